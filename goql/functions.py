"""Registry of query functions and argument helpers.

A function is a callable taking value objects (each with ``get()``) and
returning a value object. It checks its argument count and raises
FunctionError when it is wrong; argument types it should try to convert.
"""

from __future__ import annotations

import threading
from typing import Any, Callable

Function = Callable[..., Any]

_functions: dict[str, Function] = {}
_lock = threading.Lock()


class FunctionError(Exception):
    """Raised for unknown or duplicate functions and bad arguments."""


def register_function(name: str, fn: Function) -> None:
    """Register a function; the name must be unique."""
    with _lock:
        if name in _functions:
            raise FunctionError(f"function with name '{name}' is already registered")
        _functions[name] = fn


def has_function(name: str) -> bool:
    """Return whether a function with this name is registered."""
    with _lock:
        return name in _functions


def execute_function(name: str, *args: Any) -> Any:
    """Call the named function with the given values."""
    with _lock:
        fn = _functions.get(name)
    if fn is None:
        raise FunctionError(f"function with name '{name}' is not registered")
    return fn(*args)


def required(minimum: int, maximum: int, *args: Any) -> None:
    """Raise FunctionError unless the argument count is within the bounds."""
    if not minimum <= len(args) <= maximum:
        raise FunctionError(
            f"argument count is wrong, got {len(args)}, needs {minimum} to {maximum}"
        )


def _to_definition(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return None
    return value


def get_single_def(*args: Any) -> Any:
    """Return the definition held by the single argument, or None."""
    required(1, 1, *args)
    arg = args[0]
    if arg is None:
        return None
    return _to_definition(arg.get())