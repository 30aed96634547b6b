"""Typed column values; each may be null."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ValueType(enum.IntEnum):
    """Kind of value a column holds."""

    STRING = 0
    NUMBER = 1
    BOOL = 2
    DEFINITION = 3


@dataclass(frozen=True)
class StringValue:
    """A string such as a function or file name."""

    value: str = ""
    null: bool = False

    def get(self) -> str | None:
        """Return the string, or None when null."""
        return None if self.null else self.value


@dataclass(frozen=True)
class NumberValue:
    """A number; always held as a float."""

    value: float = 0.0
    null: bool = False

    def get(self) -> float | None:
        """Return the number, or None when null."""
        return None if self.null else self.value


@dataclass(frozen=True)
class BoolValue:
    """A boolean."""

    value: bool = False
    null: bool = False

    def get(self) -> bool | None:
        """Return the boolean, or None when null."""
        return None if self.null else self.value


@dataclass(frozen=True)
class DefinitionValue:
    """A type definition; None stands for no definition."""

    definition: Any = None

    def get(self) -> Any:
        """Return the definition, which may be None."""
        return self.definition