"""A small thread-safe stack of lexer items."""

from __future__ import annotations

import threading

from goql.parse.lexer import Item


class EmptyStackError(IndexError):
    """Raised when popping or peeking an empty stack."""


class Stack:
    """Last-in first-out collection used while parsing where clauses."""

    def __init__(self, items=()) -> None:
        self._items: list[Item] = list(items)
        self._lock = threading.Lock()

    def push(self, *args: Item) -> None:
        with self._lock:
            self._items.extend(args)

    def pop(self) -> Item:
        with self._lock:
            if not self._items:
                raise EmptyStackError("stack is empty")
            return self._items.pop()

    def peek(self) -> Item:
        with self._lock:
            if not self._items:
                raise EmptyStackError("stack is empty")
            return self._items[-1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"