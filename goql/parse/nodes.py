"""Syntax tree of a parsed query."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from goql.parse.lexer import Item, ItemType
from goql.parse.stack import Stack


class ParseError(Exception):
    """Raised when a query can not be parsed."""


@dataclass(frozen=True)
class FuncItem(Item):
    """A function call item together with its parameters."""

    parameters: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Field:
    """A field in a select list or a function parameter."""

    table: str = ""
    alias: str = ""
    item: Item | None = None
    parameters: tuple[Field, ...] = ()


@dataclass
class Order:
    """One entry of an order by clause."""

    field: str = ""
    index: int = 0
    desc: bool = False


@dataclass
class SelectStmt:
    """A select statement; start and count are -1 when not given."""

    table: str = ""
    fields: list[Field] = dataclasses.field(default_factory=list)
    where: Stack = dataclasses.field(default_factory=Stack)
    order: list[Order] = dataclasses.field(default_factory=list)
    start: int = -1
    count: int = -1
    placeholders: int = 0

    def param_count(self) -> int:
        """Number of ``?`` parameters this statement needs."""
        return self.placeholders


@dataclass
class Query:
    """A single parsed query."""

    statement: SelectStmt


_QUOTE_CHARS = {ItemType.LITERAL1: "'", ItemType.LITERAL2: '"'}


def get_token_string(item: Item) -> str:
    """Strip the quotes and escaped quotes from a literal; other items pass through."""
    quote = _QUOTE_CHARS.get(item.type)
    if quote is None:
        return item.value
    text = item.value.replace("\\" + quote, quote)
    if len(text) < 2 or text[0] != quote or text[-1] != quote:
        raise ParseError("un-terminated literal")
    return text[1:-1]