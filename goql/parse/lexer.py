"""A small SQL lexer with limited functionality.

It handles queries such as::

    select fields from table where "field" = 'string'
        and (another_field=100 or boolean_field)
        order by field_1 desc, field_2 asc limit 10, 100
"""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass
from typing import Callable, Generator, Iterator, Optional


class ItemType(enum.IntEnum):
    """Type of a lexeme; any new keyword needs an entry here first."""

    EOF = 0
    ERROR = enum.auto()
    WHITESPACE = enum.auto()
    SELECT = enum.auto()
    FROM = enum.auto()
    WHERE = enum.auto()
    ORDER = enum.auto()
    BY = enum.auto()
    OR = enum.auto()
    AND = enum.auto()
    IS = enum.auto()
    NULL = enum.auto()
    NOT = enum.auto()
    LIMIT = enum.auto()
    ASC = enum.auto()
    DESC = enum.auto()
    LIKE = enum.auto()
    ALPHA = enum.auto()
    NUMBER = enum.auto()
    FALSE = enum.auto()
    TRUE = enum.auto()
    EQUAL = enum.auto()
    GREATER = enum.auto()
    LESSER = enum.auto()
    GREATER_EQUAL = enum.auto()
    LESSER_EQUAL = enum.auto()
    NOT_EQUAL = enum.auto()
    PAREN_OPEN = enum.auto()
    PAREN_CLOSE = enum.auto()
    COMMA = enum.auto()
    WILDCARD = enum.auto()
    LITERAL1 = enum.auto()
    LITERAL2 = enum.auto()
    SEMICOLON = enum.auto()
    DOT = enum.auto()
    QUESTION_MARK = enum.auto()
    FUNC = enum.auto()


KEYWORDS = {
    "select": ItemType.SELECT,
    "from": ItemType.FROM,
    "where": ItemType.WHERE,
    "order": ItemType.ORDER,
    "by": ItemType.BY,
    "or": ItemType.OR,
    "and": ItemType.AND,
    "not": ItemType.NOT,
    "limit": ItemType.LIMIT,
    "asc": ItemType.ASC,
    "desc": ItemType.DESC,
    "like": ItemType.LIKE,
    "is": ItemType.IS,
    "null": ItemType.NULL,
    "false": ItemType.FALSE,
    "true": ItemType.TRUE,
}

_OPERATORS = "<>="
_SPACES = " \t\n"
_QUOTES = {'"': ItemType.LITERAL2, "'": ItemType.LITERAL1}
_SINGLE_CHAR = {
    ";": ItemType.SEMICOLON,
    ",": ItemType.COMMA,
    "*": ItemType.WILDCARD,
    ".": ItemType.DOT,
}


@dataclass(frozen=True)
class Item:
    """A single lexeme of a query."""

    type: ItemType
    pos: int
    value: str
    data: int = 0

    def __str__(self) -> str:
        return f"pos {self.pos}, token {self.value}"


_EOF_ITEM = Item(ItemType.EOF, 0, "")


def assert_type(item: Item, item_type: ItemType) -> None:
    """Raise AssertionError unless the item has the given type."""
    if item.type != item_type:
        raise AssertionError(
            f"assertion failed, type is {int(item.type)} want {int(item_type)}"
        )


_State = Callable[[], Generator[Item, None, Optional["_State"]]]


def _is_word_char(ch: str) -> bool:
    return ch == "_" or ch.isalpha() or ch.isdecimal()


class Lexer:
    """Splits a query into items; after the end it keeps returning EOF items."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._start = 0
        self._pos = 0
        self._width = 0
        self._paren_depth = 0
        self._q_index = 0
        self._lock = threading.Lock()
        self._items = self._run()

    def next_item(self) -> Item:
        """Return the next item, or an EOF item once the input is used up."""
        with self._lock:
            return next(self._items, _EOF_ITEM)

    def __iter__(self) -> Iterator[Item]:
        while True:
            with self._lock:
                item = next(self._items, None)
            if item is None:
                return
            yield item

    def _run(self) -> Iterator[Item]:
        state: Optional[_State] = self._lex_start
        while state is not None:
            state = yield from state()

    def _next(self) -> str:
        if self._pos >= len(self.text):
            self._width = 0
            return ""
        ch = self.text[self._pos]
        self._width = 1
        self._pos += 1
        return ch

    def _peek(self) -> str:
        return self.text[self._pos] if self._pos < len(self.text) else ""

    def _backup(self) -> None:
        self._pos -= self._width

    def _accept_while(self, predicate: Callable[[str], bool]) -> None:
        while self._pos < len(self.text) and predicate(self.text[self._pos]):
            self._pos += 1

    def _emit(self, item_type: ItemType) -> Item:
        data = 0
        if item_type == ItemType.QUESTION_MARK:
            self._q_index += 1
            data = self._q_index
        item = Item(item_type, self._start, self.text[self._start:self._pos], data)
        self._start = self._pos
        return item

    def _error(self, message: str) -> Item:
        return Item(ItemType.ERROR, self._start, message)

    def _lex_start(self):
        ch = self._peek()
        if not ch:
            if self._paren_depth > 0:
                yield self._error("paren not closed")
            return None
        if ch in _OPERATORS:
            return self._lex_operator
        if ch.isalpha():
            return self._lex_alpha
        if ch.isdecimal():
            return self._lex_number
        if ch in _SPACES:
            return self._lex_whitespace
        if ch == "(":
            return self._lex_paren_open
        if ch == ")":
            return self._lex_paren_close
        if ch in _QUOTES:
            return self._lex_literal
        if ch in _SINGLE_CHAR:
            return self._lex_single
        if ch == "?":
            return self._lex_parameter
        yield self._error(f"invalid character {ch}")
        return None

    def _lex_whitespace(self):
        self._accept_while(lambda ch: ch in _SPACES)
        yield self._emit(ItemType.WHITESPACE)
        return self._lex_start

    def _lex_operator(self):
        op = self._next()
        ahead = self._peek()
        if op == ">":
            item_type = ItemType.GREATER
            if ahead == "=":
                self._next()
                item_type = ItemType.GREATER_EQUAL
        elif op == "<":
            item_type = ItemType.LESSER
            if ahead == "=":
                self._next()
                item_type = ItemType.LESSER_EQUAL
            elif ahead == ">":
                self._next()
                item_type = ItemType.NOT_EQUAL
        else:
            item_type = ItemType.EQUAL
        yield self._emit(item_type)
        return self._lex_start

    def _lex_parameter(self):
        self._next()
        yield self._emit(ItemType.QUESTION_MARK)
        return self._lex_start

    def _lex_alpha(self):
        self._accept_while(_is_word_char)
        word = self.text[self._start:self._pos].lower()
        yield self._emit(KEYWORDS.get(word, ItemType.ALPHA))
        return self._lex_start

    def _lex_paren_open(self):
        self._next()
        self._paren_depth += 1
        yield self._emit(ItemType.PAREN_OPEN)
        return self._lex_start

    def _lex_paren_close(self):
        self._next()
        self._paren_depth -= 1
        if self._paren_depth < 0:
            yield self._error("invalid ) ")
            return None
        yield self._emit(ItemType.PAREN_CLOSE)
        return self._lex_start

    def _lex_single(self):
        ch = self._next()
        yield self._emit(_SINGLE_CHAR[ch])
        return self._lex_start

    def _lex_literal(self):
        quote = self._next()
        item_type = _QUOTES[quote]
        escape = False
        while True:
            ch = self._next()
            if escape and ch != quote and ch != "\\":
                self._backup()
                yield self._error("invalid escape character")
                return None
            if ch == quote and not escape:
                break
            escape = ch == "\\" and not escape
            if not ch:
                yield self._error("string is not terminated")
                return None
        yield self._emit(item_type)
        return self._lex_start

    def _lex_number(self):
        seen_dot = False
        while True:
            ch = self._peek()
            if ch == ".":
                if seen_dot:
                    self._next()
                    yield self._error("two dot in one number")
                    return None
                seen_dot = True
                self._next()
                continue
            if not ch.isdecimal():
                break
            self._next()
        yield self._emit(ItemType.NUMBER)
        return self._lex_start


def lex(text: str) -> Lexer:
    """Create a lexer for the given query text."""
    return Lexer(text)