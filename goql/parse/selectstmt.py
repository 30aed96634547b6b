"""Parsing of select statements, including where, order by and limit."""

from __future__ import annotations

import enum

from goql.parse.lexer import Item, ItemType, assert_type
from goql.parse.nodes import (
    Field,
    FuncItem,
    Order,
    ParseError,
    Query,
    SelectStmt,
    get_token_string,
)
from goql.parse.parser import Parser
from goql.parse.stack import EmptyStackError, Stack


class _Expect(enum.IntFlag):
    START = 1
    ALPHA = 2
    OP = 4
    NOT_OP = 8
    FUNC = 16


_PRECEDENCE = {ItemType.OR: -1, ItemType.AND: -1}

_OPERATORS = frozenset(
    {
        ItemType.AND,
        ItemType.OR,
        ItemType.LIKE,
        ItemType.EQUAL,
        ItemType.NOT_EQUAL,
        ItemType.GREATER,
        ItemType.GREATER_EQUAL,
        ItemType.LESSER,
        ItemType.LESSER_EQUAL,
        ItemType.IS,
    }
)

_OPERANDS = frozenset(
    {
        ItemType.NUMBER,
        ItemType.ALPHA,
        ItemType.FALSE,
        ItemType.TRUE,
        ItemType.LITERAL1,
        ItemType.LITERAL2,
        ItemType.NOT,
        ItemType.NULL,
        ItemType.QUESTION_MARK,
    }
)

_KEYWORDS = frozenset({ItemType.ORDER, ItemType.LIMIT, ItemType.EOF})

_STATIC = frozenset(
    {
        ItemType.NUMBER,
        ItemType.TRUE,
        ItemType.FALSE,
        ItemType.NULL,
        ItemType.LITERAL1,
        ItemType.QUESTION_MARK,
    }
)

_NAMES = (ItemType.ALPHA, ItemType.LITERAL2)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _precedence(item_type: ItemType) -> int:
    return _PRECEDENCE.get(item_type, 0)


def _parse_field(parser: Parser) -> Field:
    token = parser.scan_ignore_whitespace()
    if token.type == ItemType.WILDCARD:
        return Field(item=token)

    if token.type == ItemType.ALPHA:
        ahead = parser.scan_ignore_whitespace()
        if ahead.type == ItemType.PAREN_OPEN:
            params = _parse_fields(parser, in_function=True)
            ahead = parser.scan_ignore_whitespace()
            if ahead.type != ItemType.PAREN_CLOSE:
                raise ParseError(f"expected ) but got {ahead}")
            name = get_token_string(token)
            return Field(
                alias=name,
                item=Item(ItemType.FUNC, len(params), name),
                parameters=tuple(params),
            )
        parser.reject()

    if token.type in _NAMES:
        ahead = parser.scan()  # no whitespace allowed around the dot
        if ahead.type == ItemType.DOT:
            ahead = parser.scan()
            if ahead.type in _NAMES:
                return Field(
                    table=get_token_string(token),
                    item=Item(ItemType.ALPHA, ahead.pos, get_token_string(ahead)),
                )
            raise ParseError(f"expected field name got {ahead}")
        parser.reject()
        return Field(
            item=Item(ItemType.ALPHA, token.pos, get_token_string(token)),
        )

    if token.type in _STATIC:
        return Field(item=token)

    raise ParseError(f"unexpected token, {token}")


def _parse_fields(parser: Parser, in_function: bool) -> list[Field]:
    if in_function:
        ahead = parser.scan_ignore_whitespace()
        parser.reject()
        if ahead.type == ItemType.PAREN_CLOSE:
            return []
    fields = []
    while True:
        fields.append(_parse_field(parser))
        comma = parser.scan_ignore_whitespace()
        if comma.type != ItemType.COMMA:
            parser.reject()
            return fields


def _operator(ahead: Item, ops: Stack, final: Stack, expected: _Expect) -> _Expect:
    if _Expect.OP not in expected:
        raise ParseError(f"not expected operator but got {ahead}")
    while True:
        try:
            top = ops.peek()
        except EmptyStackError:
            break
        if top.type != ItemType.PAREN_OPEN and _precedence(top.type) > _precedence(
            ahead.type
        ):
            ops.pop()
            final.push(top)
        else:
            break
    ops.push(ahead)
    return _Expect.ALPHA


def _operand(ahead: Item, ops: Stack, final: Stack, expected: _Expect) -> _Expect:
    if _Expect.ALPHA not in expected and _Expect.START not in expected:
        raise ParseError(f"not expected operand but got {ahead}")

    after_not = _Expect.NOT_OP in expected
    if ahead.type == ItemType.NOT:
        if after_not:
            raise ParseError("not after not")
        ops.push(ahead)
        expected = _Expect.ALPHA | _Expect.NOT_OP
    else:
        final.push(ahead)
        expected = _Expect.OP | _Expect.FUNC

    if after_not:
        try:
            top = ops.pop()
        except EmptyStackError:
            raise AssertionError("no not operator in stack") from None
        if top.type != ItemType.NOT:
            raise AssertionError("expected not operator on top of stack")
        final.push(top)
    return expected


def _paren_close(ops: Stack, final: Stack, expected: _Expect) -> _Expect:
    if _Expect.OP not in expected:
        raise ParseError("wrong ')' ")
    while True:
        try:
            top = ops.pop()
        except EmptyStackError:
            raise AssertionError("no operator in stack") from None
        if top.type == ItemType.PAREN_OPEN:
            return expected
        final.push(top)


def _paren_open(
    parser: Parser, ahead: Item, ops: Stack, final: Stack, expected: _Expect
) -> _Expect:
    if not expected & (_Expect.START | _Expect.ALPHA | _Expect.FUNC):
        raise ParseError("wrong '(' ")
    if _Expect.FUNC in expected:
        params = _parse_fields(parser, in_function=True)
        closing = parser.scan_ignore_whitespace()
        if closing.type != ItemType.PAREN_CLOSE:
            raise ParseError(f"expected ) but {closing}")
        name = final.pop()
        final.push(
            FuncItem(
                type=ItemType.FUNC,
                pos=len(params),
                value=name.value,
                parameters=tuple(params),
            )
        )
        return _Expect.OP
    ops.push(ahead)
    return expected


def _parse_where(parser: Parser) -> Stack:
    assert_type(parser.scan_ignore_whitespace(), ItemType.WHERE)
    ops = Stack()
    final = Stack()
    expected = _Expect.START
    while True:
        ahead = parser.scan_ignore_whitespace()
        if ahead.type in _KEYWORDS:
            if _Expect.OP not in expected:
                raise ParseError(
                    f"expected an operand but end of where {int(expected)}"
                )
            parser.reject()
            break
        if ahead.type in _OPERATORS:
            expected = _operator(ahead, ops, final, expected)
        elif ahead.type in _OPERANDS:
            expected = _operand(ahead, ops, final, expected)
        elif ahead.type == ItemType.PAREN_OPEN:
            expected = _paren_open(parser, ahead, ops, final, expected)
        elif ahead.type == ItemType.PAREN_CLOSE:
            expected = _paren_close(ops, final, expected)
        else:
            raise ParseError(f"not expected {ahead}")
    while len(ops):
        final.push(ops.pop())
    return final


def _parse_order(parser: Parser) -> list[Order]:
    assert_type(parser.scan_ignore_whitespace(), ItemType.ORDER)
    by = parser.scan_ignore_whitespace()
    if by.type != ItemType.BY:
        raise ParseError(f"invalid token, need by after order , got {by}")

    orders = []
    while True:
        column = parser.scan_ignore_whitespace()
        if column.type not in _NAMES:
            raise ParseError(f"need column name got {column}")
        order = Order(field=get_token_string(column))
        orders.append(order)
        ahead = parser.scan_ignore_whitespace()
        if ahead.type in (ItemType.ASC, ItemType.DESC):
            order.desc = ahead.type == ItemType.DESC
            ahead = parser.scan_ignore_whitespace()
        if ahead.type != ItemType.COMMA:
            parser.reject()
            return orders


def _to_int32(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ParseError(f"error on converting string to int : invalid syntax {text!r}")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ParseError(f"error on converting string to int : value out of range {text!r}")
    return value


def _parse_limit(parser: Parser) -> tuple[int, int]:
    assert_type(parser.scan_ignore_whitespace(), ItemType.LIMIT)
    first = parser.scan_ignore_whitespace()
    if first.type != ItemType.NUMBER:
        raise ParseError(f"limit need a number but got {first}")
    start = _to_int32(first.value)

    comma = parser.scan_ignore_whitespace()
    if comma.type != ItemType.COMMA:
        parser.reject()
        # a single number is the count
        return 0, start

    second = parser.scan_ignore_whitespace()
    if second.type != ItemType.NUMBER:
        raise ParseError(f"need the second limit number got {second}")
    return start, _to_int32(second.value)


def _next_is(parser: Parser, item_type: ItemType) -> bool:
    ahead = parser.scan_ignore_whitespace()
    parser.reject()
    return ahead.type == item_type


def parse_select(parser: Parser) -> SelectStmt:
    """Parse the rest of a select statement after the SELECT keyword."""
    stmt = SelectStmt()
    stmt.fields = _parse_fields(parser, in_function=False)

    token = parser.scan_ignore_whitespace()
    if token.type != ItemType.FROM:
        raise ParseError(f"unexpected {token} , expected FROM or COMMA (,)")

    token = parser.scan_ignore_whitespace()
    if token.type not in _NAMES:
        raise ParseError(f"unexpected input {token} , need table name")
    stmt.table = get_token_string(token)

    if _next_is(parser, ItemType.WHERE):
        stmt.where = _parse_where(parser)
    if _next_is(parser, ItemType.ORDER):
        stmt.order = _parse_order(parser)
    if _next_is(parser, ItemType.LIMIT):
        stmt.start, stmt.count = _parse_limit(parser)

    tail = parser.scan_ignore_whitespace()
    if tail.type != ItemType.EOF:
        raise ParseError(f"unexpected token {tail}")

    stmt.placeholders = parser.q_count
    return stmt


def parse_query(text: str) -> Query:
    """Parse a query; only select statements are supported."""
    parser = Parser(text)
    first = parser.scan()
    if first.type != ItemType.SELECT:
        raise ParseError(f"token {first.value} is not a valid token")
    return Query(statement=parse_select(parser))