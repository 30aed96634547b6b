"""Reads lexer items with one item of look-back."""

from __future__ import annotations

from goql.parse.lexer import Item, ItemType, lex


class Parser:
    """Pulls items from a lexer; the last item can be pushed back once."""

    def __init__(self, text: str) -> None:
        self._lexer = lex(text)
        self._last = Item(ItemType.EOF, 0, "")
        self._rejected = False
        self.q_count = 0

    def scan(self) -> Item:
        """Return the next item, or the rejected one if there is one."""
        if self._rejected:
            self._rejected = False
            return self._last
        self._last = self._lexer.next_item()
        if self._last.type == ItemType.QUESTION_MARK:
            self.q_count += 1
        return self._last

    def scan_ignore_whitespace(self) -> Item:
        """Like scan, but skip a single whitespace item."""
        item = self.scan()
        if item.type == ItemType.WHITESPACE:
            item = self.scan()
        return item

    def reject(self) -> None:
        """Push the last scanned item back so the next scan returns it."""
        self._rejected = True