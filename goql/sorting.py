"""Ordering of result rows by an order by clause."""

from __future__ import annotations

import functools
from typing import Any, Sequence

from goql.parse.nodes import Order


def _compare_same(left: Any, right: Any, lesser: int, greater: int) -> int:
    if isinstance(left, bool):
        if left == right:
            return 0
        return lesser if left else greater
    if isinstance(left, (int, float)):
        if left == right:
            return 0
        return lesser if left < right else greater
    if isinstance(left, str):
        if left == right:
            return 0
        return lesser if left.lower() < right.lower() else greater
    return 0


def compare_values(left: Any, right: Any, desc: bool) -> int:
    """Return positive if left sorts first, negative if right does, else 0.

    Nulls come first in ascending order, true comes before false, and
    strings compare without regard to case.
    """
    lesser, greater = (-1, 1) if desc else (1, -1)
    if left is None and right is not None:
        return lesser
    if left is not None and right is None:
        return greater
    if left is None:
        return 0
    return _compare_same(left, right, lesser, greater)


def sort_rows(rows: Sequence[Sequence[Any]], orders: Sequence[Order]) -> list:
    """Return the rows sorted by the given orders, first order first."""

    def compare(a: Sequence[Any], b: Sequence[Any]) -> int:
        for order in orders:
            result = compare_values(
                a[order.index].get(), b[order.index].get(), order.desc
            )
            if result:
                return -result
        return 0

    return sorted(rows, key=functools.cmp_to_key(compare))