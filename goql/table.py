"""Registry of queryable tables and their columns.

A provider is an object with ``provide(data)`` returning the rows' objects.
A valuer is an object with a ``kind`` attribute (a ValueType) and a
``value(obj)`` method returning the matching value type.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from goql.values import ValueType


class TableError(Exception):
    """Raised for unknown tables or fields and for duplicate registrations."""


@dataclass(frozen=True)
class ColumnDef:
    """A registered column of a table."""

    name: str
    valuer: Any
    order: int

    def value_type(self) -> ValueType:
        """Return the kind of value this column holds."""
        kind = getattr(self.valuer, "kind", None)
        if not isinstance(kind, ValueType) or not callable(
            getattr(self.valuer, "value", None)
        ):
            raise TypeError("invalid valuer!")
        return kind


@dataclass
class _Table:
    name: str
    provider: Any
    fields: dict[str, ColumnDef] = field(default_factory=dict)


_tables: dict[str, _Table] = {}
_lock = threading.Lock()


def register_table(name: str, provider: Any) -> None:
    """Register a table; the name must be unique."""
    with _lock:
        if name in _tables:
            raise TableError(f"table with name {name} is already registered")
        _tables[name] = _Table(name=name, provider=provider)


def register_field(table: str, name: str, valuer: Any) -> None:
    """Register a column on an existing table; the name must be unique in it."""
    with _lock:
        tbl = _tables.get(table)
        if tbl is None:
            raise TableError(f"table {table} is not available")
        order = max((col.order for col in tbl.fields.values()), default=-1) + 1
        if name in tbl.fields:
            raise TableError(f"table {table} is already have field {name}")
        column = ColumnDef(name=name, valuer=valuer, order=order)
        try:
            column.value_type()
        except TypeError:
            raise TypeError(
                f"valuer is not a valid valuer, it is {type(valuer).__name__}"
            ) from None
        tbl.fields[name] = column


def get_table(name: str) -> dict[str, ColumnDef]:
    """Return the columns of a table by name."""
    with _lock:
        tbl = _tables.get(name)
        if tbl is None:
            raise TableError(f"table {name} is not available")
        return dict(tbl.fields)


def _rows(
    provider: Any, data: Any, columns: Sequence[Optional[ColumnDef]]
) -> Iterator[list]:
    for obj in provider.provide(data) or ():
        yield [col.valuer.value(obj) if col else None for col in columns]


def get_table_fields(data: Any, table: str, *args: str) -> Iterator[list]:
    """Validate the field names and return an iterator over the rows.

    An empty field name is a placeholder: its slot in each row is None,
    for the caller to fill with a computed value.
    """
    with _lock:
        tbl = _tables.get(table)
        if tbl is None:
            raise TableError(f"invalid table name {table}")
        if not args:
            raise TableError("no field selected")
        invalid = [name for name in args if name and name not in tbl.fields]
        if invalid:
            raise TableError(f"invalid field(s) : {', '.join(invalid)}")
        columns = [tbl.fields[name] if name else None for name in args]
        provider = tbl.provider
    return _rows(provider, data, columns)