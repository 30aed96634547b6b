"""A small SQL-like query toolkit: parser, values, tables, functions, LIKE patterns and row ordering."""

__version__ = "0.1.0"