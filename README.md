# goql

goql is a small toolkit for a SQL-like query language. It has no
dependencies outside the standard library and holds:

- `goql.parse`: a lexer and a parser for `SELECT` statements with
  `WHERE`, `ORDER BY` and `LIMIT`
- `goql.values`: typed values (string, number, bool, definition) that may be null
- `goql.table`: a registry of tables and their columns
- `goql.generic`: ready-made column valuers
- `goql.functions`: a registry of functions that queries can call
- `goql.like`: `LIKE` patterns as regular expressions
- `goql.sorting`: ordering of result rows

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Lexing

```python
from goql.parse.lexer import ItemType, lex

for item in lex("SELECT * FROM test"):
    print(item.type.name, repr(item.value), item.pos)
```

`lex` returns a `Lexer`. Iterating it yields `Item`s (with `type`, `pos`,
`value` and `data`) until the input ends. `Lexer.next_item()` returns one
item at a time, and an `ItemType.EOF` item once the input is used up.
Keywords are matched without regard to case. Each `?` placeholder carries
its 1-based number in `data`. The lexer does not raise on bad input. It
yields an `ItemType.ERROR` item, whose `value` is the message, and stops.
Examples are an unknown character, an unterminated string, a bad escape,
a number with two dots, or an unbalanced parenthesis.

## Parsing a query

```python
from goql.parse.selectstmt import parse_query

query = parse_query(
    "SELECT name, receiver FROM funcs WHERE name = 'Do' ORDER BY name DESC LIMIT 10"
)
stmt = query.statement
print(stmt.table)                          # funcs
print([f.item.value for f in stmt.fields]) # ['name', 'receiver']
print(stmt.order)                          # [Order(field='name', index=0, desc=True)]
print(stmt.start, stmt.count)              # 0 10
print(stmt.param_count())                  # number of ? placeholders
```

Only `SELECT` statements are accepted. A malformed query raises
`goql.parse.nodes.ParseError`.

- `stmt.fields` is a list of `Field`s. Each has `table`, `alias`, `item`
  and `parameters`. A function call such as `fn(a, 'b')` is a field whose
  item has type `ItemType.FUNC` and whose `parameters` hold the arguments.
  A qualified name such as `test.c` sets `table`.
- `stmt.start` and `stmt.count` are `-1` when there is no `LIMIT`.
  `LIMIT n` gives start `0` and count `n`. `LIMIT a, b` gives start `a`
  and count `b`.
- `stmt.where` is a `goql.parse.stack.Stack` that holds the condition in
  postfix order. Popping it returns the last operator first, then its
  operands. For `WHERE id = 2` the pops return `=`, then `2`, then `id`.
  Function calls in the condition come back as `FuncItem`s that carry
  their `parameters`.
- Each `Order` has `field`, `index` and `desc`. The parser leaves `index`
  at `0`. Setting it to the column's position in the result rows is up to
  the caller.

`goql.parse.nodes.get_token_string(item)` strips the quotes and escaped
quotes from a string literal item. Other items are returned as they are.

## Values

```python
from goql.values import BoolValue, NumberValue, StringValue

StringValue("x").get()          # 'x'
NumberValue(3).get()            # 3
BoolValue(null=True).get()      # None
```

`get()` returns `None` for a null value. `DefinitionValue(definition)`
holds any object, or `None` for no definition.

## Tables

A provider is any object with a `provide(data)` method. It returns the
objects that make up the table's rows. A valuer is any object with a
`kind` attribute (a `ValueType`) and a `value(obj)` method. The valuers in
`goql.generic` read plain attributes of the row object:

| Valuer               | Reads              | Kind       |
|----------------------|--------------------|------------|
| `GenericName`        | `obj.name`         | string     |
| `GenericIsExported`  | `obj.name`         | bool       |
| `GenericDoc`         | `obj.docs`         | string     |
| `GenericFileName`    | `obj.file.file_name` | string   |
| `GenericPackageName` | `obj.package.name` | string     |
| `GenericPackagePath` | `obj.package.path` | string     |
| `GenericDefinition`  | `obj.definition`   | definition |

`GenericIsExported` is true when the name starts with an upper-case ASCII
letter. `GenericDoc` joins the doc lines with newlines, and is null when
there are none.

```python
from types import SimpleNamespace

from goql.generic import GenericIsExported, GenericName
from goql.table import get_table, get_table_fields, register_field, register_table


class Items:
    def provide(self, data):
        return data


register_table("items", Items())
register_field("items", "name", GenericName())
register_field("items", "exported", GenericIsExported())

print(get_table("items")["exported"].order)   # 1

objs = [SimpleNamespace(name="Alpha"), SimpleNamespace(name="beta")]
for row in get_table_fields(objs, "items", "name", "", "exported"):
    print(row[0].get(), row[1], row[2].get())
# Alpha None True
# beta None False
```

Column order numbers follow the order of registration. `get_table_fields`
checks the table and the column names first. It then returns an iterator
over the rows. An empty column name keeps a `None` slot in each row for a
value the caller works out itself.

An unknown table or column raises `goql.table.TableError`. So does an
empty column list, or registering the same table or column twice. A valuer
without a proper `kind` and `value` raises `TypeError`.

## Functions

A function is any callable. It takes value objects (each with `get()`)
and returns a value object.

```python
from goql.functions import execute_function, has_function, register_function
from goql.values import StringValue


def concat(*args):
    return StringValue(args[0].get() + args[1].get())


register_function("concat", concat)
print(has_function("concat"))                                             # True
print(execute_function("concat", StringValue("Hello"), StringValue("World")).get())  # HelloWorld
```

Registering a name twice raises `goql.functions.FunctionError`, and so
does calling a name that is not registered. Two helpers are there for
writing functions:

- `required(minimum, maximum, *args)` raises `FunctionError` unless the
  argument count is within the bounds.
- `get_single_def(*args)` expects exactly one argument and returns the
  definition it holds. It returns `None` when the argument is `None`, or
  holds `None`, a string, a number or a bool.

## LIKE patterns

`goql.like.like_regexp(pattern)` compiles a `LIKE` pattern into a regular
expression that must match the whole text. In the pattern, `%` matches any
run of characters and `_` matches any single character. All other
characters are put into the expression unescaped, so regular-expression
metacharacters keep their meaning. Results are cached.

```python
from goql.like import like_regexp

bool(like_regexp("%ss%").match("class"))   # True
```

## Ordering rows

```python
from goql.parse.nodes import Order
from goql.sorting import sort_rows
from goql.values import NumberValue, StringValue

rows = [
    [StringValue("b"), NumberValue(1)],
    [StringValue("A"), NumberValue(2)],
    [StringValue(null=True), NumberValue(3)],
]
ordered = sort_rows(rows, [Order(index=0)])
print([r[1].get() for r in ordered])   # [3, 2, 1]
```

`sort_rows` returns a new list sorted by each `Order` in turn, keyed on
the value at `order.index`. In ascending order, nulls come first and
`True` comes before `False`. Strings are compared without regard to case.
`desc=True` reverses all of this. Values of any other kind compare as
equal. `compare_values(left, right, desc)` exposes the comparison of two
plain values. It returns a positive number when `left` sorts first, a
negative one when `right` does, and `0` otherwise.

## What this package does not do

goql provides the pieces of a query engine but does not put them
together:

- It registers no tables, columns or functions of its own.
- It has no code to load or inspect source files that would fill tables.
- It has no executor that runs a parsed `SelectStmt` against the
  registries.
- It has no database driver interface and no command-line tool.

Connecting the parser to the registries, and evaluating the `WHERE`
stack, is left to the code that uses it.