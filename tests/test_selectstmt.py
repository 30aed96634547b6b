import pytest

from goql.parse.lexer import ItemType
from goql.parse.nodes import FuncItem, Order, ParseError, SelectStmt
from goql.parse.parser import Parser
from goql.parse.selectstmt import parse_query, parse_select
from goql.parse.stack import EmptyStackError


def _drain(stack):
    popped = []
    while len(stack):
        popped.append(stack.pop())
    return list(reversed(popped))


def test_ast_basic():
    query = parse_query("SELECT * FROM TEST")
    assert isinstance(query.statement, SelectStmt)
    assert query.statement.table == "TEST"


@pytest.mark.parametrize("text", ["SELECT * TEST FROM HI", "UPDATE TEST SET x=1"])
def test_ast_errors(text):
    with pytest.raises(ParseError):
        parse_query(text)


def test_parse_select_after_keyword():
    parser = Parser("SELECT a FROM t")
    assert parser.scan().type == ItemType.SELECT
    stmt = parse_select(parser)
    assert stmt.table == "t"
    assert [f.item.value for f in stmt.fields] == ["a"]


def test_select_simple_fields():
    ss = parse_query("SELECT a,b,test.c FROM test").statement
    assert ss.table == "test"
    assert len(ss.fields) == 3
    assert ss.fields[0].item.value == "a"
    assert ss.fields[1].item.value == "b"
    assert ss.fields[2].item.value == "c"
    assert ss.fields[2].table == "test"


def test_select_function_and_static_fields():
    ss = parse_query("SELECT func(a,'b',10), c, 10, 'string' FROM test").statement
    assert ss.table == "test"
    assert len(ss.fields) == 4

    fn = ss.fields[0]
    assert fn.item.value == "func"
    assert len(fn.parameters) == 3
    assert fn.parameters[0].item.value == "a"
    assert fn.parameters[0].item.type == ItemType.ALPHA
    assert fn.parameters[1].item.value == "'b'"
    assert fn.parameters[1].item.type == ItemType.LITERAL1
    assert fn.parameters[2].item.value == "10"
    assert fn.parameters[2].item.type == ItemType.NUMBER

    assert ss.fields[1].item.value == "c"
    assert ss.fields[1].item.type == ItemType.ALPHA
    assert ss.fields[2].item.value == "10"
    assert ss.fields[2].item.type == ItemType.NUMBER
    assert ss.fields[3].item.value == "'string'"
    assert ss.fields[3].item.type == ItemType.LITERAL1


def test_select_nested_functions():
    ss = parse_query("SELECT FN1(FN2(FN3(), x)) FROM test").statement
    assert ss.table == "test"
    assert len(ss.fields) == 1

    fn1 = ss.fields[0]
    assert fn1.item.value == "FN1"
    assert len(fn1.parameters) == 1
    assert fn1.parameters[0].item.type == ItemType.FUNC

    fn2 = fn1.parameters[0]
    assert fn2.item.value == "FN2"
    assert len(fn2.parameters) == 2
    assert fn2.parameters[1].item.value == "x"
    assert fn2.parameters[1].item.type == ItemType.ALPHA
    assert fn2.parameters[0].item.type == ItemType.FUNC

    fn3 = fn2.parameters[0]
    assert fn3.item.value == "FN3"
    assert len(fn3.parameters) == 0


def test_quoted_table_and_field_names():
    ss = parse_query('SELECT "t"."col" FROM "tbl"').statement
    assert ss.table == "tbl"
    assert ss.fields[0].table == "t"
    assert ss.fields[0].item.value == "col"


def test_where_function_without_parameters():
    ss = parse_query("SELECT * FROM x where  x (  )").statement
    items = _drain(ss.where)
    assert len(items) == 1
    assert isinstance(items[0], FuncItem)
    assert items[0].value == "x"
    assert items[0].parameters == ()


@pytest.mark.parametrize(
    "text",
    [
        "SELECT a,, FROM test",
        "SELECT * FROM ,",
        "SELECT * FROM test hahaha",
        "SELECT func(invalid,) FROM test ",
        "SELECT func(invalid,  test  |)  ",
        "SELECT test. From test ",
    ],
)
def test_select_simple_errors(text):
    with pytest.raises(ParseError):
        parse_query(text)


def test_select_where_simple():
    ss = parse_query("SELECT * FROM test WHERE id = 2  ").statement
    assert ss.table == "test"
    assert len(ss.fields) == 1
    assert ss.fields[0].item.type == ItemType.WILDCARD

    top = ss.where.pop()
    assert top.type == ItemType.EQUAL

    top = ss.where.pop()
    assert top.type == ItemType.NUMBER
    assert top.value == "2"

    top = ss.where.pop()
    assert top.type == ItemType.ALPHA
    assert top.value == "id"

    with pytest.raises(EmptyStackError):
        ss.where.pop()


def test_select_where_complex_postfix():
    query = (
        "SELECT * FROM test WHERE a like '%ss%' and x or not s "
        "or (x is not null) and xx = ?"
    )
    ss = parse_query(query).statement
    assert ss.table == "test"
    assert ss.param_count() == 1
    assert [item.value for item in _drain(ss.where)] == [
        "a",
        "'%ss%'",
        "like",
        "x",
        "s",
        "not",
        "x",
        "null",
        "not",
        "is",
        "xx",
        "?",
        "=",
        "and",
        "or",
        "or",
        "and",
    ]


def test_where_function_call_with_parameters():
    ss = parse_query("SELECT * FROM t WHERE fn(a, 1) = 2").statement
    items = _drain(ss.where)
    assert [item.value for item in items] == ["fn", "2", "="]
    func = items[0]
    assert isinstance(func, FuncItem)
    assert func.type == ItemType.FUNC
    assert func.pos == 2
    assert [p.item.value for p in func.parameters] == ["a", "1"]


@pytest.mark.parametrize(
    "text",
    [
        "SELECT * FROM x where ",
        "SELECT * FROM x where x x ",
        "SELECT * FROM x where and or  ",
        "SELECT * FROM x where not  ",
        "SELECT * FROM x where not not ",
        "SELECT * FROM x where ( x = )",
        "SELECT * FROM x where ( and 2 )",
        "SELECT * FROM x where (  )",
        "SELECT * FROM x where fn () ()",
        "SELECT * FROM x where fn (x,) ",
        "SELECT * FROM x where fn (x|) ",
        "SELECT * FROM x where  x ; x",
    ],
)
def test_select_where_errors(text):
    with pytest.raises(ParseError):
        parse_query(text)


def test_select_order():
    ss = parse_query(
        "SELECT * FROM test WHERE id = 2 ORDER BY aa asc, bb desc"
    ).statement
    assert ss.table == "test"
    assert len(ss.order) == 2
    assert ss.order[0] == Order(field="aa")
    assert ss.order[1] == Order(field="bb", desc=True)


def test_select_order_without_direction():
    ss = parse_query("SELECT * FROM test ORDER BY aa, bb").statement
    assert ss.order == [Order(field="aa"), Order(field="bb")]


@pytest.mark.parametrize(
    "text", ["SELECT * FROM x order ", "SELECT * FROM x order by , "]
)
def test_select_order_errors(text):
    with pytest.raises(ParseError):
        parse_query(text)


def test_select_limit_two_numbers():
    ss = parse_query("SELECT * FROM test limit 1, 10 ").statement
    assert ss.table == "test"
    assert ss.start == 1
    assert ss.count == 10


def test_select_limit_one_number():
    ss = parse_query("SELECT * FROM test limit 1 ").statement
    assert ss.table == "test"
    assert ss.start == 0
    assert ss.count == 1


def test_select_no_limit():
    ss = parse_query("SELECT * FROM test ").statement
    assert ss.table == "test"
    assert ss.start == -1
    assert ss.count == -1


@pytest.mark.parametrize(
    "text",
    [
        "SELECT * FROM x limit ",
        "SELECT * FROM x limit 1.88",
        "SELECT * FROM x limit 1,",
        "SELECT * FROM x limit 1,1.99",
        "SELECT * FROM x limit 99999999999",
    ],
)
def test_select_limit_errors(text):
    with pytest.raises(ParseError):
        parse_query(text)


def test_param_count():
    stmt = parse_query("SELECT ? FROM test where id = ?").statement
    assert stmt.param_count() == 2

    stmt = parse_query(
        "SELECT x, ? , func(?,?) FROM test where id = ? and fn(?)"
    ).statement
    assert stmt.param_count() == 5


def test_full_query_clauses_together():
    ss = parse_query(
        "SELECT name FROM funcs WHERE name = 'Do' ORDER BY name desc LIMIT 2, 3"
    ).statement
    assert ss.table == "funcs"
    assert [item.value for item in _drain(ss.where)] == ["name", "'Do'", "="]
    assert ss.order == [Order(field="name", desc=True)]
    assert (ss.start, ss.count) == (2, 3)