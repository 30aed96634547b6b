from types import SimpleNamespace

import pytest

from goql.generic import (
    GenericDefinition,
    GenericDoc,
    GenericFileName,
    GenericIsExported,
    GenericName,
    GenericPackageName,
    GenericPackagePath,
)
from goql.table import ColumnDef
from goql.values import BoolValue, DefinitionValue, StringValue, ValueType


def _obj(**kwargs):
    defaults = dict(name="", docs=[], package=None, file=None, definition=None)
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def test_name():
    assert GenericName().value(_obj(name="Test")) == StringValue(value="Test")


def test_is_exported():
    assert GenericIsExported().value(_obj(name="Test")) == BoolValue(value=True)
    assert GenericIsExported().value(_obj(name="test")) == BoolValue(value=False)


def test_docs():
    docs = ["// Test", "// Line2"]
    assert GenericDoc().value(_obj(docs=docs)) == StringValue(value="// Test\n// Line2")
    assert GenericDoc().value(_obj()) == StringValue(null=True)


def test_definition():
    marker = object()
    assert GenericDefinition().value(_obj(definition=marker)) == DefinitionValue(
        definition=marker
    )


def test_package_and_file():
    package = SimpleNamespace(name="fixture", path="example.com/fixture")
    source = SimpleNamespace(file_name="fixture.go")
    obj = _obj(package=package, file=source)
    assert GenericPackageName().value(obj) == StringValue(value="fixture")
    assert GenericPackagePath().value(obj) == StringValue(value="example.com/fixture")
    assert GenericFileName().value(obj) == StringValue(value="fixture.go")


@pytest.mark.parametrize(
    "valuer, kind",
    [
        (GenericFileName(), ValueType.STRING),
        (GenericPackageName(), ValueType.STRING),
        (GenericPackagePath(), ValueType.STRING),
        (GenericName(), ValueType.STRING),
        (GenericIsExported(), ValueType.BOOL),
        (GenericDoc(), ValueType.STRING),
        (GenericDefinition(), ValueType.DEFINITION),
    ],
)
def test_valuers_are_valid_columns(valuer, kind):
    assert ColumnDef(name="c", valuer=valuer, order=0).value_type() == kind