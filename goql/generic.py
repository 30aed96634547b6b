"""Column valuers shared by the tables.

Each reads an attribute of the row object: ``file.file_name``,
``package.name``, ``package.path``, ``name``, ``docs`` or ``definition``.
"""

from __future__ import annotations

from typing import Any

from goql.values import BoolValue, DefinitionValue, StringValue, ValueType


class GenericFileName:
    """Name of the file the object is declared in."""

    kind = ValueType.STRING

    def value(self, obj: Any) -> StringValue:
        return StringValue(value=obj.file.file_name)


class GenericPackageName:
    """Name of the object's package."""

    kind = ValueType.STRING

    def value(self, obj: Any) -> StringValue:
        return StringValue(value=obj.package.name)


class GenericPackagePath:
    """Import path of the object's package."""

    kind = ValueType.STRING

    def value(self, obj: Any) -> StringValue:
        return StringValue(value=obj.package.path)


class GenericName:
    """Name of the object."""

    kind = ValueType.STRING

    def value(self, obj: Any) -> StringValue:
        return StringValue(value=obj.name)


class GenericIsExported:
    """Whether the object's name starts with an upper-case ASCII letter."""

    kind = ValueType.BOOL

    def value(self, obj: Any) -> BoolValue:
        first = obj.name[0]
        return BoolValue(value="A" <= first <= "Z")


class GenericDoc:
    """Documentation lines joined by newlines, null when there are none."""

    kind = ValueType.STRING

    def value(self, obj: Any) -> StringValue:
        docs = obj.docs
        if not docs:
            return StringValue(null=True)
        return StringValue(value="\n".join(docs))


class GenericDefinition:
    """Type definition of the object."""

    kind = ValueType.DEFINITION

    def value(self, obj: Any) -> DefinitionValue:
        return DefinitionValue(definition=obj.definition)