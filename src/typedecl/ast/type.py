"""
    Copyright 2026 Inmanta

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

        http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.

    Contact: code@inmanta.com
"""

import numbers
import typing
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from typedecl.ast import Locatable, RuntimeException


class TypeKind(str, Enum):
    """
    Tag of a type value. The set of type variants is closed: code that consumes types dispatches on this tag.
    """

    named = "named"
    list = "list"
    map = "map"
    record = "record"
    union = "union"
    unknown = "unknown"


class Type(Locatable):
    """
    This class is the base class for all type values produced from a type declaration. Instances are owned by a
    :py:class:`typedecl.registry.TypeRegistry`, which guarantees that structurally identical composite types are
    represented by the same instance.
    """

    kind: TypeKind

    def validate(self, value: object) -> bool:
        """
        Validate the given value to check if it satisfies this type. Returns true iff
        validation succeeds, otherwise raises a :py:class:`typedecl.ast.RuntimeException`.
        """
        return True

    def type_string(self) -> str:
        """
        Returns the type string as expressed in the type declaration language. Parsing this string with the registry
        that owns this type yields an equal type.
        """
        raise NotImplementedError()

    def invalid_value(self, value: object) -> RuntimeException:
        return RuntimeException(None, "Invalid value '%s', expected %s" % (value, self))

    def __str__(self) -> str:
        return self.type_string()

    def __repr__(self) -> str:
        return "%s(%s)" % (self.__class__.__name__, self.type_string())


class NamedType(Type):
    """
    A type referenced by a, possibly dotted, name. Named types are resolved by lookup in the registry, never constructed
    by the parser.

    :param name: the fully qualified name of the type
    :param validator: predicate used to validate values of this type. Types without a validator accept any value.
    """

    kind = TypeKind.named

    def __init__(self, name: str, validator: Optional[Callable[[object], bool]] = None) -> None:
        Type.__init__(self)
        self.name: str = name
        self.validator: Optional[Callable[[object], bool]] = validator

    def validate(self, value: object) -> bool:
        if self.validator is None:
            return True
        if not self.validator(value):
            raise self.invalid_value(value)
        return True

    def type_string(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedType):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash((self.kind, self.name))


class ListType(Type):
    """
    Instances of this class represent a list type containing only values of type element_type.
    For example `ListType(TYPES["int"])` represents `list<int>`.
    """

    kind = TypeKind.list

    def __init__(self, element_type: Type) -> None:
        Type.__init__(self)
        self.element_type: Type = element_type

    def validate(self, value: object) -> bool:
        if not isinstance(value, list):
            raise self.invalid_value(value)

        for element in value:
            self.element_type.validate(element)

        return True

    def type_string(self) -> str:
        return "list<%s>" % self.element_type.type_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListType):
            return NotImplemented
        return self.element_type == other.element_type

    def __hash__(self) -> int:
        return hash((self.kind, self.element_type))


class MapType(Type):
    """
    Instances of this class represent a map type with keys of type key_type and values of type value_type.
    """

    kind = TypeKind.map

    def __init__(self, key_type: Type, value_type: Type) -> None:
        Type.__init__(self)
        self.key_type: Type = key_type
        self.value_type: Type = value_type

    def validate(self, value: object) -> bool:
        if not isinstance(value, dict):
            raise self.invalid_value(value)

        for key, element in value.items():
            self.key_type.validate(key)
            self.value_type.validate(element)

        return True

    def type_string(self) -> str:
        return "map<%s, %s>" % (self.key_type.type_string(), self.value_type.type_string())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapType):
            return NotImplemented
        return self.key_type == other.key_type and self.value_type == other.value_type

    def __hash__(self) -> int:
        return hash((self.kind, self.key_type, self.value_type))


class RecordType(Type):
    """
    Instances of this class represent an anonymous record: a fixed set of uniquely named fields, each with its own type.
    Fields are kept in declaration order and the order is part of the identity of the record type.
    """

    kind = TypeKind.record

    def __init__(self, fields: Mapping[str, Type]) -> None:
        Type.__init__(self)
        self.fields: Dict[str, Type] = dict(fields)

    def _items(self) -> Tuple[Tuple[str, Type], ...]:
        return tuple(self.fields.items())

    def validate(self, value: object) -> bool:
        if not isinstance(value, dict):
            raise self.invalid_value(value)

        for name in value:
            if name not in self.fields:
                raise RuntimeException(None, "Invalid value '%s', %s has no field '%s'" % (value, self, name))

        for name, field_type in self.fields.items():
            if name not in value:
                raise RuntimeException(None, "Invalid value '%s', missing field '%s' of %s" % (value, name, self))
            field_type.validate(value[name])

        return True

    def type_string(self) -> str:
        return "[%s]" % ", ".join("%s: %s" % (name, tp.type_string()) for name, tp in self.fields.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordType):
            return NotImplemented
        return self._items() == other._items()

    def __hash__(self) -> int:
        return hash((self.kind, self._items()))


class UnionType(Type):
    """
    Instances of this class represent a union of multiple types, in the order they were declared.
    """

    kind = TypeKind.union

    def __init__(self, types: Sequence[Type]) -> None:
        Type.__init__(self)
        self.types: Tuple[Type, ...] = tuple(types)

    def validate(self, value: object) -> bool:
        for typ in self.types:
            try:
                if typ.validate(value):
                    return True
            except RuntimeException:
                pass
        raise self.invalid_value(value)

    def type_string(self) -> str:
        return "|".join(t.type_string() for t in self.types)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnionType):
            return NotImplemented
        return self.types == other.types

    def __hash__(self) -> int:
        return hash((self.kind, self.types))


class UnknownType(Type):
    """
    The `?` marker: a type that is not known when the declaration is written. Any value satisfies it.
    """

    kind = TypeKind.unknown

    def type_string(self) -> str:
        return "?"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnknownType):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(self.kind)


UNKNOWN: UnknownType = UnknownType()


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


TYPES: typing.Dict[str, NamedType] = {  # Part of the stable API
    "any": NamedType("any"),
    "null": NamedType("null", lambda value: value is None),
    "bool": NamedType("bool", lambda value: isinstance(value, bool)),
    "int": NamedType("int", _is_int),
    "float": NamedType("float", _is_number),
    "string": NamedType("string", lambda value: isinstance(value, str)),
}
"""
    Maps the builtin primitive type names to their representation. For each key, value pair, `value.type_string()` is
    guaranteed to return key.
"""
