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

import logging
import threading
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from typedecl import config
from typedecl.ast import DuplicateTypeException, Location
from typedecl.ast.type import TYPES, ListType, MapType, NamedType, RecordType, Type, TypeKind, UnionType
from typedecl.parser.plyTypeLex import TokenKind, tokenize

LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=Type)


def is_type_name(name: str) -> bool:
    """
    Check that a name can be written in a type declaration: dot separated identifiers that are not keywords, without
    whitespace.
    """
    kinds: List[TokenKind] = []
    lexemes: List[str] = []
    for token in tokenize(name):
        kinds.append(token.kind)
        lexemes.append(token.lexeme)
    expected = [TokenKind.IDENT] + [TokenKind.DOT, TokenKind.IDENT] * ((len(kinds) - 2) // 2) + [TokenKind.EOF]
    return kinds == expected and "".join(lexemes) == name


class TypeRegistry(object):
    """
    Owns the canonical instances of all types. Named types are resolved by name, composite types are interned so that
    structurally identical types obtained from independent parses are the same instance.

    The registry can be shared by parsers running on different threads.

    :param builtin_types: the names of the builtin primitive types to register, see
        :py:data:`typedecl.ast.type.TYPES`. Defaults to the `registry.builtin-types` config option.
    """

    def __init__(self, builtin_types: Optional[Iterable[str]] = None) -> None:
        self._lock = threading.RLock()
        self._named_types: Dict[str, NamedType] = {}
        self._interned: Dict[Hashable, Type] = {}

        if builtin_types is None:
            builtin_types = config.registry_builtin_types.get()
        for name in builtin_types:
            if name not in TYPES:
                raise ValueError("Unknown builtin type %s, expected one of %s" % (name, ", ".join(TYPES)))
            self._named_types[name] = TYPES[name]

    def define_type(
        self, name: str, validator: Optional[Callable[[object], bool]] = None, location: Optional[Location] = None
    ) -> NamedType:
        """
        Register a new named type.

        :param name: the fully qualified, dot separated, name of the type
        :param validator: predicate to validate values of this type
        :param location: where the type was declared
        """
        if not is_type_name(name):
            raise ValueError("Invalid type name %r, expected dot separated identifiers that are not keywords" % name)
        newtype = NamedType(name, validator)
        if location is not None:
            newtype.set_location(location)
        with self._lock:
            if name in self._named_types:
                raise DuplicateTypeException(newtype, self._named_types[name], "Type %s is already defined" % name)
            self._named_types[name] = newtype
        LOGGER.debug("Defined type %s", name)
        return newtype

    def get_type(self, name: str) -> Optional[NamedType]:
        """
        Resolve a named type, returns None if no type with this name is registered.
        """
        return self._named_types.get(name)

    def get_types(self) -> List[str]:
        return sorted(self._named_types)

    def _intern(self, key: Hashable, create: Callable[[], T]) -> T:
        with self._lock:
            existing = self._interned.get(key)
            if existing is not None:
                return existing
            created = create()
            self._interned[key] = created
            LOGGER.debug("Created canonical type %s", created)
            return created

    def get_or_create_list_type(self, element: Type) -> ListType:
        return self._intern((TypeKind.list, element), lambda: ListType(element))

    def get_or_create_map_type(self, key: Type, value: Type) -> MapType:
        return self._intern((TypeKind.map, key, value), lambda: MapType(key, value))

    def get_or_create_record_type(self, fields: Mapping[str, Type]) -> RecordType:
        """
        Get the record type with the given fields. The order of the fields is part of the identity of the record type.
        """
        items = tuple(fields.items())
        return self._intern((TypeKind.record, items), lambda: RecordType(dict(items)))

    def get_or_create_union_type(self, members: Sequence[Type]) -> Type:
        """
        Get the union of the given types. Nested unions are flattened and duplicate members are dropped, keeping the
        first occurrence. When a single member remains, that member is returned.
        """
        if not members:
            raise ValueError("A union type requires at least one member")

        flat: List[Type] = []
        for member in members:
            for tp in member.types if isinstance(member, UnionType) else [member]:
                if tp not in flat:
                    flat.append(tp)

        if len(flat) == 1:
            return flat[0]

        types = tuple(flat)
        return self._intern((TypeKind.union, types), lambda: UnionType(types))
