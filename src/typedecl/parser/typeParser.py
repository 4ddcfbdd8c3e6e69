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
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from typedecl import config
from typedecl.ast import Location, Range
from typedecl.ast.type import UNKNOWN, Type
from typedecl.parser import DuplicateFieldException, ParserException, UnknownTypeException
from typedecl.parser.plyTypeLex import Token, TokenKind, tokenize

if TYPE_CHECKING:
    from typedecl.registry import TypeRegistry

LOGGER = logging.getLogger(__name__)

KEYWORDS = (TokenKind.LIST_KW, TokenKind.MAP_KW)


class TypeDeclarationParser(object):
    """
    Recursive descent parser for type declarations. Each grammar rule is a method that consumes tokens from the shared
    token stream and returns a type:

        type_decl   : type_expr EOF
        type_expr   : primary ( '|' primary )*
        primary     : type_name | '?' | list_type | map_type | record_type
        list_type   : 'list' '<' type_expr '>'
        map_type    : 'map' '<' type_expr ',' type_expr '>'
        record_type : '[' ( record_field ( ',' record_field )* )? ']'
        record_field: IDENT ':' type_expr
        type_name   : IDENT ( '.' IDENT )*

    The next token alone decides which alternative is parsed, there is no backtracking. Named types are resolved and
    composite types are created through the registry while parsing. The first error aborts the parse.

    :param text: the type declaration
    :param location: the location of the declaration in the host source, reported unchanged on every error
    :param registry: the registry used to resolve and create types
    :param max_depth: the maximum nesting depth, a positive integer. Defaults to the `parser.max-nesting-depth` config
        option. Nesting that exceeds the interpreter stack is reported as a syntax error as well.
    """

    def __init__(
        self, text: str, location: Optional[Location], registry: "TypeRegistry", max_depth: Optional[int] = None
    ) -> None:
        self.text = text
        self.location = location
        self.registry = registry
        if max_depth is None:
            self.max_depth: int = config.parser_max_nesting_depth.get()
        else:
            self.max_depth = config.is_positive_int(max_depth)
        self._tokens: Optional[Iterator[Token]] = None
        self._current: Optional[Token] = None
        self._depth = 0

    def parse_type_declaration(self) -> Type:
        """
        Parse the complete type declaration. Raises a :py:class:`typedecl.parser.ParserException` on the first lexical,
        syntax or resolution error.
        """
        LOGGER.debug("Parsing type declaration %r (%s)", self.text, self.location)
        file = self.location.file if isinstance(self.location, Location) else "<type>"
        self._tokens = tokenize(self.text, file)
        self._current = next(self._tokens)
        self._depth = 0

        try:
            result = self._type_expr()
        except RecursionError:
            # the configured depth is larger than the interpreter stack allows
            token = self._peek()
            raise ParserException(self.location, token.lexeme, "type expression is nested too deeply", token.range)
        self._expect(TokenKind.EOF)
        return result

    # token stream

    def _peek(self) -> Token:
        assert self._current is not None
        return self._current

    def _advance(self) -> Token:
        token = self._peek()
        if token.kind is not TokenKind.EOF:
            assert self._tokens is not None
            self._current = next(self._tokens)
        return token

    def _expect(self, kind: TokenKind) -> Token:
        token = self._peek()
        if token.kind is kind:
            return self._advance()
        if kind is TokenKind.IDENT and token.kind in KEYWORDS:
            raise ParserException(
                self.location, token.lexeme, "invalid identifier, %s is a reserved keyword" % token.lexeme, token.range
            )
        raise self._unexpected(token, kind.value)

    def _unexpected(self, token: Token, expected: str) -> ParserException:
        if token.kind is TokenKind.UNEXPECTED:
            return ParserException(self.location, token.lexeme, "Illegal character '%s'" % token.lexeme, token.range)
        return ParserException(self.location, token.lexeme, "expected %s, found %s" % (expected, token.describe()), token.range)

    # grammar rules

    def _type_expr(self) -> Type:
        self._depth += 1
        try:
            if self._depth > self.max_depth:
                token = self._peek()
                raise ParserException(
                    self.location,
                    token.lexeme,
                    "type expression exceeds the maximum nesting depth of %d" % self.max_depth,
                    token.range,
                )
            return self._union_expr()
        finally:
            self._depth -= 1

    def _union_expr(self) -> Type:
        members: List[Type] = [self._primary()]
        while self._peek().kind is TokenKind.VBAR:
            self._advance()
            members.append(self._primary())

        if len(members) == 1:
            return members[0]
        return self.registry.get_or_create_union_type(members)

    def _primary(self) -> Type:
        token = self._peek()
        if token.kind is TokenKind.IDENT:
            return self._type_name()
        if token.kind is TokenKind.QMARK:
            self._advance()
            return UNKNOWN
        if token.kind is TokenKind.LIST_KW:
            return self._list_type()
        if token.kind is TokenKind.MAP_KW:
            return self._map_type()
        if token.kind is TokenKind.LBRACKET:
            return self._record_type()
        raise self._unexpected(token, "type expression")

    def _list_type(self) -> Type:
        self._expect(TokenKind.LIST_KW)
        self._expect(TokenKind.LANGLE)
        element = self._type_expr()
        self._expect(TokenKind.RANGLE)
        return self.registry.get_or_create_list_type(element)

    def _map_type(self) -> Type:
        self._expect(TokenKind.MAP_KW)
        self._expect(TokenKind.LANGLE)
        key = self._type_expr()
        self._expect(TokenKind.COMMA)
        value = self._type_expr()
        self._expect(TokenKind.RANGLE)
        return self.registry.get_or_create_map_type(key, value)

    def _record_type(self) -> Type:
        self._expect(TokenKind.LBRACKET)
        fields: Dict[str, Type] = {}
        if self._peek().kind is not TokenKind.RBRACKET:
            self._record_field(fields)
            while self._peek().kind is TokenKind.COMMA:
                self._advance()
                self._record_field(fields)
        self._expect(TokenKind.RBRACKET)
        return self.registry.get_or_create_record_type(fields)

    def _record_field(self, fields: Dict[str, Type]) -> None:
        name = self._expect(TokenKind.IDENT)
        if name.lexeme in fields:
            raise DuplicateFieldException(self.location, name.lexeme, name.range)
        self._expect(TokenKind.COLON)
        fields[name.lexeme] = self._type_expr()

    def _type_name(self) -> Type:
        first = self._expect(TokenKind.IDENT)
        last = first
        parts: List[str] = [first.lexeme]
        while self._peek().kind is TokenKind.DOT:
            self._advance()
            last = self._expect(TokenKind.IDENT)
            parts.append(last.lexeme)

        name = ".".join(parts)
        tp = self.registry.get_type(name)
        if tp is None:
            r = Range(first.range.file, first.range.lnr, first.range.start_char, last.range.end_lnr, last.range.end_char)
            raise UnknownTypeException(self.location, name, r)
        return tp


def parse_type_declaration(text: str, location: Optional[Location], registry: "TypeRegistry") -> Type:
    """
    Parse a type declaration into a canonical type of the given registry.

    :param text: the type declaration, e.g. `map<string, list<int>>`
    :param location: the location of the declaration in the host source, reported on errors
    :param registry: the registry used to resolve and create types
    """
    result = TypeDeclarationParser(text, location, registry).parse_type_declaration()
    LOGGER.debug("Parsed type declaration %r as %s", text, result)
    return result
