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
from typing import List, Tuple

import pytest

from typedecl.ast import Range
from typedecl.parser.plyTypeLex import Token, TokenKind, tokenize


def kinds(text: str) -> List[TokenKind]:
    return [token.kind for token in tokenize(text)]


def lexemes(text: str) -> List[Tuple[TokenKind, str]]:
    return [(token.kind, token.lexeme) for token in tokenize(text)]


def test_delimiters():
    assert kinds("<>[],|:.?") == [
        TokenKind.LANGLE,
        TokenKind.RANGLE,
        TokenKind.LBRACKET,
        TokenKind.RBRACKET,
        TokenKind.COMMA,
        TokenKind.VBAR,
        TokenKind.COLON,
        TokenKind.DOT,
        TokenKind.QMARK,
        TokenKind.EOF,
    ]


def test_keywords_and_identifiers():
    """Keywords are only recognized when the whole identifier matches"""
    assert lexemes("list map lists map_ _x1 List") == [
        (TokenKind.LIST_KW, "list"),
        (TokenKind.MAP_KW, "map"),
        (TokenKind.IDENT, "lists"),
        (TokenKind.IDENT, "map_"),
        (TokenKind.IDENT, "_x1"),
        (TokenKind.IDENT, "List"),
        (TokenKind.EOF, ""),
    ]


def test_whitespace_is_skipped():
    assert lexemes(" \tlist <\r\n int\n>\n") == [
        (TokenKind.LIST_KW, "list"),
        (TokenKind.LANGLE, "<"),
        (TokenKind.IDENT, "int"),
        (TokenKind.RANGLE, ">"),
        (TokenKind.EOF, ""),
    ]


def test_positions():
    tokens = list(tokenize("map<a,\r\n  b>", "main.tmpl"))
    assert [token.range for token in tokens] == [
        Range("main.tmpl", 1, 1, 1, 4),
        Range("main.tmpl", 1, 4, 1, 5),
        Range("main.tmpl", 1, 5, 1, 6),
        Range("main.tmpl", 1, 6, 1, 7),
        Range("main.tmpl", 2, 3, 2, 4),
        Range("main.tmpl", 2, 4, 2, 5),
        Range("main.tmpl", 2, 5, 2, 5),
    ]
    assert [token.lexpos for token in tokens] == [0, 3, 4, 5, 10, 11, 12]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("list<é>", [(TokenKind.LIST_KW, "list"), (TokenKind.LANGLE, "<"), (TokenKind.UNEXPECTED, "é"), (TokenKind.RANGLE, ">")]),
        ("int-x", [(TokenKind.IDENT, "int"), (TokenKind.UNEXPECTED, "-"), (TokenKind.IDENT, "x")]),
        ("1abc", [(TokenKind.UNEXPECTED, "1"), (TokenKind.IDENT, "abc")]),
        ("a;;", [(TokenKind.IDENT, "a"), (TokenKind.UNEXPECTED, ";"), (TokenKind.UNEXPECTED, ";")]),
    ],
)
def test_unexpected_characters(text: str, expected: List[Tuple[TokenKind, str]]):
    """Characters that don't start a token are passed on one by one, they never fail the lexer"""
    assert lexemes(text) == expected + [(TokenKind.EOF, "")]


def test_unexpected_character_position():
    token = list(tokenize("list<é>"))[2]
    assert token.kind is TokenKind.UNEXPECTED
    assert token.range == Range("<type>", 1, 6, 1, 7)


def test_empty_input():
    tokens = list(tokenize(""))
    assert len(tokens) == 1
    assert tokens[0].kind is TokenKind.EOF
    assert tokens[0].range == Range("<type>", 1, 1, 1, 1)


def test_tokenize_is_lazy_and_restartable():
    first = tokenize("Foo.Bar|?")
    second = tokenize("Foo.Bar|?")

    assert next(first).lexeme == "Foo"
    assert next(first).kind is TokenKind.DOT
    # an independent stream starts from the beginning
    assert next(second).lexeme == "Foo"
    assert [token.kind for token in first] == [TokenKind.IDENT, TokenKind.VBAR, TokenKind.QMARK, TokenKind.EOF]


def test_token_describe():
    ident, comma, eof = tokenize("a,")
    assert ident.describe() == "identifier 'a'"
    assert comma.describe() == "','"
    assert eof.describe() == "end of input"
    assert isinstance(ident, Token)
