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
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import ply.lex as lex

from typedecl.ast import Range

keywordlist = ["list", "map"]
reserved = {k: "%s_KW" % k.upper() for k in keywordlist}

# List of token names.   This is always required
tokens = [
    "LANGLE",
    "RANGLE",
    "LBRACKET",
    "RBRACKET",
    "COMMA",
    "VBAR",
    "COLON",
    "DOT",
    "QMARK",
    "IDENT",
    "UNEXPECTED",
] + sorted(list(reserved.values()))


class TokenKind(Enum):
    """
    The kinds of tokens in a type declaration. The value of each kind is its description in error messages.
    """

    LANGLE = "'<'"
    RANGLE = "'>'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    COMMA = "','"
    VBAR = "'|'"
    COLON = "':'"
    DOT = "'.'"
    QMARK = "'?'"
    LIST_KW = "'list'"
    MAP_KW = "'map'"
    IDENT = "identifier"
    UNEXPECTED = "illegal character"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    range: Range
    lexpos: int

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return self.kind.value
        if self.kind is TokenKind.IDENT:
            return "identifier '%s'" % self.lexeme
        return "'%s'" % self.lexeme


t_LANGLE = r"<"
t_RANGLE = r">"
t_LBRACKET = r"\["
t_RBRACKET = r"\]"
t_COMMA = r","
t_VBAR = r"\|"
t_COLON = r":"
t_DOT = r"\."
t_QMARK = r"\?"


def t_IDENT(t: lex.LexToken) -> lex.LexToken:  # noqa: N802
    r"[A-Za-z_][A-Za-z_0-9]*"
    t.type = reserved.get(t.value, "IDENT")  # Check for reserved words
    return t


# Define a rule so we can track line numbers
def t_newline(t: lex.LexToken) -> None:  # noqa: N802
    r"\n+"
    t.lexer.lineno += len(t.value)
    t.lexer.linestart = t.lexer.lexpos


# A string containing ignored characters (spaces, tabs and the carriage return of CRLF)
t_ignore = " \t\r"


# Illegal characters are handed to the parser, which reports them with the position of the token
def t_error(t: lex.LexToken) -> lex.LexToken:  # noqa: N802
    t.type = "UNEXPECTED"
    t.value = t.value[0]
    t.lexer.skip(1)
    return t


# Build the lexer
lexer = lex.lex()


def tokenize(text: str, file: str = "<type>") -> Iterator[Token]:
    """
    Lazily split a type declaration into tokens. The sequence always ends with a single EOF token. Every call starts from
    scratch on its own copy of the lexer.

    :param text: the type declaration
    :param file: the file name to use in the range of every token
    """
    instance = lexer.clone()
    instance.lineno = 1
    instance.linestart = 0
    instance.input(text)

    while True:
        tok = instance.token()
        if tok is None:
            break
        start = tok.lexpos - instance.linestart + 1
        yield Token(
            kind=TokenKind[tok.type],
            lexeme=tok.value,
            range=Range(file, tok.lineno, start, tok.lineno, start + len(tok.value)),
            lexpos=tok.lexpos,
        )

    end = len(text) - instance.linestart + 1
    yield Token(kind=TokenKind.EOF, lexeme="", range=Range(file, instance.lineno, end, instance.lineno, end), lexpos=len(text))
