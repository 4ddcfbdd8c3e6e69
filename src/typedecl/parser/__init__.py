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

from typing import Optional

import typedecl.ast.export as ast_export
from typedecl.ast import CompilerException, Location, Range


def _with_position(msg: str, range: Optional[Range]) -> str:
    if range is None:
        return msg
    return "%s at %d:%d" % (msg, range.lnr, range.start_char)


class ParserException(CompilerException):
    """
    Exception occurring during the parsing of a type declaration. This is the only exception raised by the parser: lexical,
    syntactic and semantic errors are all reported through it.

    :param location: the source location of the type declaration, as supplied by the caller. It is reported unchanged.
    :param value: the offending lexeme or name
    :param msg: the error message, prefixed with `Syntax error`
    :param range: the position of the offending token within the type declaration
    """

    def __init__(
        self, location: Optional[Location], value: object, msg: Optional[str] = None, range: Optional[Range] = None
    ) -> None:
        if msg is None:
            msg = "Syntax error at token %s" % value
        else:
            msg = "Syntax error: %s" % msg
        CompilerException.__init__(self, _with_position(msg, range))
        self.set_location(location)
        self.value = value
        self.range = range

    def export(self) -> ast_export.Error:
        error: ast_export.Error = super().export()
        error.category = ast_export.ErrorCategory.parser
        if self.range is not None:
            error.range = self.range.export().range
        return error


class TypeResolutionException(ParserException):
    """Grammatically valid type declaration that has no meaning"""

    def __init__(self, location: Optional[Location], value: object, msg: str, range: Optional[Range] = None) -> None:
        # not a syntax error, so the message has no prefix
        CompilerException.__init__(self, _with_position(msg, range))
        self.set_location(location)
        self.value = value
        self.range = range


class UnknownTypeException(TypeResolutionException):
    """Exception raised when a type declaration references a named type that is not in the registry"""

    def __init__(self, location: Optional[Location], name: str, range: Optional[Range] = None) -> None:
        TypeResolutionException.__init__(self, location, name, "Unknown type '%s'" % name, range)
        self.name = name


class DuplicateFieldException(TypeResolutionException):
    """Exception raised when a record type declares the same field twice"""

    def __init__(self, location: Optional[Location], field: str, range: Optional[Range] = None) -> None:
        TypeResolutionException.__init__(self, location, field, "Duplicate field '%s' in record type" % field, range)
        self.field = field
