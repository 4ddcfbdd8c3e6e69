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

from typedecl.ast import export


class Location(export.Exportable):
    __slots__ = ("file", "lnr")

    def __init__(self, file: str, lnr: int) -> None:
        self.file = file
        self.lnr = lnr

    def __str__(self) -> str:
        return "%s:%d" % (self.file, self.lnr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return False
        return self.file == other.file and self.lnr == other.lnr

    def __hash__(self) -> int:
        return hash((self.file, self.lnr))

    def export(self) -> export.Location:
        # Location is 1-based, export.Position spec is 0-based
        # whole line: range from line:0 to line+1:0
        range_start: export.Position = export.Position(line=self.lnr - 1, character=0)
        range_end: export.Position = export.Position(line=self.lnr, character=0)
        return export.Location(uri=self.file, range=export.Range(start=range_start, end=range_end))


class Range(Location):
    __slots__ = ("start_char", "end_lnr", "end_char")

    def __init__(self, file: str, start_lnr: int, start_char: int, end_lnr: int, end_char: int) -> None:
        """
        Create a new Range instance.
        :param file: the file this Range is in
        :param start_lnr: the line number this Range starts on, 1-based
        :param start_char: the start character number of the Range, 1-based
        :param end_lnr: the line number this Range ends on, 1-based
        :param end_char: the end character number of the Range, exclusive, 1-based
        """
        Location.__init__(self, file, start_lnr)
        self.start_char = start_char
        self.end_lnr = end_lnr
        self.end_char = end_char

    def export(self) -> export.Location:
        range_start: export.Position = export.Position(line=self.lnr - 1, character=self.start_char - 1)
        range_end: export.Position = export.Position(line=self.end_lnr - 1, character=self.end_char - 1)
        result: export.Location = super().export()
        result.range = export.Range(start=range_start, end=range_end)
        return result

    def __str__(self) -> str:
        return "%s:%d:%d" % (self.file, self.lnr, self.start_char)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Range):
            return (
                self.file == other.file
                and self.lnr == other.lnr
                and self.start_char == other.start_char
                and self.end_lnr == other.end_lnr
                and self.end_char == other.end_char
            )
        return False

    def __hash__(self) -> int:
        return hash((self.file, self.lnr, self.start_char, self.end_lnr, self.end_char))


class Locatable(object):
    __slots__ = ("_location",)

    def __init__(self) -> None:
        self._location: Optional[Location] = None

    def set_location(self, location: Location) -> None:
        assert location is not None and location.lnr > 0
        self._location = location

    def get_location(self) -> Optional[Location]:
        return self._location

    location = property(get_location, set_location)


class CompilerException(Exception, export.Exportable):
    """Base class for exceptions generated while parsing or using type declarations"""

    def __init__(self, msg: str) -> None:
        Exception.__init__(self, msg)
        self.location = None  # type: Optional[Location]
        self.msg = msg

    def set_location(self, location: Optional[Location]) -> None:
        if self.location is None:
            self.location = location

    def get_message(self) -> str:
        return self.msg

    def get_location(self) -> Optional[Location]:
        return self.location

    def format(self) -> str:
        """Make a string representation of this particular exception"""
        location = self.get_location()
        if location is not None:
            return "%s (%s)" % (self.get_message(), location)
        else:
            return self.get_message()

    def export(self) -> export.Error:
        location: Optional[Location] = self.get_location()
        module: Optional[str] = self.__class__.__module__
        name: str = self.__class__.__qualname__
        return export.Error(
            type=name if module is None else "%s.%s" % (module, name),
            message=self.get_message(),
            # the location is supplied by the host and is only exported when it is one of ours
            location=location.export() if isinstance(location, Location) else None,
        )

    def __str__(self) -> str:
        return self.format()


class RuntimeException(CompilerException):
    """Baseclass for exceptions raised when a parsed type is used, e.g. to validate a value."""

    def __init__(self, source: "Optional[Locatable]", msg: str) -> None:
        CompilerException.__init__(self, msg)
        if source is not None:
            self.set_location(source.get_location())


class DuplicateTypeException(RuntimeException):
    """Exception raised when a named type is registered twice"""

    def __init__(self, source: Locatable, other: Locatable, msg: str) -> None:
        RuntimeException.__init__(self, source, msg)
        self.other = other

    def format(self) -> str:
        return "%s (original at (%s)) (duplicate at (%s))" % (self.get_message(), self.other.get_location(), self.location)
