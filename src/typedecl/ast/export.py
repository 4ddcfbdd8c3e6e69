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

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Exportable:
    # empty slots so Location and Range keep their own __slots__
    __slots__ = ()

    def export(self) -> BaseModel:
        raise NotImplementedError()


class Position(BaseModel):
    """A 0-based line and character offset"""

    line: int
    character: int


class Range(BaseModel):
    """A span between two positions, the end is exclusive"""

    start: Position
    end: Position


class Location(BaseModel):
    """A range in a named source, in the LSP location format"""

    uri: str
    range: Range


class ErrorCategory(str, Enum):
    parser = "parse_error"
    runtime = "runtime_error"


class Error(BaseModel):
    """
    An error in a form the host compiler can report.

    :param category: whether the declaration was rejected or a value did not match a parsed type
    :param type: fully qualified name of the exception class
    :param message: the formatted error message
    :param location: the location of the type declaration in the host source, if the host supplied one
    :param range: the position of the offending token within the type declaration itself
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    category: ErrorCategory = ErrorCategory.runtime
    type: str
    message: str
    location: Optional[Location] = None
    range: Optional[Range] = None
