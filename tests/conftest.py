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
import os

import pytest

import typedecl.logging
from typedecl.ast import Location
from typedecl.config import Config
from typedecl.registry import TypeRegistry


@pytest.fixture(autouse=True)
def reset_config(tmp_path, monkeypatch):
    """
    Make sure no config file of the developer is loaded and every test starts from the default configuration.
    """
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in list(os.environ):
        if name.startswith("TYPEDECL_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    Config._reset()
    yield
    Config._reset()


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Remove the handler installed by the command line, it writes to a stream that is closed after the test.
    """
    root = logging.getLogger()
    level = root.level
    yield
    if typedecl.logging._handler is not None:
        root.removeHandler(typedecl.logging._handler)
        typedecl.logging._handler = None
    root.setLevel(level)


@pytest.fixture
def registry() -> TypeRegistry:
    registry = TypeRegistry()
    registry.define_type("Foo.Bar")
    registry.define_type("Baz")
    return registry


@pytest.fixture
def location() -> Location:
    return Location("test.tmpl", 7)
