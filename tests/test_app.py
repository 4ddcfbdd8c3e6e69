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
import json

from click import testing

from typedecl import VERSION
from typedecl.app import cmd


def run(*args: str) -> testing.Result:
    runner = testing.CliRunner()
    return runner.invoke(cli=cmd, args=list(args))


def test_parse():
    result = run("parse", "map< string,?>")
    assert result.exit_code == 0
    assert result.output == "map<string, ?>\n"


def test_parse_with_defined_types():
    result = run("parse", "-d", "Foo.Bar", "--define", "Baz", "Foo.Bar|list<Baz>|?")
    assert result.exit_code == 0
    assert result.output == "Foo.Bar|list<Baz>|?\n"


def test_parse_error():
    result = run("parse", "[a: int, b: bogus]")
    assert result.exit_code == 1
    assert "Unknown type 'bogus' at 1:13 (<cmdline>:1)" in result.output


def test_parse_error_json():
    result = run("parse", "--json", "list<")
    assert result.exit_code == 1
    error = json.loads(result.output)
    assert error["category"] == "parse_error"
    assert error["type"] == "typedecl.parser.ParserException"
    assert error["message"] == "Syntax error: expected type expression, found end of input at 1:6"
    assert error["location"]["uri"] == "<cmdline>"


def test_define_builtin_type():
    result = run("parse", "-d", "int", "int")
    assert result.exit_code == 1
    assert "Type int is already defined" in result.output


def test_define_invalid_name():
    result = run("parse", "-d", "list", "int")
    assert result.exit_code == 2
    assert "Invalid type name 'list'" in result.output


def test_validate():
    result = run("validate", "list<[a: int|null]>", '[{"a": 1}, {"a": null}]')
    assert result.exit_code == 0
    assert result.output == '[{"a": 1}, {"a": null}] is a valid list<[a: int|null]>\n'


def test_validate_invalid_value():
    result = run("validate", "map<string, int>", '{"a": "b"}')
    assert result.exit_code == 1
    assert "Invalid value 'b', expected int" in result.output


def test_validate_invalid_json():
    result = run("validate", "int", "{")
    assert result.exit_code == 2
    assert "not a valid JSON document" in result.output


def test_config_option(tmp_path):
    cfg_file = tmp_path / "custom.cfg"
    cfg_file.write_text("[registry]\nbuiltin-types=string\n", encoding="utf-8")

    result = run("--config", str(cfg_file), "parse", "string")
    assert result.exit_code == 0

    result = run("--config", str(cfg_file), "parse", "int")
    assert result.exit_code == 1
    assert "Unknown type 'int'" in result.output


def test_version():
    result = run("--version")
    assert result.exit_code == 0
    assert VERSION in result.output
