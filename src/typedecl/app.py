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
import logging
from typing import NoReturn, Sequence

import click

from typedecl import VERSION
from typedecl.ast import CompilerException, Location
from typedecl.ast.type import Type
from typedecl.config import Config
from typedecl.logging import setup_logging
from typedecl.parser.typeParser import parse_type_declaration
from typedecl.registry import TypeRegistry

LOGGER = logging.getLogger(__name__)

CMDLINE_LOCATION = Location("<cmdline>", 1)


def build_registry(define: Sequence[str]) -> TypeRegistry:
    """
    Create a registry with the builtin types and the named types passed with --define
    """
    registry = TypeRegistry()
    for name in define:
        try:
            registry.define_type(name, location=CMDLINE_LOCATION)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--define")
    return registry


def fail(exception: CompilerException, as_json: bool = False) -> NoReturn:
    LOGGER.debug("Type declaration rejected", exc_info=True)
    if as_json:
        click.echo(exception.export().model_dump_json())
    else:
        click.echo(exception.format(), err=True)
    raise click.exceptions.Exit(1)


define_option = click.option(
    "--define", "-d", multiple=True, metavar="NAME", help="Define a named type, e.g. Foo.Bar. Can be passed multiple times."
)


@click.group(help="Parse and check type declarations")
@click.version_option(version=VERSION, prog_name="typedecl")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Load this config file on top of the default config files",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log level for messages going to the console. Default is warnings, -v is info and -vv is debug.",
)
def cmd(config_file: str, verbose: int) -> None:
    setup_logging(verbose)
    Config.load_config(config_file)


@cmd.command(help="Parse a type declaration and print its canonical form")
@click.argument("declaration")
@define_option
@click.option("--json", "as_json", is_flag=True, help="Report errors as a JSON document on stdout")
def parse(declaration: str, define: Sequence[str], as_json: bool) -> None:
    try:
        registry = build_registry(define)
        tp: Type = parse_type_declaration(declaration, CMDLINE_LOCATION, registry)
    except CompilerException as e:
        fail(e, as_json)
    click.echo(tp.type_string())


@cmd.command(help="Check that a JSON encoded value is valid for a type declaration")
@click.argument("declaration")
@click.argument("value")
@define_option
def validate(declaration: str, value: str, define: Sequence[str]) -> None:
    try:
        decoded: object = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter("not a valid JSON document: %s" % e, param_hint="VALUE")

    try:
        registry = build_registry(define)
        tp: Type = parse_type_declaration(declaration, CMDLINE_LOCATION, registry)
        tp.validate(decoded)
    except CompilerException as e:
        fail(e)
    click.echo("%s is a valid %s" % (value, tp))


def main() -> None:
    cmd()


if __name__ == "__main__":
    main()
