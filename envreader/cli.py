"""
ABOUTME: Command-line interface for checking environment configuration
ABOUTME: Resolves a list of variable declarations and reports every problem in one pass
"""

import argparse
import json
import logging
import math
import re
import sys
from datetime import timedelta
from pathlib import Path
from typing import Any, NamedTuple, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import build_environ
from .exceptions import ConfigError, ParseError
from .parsers import parse_bool, parse_duration, parse_float, parse_int
from .reader import Reader

console = Console()

TYPE_PARSERS = {
    "str": str,
    "bool": parse_bool,
    "int": parse_int,
    "float": parse_float,
    "duration": parse_duration,
}

_DECL_RE = re.compile(r"(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<type>\w+))?(?:=(?P<default>.*))?", re.S)


class Declaration(NamedTuple):
    name: str
    type: str
    defaults: tuple


def parse_declaration(text: str) -> Declaration:
    """
    Parse a NAME[:TYPE][=DEFAULT] declaration.

    The default, when present, is parsed with the declared type's grammar so that
    the Reader receives a typed fallback value.

    Raises:
        argparse.ArgumentTypeError: If the declaration or its default is malformed.
    """
    m = _DECL_RE.fullmatch(text)
    if not m:
        raise argparse.ArgumentTypeError(f"invalid declaration '{text}'")

    type_name = m.group("type") or "str"
    if type_name not in TYPE_PARSERS:
        raise argparse.ArgumentTypeError(
            f"unknown type '{type_name}' in '{text}' (choose from {', '.join(TYPE_PARSERS)})"
        )

    defaults = ()
    if m.group("default") is not None:
        try:
            defaults = (TYPE_PARSERS[type_name](m.group("default")),)
        except ParseError as e:
            raise argparse.ArgumentTypeError(f"bad default in '{text}': {e}") from e

    return Declaration(m.group("name"), type_name, defaults)


def resolve(reader: Reader, declarations: list[Declaration]) -> dict[str, Any]:
    """Read every declaration through the reader, keyed by unprefixed name."""
    values = {}
    for decl in declarations:
        accessor = getattr(reader, f"get_{decl.type}")
        values[decl.name] = accessor(decl.name, *decl.defaults)
    return values


def _jsonable(value: Any) -> Any:
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def render_table(reader: Reader, declarations: list[Declaration], values: dict[str, Any]) -> Table:
    """Build a rich table showing each declaration, its resolved value and status."""
    failed = {e.name for e in reader.errors}
    table = Table(title="Environment configuration", show_header=True, header_style="bold magenta")
    table.add_column("Variable", style="cyan")
    table.add_column("Type")
    table.add_column("Value", justify="right")
    table.add_column("Status")

    for decl in declarations:
        full_name = reader.prefix + decl.name
        _, found = reader.lookup(decl.name)
        if full_name in failed:
            status = "[red]error[/red]"
        elif found:
            status = "[green]set[/green]"
        else:
            status = "[yellow]default[/yellow]"
        table.add_row(full_name, decl.type, str(values[decl.name]), status)
    return table


def cli(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse and return command-line arguments for the environment checker.

    Returns:
        argparse.Namespace: Parsed prefix, env file, output and logging options plus the list of declarations.
    """
    p = argparse.ArgumentParser(
        description="Check that environment variables are set and parse as the expected types"
    )
    p.add_argument(
        "declarations",
        nargs="+",
        type=parse_declaration,
        metavar="NAME[:TYPE][=DEFAULT]",
        help=f"Variable to check; TYPE is one of {', '.join(TYPE_PARSERS)} (default str)",
    )
    p.add_argument(
        "--prefix",
        type=str,
        default="",
        help="Prefix prepended to every variable name, e.g. APP_",
    )
    p.add_argument(
        "--env-file",
        type=Path,
        help="Read additional variables from this .env file (process variables take precedence)",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format instead of a rich console table",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"envreader {__version__}",
    )
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Execute the environment checker.

    Loads the optional .env file, resolves every declaration through a single Reader and
    reports all failures together. Exits with status 1 when any variable is missing or
    malformed, 0 otherwise.
    """
    a = cli(argv)

    logging.basicConfig(
        level=getattr(logging, a.log_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    try:
        environ = build_environ(a.env_file)
    except ConfigError as e:
        console.print(f"❌ Configuration error: {e}")
        sys.exit(1)

    reader = Reader(a.prefix, environ)
    values = resolve(reader, a.declarations)
    err = reader.err()

    if a.json:
        print(
            json.dumps(
                {
                    "values": {reader.prefix + k: _jsonable(v) for k, v in values.items()},
                    "errors": [
                        {"name": e.name, "error": str(e.cause)} for e in (err or ())
                    ],
                },
                indent=2,
                allow_nan=False,
            )
        )
    else:
        console.print(render_table(reader, a.declarations, values))
        if err is None:
            console.print("✅ All variables resolved")
        else:
            for e in err:
                console.print(f"❌ {e}")

    if err is not None:
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
