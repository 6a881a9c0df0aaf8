"""
Command-line interface for reldoc.

Converts between JSON arrays and relational documents, inspects document
blocks, and shows or exports the effective configuration.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from . import __version__
from .api import decode_document, encode_document
from .codec.blocks import BlockParser
from .core.config import CodecConfig, get_config
from .exceptions import DocumentSyntaxError
from .models.enums import LogLevel, RelationPolicy
from .utils.config_export import export_config
from .utils.logging import setup_logging
from .utils.rich_logging import console, setup_rich_logging

app = typer.Typer(
    name="reldoc",
    help="Encode and decode relational document notation",
    add_completion=False,
)

_state: dict[str, CodecConfig] = {}


def _config() -> CodecConfig:
    return _state.get("config") or get_config()


def _read_input(path: Path) -> str:
    """Read a file, or stdin when the path is '-'."""
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        console.print_error(f"Input not found: {path}")
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print_success(f"Wrote {output}")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Load configuration and set up logging for every command."""
    setup_rich_logging()
    try:
        config = get_config()
    except ValidationError as e:
        console.print_error(f"Invalid configuration:\n{e}")
        raise typer.Exit(code=1)

    if verbose:
        config = config.model_copy(update={"log_level": LogLevel.DEBUG})
    _state["config"] = config
    setup_logging(config)


@app.command()
def version():
    """Show version information."""
    console.console.print(f"[bold cyan]reldoc[/bold cyan] version {__version__}")


@app.command()
def encode(
    input: Path = typer.Argument(..., help="JSON file holding an array of records ('-' for stdin)"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Root block name"),
    foreign_key: Optional[str] = typer.Option(
        None, "--foreign-key", help="Relation key name for child blocks"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
):
    """
    Convert a JSON array to a relational document.

    Examples:
        reldoc encode customers.json --name clientes
        cat customers.json | reldoc encode - -n clientes -o customers.rdn
    """
    config = _config()
    try:
        records = json.loads(_read_input(input))
    except json.JSONDecodeError as e:
        console.print_error(f"Invalid JSON input: {e}")
        raise typer.Exit(code=1)

    if not isinstance(records, list):
        console.print_error("Input must be a JSON array.")
        raise typer.Exit(code=1)

    result = encode_document(
        records, name or config.default_root_name, foreign_key=foreign_key, config=config
    )
    if not result:
        console.print_error(result.error)
        raise typer.Exit(code=1)

    _write_output(result.data, output)


@app.command()
def decode(
    input: Path = typer.Argument(..., help="Document file ('-' for stdin)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON to file"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on child blocks that reference no known parent"
    ),
):
    """
    Convert a relational document to a JSON array.

    Examples:
        reldoc decode customers.rdn
        reldoc decode customers.rdn --strict -o customers.json
    """
    policy = RelationPolicy.STRICT if strict else None
    result = decode_document(_read_input(input), config=_config(), relation_policy=policy)

    for warning in result.warnings:
        console.print_warning(warning)

    if not result:
        console.print_error(result.error)
        raise typer.Exit(code=1)

    _write_output(json.dumps(result.data, indent=2, ensure_ascii=False), output)


@app.command()
def inspect(
    input: Path = typer.Argument(..., help="Document file ('-' for stdin)"),
):
    """List the blocks of a document without resolving relations."""
    parser = BlockParser(strip_whitespace=_config().strip_whitespace)
    try:
        blocks = parser.parse(_read_input(input))
    except DocumentSyntaxError as e:
        console.print_error(f"{e.user_message} {e.line!r}")
        raise typer.Exit(code=1)

    if not blocks:
        console.print_warning("Document is empty.")
        return
    console.print_blocks(blocks)


@app.command()
def config(
    export: Optional[Path] = typer.Option(
        None, "--export", help="Write the effective configuration to a YAML file"
    ),
):
    """Show the effective configuration, or export it to YAML."""
    current = _config()
    if export is not None:
        path = export_config(current, export)
        console.print_success(f"Configuration exported to {path}")
        return

    console.print_banner(__version__)
    console.print_config_summary(current)
