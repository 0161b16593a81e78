"""Command-line interface for toonlite.

Commands:
- `encode`: JSON in, notation out.
- `decode`: notation in, JSON out.
- `demo`: encode a sample record and decode it back.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, NoReturn, Optional, TextIO

import typer
from loguru import logger

from .codec import decode, encode
from .options import EncodeOptions

app = typer.Typer(
    name="toonlite",
    no_args_is_help=True,
    help="Convert between JSON and the toonlite notation.",
)

DEMO_DATA = {
    "id": 1,
    "name": "Manoj",
    "tags": ["php", "ai", "iot"],
    "items": [
        {"sku": "A1", "qty": 2, "price": 9.99},
        {"sku": "B2", "qty": 1, "price": 14.5},
    ],
}


def configure_logging(sink: Optional[TextIO] = None) -> None:
    """Route package debug records to stderr as plain message lines."""

    logger.remove()
    logger.add(sink or sys.stderr, format="{message}", level="DEBUG", colorize=False)
    logger.enable("toonlite")


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print a one-line diagnostic and exit with code 1."""

    typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _read_input(path: Optional[Path]) -> str:
    if path is None or str(path) == "-":
        return typer.get_text_stream("stdin").read()
    return path.read_text(encoding="utf-8")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log codec activity to stderr."),
    ] = False,
) -> None:
    """Convert between JSON and the toonlite notation."""

    if verbose:
        configure_logging()


@app.command("encode")
def encode_command(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="JSON file to read; stdin when omitted or `-`."),
    ] = None,
    indent: Annotated[int, typer.Option("--indent", help="Spaces per nesting level.")] = 2,
    minify: Annotated[bool, typer.Option("--minify", help="Drop all indentation.")] = False,
    trailing_newline: Annotated[
        bool,
        typer.Option(
            "--trailing-newline/--no-trailing-newline",
            help="End the output with a newline.",
        ),
    ] = True,
) -> None:
    """Encode a JSON document."""

    try:
        options = EncodeOptions(
            indent_size=indent,
            trailing_newline=trailing_newline,
            minify=minify,
        )
        text = encode(json.loads(_read_input(path)), options)
    except (ValueError, OSError) as exc:
        exit_with_command_error("encode", exc)
    typer.echo(text, nl=False)


@app.command("decode")
def decode_command(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="Notation file to read; stdin when omitted or `-`."),
    ] = None,
    indent: Annotated[int, typer.Option("--indent", help="JSON indentation.")] = 2,
) -> None:
    """Decode a notation document to JSON."""

    try:
        data = decode(_read_input(path))
    except (ValueError, OSError) as exc:
        exit_with_command_error("decode", exc)
    typer.echo(json.dumps(data, indent=indent, ensure_ascii=False))


@app.command("demo")
def demo_command() -> None:
    """Encode a sample record, then decode the result."""

    text = encode(DEMO_DATA)
    typer.echo("TOON:")
    typer.echo(text, nl=False)
    typer.echo("JSON:")
    typer.echo(json.dumps(decode(text), indent=2))


def main() -> None:
    """Run the CLI."""

    app()
