"""stdout carries data; everything else goes to stderr so output stays pipeable."""

from __future__ import annotations

import typer


def output_data(message: str) -> None:
    """Write primary output (JSON, tables, ids in quiet mode) to stdout."""
    typer.echo(message)


def output_message(message: str) -> None:
    """Write status messages and errors to stderr."""
    typer.echo(message, err=True)
