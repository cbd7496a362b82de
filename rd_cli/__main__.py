"""Entry point for raindrop-cli."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Optional

import typer

from rd_cli import __version__
from rd_cli.commands import auth as auth_commands
from rd_cli.commands import bookmarks as bookmark_commands
from rd_cli.commands import collections as collection_commands
from rd_cli.commands import tags as tag_commands
from rd_cli.core.config import default_config_path, load_config, resolve_format, resolve_timeout, validate_timeout
from rd_cli.core.errors import ConfigError
from rd_cli.core.models import FORMAT_NAMES, OutputOptions, parse_format
from rd_cli.core.state import CLIState
from rd_cli.utils.debug import Diagnostics
from rd_cli.utils.tty import should_use_color

app = typer.Typer(
    add_completion=False,
    help="Raindrop.io command-line interface",
    invoke_without_command=True,
)


def _validate_format_option(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        return parse_format(value).value
    except ConfigError as exc:
        raise typer.BadParameter(exc.message) from exc


def _validate_timeout_option(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    try:
        return validate_timeout(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _pick_format(explicit: Optional[str], shortcuts: dict[str, bool]) -> Optional[str]:
    chosen = [name for name, enabled in shortcuts.items() if enabled]
    if explicit is not None:
        chosen.insert(0, explicit)
    distinct = list(dict.fromkeys(chosen))
    if len(distinct) > 1:
        flags = " and ".join(f"--{name}" for name in distinct)
        typer.echo(f"Options {flags} are mutually exclusive.", err=True)
        raise typer.Exit(code=2)
    return distinct[0] if distinct else None


@app.callback()
def main_callback(
    ctx: typer.Context,
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {'|'.join(FORMAT_NAMES)}",
        callback=_validate_format_option,
    ),
    json_output: bool = typer.Option(False, "--json", help="Shortcut for --format json"),
    table_output: bool = typer.Option(False, "--table", help="Shortcut for --format table"),
    tsv_output: bool = typer.Option(False, "--tsv", help="Shortcut for --format tsv"),
    plain_output: bool = typer.Option(False, "--plain", help="Shortcut for --format plain"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print IDs"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show API calls and timing on stderr"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Show internal state on stderr (implies --verbose)"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds (default 30)",
        callback=_validate_timeout_option,
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    explicit_format = _pick_format(
        output_format,
        {"json": json_output, "table": table_output, "tsv": tsv_output, "plain": plain_output},
    )

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
        resolved_format = resolve_format(cfg, explicit_format)
        timeout_seconds = resolve_timeout(cfg, timeout)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc.message}", err=True)
        raise typer.Exit(code=2)

    ctx.obj = CLIState(
        output=OutputOptions(
            format=resolved_format,
            quiet=quiet,
            verbose=verbose or debug,
            debug=debug,
            color=should_use_color(no_color),
        ),
        timeout_seconds=timeout_seconds,
        config_path=cfg_path,
        config=MappingProxyType(cfg),
        diagnostics=Diagnostics(verbose=verbose, debug=debug),
    )
    ctx.obj.diagnostics.debug(
        "Resolved options",
        {"format": resolved_format, "timeout": timeout_seconds, "config": str(cfg_path)},
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


app.add_typer(auth_commands.app, name="auth")
app.add_typer(bookmark_commands.app, name="bookmarks")
app.add_typer(collection_commands.app, name="collections")
app.add_typer(tag_commands.app, name="tags")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
