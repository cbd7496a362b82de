"""Shared command helpers."""

from __future__ import annotations

import json
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Iterator, NoReturn

import typer

from rd_cli.core.api import RaindropAPI
from rd_cli.core.config import resolve_api_delay, resolve_token
from rd_cli.core.constants import API_BASE, MAX_RETRIES
from rd_cli.core.errors import RaindropCliError
from rd_cli.core.models import OutputFormat
from rd_cli.output import resolve_output_format
from rd_cli.core.state import CLIState
from rd_cli.utils.streams import output_message


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def build_api(state: CLIState) -> RaindropAPI:
    """Create an API client from resolved state; raises ``ConfigError`` without a token."""
    api_cfg = state.config.get("api", {})
    return RaindropAPI(
        token=resolve_token(state.config),
        base_url=str(api_cfg.get("base_url") or API_BASE),
        timeout_seconds=state.timeout_seconds,
        max_retries=int(api_cfg.get("max_retries", MAX_RETRIES)),
        rate_limit_delay=resolve_api_delay(state.config),
        diagnostics=state.diagnostics,
    )


def handle_error(state: CLIState, exc: Exception) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    if isinstance(exc, RaindropCliError):
        if resolve_output_format(state.output) is OutputFormat.JSON:
            output_message(json.dumps(exc.to_dict(), indent=2, default=str))
        else:
            output_message(f"Error: {exc.message}")
            if state.diagnostics.debug_enabled and exc.details:
                output_message("Details: " + json.dumps(exc.details, indent=2, default=str))
    else:
        output_message(f"Error: {exc}")
    raise typer.Exit(code=1)


@contextmanager
def error_boundary(state: CLIState) -> Iterator[None]:
    """Turn known client errors into a clean message and exit code."""
    try:
        yield
    except RaindropCliError as exc:
        handle_error(state, exc)


def status(state: CLIState, message: str) -> ContextManager[object]:
    """Spinner on stderr for interactive sessions only."""
    console = state.diagnostics.console
    if state.output.quiet or state.diagnostics.verbose_enabled or not console.is_terminal:
        return nullcontext()
    return console.status(message)
