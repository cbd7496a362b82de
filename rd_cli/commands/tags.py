"""Tag commands."""

from __future__ import annotations

from typing import Optional

import typer

from rd_cli.commands.common import build_api, error_boundary, get_state, status
from rd_cli.core.models import Column
from rd_cli.output import output

app = typer.Typer(help="List tags", no_args_is_help=True)

TAG_COLUMNS = [
    Column("_id", "Tag", prominent=True),
    Column("count", "Count", width=10),
]


@app.command("list")
def list_command(
    ctx: typer.Context,
    collection: Optional[int] = typer.Option(None, "--collection", "-c", help="Only tags used in this collection"),
) -> None:
    """List tags with usage counts."""
    state = get_state(ctx)
    with error_boundary(state):
        api = build_api(state)
        with status(state, "Fetching tags..."):
            payload = api.get_tags(collection)

    output(payload.get("items", []), TAG_COLUMNS, state.output)
