"""Collection commands."""

from __future__ import annotations

import typer

from rd_cli.commands.common import build_api, error_boundary, get_state, status
from rd_cli.core.models import Column
from rd_cli.output import output, output_tree
from rd_cli.utils.tree import build_tree

app = typer.Typer(help="List collections", no_args_is_help=True)

COLLECTION_COLUMNS = [
    Column("title", "Title", width=40, prominent=True),
    Column("_id", "ID", width=10),
    Column("count", "Items", width=8),
    Column("parent.$id", "Parent", width=10),
]


@app.command("list")
def list_command(
    ctx: typer.Context,
    tree: bool = typer.Option(False, "--tree", "-t", help="Show nested collections as a tree"),
) -> None:
    """List root and nested collections."""
    state = get_state(ctx)
    with error_boundary(state):
        api = build_api(state)
        with status(state, "Fetching collections..."):
            roots = api.get_collections().get("items", [])
            children = api.get_child_collections().get("items", [])

    if tree:
        output_tree(build_tree(roots, children), state.output)
        return

    output([*roots, *children], COLLECTION_COLUMNS, state.output)
