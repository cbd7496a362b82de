"""Bookmark (raindrop) commands."""

from __future__ import annotations

from typing import Optional

import typer

from rd_cli.commands.common import build_api, error_boundary, get_state, status
from rd_cli.core.constants import COLLECTION_ALL
from rd_cli.core.models import Column
from rd_cli.output import output

app = typer.Typer(help="List and inspect bookmarks", no_args_is_help=True)

BOOKMARK_COLUMNS = [
    Column("title", "Title", width=40, prominent=True),
    Column("link", "URL", width=50, prominent=True),
    Column("excerpt", "Excerpt"),
    Column("note", "Note"),
    Column("tags", "Tags", width=20),
    Column("created", "Created", width=12),
    Column("_id", "ID", width=12),
]

BOOKMARK_DETAIL_COLUMNS = [
    *BOOKMARK_COLUMNS[:2],
    Column("domain", "Domain"),
    Column("type", "Type"),
    Column("collection.$id", "Collection"),
    *BOOKMARK_COLUMNS[2:],
    Column("lastUpdate", "Updated", width=12),
]

SORT_CHOICES = {"-created", "created", "score", "-sort", "title", "-title", "domain", "-domain"}


@app.command("list")
def list_command(
    ctx: typer.Context,
    collection: Optional[int] = typer.Option(
        None, "--collection", "-c", help="Collection ID (0 = all, -1 = unsorted); defaults to [defaults] collection"
    ),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search query"),
    limit: int = typer.Option(25, "--limit", "-l", min=1, max=50, help="Bookmarks per page (max 50)"),
    page: int = typer.Option(0, "--page", "-p", min=0, help="Page number, starting at 0"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort order, e.g. -created or title"),
) -> None:
    """List bookmarks in a collection."""
    state = get_state(ctx)
    if sort is not None and sort not in SORT_CHOICES:
        raise typer.BadParameter(f"--sort must be one of: {', '.join(sorted(SORT_CHOICES))}")
    if collection is None:
        collection = int(state.config.get("defaults", {}).get("collection", COLLECTION_ALL))

    with error_boundary(state):
        api = build_api(state)
        with status(state, "Fetching bookmarks..."):
            payload = api.get_raindrops(collection, search=search, page=page, per_page=limit, sort=sort)

    output(payload.get("items", []), BOOKMARK_COLUMNS, state.output)


@app.command("get")
def get_command(
    ctx: typer.Context,
    bookmark_id: int = typer.Argument(..., help="Bookmark ID"),
) -> None:
    """Show a single bookmark."""
    state = get_state(ctx)
    with error_boundary(state):
        api = build_api(state)
        with status(state, f"Fetching bookmark {bookmark_id}..."):
            payload = api.get_raindrop(bookmark_id)

    output(payload.get("item", payload), BOOKMARK_DETAIL_COLUMNS, state.output)
