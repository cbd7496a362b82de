"""Authentication status command."""

from __future__ import annotations

import typer

from rd_cli.commands.common import build_api, error_boundary, get_state, status
from rd_cli.core.config import token_source
from rd_cli.core.models import Column
from rd_cli.output import output

app = typer.Typer(help="Inspect authentication", no_args_is_help=True)

USER_COLUMNS = [
    Column("fullName", "Name", prominent=True),
    Column("email", "Email"),
    Column("_id", "ID"),
    Column("pro", "Pro"),
    Column("tokenSource", "Token source"),
]


@app.command("status")
def status_command(ctx: typer.Context) -> None:
    """Check that the configured token works and show the account."""
    state = get_state(ctx)
    with error_boundary(state):
        api = build_api(state)
        with status(state, "Validating token..."):
            user = dict(api.get_user().get("user", {}))

    user["tokenSource"] = token_source(state.config)
    output(user, USER_COLUMNS, state.output)
