"""Boxed table rendering for terminals."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.table import Table
from rich.text import Text

from rd_cli.core.models import Column
from rd_cli.output.render import as_records, render_to_string
from rd_cli.utils.colors import PLAIN, Palette
from rd_cli.utils.records import format_value, get_nested_value


def format_table(
    data: Any,
    columns: Sequence[Column],
    palette: Palette = PLAIN,
    width: Optional[int] = None,
) -> str:
    """Project each record through ``columns``; sized columns truncate with an ellipsis."""
    table = Table(header_style="bold" if palette.enabled else "")
    for column in columns:
        table.add_column(
            column.header,
            width=column.width,
            no_wrap=column.width is not None,
            overflow="ellipsis",
        )

    for item in as_records(data):
        table.add_row(*(Text(format_value(get_nested_value(item, column.key))) for column in columns))

    return render_to_string(table, color=palette.enabled, width=width)
