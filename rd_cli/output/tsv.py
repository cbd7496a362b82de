"""Tab-separated rendering for scripts."""

from __future__ import annotations

from typing import Any, Sequence

from rd_cli.core.models import Column
from rd_cli.output.render import as_records
from rd_cli.utils.records import format_value, get_nested_value


def _tsv_value(value: Any) -> str:
    text = format_value(value, list_separator=",")
    return text.replace("\t", "\\t").replace("\n", "\\n")


def format_tsv(data: Any, columns: Sequence[Column]) -> str:
    """Header row plus one row per record; values are escaped, never truncated."""
    lines = ["\t".join(column.header for column in columns)]
    for item in as_records(data):
        lines.append("\t".join(_tsv_value(get_nested_value(item, column.key)) for column in columns))
    return "\n".join(lines)
