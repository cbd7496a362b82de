"""Format-aware output for collection trees.

Terminal formats draw the hierarchy; data formats get flat rows with
``parentId`` and ``depth`` instead of box-drawing characters.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.text import Text

from rd_cli.core.constants import TREE_ICON
from rd_cli.core.models import OutputFormat
from rd_cli.output.json_output import format_json
from rd_cli.output.render import render_to_string
from rd_cli.utils.colors import PLAIN, Palette
from rd_cli.utils.tree import TreeNode, render_tree, walk_tree

TREE_DATA_FIELDS = ("title", "_id", "count", "parentId", "depth")


def flatten_tree(nodes: List[TreeNode]) -> List[Dict[str, Any]]:
    """Pre-order rows suitable for JSON/TSV."""
    return [
        {
            "title": node.title,
            "_id": node.id,
            "count": node.count,
            "parentId": node.parent_id,
            "depth": depth,
        }
        for node, depth in walk_tree(nodes)
    ]


def _count_label(count: int) -> str:
    return "1 item" if count == 1 else f"{count} items"


def format_tree_plain(nodes: List[TreeNode], palette: Palette = PLAIN, icon: str = TREE_ICON) -> str:
    return "\n".join(
        f"{row.tree} {palette.dim(f'({_count_label(row.count)})')}"
        for row in render_tree(nodes, icon, label=palette.bold)
    )


def format_tree_table(
    nodes: List[TreeNode],
    palette: Palette = PLAIN,
    icon: str = TREE_ICON,
    width: Optional[int] = None,
) -> str:
    table = Table(header_style="bold" if palette.enabled else "")
    table.add_column("Collection", width=50, no_wrap=True, overflow="ellipsis")
    table.add_column("ID", width=12, no_wrap=True)
    table.add_column("Items", width=8, no_wrap=True)
    for row in render_tree(nodes, icon, label=palette.bold):
        table.add_row(Text.from_ansi(row.tree), Text(str(row.id)), Text(str(row.count)))
    return render_to_string(table, color=palette.enabled, width=width)


def format_tree_tsv(rows: List[Dict[str, Any]]) -> str:
    lines = ["\t".join(TREE_DATA_FIELDS)]
    for row in rows:
        lines.append(
            "\t".join(
                [
                    str(row["title"]),
                    str(row["_id"]),
                    str(row["count"]),
                    "" if row["parentId"] is None else str(row["parentId"]),
                    str(row["depth"]),
                ]
            )
        )
    return "\n".join(lines)


def format_tree(nodes: List[TreeNode], output_format: OutputFormat, palette: Palette = PLAIN) -> str:
    if output_format is OutputFormat.JSON:
        return format_json(flatten_tree(nodes))
    if output_format is OutputFormat.TSV:
        return format_tree_tsv(flatten_tree(nodes))
    if output_format is OutputFormat.PLAIN:
        return format_tree_plain(nodes, palette)
    return format_tree_table(nodes, palette)
