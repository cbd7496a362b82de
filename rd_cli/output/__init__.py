"""Output dispatcher: picks a renderer and writes one composed string."""

from __future__ import annotations

from typing import Any, Callable, List, Sequence

from rd_cli.core.models import Column, OutputFormat, OutputOptions
from rd_cli.output.json_output import format_json
from rd_cli.output.plain import format_plain
from rd_cli.output.render import as_records
from rd_cli.output.table import format_table
from rd_cli.output.tree import flatten_tree, format_tree
from rd_cli.output.tsv import format_tsv
from rd_cli.utils.colors import Palette
from rd_cli.utils.records import MISSING, record_id
from rd_cli.utils.streams import output_data
from rd_cli.utils.tree import TreeNode
from rd_cli.utils.tty import default_format

Writer = Callable[[str], None]


def resolve_output_format(options: OutputOptions) -> OutputFormat:
    return options.format or default_format()


def render(data: Any, columns: Sequence[Column], options: OutputOptions) -> str:
    """Compose the full display string for ``data`` without writing it."""
    output_format = resolve_output_format(options)
    palette = Palette(enabled=options.color)

    if output_format is OutputFormat.JSON:
        return format_json(data)
    if output_format is OutputFormat.TABLE:
        return format_table(data, columns, palette)
    if output_format is OutputFormat.TSV:
        return format_tsv(data, columns)
    return format_plain(data, columns, palette)


def write_ids(records: List[Any], write: Writer) -> None:
    for item in records:
        identifier = record_id(item)
        if identifier is not MISSING:
            write(str(identifier))


def output(data: Any, columns: Sequence[Column], options: OutputOptions, write: Writer = output_data) -> None:
    """Write ``data`` in the requested format.

    Quiet mode writes each record's id on its own line and ignores ``columns``.
    """
    if options.quiet:
        write_ids(as_records(data), write)
        return
    write(render(data, columns, options))


def output_tree(tree: List[TreeNode], options: OutputOptions, write: Writer = output_data) -> None:
    """Write a collection tree; quiet mode lists ids in tree order."""
    if options.quiet:
        write_ids(flatten_tree(tree), write)
        return
    write(format_tree(tree, resolve_output_format(options), Palette(enabled=options.color)))


__all__ = ["output", "output_tree", "render", "resolve_output_format"]
