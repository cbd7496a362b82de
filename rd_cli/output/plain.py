"""Readable multi-line rendering of records.

Each record becomes a small card:

* prominent columns (title, link) first, without labels;
* a blank line;
* one ``icon label  value`` line per remaining column, labels aligned;
* long text fields (excerpt, note, ...) as an indented, wrapped block.

Cards are separated by a dimmed rule.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from rd_cli.core.constants import (
    BLOCK_FIELDS,
    BLOCK_INDENT,
    DEFAULT_FIELD_ICON,
    EMPTY_PLACEHOLDER,
    FIELD_ICONS,
    NO_RESULTS_MESSAGE,
    RECORD_DIVIDER,
    WRAP_WIDTH,
)
from rd_cli.core.models import Column
from rd_cli.output.render import as_records
from rd_cli.utils.colors import PLAIN, Palette
from rd_cli.utils.records import format_value, get_nested_value, is_empty
from rd_cli.utils.text import indent_all_lines, indent_multiline, word_wrap


def _normalize_key(key: str) -> str:
    return key.lower().replace(".", "").replace("_", "").replace("-", "")


def field_icon(key: str) -> str:
    return FIELD_ICONS.get(_normalize_key(key), DEFAULT_FIELD_ICON)


def is_block_field(key: str) -> bool:
    return _normalize_key(key) in BLOCK_FIELDS


def _is_link(key: str) -> bool:
    lowered = key.lower()
    return "url" in lowered or "link" in lowered


def _plain_value(value: Any) -> Optional[str]:
    if is_empty(value):
        return None
    return format_value(value)


def _format_record(
    item: Any,
    prominent: Sequence[Column],
    regular: Sequence[Column],
    palette: Palette,
) -> str:
    lines: List[str] = []

    first_shown = True
    for column in prominent:
        value = _plain_value(get_nested_value(item, column.key))
        if value is None:
            continue
        if _is_link(column.key):
            lines.append(palette.cyan(value))
        elif first_shown:
            lines.append(palette.bold(value))
        else:
            lines.append(value)
        first_shown = False

    if prominent and regular:
        lines.append("")

    header_width = max((len(column.header) for column in regular), default=0)
    # emoji + space + header + two spaces before the value
    label_width = 2 + header_width + 2

    for column in regular:
        value = _plain_value(get_nested_value(item, column.key))
        label = f"{field_icon(column.key)} {palette.bold(column.header.ljust(header_width))}"

        if value is None:
            lines.append(f"{label}  {palette.dim(EMPTY_PLACEHOLDER)}")
        elif is_block_field(column.key):
            lines.append(label)
            lines.append(indent_all_lines(word_wrap(value, WRAP_WIDTH), BLOCK_INDENT))
        else:
            lines.append(f"{label}  {indent_multiline(value, label_width)}")

    return "\n".join(lines)


def format_plain(data: Any, columns: Sequence[Column], palette: Palette = PLAIN) -> str:
    """Render records as labelled cards separated by a divider."""
    items = as_records(data)
    if not items:
        return palette.dim(NO_RESULTS_MESSAGE)

    prominent = [column for column in columns if column.prominent]
    regular = [column for column in columns if not column.prominent]

    separator = "\n\n" + palette.dim(RECORD_DIVIDER) + "\n\n"
    return separator.join(_format_record(item, prominent, regular, palette) for item in items)
