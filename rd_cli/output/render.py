"""Shared plumbing for the format renderers."""

from __future__ import annotations

import io
import shutil
from typing import Any, List, Optional

from rich.console import Console, RenderableType


def as_records(data: Any) -> List[Any]:
    """Treat a single record and a list of records alike."""
    if data is None:
        return []
    if isinstance(data, (list, tuple)):
        return list(data)
    return [data]


def render_to_string(renderable: RenderableType, color: bool = False, width: Optional[int] = None) -> str:
    """Render a rich renderable off-screen and return the text."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width or shutil.get_terminal_size((120, 24)).columns,
        force_terminal=color,
        color_system="standard" if color else None,
        no_color=not color,
        highlight=False,
        emoji=False,
        legacy_windows=False,
    )
    console.print(renderable)
    return buffer.getvalue().rstrip("\n")
