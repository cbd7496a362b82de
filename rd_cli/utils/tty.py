"""Terminal detection helpers."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from rd_cli.core.models import OutputFormat


def is_tty(stream: Optional[TextIO] = None) -> bool:
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def default_format(tty: Optional[bool] = None) -> OutputFormat:
    """Table for people at a terminal, JSON when piped or scripted."""
    if tty is None:
        tty = is_tty()
    return OutputFormat.TABLE if tty else OutputFormat.JSON


def should_use_color(no_color: bool = False, stream: Optional[TextIO] = None) -> bool:
    """Honour --no-color, NO_COLOR and non-terminal output."""
    if no_color or "NO_COLOR" in os.environ:
        return False
    return is_tty(stream)
