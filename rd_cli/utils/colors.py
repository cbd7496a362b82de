"""ANSI styling for rendered strings.

Renderers return plain strings, so styles are rendered eagerly with rich
``Style`` objects. A disabled palette returns text untouched.
"""

from __future__ import annotations

from rich.color import ColorSystem
from rich.style import Style

_STYLES = {
    "bold": Style(bold=True),
    "dim": Style(dim=True),
    "cyan": Style(color="cyan"),
}


class Palette:
    """Small set of text styles that can be switched off as a whole."""

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def _paint(self, text: object, name: str) -> str:
        value = str(text)
        if not self.enabled:
            return value
        return _STYLES[name].render(value, color_system=ColorSystem.STANDARD)

    def bold(self, text: object) -> str:
        return self._paint(text, "bold")

    def dim(self, text: object) -> str:
        return self._paint(text, "dim")

    def cyan(self, text: object) -> str:
        return self._paint(text, "cyan")


PLAIN = Palette(enabled=False)
