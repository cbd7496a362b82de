"""Verbose and debug diagnostics written to stderr.

``--verbose`` shows what is happening (API calls, timing, retries);
``--debug`` adds internal state and implies verbose.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Console


class Diagnostics:
    """Stderr logger handed to components that must not print directly."""

    def __init__(self, verbose: bool = False, debug: bool = False, console: Optional[Console] = None) -> None:
        self.debug_enabled = debug
        self.verbose_enabled = verbose or debug
        self.console = console or Console(stderr=True, highlight=False, soft_wrap=True)

    def _emit(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def verbose(self, message: str) -> None:
        if self.verbose_enabled:
            self._emit(f"→ {message}")

    def debug(self, message: str, data: Any = None) -> None:
        if not self.debug_enabled:
            return
        prefix = "[debug]"
        self._emit(f"{prefix} {message}")
        if data is not None:
            formatted = data if isinstance(data, str) else json.dumps(data, indent=2, default=str)
            self._emit("\n".join(f"{prefix}   {line}" for line in formatted.splitlines()))


SILENT = Diagnostics()
