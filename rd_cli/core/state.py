"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from rd_cli.core.models import OutputOptions
from rd_cli.utils.debug import Diagnostics


@dataclass(frozen=True)
class CLIState:
    """Options resolved once in the root callback; read-only afterwards."""

    output: OutputOptions
    timeout_seconds: int
    config_path: Path
    config: Mapping[str, Any]
    diagnostics: Diagnostics
