from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Dict, List

import pytest
from rich.console import Console
from typer.testing import CliRunner

from rd_cli.utils.debug import Diagnostics


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RDCLI_CONFIG_FILE", str(tmp_path / "missing-config.toml"))
    for name in ("RAINDROP_TOKEN", "RDCLI_TIMEOUT", "RDCLI_FORMAT", "RDCLI_API_DELAY_MS", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def diagnostics_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture()
def verbose_diagnostics(diagnostics_buffer: io.StringIO) -> Diagnostics:
    console = Console(file=diagnostics_buffer, width=200, force_terminal=False, no_color=True)
    return Diagnostics(verbose=True, debug=True, console=console)


@pytest.fixture()
def sample_bookmarks() -> List[Dict[str, Any]]:
    return [
        {
            "_id": 100,
            "title": "Python docs",
            "link": "https://docs.python.org/3/",
            "domain": "docs.python.org",
            "excerpt": "The official Python documentation.",
            "note": "",
            "tags": ["python", "docs"],
            "created": "2026-02-10T08:00:00.000Z",
            "collection": {"$id": 10},
        },
        {
            "_id": 200,
            "title": "Rich",
            "link": "https://github.com/Textualize/rich",
            "domain": "github.com",
            "excerpt": "",
            "note": "terminal formatting",
            "tags": [],
            "created": "2026-02-11T08:00:00.000Z",
            "collection": {"$id": 11},
        },
    ]


@pytest.fixture()
def sample_collections() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "roots": [
            {"_id": 10, "title": "Work", "count": 4},
            {"_id": 11, "title": "Reading", "count": 1},
        ],
        "children": [
            {"_id": 12, "title": "Projects", "count": 2, "parent": {"$id": 10}},
            {"_id": 13, "title": "Archive", "count": 0, "parent": {"$id": 10}},
            {"_id": 14, "title": "Old", "count": 7, "parent": {"$id": 13}},
        ],
    }
