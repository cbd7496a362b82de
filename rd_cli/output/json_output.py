"""JSON rendering."""

from __future__ import annotations

import json
from typing import Any


def format_json(data: Any) -> str:
    """Serialize records as indented JSON; never styled, never filtered."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)
