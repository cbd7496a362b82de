"""Helpers for walking loosely-shaped API records."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any


class _Missing:
    """Marker for a path that does not resolve."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def get_nested_value(record: Any, path: str) -> Any:
    """Follow a dotted path such as ``collection.$id`` or ``media.0.link``.

    Returns :data:`MISSING` when any segment is absent; a present ``None``
    is returned as ``None``.
    """
    current = record
    for key in path.split("."):
        if isinstance(current, Mapping):
            if key not in current:
                return MISSING
            current = current[key]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(key)]
            except (ValueError, IndexError):
                return MISSING
        else:
            return MISSING
    return current


def is_empty(value: Any) -> bool:
    """True for absent values, ``None``, empty strings and empty lists."""
    if value is MISSING or value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def format_value(value: Any, list_separator: str = ", ") -> str:
    """Render a scalar, list or mapping as display text."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return list_separator.join(format_value(item, list_separator) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def record_id(record: Any) -> Any:
    """Identifier of a record: ``_id`` first, then ``id``; MISSING if neither is set."""
    if not isinstance(record, Mapping):
        return MISSING
    for key in ("_id", "id"):
        if record.get(key) is not None:
            return record[key]
    return MISSING
