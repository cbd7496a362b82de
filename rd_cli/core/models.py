"""Lightweight data models used across the client and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from rd_cli.core.errors import UnsupportedFormatError


class OutputFormat(str, Enum):
    """Presentation formats understood by the output dispatcher."""

    JSON = "json"
    TABLE = "table"
    TSV = "tsv"
    PLAIN = "plain"


FORMAT_NAMES = tuple(item.value for item in OutputFormat)


def parse_format(value: Union[str, OutputFormat]) -> OutputFormat:
    """Normalise a format name, rejecting anything unknown."""
    if isinstance(value, OutputFormat):
        return value
    try:
        return OutputFormat(str(value).strip().lower())
    except ValueError:
        raise UnsupportedFormatError(str(value), FORMAT_NAMES) from None


@dataclass(frozen=True)
class Column:
    """One displayed field: dotted key path plus presentation hints."""

    key: str
    header: str
    width: Optional[int] = None
    prominent: bool = False


@dataclass(frozen=True)
class OutputOptions:
    """Per-invocation output settings.

    ``format`` of ``None`` means "pick based on whether stdout is a terminal".
    """

    format: Optional[OutputFormat] = None
    quiet: bool = False
    verbose: bool = False
    debug: bool = False
    color: bool = False

    def __post_init__(self) -> None:
        if self.format is not None:
            object.__setattr__(self, "format", parse_format(self.format))


@dataclass(frozen=True)
class RateLimitInfo:
    """Advisory rate limit headers; ``None`` means the header was absent."""

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None
