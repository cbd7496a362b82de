"""Exception hierarchy shared by the API client, renderers and commands."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


class RaindropCliError(RuntimeError):
    """Base error carrying a machine-readable code and optional details."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(RaindropCliError):
    """Raised for invalid configuration or missing credentials."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class UnsupportedFormatError(ConfigError):
    """Raised when an output format name is not recognised."""

    def __init__(self, value: str, valid: tuple[str, ...]) -> None:
        super().__init__(
            f"Unsupported output format '{value}'. Expected one of: {', '.join(valid)}",
            {"format": value, "valid": list(valid)},
        )
        self.value = value


class ApiError(RaindropCliError):
    """A failed remote call.

    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, "API_ERROR", {"statusCode": status_code, **(details or {})})
        self.status_code = status_code
        self.headers: Mapping[str, str] = headers or {}


class ApiTimeoutError(ApiError):
    """Raised when a single request exceeds the transport timeout."""

    def __init__(self, timeout_seconds: float, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            f"Request timed out after {timeout_seconds:g} seconds. "
            "Increase it with --timeout or RDCLI_TIMEOUT.",
            status_code=None,
            details={"timeoutSeconds": timeout_seconds, **(details or {})},
        )
        self.code = "TIMEOUT"
        self.timeout_seconds = timeout_seconds


class RateLimitError(RaindropCliError):
    """Raised on HTTP 429; never retried automatically."""

    def __init__(self, limit: int, reset: int, remaining: Optional[int] = None) -> None:
        reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)
        super().__init__(
            f"Rate limit exceeded. Limit: {limit}, resets at: {reset_at.isoformat()}",
            "RATE_LIMITED",
            {"limit": limit, "reset": reset, "remaining": remaining},
        )
        self.limit = limit
        self.reset = reset
        self.remaining = remaining
