"""Configuration loading and option resolution."""

from __future__ import annotations

import copy
import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from rd_cli.core.constants import (
    API_BASE,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_RETRIES,
    MAX_TIMEOUT_SECONDS,
    MIN_TIMEOUT_SECONDS,
)
from rd_cli.core.errors import ConfigError
from rd_cli.core.models import OutputFormat, parse_format

TOKEN_HELP = (
    "No API token configured. Set the RAINDROP_TOKEN environment variable or add "
    "'token' under [auth] in the config file.\n"
    "Get your token from: https://app.raindrop.io/settings/integrations"
)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("RDCLI_CONFIG_FILE", "~/.config/raindrop-cli/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "auth": {
            "token": None,
        },
        "defaults": {
            "output_format": None,
            "collection": 0,
        },
        "api": {
            "base_url": API_BASE,
            "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
            "max_retries": MAX_RETRIES,
            "rate_limit_delay": 0.0,
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix == ".json":
            loaded = json.loads(text)
        else:
            loaded = tomllib.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def clamp_timeout(seconds: int) -> int:
    return max(MIN_TIMEOUT_SECONDS, min(seconds, MAX_TIMEOUT_SECONDS))


def validate_timeout(value: Any) -> int:
    """Check an explicit timeout, raising ``ValueError`` with a user-facing message."""
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeout value: '{value}'. Must be a number.") from None
    if seconds < MIN_TIMEOUT_SECONDS:
        raise ValueError(f"Timeout must be at least {MIN_TIMEOUT_SECONDS} second.")
    if seconds > MAX_TIMEOUT_SECONDS:
        raise ValueError(f"Timeout must be at most {MAX_TIMEOUT_SECONDS} seconds (5 minutes).")
    return seconds


def resolve_timeout(config: Mapping[str, Any], explicit: Optional[int] = None) -> int:
    """Resolve the request timeout: flag, then RDCLI_TIMEOUT, then config, then default."""
    if explicit is not None:
        return validate_timeout(explicit)

    env_value = os.getenv("RDCLI_TIMEOUT")
    if env_value:
        try:
            return clamp_timeout(int(env_value))
        except ValueError:
            pass

    configured = config.get("api", {}).get("timeout_seconds")
    if configured is not None:
        try:
            return clamp_timeout(int(configured))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"api.timeout_seconds must be an integer, got {configured!r}") from exc
    return DEFAULT_TIMEOUT_SECONDS


def resolve_format(config: Mapping[str, Any], explicit: Optional[str] = None) -> Optional[OutputFormat]:
    """Resolve the output format; ``None`` leaves the choice to TTY detection."""
    raw = explicit or os.getenv("RDCLI_FORMAT") or config.get("defaults", {}).get("output_format")
    if not raw:
        return None
    return parse_format(raw)


def resolve_token(config: Mapping[str, Any]) -> str:
    """Resolve the API token from env or config."""
    token = os.getenv("RAINDROP_TOKEN") or config.get("auth", {}).get("token")
    if not token:
        raise ConfigError(TOKEN_HELP)
    return str(token)


def token_source(config: Mapping[str, Any]) -> Optional[str]:
    if os.getenv("RAINDROP_TOKEN"):
        return "env"
    if config.get("auth", {}).get("token"):
        return "config"
    return None


def resolve_api_delay(config: Mapping[str, Any]) -> float:
    """Delay in seconds between consecutive requests (RDCLI_API_DELAY_MS wins)."""
    env_value = os.getenv("RDCLI_API_DELAY_MS")
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError:
            parsed = 0
        if parsed > 0:
            return parsed / 1000
    return float(config.get("api", {}).get("rate_limit_delay", 0.0) or 0.0)
