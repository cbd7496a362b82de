"""Retry policy for remote calls: backoff, classification and the invoker.

Nothing in this module logs or prints. Callers observe retries through the
``on_retry`` hook and receive either a result or a structured error.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional, TypeVar

from rd_cli.core.constants import (
    DEFAULT_RATE_LIMIT,
    DEFAULT_RATE_RESET_SECONDS,
    HEADER_RATE_LIMIT,
    HEADER_RATE_REMAINING,
    HEADER_RATE_RESET,
    INITIAL_DELAY_MS,
    JITTER_RATIO,
    MAX_DELAY_MS,
    MAX_RETRIES,
)
from rd_cli.core.errors import ApiError, RateLimitError
from rd_cli.core.models import RateLimitInfo

T = TypeVar("T")

# 2**15 * INITIAL_DELAY_MS is already far above MAX_DELAY_MS
_MAX_EXPONENT = 15


class FailureKind(str, Enum):
    """How a failed call should be treated."""

    FATAL = "fatal"
    RETRYABLE = "retryable"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class RetryAttempt:
    """Snapshot handed to ``on_retry`` before each backoff sleep."""

    index: int
    elapsed: float
    delay_ms: float
    error: ApiError


def calculate_backoff(attempt: int, jitter: Callable[[], float] = random.random) -> float:
    """Return the delay in milliseconds before retry number ``attempt`` (0-based)."""
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")
    delay = INITIAL_DELAY_MS * 2 ** min(attempt, _MAX_EXPONENT)
    return min(delay + delay * JITTER_RATIO * jitter(), MAX_DELAY_MS)


def classify_status(status_code: Optional[int]) -> FailureKind:
    """Map an HTTP status (``None`` for no response) to a failure kind."""
    if status_code is None or status_code == 408:
        return FailureKind.RETRYABLE
    if status_code == 429:
        return FailureKind.RATE_LIMITED
    if 500 <= status_code <= 599:
        return FailureKind.RETRYABLE
    return FailureKind.FATAL


def classify_failure(error: ApiError) -> FailureKind:
    return classify_status(error.status_code)


def _parse_int_header(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def extract_rate_limit_info(headers: Mapping[str, str]) -> RateLimitInfo:
    """Read the rate limit headers, matching names case-insensitively."""
    lowered = {str(name).lower(): value for name, value in headers.items()}
    return RateLimitInfo(
        limit=_parse_int_header(lowered.get(HEADER_RATE_LIMIT)),
        remaining=_parse_int_header(lowered.get(HEADER_RATE_REMAINING)),
        reset=_parse_int_header(lowered.get(HEADER_RATE_RESET)),
    )


def rate_limit_error(error: ApiError, now: Optional[float] = None) -> RateLimitError:
    """Build the error raised for a 429, filling documented defaults."""
    info = extract_rate_limit_info(error.headers)
    current = time.time() if now is None else now
    return RateLimitError(
        limit=info.limit if info.limit is not None else DEFAULT_RATE_LIMIT,
        reset=info.reset if info.reset is not None else int(current) + DEFAULT_RATE_RESET_SECONDS,
        remaining=info.remaining,
    )


def invoke_with_retry(
    operation: Callable[[], T],
    *,
    max_retries: int = MAX_RETRIES,
    sleep: Optional[Callable[[float], None]] = None,
    backoff: Callable[[int], float] = calculate_backoff,
    on_retry: Optional[Callable[[RetryAttempt], None]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Run ``operation`` with up to ``max_retries`` retries on transient failures.

    Fatal failures propagate at once, a 429 becomes :class:`RateLimitError`,
    and retryable failures are re-raised once the retries are used up.
    """
    pause = sleep or time.sleep
    started = clock()
    attempt = 0
    while True:
        try:
            return operation()
        except ApiError as exc:
            kind = classify_failure(exc)
            if kind is FailureKind.RATE_LIMITED:
                raise rate_limit_error(exc) from exc
            if kind is FailureKind.FATAL or attempt >= max_retries:
                raise

            delay_ms = backoff(attempt)
            if on_retry is not None:
                on_retry(
                    RetryAttempt(
                        index=attempt,
                        elapsed=clock() - started,
                        delay_ms=delay_ms,
                        error=exc,
                    )
                )
            pause(delay_ms / 1000)
            attempt += 1
