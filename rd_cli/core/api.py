"""Raindrop.io REST client with retry, backoff and rate limit handling."""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import requests

from rd_cli.core.constants import API_BASE, COLLECTION_ALL, DEFAULT_TIMEOUT_SECONDS, MAX_RETRIES
from rd_cli.core.errors import ApiError, ApiTimeoutError
from rd_cli.core.retry import RetryAttempt, extract_rate_limit_info, invoke_with_retry
from rd_cli.utils.debug import SILENT, Diagnostics


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("errorMessage", "error", "message"):
            if body.get(key):
                return str(body[key])
    return response.reason or f"HTTP {response.status_code}"


class RaindropAPI:
    """Thin wrapper around the Raindrop REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = MAX_RETRIES,
        rate_limit_delay: float = 0.0,
        diagnostics: Diagnostics = SILENT,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.rate_limit_delay = rate_limit_delay
        self.diagnostics = diagnostics
        self._has_sent_request = False

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """One attempt: perform the HTTP call and turn failures into ``ApiError``."""
        if self.rate_limit_delay > 0 and self._has_sent_request:
            self.diagnostics.debug(f"API delay: waiting {self.rate_limit_delay * 1000:.0f}ms before request")
            time.sleep(self.rate_limit_delay)
        self._has_sent_request = True

        self.diagnostics.verbose(f"API {method} {path}")
        self.diagnostics.debug("Request config", {"method": method, "url": path, "params": params, "hasData": bool(json_data)})
        started = time.perf_counter()
        try:
            response = requests.request(
                method=method,
                url=f"{self.base_url}{path}",
                headers=self._headers,
                params=params,
                json=json_data,
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise ApiTimeoutError(self.timeout_seconds, {"url": path, "method": method}) from exc
        except requests.RequestException as exc:
            raise ApiError(
                f"Network error - no response received: {exc}",
                status_code=None,
                details={"url": path, "method": method},
            ) from exc

        if response.status_code >= 400:
            self.diagnostics.debug(
                "API error response",
                {"status": response.status_code, "url": path, "body": response.text[:500]},
            )
            raise ApiError(
                _error_message(response),
                status_code=response.status_code,
                headers=dict(response.headers),
                details={"url": path, "method": method},
            )

        self.diagnostics.verbose(f"API {method} {path} completed in {(time.perf_counter() - started) * 1000:.0f}ms")
        rate_info = extract_rate_limit_info(response.headers)
        if rate_info.remaining is not None:
            self.diagnostics.debug("Rate limit status", {"remaining": rate_info.remaining, "limit": rate_info.limit})

        if not response.text:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"Invalid JSON in response to {method} {path}",
                status_code=response.status_code,
                details={"url": path, "method": method},
            ) from exc

    def _log_retry(self, attempt: RetryAttempt) -> None:
        status = attempt.error.status_code or "network error"
        self.diagnostics.verbose(
            f"Retrying request (attempt {attempt.index + 1}/{self.max_retries}) "
            f"after {attempt.delay_ms:.0f}ms - {status}"
        )
        self.diagnostics.debug("Retry details", {"retryCount": attempt.index, "delay": attempt.delay_ms, "status": status})

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return invoke_with_retry(
            lambda: self._send(method, path, params=params, json_data=json_data),
            max_retries=self.max_retries,
            on_retry=self._log_retry,
        )

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def get_user(self) -> Dict[str, Any]:
        return self.get("/user")

    def get_raindrops(
        self,
        collection_id: int = COLLECTION_ALL,
        search: Optional[str] = None,
        page: int = 0,
        per_page: int = 25,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": page, "perpage": per_page}
        if search:
            params["search"] = search
        if sort:
            params["sort"] = sort
        return self.get(f"/raindrops/{collection_id}", params=params)

    def get_raindrop(self, raindrop_id: int) -> Dict[str, Any]:
        return self.get(f"/raindrop/{raindrop_id}")

    def get_collections(self) -> Dict[str, Any]:
        return self.get("/collections")

    def get_child_collections(self) -> Dict[str, Any]:
        return self.get("/collections/childrens")

    def get_tags(self, collection_id: Optional[int] = None) -> Dict[str, Any]:
        if collection_id is None:
            return self.get("/tags")
        return self.get(f"/tags/{collection_id}")
