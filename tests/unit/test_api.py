from __future__ import annotations

import io
from typing import Any, Dict, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from rd_cli.core.api import RaindropAPI
from rd_cli.core.errors import ApiError, ApiTimeoutError, RateLimitError
from rd_cli.utils.debug import Diagnostics


class _MockResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        text: str = '{"result":true}',
        headers: Optional[Dict[str, str]] = None,
        reason: str = "",
    ) -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {"result": True}
        self.text = text
        self.headers = CaseInsensitiveDict(headers or {})
        self.reason = reason

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture()
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list:
    sleeps: list = []
    monkeypatch.setattr("rd_cli.core.api.time.sleep", sleeps.append)
    return sleeps


def test_api_retries_timeout_then_succeeds(monkeypatch, no_sleep) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise requests.Timeout("timeout")
        return _MockResponse(payload={"user": {"_id": 42}})

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    api = RaindropAPI(token="token")
    assert api.get_user()["user"]["_id"] == 42
    assert attempts["count"] == 2
    assert len(no_sleep) == 1
    assert 1.0 <= no_sleep[0] <= 1.25


def test_api_retries_on_server_error(monkeypatch, no_sleep) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        if attempts["count"] == 1:
            return _MockResponse(status_code=502, payload={"error": "bad gateway"}, text="bad gateway")
        return _MockResponse(payload={"items": []})

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    assert RaindropAPI(token="token").get("/collections") == {"items": []}
    assert attempts["count"] == 2


def test_api_raises_after_max_retries(monkeypatch, no_sleep) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        raise requests.ConnectionError("network down")

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    api = RaindropAPI(token="token", max_retries=2)
    with pytest.raises(ApiError, match="no response received") as exc_info:
        api.get("/user")
    assert exc_info.value.status_code is None
    assert attempts["count"] == 3


def test_api_timeout_exhaustion_raises_timeout_error(monkeypatch, no_sleep) -> None:
    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise requests.ReadTimeout("slow")

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    with pytest.raises(ApiTimeoutError) as exc_info:
        RaindropAPI(token="token", timeout_seconds=5).get("/user")
    assert exc_info.value.timeout_seconds == 5
    assert len(no_sleep) == 3


def test_api_client_error_is_not_retried(monkeypatch, no_sleep) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        return _MockResponse(status_code=404, payload={"result": False, "errorMessage": "Not found"}, text="x")

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    with pytest.raises(ApiError, match="Not found") as exc_info:
        RaindropAPI(token="token").get_raindrop(1)
    assert exc_info.value.status_code == 404
    assert attempts["count"] == 1
    assert no_sleep == []


def test_api_error_message_falls_back_to_reason(monkeypatch, no_sleep) -> None:
    monkeypatch.setattr(
        "rd_cli.core.api.requests.request",
        lambda *args, **kwargs: _MockResponse(status_code=401, payload=ValueError("no json"), reason="Unauthorized"),
    )
    with pytest.raises(ApiError, match="Unauthorized"):
        RaindropAPI(token="bad").get_user()


def test_api_rate_limit_raises_dedicated_error(monkeypatch, no_sleep) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        return _MockResponse(
            status_code=429,
            headers={"x-ratelimit-limit": "120", "x-ratelimit-reset": "1760000000"},
            text="Too Many Requests",
        )

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    with pytest.raises(RateLimitError) as exc_info:
        RaindropAPI(token="token").get_tags()
    assert exc_info.value.reset == 1760000000
    assert attempts["count"] == 1
    assert no_sleep == []


def test_api_passes_timeout_and_auth_to_transport(monkeypatch) -> None:
    seen: Dict[str, Any] = {}

    def fake_request(**kwargs):  # type: ignore[no-untyped-def]
        seen.update(kwargs)
        return _MockResponse(payload={"items": []})

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    api = RaindropAPI(token="abc123", base_url="https://example.test/rest/v1/", timeout_seconds=7)
    api.get_raindrops(5, search="python", page=2, per_page=10, sort="-created")

    assert seen["timeout"] == 7
    assert seen["url"] == "https://example.test/rest/v1/raindrops/5"
    assert seen["params"] == {"page": 2, "perpage": 10, "search": "python", "sort": "-created"}
    assert seen["headers"]["Authorization"] == "Bearer abc123"


def test_api_empty_response_text_returns_empty_object(monkeypatch) -> None:
    monkeypatch.setattr(
        "rd_cli.core.api.requests.request",
        lambda *args, **kwargs: _MockResponse(payload={}, text=""),
    )
    assert RaindropAPI(token="token").get("/empty") == {}


def test_api_invalid_json_is_fatal(monkeypatch, no_sleep) -> None:
    monkeypatch.setattr(
        "rd_cli.core.api.requests.request",
        lambda *args, **kwargs: _MockResponse(payload=ValueError("bad"), text="<html>"),
    )
    with pytest.raises(ApiError, match="Invalid JSON"):
        RaindropAPI(token="token").get("/user")
    assert no_sleep == []


def test_api_delay_applies_between_requests_only(monkeypatch, no_sleep) -> None:
    monkeypatch.setattr(
        "rd_cli.core.api.requests.request",
        lambda *args, **kwargs: _MockResponse(payload={"items": []}),
    )
    api = RaindropAPI(token="token", rate_limit_delay=0.5)
    api.get_collections()
    api.get_child_collections()
    assert no_sleep == [0.5]


def test_api_verbose_diagnostics(monkeypatch, no_sleep, verbose_diagnostics: Diagnostics, diagnostics_buffer: io.StringIO) -> None:
    attempts = {"count": 0}

    def fake_request(*args, **kwargs):  # type: ignore[no-untyped-def]
        attempts["count"] += 1
        if attempts["count"] == 1:
            return _MockResponse(status_code=500, text="boom")
        return _MockResponse(payload={"user": {}}, headers={"RateLimit-Remaining": "99", "X-RateLimit-Limit": "120"})

    monkeypatch.setattr("rd_cli.core.api.requests.request", fake_request)

    RaindropAPI(token="token", diagnostics=verbose_diagnostics).get_user()

    logged = diagnostics_buffer.getvalue()
    assert "→ API GET /user" in logged
    assert "Retrying request (attempt 1/3)" in logged
    assert "- 500" in logged
    assert "[debug] Rate limit status" in logged
    assert '"remaining": 99' in logged


def test_api_specialized_methods_use_expected_paths(monkeypatch) -> None:
    calls = []

    def fake_get(self, path, params=None):  # type: ignore[no-untyped-def]
        calls.append((path, params))
        return {"items": []}

    monkeypatch.setattr(RaindropAPI, "get", fake_get)

    api = RaindropAPI(token="token")
    api.get_user()
    api.get_raindrop(99)
    api.get_collections()
    api.get_child_collections()
    api.get_tags()
    api.get_tags(-1)
    api.get_raindrops()

    assert calls == [
        ("/user", None),
        ("/raindrop/99", None),
        ("/collections", None),
        ("/collections/childrens", None),
        ("/tags", None),
        ("/tags/-1", None),
        ("/raindrops/0", {"page": 0, "perpage": 25}),
    ]
