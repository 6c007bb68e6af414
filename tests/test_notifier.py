from __future__ import annotations

from typing import List

import httpx

from simile_notifier.config import (
    BANNER_SEPARATOR,
    BANNER_TITLE,
    MSG_FAILURE,
    MSG_SENDING,
    MSG_SUCCESS,
    resolve_endpoint,
)
from simile_notifier.models import NotificationConfig, ServerConfig
from simile_notifier.notifier import notify

CONFIG = NotificationConfig(
    repository="https://example.com/repo.git",
    branch="main",
    email="dev@example.org",
)


def _recording_transport(status_code: int, body: str, seen: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, text=body)

    return httpx.MockTransport(handler)


def test_success_sends_query_params_to_default_endpoint(log) -> None:
    seen: List[httpx.Request] = []

    outcome = notify(CONFIG, ServerConfig(base_url=""), log, transport=_recording_transport(200, '{"ok": true}', seen))

    assert outcome.succeeded is True
    assert outcome.http_status == 200
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url).split("?")[0] == "http://localhost:8080/simile/repository"
    assert request.url.params["repo"] == "https://example.com/repo.git"
    assert request.url.params["branch"] == "main"
    assert request.url.params["email"] == "dev@example.org"
    assert request.headers["accept"] == "application/json"
    assert request.headers["content-type"] == "application/json"
    assert request.content == b""


def test_success_log_lines(log) -> None:
    notify(CONFIG, ServerConfig(), log, transport=_recording_transport(200, "{}", []))

    assert log.lines == [
        BANNER_TITLE,
        BANNER_SEPARATOR,
        MSG_SENDING,
        "Simile Endpoint: http://localhost:8080/simile/repository",
        MSG_SUCCESS,
        BANNER_SEPARATOR,
    ]
    assert log.lines.count(MSG_SUCCESS) == 1
    assert len(BANNER_SEPARATOR) == len(BANNER_TITLE)


def test_configured_base_url_is_used(log) -> None:
    seen: List[httpx.Request] = []

    notify(
        CONFIG,
        ServerConfig(base_url="https://simile.example.com/api/"),
        log,
        transport=_recording_transport(200, "{}", seen),
    )

    assert str(seen[0].url).startswith("https://simile.example.com/api/repository?")
    assert "Simile Endpoint: https://simile.example.com/api/repository" in log.lines


def test_server_error_reports_status_and_body(log) -> None:
    outcome = notify(CONFIG, ServerConfig(), log, transport=_recording_transport(500, "boom", []))

    assert outcome.succeeded is False
    assert outcome.http_status == 500
    assert outcome.detail == "boom"
    assert MSG_FAILURE in log.lines
    assert log.lines[-2:] == [MSG_FAILURE, "boom"]
    assert MSG_SUCCESS not in log.lines


def test_non_200_success_codes_are_failures(log) -> None:
    outcome = notify(CONFIG, ServerConfig(), log, transport=_recording_transport(201, "created", []))

    assert outcome.succeeded is False
    assert outcome.http_status == 201


def test_unreachable_endpoint_is_absorbed(log) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    outcome = notify(CONFIG, ServerConfig(), log, transport=httpx.MockTransport(handler))

    assert outcome.succeeded is False
    assert outcome.http_status is None
    assert "Connection refused" in outcome.detail
    assert MSG_FAILURE in log.lines
    assert any("Connection refused" in line for line in log.lines)
    assert "Traceback" in log.text()


def test_timeout_is_absorbed(log) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    outcome = notify(CONFIG, ServerConfig(), log, transport=httpx.MockTransport(handler))

    assert outcome.succeeded is False
    assert outcome.http_status is None
    assert "timed out" in outcome.detail


def test_url_without_scheme_is_absorbed(log) -> None:
    outcome = notify(CONFIG, ServerConfig(base_url="not-a-url"), log)

    assert outcome.succeeded is False
    assert outcome.http_status is None
    assert MSG_FAILURE in log.lines


def test_resolve_endpoint() -> None:
    assert resolve_endpoint("") == "http://localhost:8080/simile/repository"
    assert resolve_endpoint(None) == "http://localhost:8080/simile/repository"
    assert resolve_endpoint("http://simile:9000/") == "http://simile:9000/repository"
