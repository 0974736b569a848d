from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import IdentityRequest, WebhookGrant

GENERATE_URL = "https://gen.example/hiring/generateWebhook"


class RecordingTransport:
    """Fake transport: records every request and answers with `handler`."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> object:
        return json.loads(self.requests[-1].content)


def json_response(status: int, payload: object) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=payload)


def raising(exc_type: type[httpx.TransportError], message: str = "boom") -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return handler


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in (
        "SQLHOOK_CANDIDATE_NAME",
        "SQLHOOK_CANDIDATE_REG_NO",
        "SQLHOOK_CANDIDATE_EMAIL",
        "SQLHOOK_GENERATE_WEBHOOK_URL",
        "SQLHOOK_SOLUTION_PATH",
        "SQLHOOK_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        generate_webhook_url=GENERATE_URL,
        http_timeout_seconds=0.5,
        http_connect_timeout_seconds=0.5,
    )


@pytest.fixture
def identity() -> IdentityRequest:
    return IdentityRequest(name="A", registration_id="1", email="a@b.c")


@pytest.fixture
def grant() -> WebhookGrant:
    return WebhookGrant(webhook_url="https://ep/sub", access_token="tok")
