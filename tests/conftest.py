"""Shared fixtures: a scripted fake of the device-control service."""

from __future__ import annotations

import json
from typing import Any, Callable, List, Union

import httpx
import pytest

from hub_app.api_client import DashboardApiClient, RetryConfig, RetryingTransport

BASE_URL = "http://raspi.test:8080/"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


def json_reply(status: int, payload: Any) -> httpx.Response:
    return httpx.Response(status, json=payload)


def text_reply(status: int, text: str = "") -> httpx.Response:
    return httpx.Response(status, text=text)


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def read_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


class FakeService:
    """Answers requests with scripted replies, repeating the last one."""

    def __init__(self, *replies: Reply) -> None:
        self.replies: List[Reply] = list(replies) or [text_reply(200)]
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if callable(reply):
            return reply(request)
        return reply

    @property
    def attempts(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


def no_delay_config(max_attempts: int = 6) -> RetryConfig:
    return RetryConfig(max_attempts=max_attempts, base_delay=0.0, jitter=False)


def http_client(service: FakeService) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(service), base_url=BASE_URL)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def make_transport() -> Callable[..., RetryingTransport]:
    def _make(service: FakeService, **config: Any) -> RetryingTransport:
        retry_config = RetryConfig(**{"base_delay": 0.0, "jitter": False, **config})
        return RetryingTransport(http_client(service), retry_config, sleep=RecordingSleep())

    return _make


@pytest.fixture
def make_client() -> Callable[..., DashboardApiClient]:
    def _make(service: FakeService, max_attempts: int = 6) -> DashboardApiClient:
        return DashboardApiClient(
            BASE_URL,
            retry_config=no_delay_config(max_attempts),
            http_client=http_client(service),
        )

    return _make
