"""Connectivity check command."""

from __future__ import annotations

import json

import httpx
import pytest

from hub_app.scripts import check_api
from hub_app.scripts.check_api import check_collections

from tests.conftest import FakeService, json_reply, text_reply


def by_path(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/prices/current":
        return httpx.Response(200, json={
            "amount": 0.9, "currency": "NOK", "ext_price_level": "Normal", "starts_at": "2024-01-01T10:00:00",
        })
    if request.url.path == "/plugs/":
        return text_reply(404)
    return json_reply(200, [])


@pytest.mark.asyncio
async def test_check_collections_reports_counts_and_failures(make_client) -> None:
    client = make_client(FakeService(by_path))

    results = await check_collections(client)

    assert results["rooms"] == 0
    assert results["plugs"] == "ERROR"
    assert results["current_price"] == "0.9 NOK (Normal)"


@pytest.mark.asyncio
async def test_main_logs_to_configured_directory(
    make_client, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path
) -> None:
    logging_calls = []
    client = make_client(FakeService(by_path))
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(check_api, "setup_logging", lambda level, log_dir=None: logging_calls.append((level, log_dir)))
    monkeypatch.setattr(check_api.DashboardApiClient, "from_config", classmethod(lambda cls, config: client))

    exit_code = await check_api.main(["--json"])

    assert exit_code == 1
    assert logging_calls == [("DEBUG", str(tmp_path))]
    report = json.loads(capsys.readouterr().out)
    assert report["ok"] is False
    assert report["results"]["plugs"] == "ERROR"


@pytest.mark.asyncio
async def test_main_without_log_directory(make_client, monkeypatch: pytest.MonkeyPatch) -> None:
    logging_calls = []
    client = make_client(FakeService(json_reply(200, [])))
    monkeypatch.setenv("LOG_DIR", "")
    monkeypatch.setattr(check_api, "setup_logging", lambda level, log_dir=None: logging_calls.append((level, log_dir)))
    monkeypatch.setattr(check_api.DashboardApiClient, "from_config", classmethod(lambda cls, config: client))

    await check_api.main(["--quiet"])

    assert logging_calls == [("ERROR", None)]
