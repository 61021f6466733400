"""Tests for logging configuration and session bootstrap."""

from __future__ import annotations

import json

import httpx
import pytest
import structlog

from felice import main as main_module
from felice.logging import configure_logging, redact_sensitive
from felice.services.controller import SearchSessionController


def test_configure_logging_outputs_json(capsys):
    configure_logging()
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    record = json.loads(out.strip().splitlines()[-1])
    assert record["event"] == "unit-test"
    assert record["foo"] == "bar"
    assert record["level"] == "info"


def test_redact_sensitive_masks_keys():
    event = redact_sensitive(
        None,
        "info",
        {
            "event": "x",
            "api_key": "secret",
            "headers": {"Ocp-Apim-Subscription-Key": "secret", "Accept": "json"},
        },
    )
    assert event["api_key"] == "***"
    assert event["headers"] == {"Ocp-Apim-Subscription-Key": "***", "Accept": "json"}


@pytest.mark.asyncio
async def test_search_session_bootstrap(monkeypatch, settings):
    configured = {}
    monkeypatch.setattr(main_module, "configure_logging", lambda level: configured.setdefault("level", level))

    async with main_module.search_session(settings) as controller:
        assert isinstance(controller, SearchSessionController)
        assert controller.session.page_size == settings.bing.results_per_page
        assert controller.session.has_searched is False

    assert configured["level"] == "INFO"


@pytest.mark.asyncio
async def test_search_session_uses_cached_settings(monkeypatch, settings):
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    created = []

    class RecordingClient(httpx.AsyncClient):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(main_module.httpx, "AsyncClient", RecordingClient)

    async with main_module.search_session() as controller:
        assert controller.session.query == ""

    assert len(created) == 1
    assert created[0].is_closed
