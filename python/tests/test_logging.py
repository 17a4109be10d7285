"""Tests for structured logging.

Covers:
- Request context injection into every entry
- JSON rendering through the stdlib root logger
- The bearer token never appears in upstream error logs
"""

import json
import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from pansa.app import add_request_id_middleware, create_app
from pansa.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_request_id,
    set_request_context,
)
from tests.helpers import TEST_TOKEN


@pytest.fixture(autouse=True)
def _reset_context():
    clear_request_context()
    yield
    clear_request_context()


class TestRequestContext:
    """Tests for the request-scoped ContextVars."""

    def test_context_injected(self):
        set_request_context("req-1", method="GET", path="/health")

        event = add_request_context(None, "info", {"event": "x"})

        assert event == {"event": "x", "request_id": "req-1", "method": "GET", "path": "/health"}

    def test_nothing_injected_without_context(self):
        assert add_request_context(None, "info", {"event": "x"}) == {"event": "x"}

    def test_explicit_fields_win(self):
        set_request_context("req-1", path="/health")

        event = add_request_context(None, "info", {"event": "x", "path": "/explicit"})

        assert event["path"] == "/explicit"

    def test_clear(self):
        set_request_context("req-1")
        clear_request_context()

        assert get_request_id() is None


class TestJsonOutput:
    """configure_logging renders stdlib records as JSON lines."""

    def test_json_line(self, capsys, restore_logging):
        configure_logging(json_format=True)
        set_request_context("req-42", method="GET", path="/netshort/tabs")

        logging.getLogger("pansa.test").warning("upstream_slow")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "upstream_slow"
        assert entry["level"] == "warning"
        assert entry["logger"] == "pansa.test"
        assert entry["request_id"] == "req-42"
        assert entry["path"] == "/netshort/tabs"
        assert "timestamp" in entry

    def test_access_log_entry(self, capsys, restore_logging, settings, upstream):
        configure_logging(json_format=True)
        app = create_app(settings)
        add_request_id_middleware(app)

        with TestClient(app) as client:
            client.get("/health", headers={"X-Request-ID": "access-1"})

        entries = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
        access = [e for e in entries if e["event"] == "request_completed"]
        assert len(access) == 1
        assert access[0]["method"] == "GET"
        assert access[0]["path"] == "/health"
        assert access[0]["status_code"] == 200
        assert access[0]["request_id"] == "access-1"
        assert access[0]["duration_ms"] >= 0

    def test_token_not_logged_on_upstream_error(
        self, client: TestClient, upstream, caplog
    ):
        upstream.get("/languages").mock(side_effect=httpx.ConnectError("refused"))

        with caplog.at_level(logging.WARNING):
            client.get("/netshort/languages")

        assert TEST_TOKEN not in caplog.text
