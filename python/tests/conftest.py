"""Pytest configuration and fixtures for PANSA proxy tests.

Test isolation strategy:
- The upstream is never contacted: respx intercepts every httpx call
- Each test gets a fresh app built from explicit Settings (no .env, no cache)
- The TestClient is entered as a context manager so the lifespan owns the
  shared upstream client exactly as in production
"""

import logging
from collections.abc import Generator

import pytest
import respx
from fastapi.testclient import TestClient

from pansa.app import add_request_id_middleware, create_app
from pansa.config import Settings, clear_settings_cache
from tests.helpers import UPSTREAM_BASE, make_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Never leak cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Restore root logger handlers after a test calls configure_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the mocked upstream."""
    return make_settings()


@pytest.fixture
def upstream() -> Generator[respx.MockRouter, None, None]:
    """Mock of the NetShort upstream.

    Routes are registered relative to UPSTREAM_BASE, e.g. upstream.get("/tabs").
    Any unmocked call fails the request.
    """
    with respx.mock(base_url=UPSTREAM_BASE, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(settings: Settings, upstream: respx.MockRouter) -> Generator[TestClient, None, None]:
    """Provide a test client for the fully wired app."""
    app = create_app(settings)
    add_request_id_middleware(app, log_requests=False)
    with TestClient(app) as client:
        yield client
