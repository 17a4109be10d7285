"""Tests for the uvicorn launcher (apps/api/main.py).

The launcher must refuse to start without upstream configuration and
otherwise expose a fully wired app.
"""

import runpy
from pathlib import Path

import pytest
from fastapi import FastAPI

from tests.helpers import TEST_TOKEN, UPSTREAM_BASE

LAUNCHER = Path(__file__).resolve().parents[2] / "apps" / "api" / "main.py"


@pytest.fixture
def launcher_env(monkeypatch, tmp_path, restore_logging):
    for name in ("NETSHORT_BASE", "NETSHORT_TOKEN", "CORS_ORIGIN", "PORT", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestLauncher:
    def test_exits_nonzero_without_configuration(self, launcher_env):
        with pytest.raises(SystemExit) as exc:
            runpy.run_path(str(LAUNCHER), run_name="launcher")

        assert exc.value.code == 1

    def test_builds_app_when_configured(self, launcher_env):
        launcher_env.setenv("NETSHORT_BASE", UPSTREAM_BASE)
        launcher_env.setenv("NETSHORT_TOKEN", TEST_TOKEN)
        launcher_env.setenv("PORT", "6060")

        namespace = runpy.run_path(str(LAUNCHER), run_name="launcher")

        assert isinstance(namespace["app"], FastAPI)
        assert namespace["settings"].port == 6060
