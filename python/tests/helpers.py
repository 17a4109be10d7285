"""Test helpers shared across test modules.

Provides:
- Upstream constants used by the respx mock
- Settings construction that ignores the developer's .env file
- A stand-in NetshortClient for dependency-injection tests
"""

from typing import Any

from pansa.config import Settings
from pansa.errors import UpstreamError

UPSTREAM_BASE = "https://upstream.test/api"
TEST_TOKEN = "test-token"


def make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults + overrides."""
    values = {
        "NETSHORT_BASE": UPSTREAM_BASE,
        "NETSHORT_TOKEN": TEST_TOKEN,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class StubNetshortClient:
    """Records requested paths instead of calling an upstream.

    Args:
        body: Returned for every call.
        error: Raised for every call instead of returning body.
    """

    def __init__(self, body: Any = None, error: Exception | None = None):
        self.body = {"ok": True} if body is None else body
        self.error = error
        self.paths: list[str] = []

    async def get(self, path: str) -> Any:
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.body

    async def aclose(self) -> None:
        pass


def upstream_failure(status: int, body: Any) -> UpstreamError:
    """Build the UpstreamError NetshortClient raises for a non-2xx answer."""
    return UpstreamError(
        status_code=status, body=body, reason=f"Request failed with status code {status}"
    )
