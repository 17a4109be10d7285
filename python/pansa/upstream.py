"""NetShort upstream client.

All business calls go to a single upstream API. The base URL and bearer token
live in an immutable UpstreamConfig built once at startup; NetshortClient wraps
the shared httpx.AsyncClient created in the app lifespan.

Each call is a single GET:
- 2xx: the parsed body is returned verbatim
- non-2xx: UpstreamError carrying the upstream status and body
- timeout / connection failure: UpstreamError with no status (answered as 500)

No retries. A failed attempt surfaces immediately.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from pansa.errors import UpstreamError
from pansa.logging import get_logger

logger = get_logger(__name__)

# Upstream request timeout (seconds)
UPSTREAM_TIMEOUT_S = 15.0

# Characters encodeURIComponent leaves alone besides A-Z a-z 0-9 - _ . ~
COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class UpstreamConfig:
    """Static upstream connection settings.

    Attributes:
        base_url: Upstream API base URL
        token: Bearer credential sent on every call
        timeout_s: Per-request timeout in seconds
    """

    base_url: str
    token: str
    timeout_s: float = UPSTREAM_TIMEOUT_S

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return f"UpstreamConfig(base_url={self.base_url!r}, timeout_s={self.timeout_s})"


def encode_component(value: object) -> str:
    """Percent-encode a single path segment or query value.

    Non-string values are stringified first so numeric defaults and
    user-supplied strings encode the same way.
    """
    return quote(str(value), safe=COMPONENT_SAFE)


def build_query(params: Iterable[tuple[str, object]]) -> str:
    """Build a query string from (key, value) pairs, encoding values only."""
    return "&".join(f"{key}={encode_component(value)}" for key, value in params)


def upstream_path(*segments: object, query: str | None = None) -> str:
    """Join path segments into an upstream path.

    The first segment is a literal route name; the rest are encoded. A query
    of "" still emits the trailing "?".
    """
    head, *rest = segments
    path = "/" + "/".join([str(head), *(encode_component(s) for s in rest)])
    if query is not None:
        path = f"{path}?{query}"
    return path


def create_http_client(config: UpstreamConfig) -> httpx.AsyncClient:
    """Create the shared httpx client for upstream calls."""
    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=httpx.Timeout(config.timeout_s),
        follow_redirects=True,
    )


def parse_body(response: httpx.Response) -> Any:
    """Return the JSON body when it parses, else the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class NetshortClient:
    """Thin GET-only client for the NetShort upstream.

    Args:
        http_client: Shared async HTTP client (connection pooling).
        config: Upstream settings; its bearer header is sent on every call.
    """

    def __init__(self, http_client: httpx.AsyncClient, config: UpstreamConfig):
        self._client = http_client
        self.config = config

    @property
    def headers(self) -> dict[str, str]:
        return self.config.headers

    async def get(self, path: str) -> Any:
        """Issue one GET to the upstream and return its parsed body.

        Args:
            path: Upstream path with an already-encoded query string.

        Raises:
            UpstreamError: On non-2xx responses and transport failures.
        """
        try:
            response = await self._client.get(path, headers=self.headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("upstream_error", upstream_path=path, error=str(e) or type(e).__name__)
            raise UpstreamError(reason=str(e)) from e

        if not response.is_success:
            logger.warning(
                "upstream_error", upstream_path=path, upstream_status=response.status_code
            )
            raise UpstreamError(
                status_code=response.status_code,
                body=parse_body(response),
                reason=f"Request failed with status code {response.status_code}",
            )

        return parse_body(response)

    async def aclose(self) -> None:
        await self._client.aclose()
