"""NetShort forwarding routes.

Every route is transport-only:
- Read query/path parameters, applying defaults
- Reject missing required parameters with 400 before any upstream contact
- Build the upstream path with every value percent-encoded
- Forward one GET and return the upstream body verbatim with 200

Upstream failures raise UpstreamError and are answered by the ProxyError
handler. All values stay strings; numeric defaults are string literals.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from pansa.api.deps import get_netshort_client
from pansa.errors import MissingParameterError
from pansa.upstream import NetshortClient, build_query, upstream_path

DEFAULT_LANG = "id_ID"
DEFAULT_LIMIT = "10"
DEFAULT_SEARCH_LIMIT = "20"
DEFAULT_OFFSET = "0"

router = APIRouter(prefix="/netshort")

Client = Annotated[NetshortClient, Depends(get_netshort_client)]


def require_params(**params: str | None) -> None:
    """Raise MissingParameterError naming every absent or empty parameter."""
    missing = [name for name, value in params.items() if not value]
    if missing:
        raise MissingParameterError(*missing)


async def forward(client: NetshortClient, path: str) -> JSONResponse:
    body: Any = await client.get(path)
    return JSONResponse(status_code=200, content=body)


@router.get("/languages")
async def languages(client: Client) -> JSONResponse:
    """List languages supported by the upstream."""
    return await forward(client, upstream_path("languages"))


@router.get("/tabs")
async def tabs(client: Client, lang: str | None = Query(default=None)) -> JSONResponse:
    """List home tabs. An empty lang falls back to the default."""
    query = build_query([("lang", lang or DEFAULT_LANG)])
    return await forward(client, upstream_path("tabs", query=query))


@router.get("/home")
async def home(
    client: Client,
    tab_id: str | None = Query(default=None, alias="tabId"),
    limit: str = Query(default=DEFAULT_LIMIT),
    offset: str = Query(default=DEFAULT_OFFSET),
    lang: str = Query(default=DEFAULT_LANG),
) -> JSONResponse:
    """Page through one home tab."""
    require_params(tabId=tab_id)
    query = build_query([("tabId", tab_id), ("limit", limit), ("offset", offset), ("lang", lang)])
    return await forward(client, upstream_path("get-home", query=query))


@router.get("/recommend")
async def recommend(
    client: Client,
    limit: str = Query(default=DEFAULT_LIMIT),
    offset: str = Query(default=DEFAULT_OFFSET),
    lang: str = Query(default=DEFAULT_LANG),
) -> JSONResponse:
    query = build_query([("limit", limit), ("offset", offset), ("lang", lang)])
    return await forward(client, upstream_path("recommend", query=query))


@router.get("/member")
async def member(
    client: Client,
    limit: str = Query(default=DEFAULT_LIMIT),
    offset: str = Query(default=DEFAULT_OFFSET),
    lang: str = Query(default=DEFAULT_LANG),
) -> JSONResponse:
    query = build_query([("limit", limit), ("offset", offset), ("lang", lang)])
    return await forward(client, upstream_path("member", query=query))


@router.get("/search")
async def search(
    client: Client,
    keyword: str = Query(default=""),
    limit: str = Query(default=DEFAULT_SEARCH_LIMIT),
    offset: str = Query(default=DEFAULT_OFFSET),
    lang: str = Query(default=DEFAULT_LANG),
) -> JSONResponse:
    """Keyword search. An empty keyword is forwarded as-is."""
    query = build_query(
        [("keyword", keyword), ("limit", limit), ("offset", offset), ("lang", lang)]
    )
    return await forward(client, upstream_path("search", query=query))


@router.get("/search/recommend")
async def search_recommend(
    client: Client, lang: str | None = Query(default=None)
) -> JSONResponse:
    """Suggested searches. An empty lang falls back to the default."""
    query = build_query([("lang", lang or DEFAULT_LANG)])
    return await forward(client, upstream_path("search/recommend", query=query))


@router.get("/episodes/{short_play_id}")
async def episodes(client: Client, short_play_id: str) -> JSONResponse:
    """List the episodes of one short play.

    The upstream path keeps its bare trailing "?".
    """
    return await forward(client, upstream_path("getepisode", short_play_id, query=""))


@router.get("/video")
async def video(
    client: Client,
    short_play_id: str | None = Query(default=None, alias="shortPlayId"),
    episode_id: str | None = Query(default=None, alias="episodeId"),
    episode_no: str | None = Query(default=None, alias="episodeNo"),
) -> JSONResponse:
    """Resolve the playable video of one episode."""
    require_params(shortPlayId=short_play_id, episodeId=episode_id, episodeNo=episode_no)
    query = build_query([("episodeNo", episode_no)])
    return await forward(
        client, upstream_path("getepisode", short_play_id, episode_id, query=query)
    )
