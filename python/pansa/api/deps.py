"""FastAPI dependencies for route handlers."""

from fastapi import Request

from pansa.upstream import NetshortClient

__all__ = ["get_netshort_client"]


def get_netshort_client(request: Request) -> NetshortClient:
    """Get the NetShort client injected into app state at startup.

    The client is built in create_app (or its lifespan) from an immutable
    UpstreamConfig; routes never read credentials themselves.
    """
    return request.app.state.netshort_client
