"""API route definitions.

Uses a factory so importing route modules never loads settings.
"""

from fastapi import APIRouter

from pansa.api.routes.health import router as health_router
from pansa.api.routes.netshort import router as netshort_router


def create_api_router() -> APIRouter:
    """Create the API router with all routes registered."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(netshort_router, tags=["netshort"])
    return api_router


__all__ = ["create_api_router"]
