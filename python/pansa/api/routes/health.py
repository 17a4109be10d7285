"""Health check endpoint."""

from fastapi import APIRouter

SERVICE_NAME = "PANSA Proxy"

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """Liveness check endpoint.

    Returns 200 if the process is running. Never contacts the upstream.
    """
    return {"ok": True, "name": SERVICE_NAME}
