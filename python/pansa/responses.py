"""Response envelope helpers and exception handlers.

Every non-success response uses the same envelope:
    { "ok": false, "message": ... }

The message is a string for local errors and the upstream body verbatim when
the upstream supplied one.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pansa.errors import ProxyError, resolve_error_message
from pansa.logging import get_logger

logger = get_logger(__name__)


def error_response(message: Any) -> dict[str, Any]:
    """Create an error response envelope."""
    return {"ok": False, "message": message}


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    """Handle ProxyError exceptions and return the error envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.message),
    )


async def http_exception_handler(request: Request, exc: Any) -> JSONResponse:
    """Handle Starlette HTTPException (unknown route, wrong method)."""
    message = str(exc.detail) if exc.detail else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(resolve_error_message(exception_message=message)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as a plain 400."""
    logger.warning("request_invalid", errors=exc.errors())
    return JSONResponse(
        status_code=400,
        content=error_response("Invalid request"),
    )


def unhandled_error_response(exc: Exception) -> JSONResponse:
    """Build the 500 envelope for an exception no handler claimed."""
    return JSONResponse(
        status_code=500,
        content=error_response(resolve_error_message(exception_message=str(exc))),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions with a 500 envelope."""
    logger.exception("unhandled_exception", error_type=type(exc).__name__)

    return unhandled_error_response(exc)
