"""X-Request-ID correlation and access logging.

This middleware:
- Extracts or generates a unique request ID for each request
- Echoes the ID in response headers
- Answers exceptions no handler claimed with the 500 envelope
- Logs access information after the response is produced

Middleware Ordering (Critical):
- Must sit outside CORS and every route so all of them receive request_id
- Security headers wrap this layer, so its own 500 responses carry them too
"""

import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pansa.logging import clear_request_context, get_logger, set_request_context
from pansa.responses import unhandled_error_response

REQUEST_ID_HEADER = "X-Request-ID"

# Alphanumeric, dots, hyphens, underscores; UUIDs match as well
VALID_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

logger = get_logger(__name__)


def resolve_request_id(incoming: str | None) -> str:
    """Keep a well-formed client request ID, otherwise mint a UUID4."""
    if incoming and VALID_REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware for X-Request-ID handling and access logging.

    Args:
        app: The ASGI application.
        log_requests: If True, log an access entry for each request.
    """

    def __init__(self, app, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.monotonic()

        # Extract and validate request ID from header
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        # Attach to request state for downstream middleware/routes
        request.state.request_id = request_id

        # Set logging context (available to all subsequent log calls)
        set_request_context(request_id, method=request.method, path=request.url.path)

        try:
            try:
                # Process request through the rest of the middleware stack
                response = await call_next(request)
            except Exception as exc:
                # Answered here so the 500 still gets the header and access log
                logger.exception("request_failed", error_type=type(exc).__name__)
                response = unhandled_error_response(exc)

            # Always echo request ID in response
            response.headers[REQUEST_ID_HEADER] = request_id

            # Log access entry
            if self.log_requests:
                duration_ms = (time.monotonic() - start_time) * 1000
                logger.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                )

            return response

        finally:
            # Clear context at end of request
            clear_request_context()
