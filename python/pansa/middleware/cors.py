"""CORS middleware answering preflights in the proxy's own response shapes.

Starlette's CORSMiddleware handles origin matching and the simple-request
headers. Only its preflight answers are reshaped:
- Allowed preflight: 204 with the access-control-* headers and no body
- Denied preflight: error envelope with the same status, no allow-origin header
"""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response

from pansa.responses import error_response

# Dropped from Starlette's plain-text preflight; the replacement sets its own
BODY_HEADERS = ("content-length", "content-type")


class EnvelopeCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose preflight responses are 204 or a JSON envelope."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            name: value for name, value in response.headers.items() if name not in BODY_HEADERS
        }

        if response.status_code >= 400:
            # e.g. "Disallowed CORS origin"
            return JSONResponse(
                status_code=response.status_code,
                content=error_response(response.body.decode()),
                headers=headers,
            )

        return Response(status_code=204, headers=headers)
