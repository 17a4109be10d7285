"""Proxy error definitions.

Two kinds of failure reach a caller:
- MissingParameterError: a required field is absent, always 400, no upstream call.
- UpstreamError: the upstream answered non-2xx, timed out, or was unreachable.
  The status mirrors the upstream's when it has one, else 500.

Both render as the error envelope { "ok": false, "message": ... }.
"""

from typing import Any

FALLBACK_ERROR_MESSAGE = "Proxy error"
DEFAULT_ERROR_STATUS = 500


def resolve_error_message(upstream_body: Any = None, exception_message: str | None = None) -> Any:
    """Pick the message for an error envelope.

    Precedence, first present value wins:
    1. The upstream error body when truthy. An empty JSON object or list
       also counts and is forwarded as-is; None, "", false and 0 do not.
    2. The local exception message, when non-empty.
    3. FALLBACK_ERROR_MESSAGE.
    """
    if upstream_body or isinstance(upstream_body, (dict, list)):
        return upstream_body
    if exception_message:
        return exception_message
    return FALLBACK_ERROR_MESSAGE


class ProxyError(Exception):
    """Base exception for errors answered with the error envelope.

    Attributes:
        status_code: HTTP status for the response
        message: Envelope message (string or upstream JSON body)
    """

    def __init__(self, status_code: int, message: Any):
        self.status_code = status_code
        self.message = message
        super().__init__(str(message))


class MissingParameterError(ProxyError):
    """One or more required parameters were not supplied."""

    def __init__(self, *fields: str):
        self.fields = fields
        super().__init__(400, f"{', '.join(fields)} required")


class UpstreamError(ProxyError):
    """The upstream call failed.

    Args:
        status_code: Upstream HTTP status, or None for transport failures.
        body: Parsed upstream response body, if any.
        reason: Local exception message.
    """

    def __init__(
        self,
        status_code: int | None = None,
        body: Any = None,
        reason: str | None = None,
    ):
        self.upstream_status = status_code
        self.body = body
        self.reason = reason
        super().__init__(
            status_code or DEFAULT_ERROR_STATUS,
            resolve_error_message(body, reason),
        )
