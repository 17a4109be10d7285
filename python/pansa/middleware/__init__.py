"""Middleware modules for the PANSA proxy."""

from pansa.middleware.cors import EnvelopeCORSMiddleware
from pansa.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from pansa.middleware.security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware

__all__ = [
    "EnvelopeCORSMiddleware",
    "RequestIDMiddleware",
    "REQUEST_ID_HEADER",
    "SecurityHeadersMiddleware",
    "SECURITY_HEADERS",
]
