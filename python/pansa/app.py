"""FastAPI application creation and configuration.

This module creates and configures the FastAPI application instance.
It registers exception handlers, middleware, and routes.

Middleware Ordering:
- Middleware runs in reverse order of registration
- RequestIDMiddleware and SecurityHeadersMiddleware are added LAST (see
  add_request_id_middleware) so every response gets the request ID and the
  security headers, including CORS preflights and unhandled-exception 500s

Order of registration:
1. EnvelopeCORSMiddleware (innermost, only when CORS_ORIGIN is set)
2. RequestIDMiddleware
3. SecurityHeadersMiddleware (outermost)

Upstream Client Lifecycle:
- UpstreamConfig is built once from Settings and never mutated
- httpx.AsyncClient is created at startup and stored in app.state
- Routes reach NetshortClient only through the get_netshort_client dependency
- A client passed to create_app is used as-is and not closed by the app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pansa.api.routes import create_api_router
from pansa.api.routes.health import SERVICE_NAME
from pansa.config import LogFormat, Settings, get_settings
from pansa.errors import ProxyError
from pansa.logging import configure_logging, get_logger
from pansa.middleware.cors import EnvelopeCORSMiddleware
from pansa.middleware.request_id import RequestIDMiddleware
from pansa.middleware.security_headers import SecurityHeadersMiddleware
from pansa.responses import (
    http_exception_handler,
    proxy_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from pansa.upstream import NetshortClient, UpstreamConfig, create_http_client

logger = get_logger(__name__)


def create_upstream_config(settings: Settings) -> UpstreamConfig:
    """Build the immutable upstream config from settings."""
    return UpstreamConfig(base_url=settings.netshort_base, token=settings.netshort_token)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the shared upstream HTTP client unless one was injected."""
    settings: Settings = app.state.settings
    owns_client = app.state.netshort_client is None

    if owns_client:
        config = create_upstream_config(settings)
        app.state.netshort_client = NetshortClient(create_http_client(config), config)

    logger.info(
        "proxy_started",
        host=settings.host,
        port=settings.port,
        upstream=settings.netshort_base,
        cors_origins=settings.cors_origin_list,
    )

    yield

    if owns_client:
        await app.state.netshort_client.aclose()
        app.state.netshort_client = None
    logger.info("proxy_stopped")


def create_app(
    settings: Settings | None = None,
    netshort_client: NetshortClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Proxy settings. Loaded from the environment if None.
        netshort_client: Optional pre-built upstream client (for testing).

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Thin reverse proxy in front of the NetShort API",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.netshort_client = netshort_client

    # Register exception handlers
    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    # Fallback for apps built without RequestIDMiddleware
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include API routes (must be before middleware for correct ordering)
    app.include_router(create_api_router())

    # Cross-origin access only for the configured origin(s); unset means none
    cors_origins = settings.cors_origin_list
    if cors_origins:
        app.add_middleware(
            EnvelopeCORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )
        logger.info("cors_middleware_enabled", origins=cors_origins)

    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Add request-id/access-log middleware and the security headers around it.

    Call AFTER all other middleware is added, so it runs FIRST.

    Args:
        app: The FastAPI application.
        log_requests: Whether to log access entries for each request.
    """
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
    # Outermost: decorates everything below, including the 500 built above
    app.add_middleware(SecurityHeadersMiddleware)


def build_app(settings: Settings) -> FastAPI:
    """Configure logging and build the fully wired production app."""
    configure_logging(json_format=settings.log_format == LogFormat.JSON)
    app = create_app(settings)
    add_request_id_middleware(app)
    return app
