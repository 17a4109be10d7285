"""Application settings loaded from environment variables.

Environment Configuration:
    NETSHORT_BASE: Upstream NetShort API base URL (required)
    NETSHORT_TOKEN: Bearer token sent on every upstream call (required)
    CORS_ORIGIN: Allowed cross-origin caller(s), comma-separated (optional)
    PORT: Listen port (default 5050)
    HOST: Listen interface (default 0.0.0.0)
    LOG_FORMAT: json | console (default json)

Settings are read once at startup. A missing NETSHORT_BASE or NETSHORT_TOKEN
is fatal: the launcher refuses to start rather than run half-configured.
"""

import sys
from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from pansa.logging import get_logger

logger = get_logger(__name__)

REQUIRED_VARIABLES = ("NETSHORT_BASE", "NETSHORT_TOKEN")


class LogFormat(str, Enum):
    """Supported log renderers."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Proxy configuration.

    Validation rules:
    - NETSHORT_BASE and NETSHORT_TOKEN are required and must not be blank
    - PORT must be a valid TCP port
    """

    netshort_base: Annotated[str, Field(alias="NETSHORT_BASE")]
    netshort_token: Annotated[str, Field(alias="NETSHORT_TOKEN")]
    cors_origin: str | None = Field(default=None, alias="CORS_ORIGIN")
    port: int = Field(default=5050, alias="PORT", ge=1, le=65535)
    host: str = Field(default="0.0.0.0", alias="HOST")
    log_format: LogFormat = Field(default=LogFormat.JSON, alias="LOG_FORMAT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("netshort_base", "netshort_token")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        if self.cors_origin:
            return [o.strip() for o in self.cors_origin.split(",") if o.strip()]
        return []


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()


def missing_variables(exc: ValidationError) -> list[str]:
    """Names of the required variables a ValidationError complains about."""
    names = {str(loc) for error in exc.errors() for loc in error["loc"]}
    return [name for name in REQUIRED_VARIABLES if name in names]


def get_settings_or_exit() -> Settings:
    """Load settings, exiting the process with status 1 when they are invalid."""
    try:
        return get_settings()
    except ValidationError as exc:
        missing = missing_variables(exc)
        if missing:
            logger.error("config_missing", missing=missing)
            print(f"Missing {' or '.join(missing)} in environment or .env", file=sys.stderr)
        else:
            logger.error("config_invalid", errors=exc.errors(include_url=False))
            print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)
