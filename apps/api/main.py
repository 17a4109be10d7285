"""Thin API launcher.

This is the uvicorn entrypoint. All application logic lives in the pansa package.
Run with: uvicorn main:app   (from apps/api)
     or: python apps/api/main.py

Settings are loaded here, not at pansa import time. A missing NETSHORT_BASE or
NETSHORT_TOKEN stops the process with exit status 1 before anything listens.
"""

import uvicorn

from pansa.app import build_app
from pansa.config import get_settings_or_exit

settings = get_settings_or_exit()
app = build_app(settings)

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        server_header=False,
    )
