#!/usr/bin/env python3
"""Serve the API with uvicorn.

Logging and Logfire are configured before the app module is imported so
import-time failures are reported too.
"""

import sys

import logfire
import uvicorn

from engage.config import Settings
from engage.util.logging import setup_logging
from engage.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting Engage API",
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "engage.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            reload=settings.environment == "development",
        )
    except Exception:
        logfire.exception("Engage API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
