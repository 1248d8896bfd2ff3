#!/usr/bin/env python3
"""Run the linkage API under uvicorn.

Logging and Logfire are configured before the app module is imported so
startup failures (missing settings, bad provider wiring) are recorded.
"""

import sys

import logfire
import uvicorn

from linkage.config import Settings
from linkage.util.logging import setup_logging
from linkage.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting linkage API",
        host=settings.host,
        port=settings.port,
        directory_base_url=settings.directory.base_url,
    )
    try:
        uvicorn.run(
            "linkage.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("linkage API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
