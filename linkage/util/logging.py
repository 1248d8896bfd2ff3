"""Standard library logging setup.

Logfire carries spans and structured events; stdlib logging covers uvicorn
and third-party libraries, and is forwarded to Logfire as well.
"""

import logging
import sys

import logfire

from linkage.config import Settings

# Per-request chatter from the HTTP stack
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the service process.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger().addHandler(logfire.LogfireLoggingHandler())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
