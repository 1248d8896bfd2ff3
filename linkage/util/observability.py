"""Logfire setup.

Spans wrap each directory call and each link or unlink flow; events use
``logfire.info`` / ``warn`` / ``error`` with keyword attributes:

    with logfire.span("account_linking_service.initiate_link", ...):
        logfire.info("Account linked", primary_user_id=..., identity_count=...)
"""

import logfire
from fastapi import FastAPI

from linkage.config import Settings

# Attribute names that may carry the Management API token or session tokens
_SECRET_PATTERNS = ["api_token", "authorization", "session_token"]


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the service.

    Data is sent to Logfire when ``OBSERVABILITY__SEND_TO_LOGFIRE`` is true,
    or when it is unset and ``OBSERVABILITY__LOGFIRE_TOKEN`` is present.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name="linkage",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SECRET_PATTERNS),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        directory_domain=settings.directory.domain,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace incoming requests to ``app``."""
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_httpx() -> None:
    """Trace outbound Management API calls."""
    logfire.instrument_httpx()
