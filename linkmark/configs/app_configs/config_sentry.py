"""Sentry Configuration"""

import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.types import Event, Hint

from linkmark import __version__
from linkmark.configs import settings

logger = logging.getLogger(__name__)

REDACTED_TEXT = "[REDACTED]"

# Local variable names that carry bookmark URLs or titles.
SENSITIVE_VARS = frozenset({"url", "title", "page_url", "query"})


def configure_sentry() -> None:  # pragma: no cover
    """Configure and initialize Sentry integration."""
    if settings.sentry.mode == "disabled":
        return
    sentry_sdk.init(
        dsn=settings.sentry.dsn,
        integrations=[
            StarletteIntegration(),
            FastApiIntegration(),
        ],
        release=__version__,
        debug="debug" == settings.sentry.mode,
        before_send=strip_sensitive_data,
        environment=settings.sentry.env,
        traces_sample_rate=settings.sentry.traces_sample_rate,
    )


def strip_sensitive_data(event: Event, hint: Hint) -> Event | None:
    """Filter bookmark URLs and titles out of Sentry events."""
    #  See: https://docs.sentry.io/platforms/python/configuration/filtering/
    request = event.get("request", {})
    if request.get("query_string"):
        request["query_string"] = REDACTED_TEXT
    if request.get("data"):
        request["data"] = REDACTED_TEXT

    for exception in event.get("exception", {}).get("values", []):
        for frame in exception.get("stacktrace", {}).get("frames", []):
            frame_vars = frame.get("vars", {})
            for name in SENSITIVE_VARS.intersection(frame_vars):
                frame_vars[name] = REDACTED_TEXT

    return event
