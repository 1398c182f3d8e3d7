"""Logfire setup for the engage service.

Services log and trace with ``logfire`` directly; this module only
configures the SDK once per process and hooks the web and database layers.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from engage.config import ObservabilitySettings, Settings

SERVICE_NAME = "engage-backend"

UNTRACED_URLS = "/health"


def should_send(observability: ObservabilitySettings) -> bool:
    """Ship to Logfire cloud when told to, else whenever a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire before the app or migrations start."""
    send_to_logfire = should_send(settings.observability)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    # Request headers carry the auth_token cookie; never record them
    logfire.instrument_fastapi(app, capture_headers=False, excluded_urls=UNTRACED_URLS)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries, tagging each statement with its span context."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
