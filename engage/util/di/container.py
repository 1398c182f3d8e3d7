"""Dependency injection container."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from engage.util.di import PROVIDERS, get_provider


def create_container(*overrides: Provider) -> AsyncContainer:
    """Build the production container.

    Every entry of PROVIDERS resolves to its production implementation.
    Settings come from the environment.

    Args:
        overrides: Extra providers appended after the defaults; later
            providers win in dishka

    Returns:
        Container with FastAPI request integration
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, *overrides, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app as ``app.state.dishka_container``."""
    setup_dishka(container, app)
