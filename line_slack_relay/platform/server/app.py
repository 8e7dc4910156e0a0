"""FastAPI application factory and server configuration.

This module creates and configures the FastAPI application with all middleware,
routes, and lifecycle management.
"""

import asyncio
import os
import signal
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from line_slack_relay.platform.observability import errors as bugsnag
from line_slack_relay.platform.observability.logging import configure_logging, get_logger
from line_slack_relay.platform.observability.metrics import prometheus_middleware
from line_slack_relay.platform.server.health import HealthCheck
from line_slack_relay.platform.server.middlewares import CorrelationIdMiddleware
from line_slack_relay.platform.server.routes import root as root_router
from line_slack_relay.platform.settings import Settings
from line_slack_relay.relay.builder import build_relay_services
from line_slack_relay.relay.routes import line_router, mock_router, slack_router

logger = get_logger(__name__)


def lifespan_closure(settings: Settings):
    @asynccontextmanager
    async def lifespan(app):
        """
        Use this to initialize all of the singleton dependencies and shared
        objects.  i.e. http client, platform clients, bugsnag, etc
        """
        if settings.bugsnag.release_stage in ["production", "development"]:
            signal_handler = SignalHandler(app)
            signal_handler.register_signal_handler()

        # JSON in prod/dev, console in local
        if settings.app_http.log_json is not None:
            json_output = settings.app_http.log_json
        else:
            json_output = settings.bugsnag.release_stage != "local"
        configure_logging(settings.app_http.log_level, json_output=json_output)

        # After logging, which replaces the root handlers
        await bugsnag.initialize_bugsnag(
            settings.bugsnag.api_key,
            settings.bugsnag.release_stage,
        )

        for key in settings.missing_settings():
            logger.warning("setting_missing", key=key)

        app.state.settings = settings
        app.state.http_client = httpx.AsyncClient(
            timeout=30.0,  # Default timeout, can be overridden per-request
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        )
        app.state.relay = build_relay_services(settings, app.state.http_client)

        HealthCheck.enable()
        logger.info("relay_started", port=settings.app_http.port)
        try:
            yield
        finally:
            await close_clients(app)

    return lifespan


async def close_clients(app: FastAPI) -> None:
    """Close the shared clients; safe to call more than once."""
    relay = getattr(app.state, "relay", None)
    if relay is not None:
        await relay.aclose()
        app.state.relay = None

    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()
        app.state.http_client = None


def create_app(settings: Settings):
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings instance

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(lifespan=lifespan_closure(settings))
    app.add_middleware(CorrelationIdMiddleware)
    app.middleware("http")(prometheus_middleware)

    # Platform routes (health, info, metrics)
    app.include_router(root_router)

    # Relay routes
    app.include_router(line_router)
    app.include_router(slack_router)
    app.include_router(mock_router)

    return app


class SignalHandler:
    def __init__(self, app: FastAPI):
        self.app = app

    async def handle_exit(self):
        """
        Handle the exit of the server
        Do NOT use FastAPI @app.on_event("shutdown") or lifespan
        The problem with this method is, it is invoked *after* server
        stops accepting request, so it does not give us any time to
        drain requests in progress and DNS cache to refresh
        """
        HealthCheck.disable()
        for _ in range(20):
            logger.info("shutting_down")
            await asyncio.sleep(1)

        await close_clients(self.app)

        # stop service successfully
        os.kill(os.getpid(), signal.SIGUSR1)

    def signal_handler(self):
        asyncio.create_task(self.handle_exit())

    def register_signal_handler(self) -> None:
        """
        Register signal handlers for the server
        """
        loop = asyncio.get_running_loop()
        for sig in [signal.SIGINT, signal.SIGTERM]:
            loop.add_signal_handler(sig, self.signal_handler)
