"""
Print Relay Application

FastAPI application with the relay's WebSocket endpoint.

Settings are passed to create_app() or, when omitted, read from the
environment at startup (see print_relay.config). Startup fails when
WS_SECRET is missing.

Run with:
    python -m print_relay
or:
    uvicorn print_relay.transport.app:app --port 3001
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket, status

from print_relay import __version__
from print_relay.auth import Authenticator
from print_relay.config import RelaySettings, settings_from_env
from print_relay.registry import AgentRegistry
from print_relay.routing import PrintRouter
from print_relay.transport.handler import WebSocketHandler

logger = logging.getLogger(__name__)


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    """
    Build the relay application.

    Components are created in the lifespan and kept on app.state, so every
    app instance has its own registry.

    Args:
        settings: Relay settings (None = read from environment at startup)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.

        Initializes and tears down all relay components.
        """
        if settings is None:
            load_dotenv()
        relay_settings = settings or settings_from_env()

        logger.info("Starting print relay...")

        registry = AgentRegistry()
        router = PrintRouter(registry)
        handler = WebSocketHandler(
            authenticator=Authenticator(relay_settings.secret),
            registry=registry,
            router=router,
            server_name=relay_settings.server_name,
            heartbeat_interval=relay_settings.heartbeat_interval,
            max_queue_size=relay_settings.outbound_queue_size,
        )

        app.state.settings = relay_settings
        app.state.registry = registry
        app.state.router = router
        app.state.handler = handler

        logger.info(
            f"Print relay started on port {relay_settings.port} "
            f"(heartbeat every {relay_settings.heartbeat_interval}s)"
        )

        yield

        logger.info("Shutting down print relay...")
        await registry.clear()
        app.state.handler = None
        logger.info("Print relay stopped")

    app = FastAPI(
        title="Print Relay",
        description="Relays print orders from the saas to each restaurant's local agent",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.handler = None

    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket endpoint for agents and saas clients.

        Authentication happens on connect through the query string.
        """
        handler: WebSocketHandler | None = websocket.app.state.handler
        if handler is None:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR, reason="Relay not initialized")
            return

        await handler.handle_connection(websocket)

    app.add_api_websocket_route("/", websocket_endpoint)
    app.add_api_websocket_route("/ws", websocket_endpoint)

    return app


app = create_app()
