"""
WebSocket Handler

Lifecycle controller for every relay connection:

    accept -> authenticate -> bind role -> (agent) register -> message loop
    -> close -> (agent) unregister

Connection parameters come from the query string:
- token: shared secret, or the tenant id itself for tenant-scoped access
- restaurantId: tenant id
- role: "agent" or "saas"

Supported inbound message types:
- print_order (saas only) -> routed to the tenant's agent, answered with
  print_ack / print_error
- pong -> ignored

Anything else is logged and dropped; the connection stays open. Only an
authentication failure closes a connection from this side.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from print_relay.auth import Authenticator, ConnectionRole, Credentials
from print_relay.heartbeat import HeartbeatMonitor
from print_relay.protocol import (
    InboundMessage,
    MessageType,
    OutboundMessage,
    PrintOrder,
    create_agent_connected,
    create_print_result,
    create_welcome,
)
from print_relay.registry import AgentRegistry
from print_relay.routing import PrintRouter
from print_relay.transport.connection import Connection

logger = logging.getLogger(__name__)


class WebSocketHandler:
    """
    Handles WebSocket connections and message routing.

    One handler is shared by all connections; per-connection state lives in
    the Connection and HeartbeatMonitor created inside handle_connection.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        registry: AgentRegistry,
        router: PrintRouter,
        server_name: str = "print-ws",
        heartbeat_interval: float = 30.0,
        max_queue_size: int = 200,
    ):
        """
        Initialize the handler.

        Args:
            authenticator: Credential check run on every connection
            registry: Agent registry (one agent per tenant)
            router: Print router used for saas print orders
            server_name: Identifier sent to saas clients on connect
            heartbeat_interval: Seconds between pings
            max_queue_size: Outbound queue depth per connection
        """
        self._auth = authenticator
        self._registry = registry
        self._router = router
        self._server_name = server_name
        self._heartbeat_interval = heartbeat_interval
        self._max_queue_size = max_queue_size

    async def handle_connection(self, websocket: WebSocket) -> None:
        """
        Handle a WebSocket connection lifecycle.

        Args:
            websocket: The WebSocket connection
        """
        credentials = Credentials(
            token=websocket.query_params.get("token"),
            tenant_id=websocket.query_params.get("restaurantId"),
            role=websocket.query_params.get("role"),
        )
        client = websocket.client
        logger.info(
            f"New connection: role={credentials.role} "
            f"restaurantId={credentials.tenant_id} "
            f"from={client.host if client else 'unknown'}"
        )

        await websocket.accept()

        result = self._auth.authenticate(credentials)
        if not result.is_admitted:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=result.reason)
            return

        connection = Connection(
            websocket,
            role=result.role,
            tenant_id=result.tenant_id,
            max_queue_size=self._max_queue_size,
        )
        heartbeat = HeartbeatMonitor(connection, self._heartbeat_interval)

        try:
            await connection.open()
            await self._bind(connection)
            heartbeat.start()

            while True:
                raw = await self._receive_raw(websocket)
                await self._handle_message(connection, raw)

        except WebSocketDisconnect as e:
            logger.info(f"WebSocket disconnected: {connection!r} (code={e.code})")

        except Exception as e:
            logger.error(f"WebSocket error on {connection!r}: {e}", exc_info=True)

        finally:
            # Cleanup must finish even when the task is cancelled on shutdown
            await asyncio.shield(self._close(connection, heartbeat))

    async def _bind(self, connection: Connection) -> None:
        """Register agents, greet saas clients."""
        if connection.role == ConnectionRole.AGENT:
            await self._registry.register(connection.tenant_id, connection)
            self._send(connection, create_agent_connected(connection.tenant_id))
            logger.info(f"Agent connected for restaurant {connection.tenant_id}")
        else:
            self._send(connection, create_welcome(self._server_name))
            logger.info(f"Saas connected for restaurant {connection.tenant_id}")

    async def _close(self, connection: Connection, heartbeat: HeartbeatMonitor) -> None:
        """
        Release everything tied to a connection.

        Runs on every exit path; repeated calls do nothing.
        """
        await heartbeat.stop()
        if not await connection.close():
            return

        if connection.role == ConnectionRole.AGENT:
            removed = await self._registry.unregister(connection.tenant_id, connection)
            if removed:
                logger.info(f"Agent disconnected: {connection.tenant_id}")
            else:
                # Superseded by a newer agent, or the registry was cleared on shutdown
                logger.debug(
                    f"Agent {connection!r} closed; no longer the registered agent "
                    f"for {connection.tenant_id}"
                )

    async def _receive_raw(self, websocket: WebSocket) -> str | bytes:
        """
        Wait for the next frame, text or binary.

        Raises:
            WebSocketDisconnect: When the peer goes away
        """
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
        text = message.get("text")
        if text is not None:
            return text
        return message.get("bytes") or b""

    async def _handle_message(self, connection: Connection, raw: str | bytes) -> None:
        """
        Parse and dispatch one inbound frame.

        Malformed frames and handler failures are logged and swallowed so
        that one bad message never takes the connection down.
        """
        try:
            message = InboundMessage.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Invalid message from {connection!r}: {e.error_count()} error(s)")
            return

        handlers = {
            MessageType.PRINT_ORDER: self._handle_print_order,
            MessageType.PONG: self._handle_pong,
        }

        try:
            message_type = MessageType(message.type)
        except ValueError:
            message_type = None

        handler = handlers.get(message_type)
        if handler is None:
            logger.warning(f"Unsupported message type from {connection!r}: {message.type}")
            return

        try:
            await handler(connection, message)
        except Exception as e:
            logger.error(
                f"Error handling {message.type} from {connection!r}: {e}",
                exc_info=True
            )

    async def _handle_print_order(
        self,
        connection: Connection,
        message: InboundMessage
    ) -> None:
        """Route a saas print order and report the outcome."""
        if connection.role != ConnectionRole.SAAS:
            logger.warning(f"Ignoring print_order from non-saas connection {connection!r}")
            return

        if message.order is None:
            logger.warning(f"print_order without order from {connection!r}")
            return

        try:
            order = PrintOrder.model_validate(message.order)
        except ValidationError as e:
            logger.warning(f"Invalid order from {connection!r}: {e.error_count()} error(s)")
            return

        outcome = await self._router.route(connection.tenant_id, order)

        self._send(
            connection,
            create_print_result(
                print_id=outcome.print_id,
                success=outcome.success,
                reason=outcome.reason
            )
        )

    async def _handle_pong(self, connection: Connection, message: InboundMessage) -> None:
        """Keep-alive answer; nothing to do."""
        logger.debug(f"Pong from {connection!r}")

    def _send(self, connection: Connection, message: OutboundMessage) -> bool:
        """Send a frame to the connection's own peer."""
        try:
            connection.send(message)
            return True
        except Exception as e:
            logger.warning(f"Could not send {message.type} to {connection!r}: {e}")
            return False
