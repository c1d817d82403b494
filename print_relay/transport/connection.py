"""
Connection Handle

Wraps an accepted WebSocket with the state the relay tracks per client:
role, tenant, connect time, and an outbound queue.

Only the lifecycle controller that accepted the socket owns a Connection.
The registry and the router hold references to agent connections but never
close them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from print_relay.auth import ConnectionRole
from print_relay.protocol import OutboundMessage
from print_relay.transport.queue import ConnectionQueue

logger = logging.getLogger(__name__)


class Connection:
    """
    A role-bound client connection.

    send() is fire-and-forget: frames are enqueued and written by the
    queue's writer task in order.
    """

    def __init__(
        self,
        websocket: WebSocket,
        role: ConnectionRole,
        tenant_id: str,
        max_queue_size: int = 200,
    ):
        self.websocket = websocket
        self.role = role
        self.tenant_id = tenant_id
        self.connected_at = datetime.now(timezone.utc)
        self.conn_id = f"{role.value}:{tenant_id}:{id(websocket):x}"
        self._queue = ConnectionQueue(
            self.conn_id,
            websocket.send_text,
            max_size=max_queue_size
        )
        self._closed = False

    async def open(self) -> None:
        """Start the outbound writer."""
        await self._queue.start()

    async def close(self) -> bool:
        """
        Stop the outbound writer and drop pending frames.

        Returns:
            True the first time, False on any later call
        """
        if self._closed:
            return False
        self._closed = True
        await self._queue.stop()
        return True

    @property
    def is_open(self) -> bool:
        """True while frames can still be delivered to the peer."""
        if self._closed or self._queue.is_closed:
            return False
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    def send(self, message: OutboundMessage) -> None:
        """
        Enqueue a frame for the peer.

        Raises:
            ConnectionClosedError: If the connection is closed
            QueueFullError: If the peer is not draining its queue
        """
        self._queue.put_nowait(message.to_json())

    def __repr__(self) -> str:
        return f"Connection({self.conn_id})"
