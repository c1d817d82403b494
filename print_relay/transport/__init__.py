# Transport Layer
# Handles WebSocket connections, per-connection outbound queues and the
# connection lifecycle (authenticate, register, message loop, cleanup)

from print_relay.transport.connection import Connection
from print_relay.transport.queue import ConnectionQueue, ConnectionClosedError, QueueFullError
from print_relay.transport.handler import WebSocketHandler
from print_relay.transport.app import app, create_app

__all__ = [
    "Connection",
    "ConnectionQueue",
    "ConnectionClosedError",
    "QueueFullError",
    "WebSocketHandler",
    "app",
    "create_app",
]
