"""
Heartbeat Monitor

Sends a periodic ping to one connection while it is open.

This is a keep-alive, not a failure detector: the peer may answer with
pong, but a missing pong never closes the connection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from print_relay.protocol import OutboundMessage, create_ping

logger = logging.getLogger(__name__)

DEFAULT_HEARTBEAT_INTERVAL = 30.0


class Pingable(Protocol):
    """What the monitor needs from a connection."""
    conn_id: str

    @property
    def is_open(self) -> bool: ...

    def send(self, message: OutboundMessage) -> None: ...


class HeartbeatMonitor:
    """
    Per-connection ping timer.

    Created once the connection is authenticated; stop() must be called on
    every close path.
    """

    def __init__(
        self,
        connection: Pingable,
        interval_seconds: float = DEFAULT_HEARTBEAT_INTERVAL
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._connection = connection
        self._interval = interval_seconds
        self._task: asyncio.Task | None = None
        self.pings_sent = 0

    def start(self) -> None:
        """Start the ping loop."""
        if self._task is None:
            self._task = asyncio.create_task(
                self._ping_loop(),
                name=f"heartbeat_{self._connection.conn_id}"
            )

    async def stop(self) -> None:
        """Cancel the ping loop. Safe to call more than once."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _ping_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)

            if not self._connection.is_open:
                continue

            try:
                self._connection.send(create_ping())
                self.pings_sent += 1
            except Exception as e:
                logger.debug(f"Ping skipped for {self._connection.conn_id}: {e}")
