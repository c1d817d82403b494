"""
Outbound Connection Queue

Per-connection async outgoing queue with a single writer task.

Design:
- Each connection gets a dedicated asyncio.Queue
- A single writer coroutine drains the queue and sends to the WebSocket,
  so frames reach the peer in the order they were enqueued
- Enqueueing never waits on the network: the router, the heartbeat and the
  lifecycle controller all send through put_nowait
- Stopping the queue cancels the writer; anything still pending is dropped
"""

import asyncio
import logging
from typing import Callable, Awaitable

logger = logging.getLogger(__name__)


class QueueFullError(Exception):
    """Raised when the outbound queue is full (backpressure)."""
    def __init__(self, conn_id: str, queue_size: int):
        self.conn_id = conn_id
        self.queue_size = queue_size
        super().__init__(f"Queue full for {conn_id} (size={queue_size})")


class ConnectionClosedError(Exception):
    """Raised when sending on a connection whose queue has been stopped."""
    def __init__(self, conn_id: str):
        self.conn_id = conn_id
        super().__init__(f"Connection closed: {conn_id}")


class ConnectionQueue:
    """
    Outbound message queue for a single connection.
    """

    def __init__(
        self,
        conn_id: str,
        send_fn: Callable[[str], Awaitable[None]],
        max_size: int = 200
    ):
        """
        Initialize connection queue.

        Args:
            conn_id: Connection identifier (for logs and errors)
            send_fn: Async function that writes one text frame
            max_size: Max queue depth before backpressure
        """
        self.conn_id = conn_id
        self._send_fn = send_fn
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_size)
        self._writer_task: asyncio.Task | None = None
        self._closed = False
        self._failed = False
        self._max_size = max_size

    async def start(self) -> None:
        """Start the writer task."""
        if self._writer_task is None:
            self._writer_task = asyncio.create_task(
                self._writer_loop(),
                name=f"queue_writer_{self.conn_id}"
            )

    async def stop(self) -> None:
        """Stop the writer task. Safe to call more than once."""
        self._closed = True

        if self._writer_task:
            self._writer_task.cancel()
            try:
                await self._writer_task
            except asyncio.CancelledError:
                pass
            self._writer_task = None

    @property
    def is_closed(self) -> bool:
        """True once stopped or once a write to the peer has failed."""
        return self._closed or self._failed

    def put_nowait(self, message: str) -> None:
        """
        Put a message on the queue without blocking.

        Raises:
            ConnectionClosedError: If the queue is stopped or the writer died
            QueueFullError: If queue is full (backpressure condition)
        """
        if self.is_closed:
            raise ConnectionClosedError(self.conn_id)

        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            raise QueueFullError(self.conn_id, self._max_size)

    @property
    def qsize(self) -> int:
        """Current queue depth."""
        return self._queue.qsize()

    async def _writer_loop(self) -> None:
        """
        Single writer loop that drains the queue.

        Serializes all sends to the WebSocket connection.
        """
        while not self._closed:
            try:
                message = await self._queue.get()
                try:
                    await self._send_fn(message)
                except Exception as e:
                    logger.warning(f"Send failed for {self.conn_id}: {e}")
                    # Connection likely dead, stop accepting sends
                    self._failed = True
                    break
                finally:
                    self._queue.task_done()

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Writer loop error for {self.conn_id}: {e}")
