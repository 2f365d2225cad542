"""
Sinks: write capabilities bound to one live streaming connection.
"""

import asyncio
from typing import Protocol

from .errors import SinkClosedError, SlowConsumerError


class Sink(Protocol):
    async def send(self, chunk: bytes) -> None:
        """Deliver one encoded frame. Raises if the connection is unusable."""

    def close(self) -> None:
        """Stop accepting frames. Must be safe to call more than once."""


class QueueSink:
    """Sink backed by an asyncio.Queue drained by the connection's response.

    ``send`` never waits: an unbounded queue always accepts, a bounded queue
    that is full fails the write so the hub drops the slow client.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: asyncio.Queue[bytes | None] = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    async def send(self, chunk: bytes) -> None:
        if self.closed:
            raise SinkClosedError("sink is closed")
        try:
            self._queue.put_nowait(chunk)
        except asyncio.QueueFull:
            raise SlowConsumerError(
                f"sink queue is full ({self._queue.maxsize} frames pending)"
            )

    async def receive(self) -> bytes | None:
        """Next pending frame, or None once the sink has been closed."""
        if self.closed and self._queue.empty():
            return None
        return await self._queue.get()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        # Pending frames are dropped; the sentinel wakes a waiting receiver
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)
