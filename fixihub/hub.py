"""
Broadcast hub for SSE push updates.
Encodes each envelope once and fans it out to every registered sink.
"""

import asyncio
import logging

from .encoding import DEFAULT_EVENT, encode_frame
from .models import Envelope
from .registry import SubscriberRegistry, Subscription
from .sinks import Sink

logger = logging.getLogger(__name__)


class BroadcastHub:
    def __init__(
        self,
        name: str,
        event: str = DEFAULT_EVENT,
        write_timeout: float | None = None,
    ):
        self.name = name
        self.event = event
        self.write_timeout = write_timeout
        self.registry = SubscriberRegistry()
        # Serializes publishes so every sink sees frames in call order
        self._publish_lock = asyncio.Lock()

    def subscribe(self, sink: Sink) -> Subscription:
        subscription = self.registry.register(sink)
        logger.info(
            "SSE client subscribed to %s (total: %d)", self.name, len(self.registry)
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription and close its sink. Safe to repeat."""
        if self.registry.unregister(subscription):
            logger.info(
                "SSE client unsubscribed from %s (total: %d)",
                self.name,
                len(self.registry),
            )
        subscription.sink.close()

    async def publish(self, envelope: Envelope) -> None:
        """Deliver an envelope to every live subscriber, best effort.

        Encoding errors propagate to the caller. Failures of individual
        sinks only remove those sinks.
        """
        chunk = encode_frame(envelope, self.event)
        logger.info("Broadcast %s: %s", self.name, chunk.decode("utf-8").rstrip())

        async with self._publish_lock:
            dead: list[Subscription] = []
            for subscription in self.registry.snapshot():
                try:
                    await self._write(subscription.sink, chunk)
                except Exception as e:
                    logger.warning(
                        "Failed to send to %s subscription %d: %r",
                        self.name,
                        subscription.id,
                        e,
                    )
                    dead.append(subscription)
            for subscription in dead:
                self.unsubscribe(subscription)
            if dead:
                logger.warning(
                    "Dropped %d dead SSE client(s) from %s (total: %d)",
                    len(dead),
                    self.name,
                    len(self.registry),
                )

    async def _write(self, sink: Sink, chunk: bytes) -> None:
        if self.write_timeout is None:
            await sink.send(chunk)
        else:
            await asyncio.wait_for(sink.send(chunk), timeout=self.write_timeout)

    @property
    def subscriber_count(self) -> int:
        return len(self.registry)

    def close(self) -> None:
        """Drop every subscriber; their streams end."""
        for subscription in self.registry.snapshot():
            self.unsubscribe(subscription)
