"""
Binds a long-lived SSE request to a hub subscription.

Opening registers a queue-backed sink and sends a comment frame so the
browser and any buffering proxy see the stream is live. Closing happens
either when the client goes away (Starlette cancels the generator) or
when the hub drops the sink after a failed write; both end in close().
"""

import asyncio
import logging
from typing import AsyncIterator

from fastapi.responses import StreamingResponse

from .encoding import encode_comment
from .hub import BroadcastHub
from .registry import Subscription
from .settings import Settings
from .sinks import QueueSink

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class StreamConnection:
    def __init__(
        self,
        hub: BroadcastHub,
        heartbeat_interval: float | None = 30.0,
        queue_size: int = 0,
    ):
        self.hub = hub
        self.heartbeat_interval = heartbeat_interval
        self.sink = QueueSink(maxsize=queue_size)
        self.subscription: Subscription | None = None

    async def events(self) -> AsyncIterator[bytes]:
        self.subscription = self.hub.subscribe(self.sink)
        try:
            yield encode_comment("connected")
            while True:
                try:
                    chunk = await asyncio.wait_for(
                        self.sink.receive(), timeout=self.heartbeat_interval
                    )
                except asyncio.TimeoutError:
                    yield encode_comment("keepalive")
                    continue
                if chunk is None:
                    logger.info("Stream on %s closed by hub", self.hub.name)
                    break
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        if self.subscription is not None:
            self.hub.unsubscribe(self.subscription)
        else:
            self.sink.close()


def event_stream_response(hub: BroadcastHub, settings: Settings) -> StreamingResponse:
    connection = StreamConnection(
        hub,
        heartbeat_interval=settings.heartbeat_interval,
        queue_size=settings.sink_queue_size,
    )
    return StreamingResponse(
        connection.events(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
