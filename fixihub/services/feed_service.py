import asyncio
import logging
from collections import deque
from typing import Coroutine

from paho.mqtt import client as mqtt_client
from pydantic import ValidationError

from fixihub import views
from fixihub.hub import BroadcastHub
from fixihub.models import Envelope, Note

logger = logging.getLogger(__name__)


class FeedService:
    """Turns notes arriving on the MQTT feed topic into timeline updates."""

    def __init__(self, hub: BroadcastHub, topic: str, cache_size: int = 50):
        self.hub = hub
        self.topic = topic
        self.notes: deque[Note] = deque(maxlen=cache_size)
        self._event_loop: asyncio.AbstractEventLoop | None = None

    def recent_notes(self) -> list[Note]:
        """Newest first, matching how the timeline prepends."""
        return list(reversed(self.notes))

    async def ingest(self, payload: bytes) -> None:
        try:
            note = Note.model_validate_json(payload)
        except ValidationError as e:
            logger.warning("Invalid note payload on %s: %s", self.topic, e)
            return

        if note.deleted:
            self.notes = deque(
                (n for n in self.notes if n.id != note.id), maxlen=self.notes.maxlen
            )
            envelope = Envelope(
                target=f"#note-{note.id}", swap_strategy="outerHTML", payload=""
            )
        else:
            self.notes.append(note)
            envelope = Envelope(
                target="#timeline",
                swap_strategy="afterbegin",
                payload=views.note(note),
            )

        await self.hub.publish(envelope)

    def attach(self, client: mqtt_client.Client):
        """Subscribe to the feed topic; must be called from the event loop."""
        self._event_loop = asyncio.get_running_loop()
        client.on_message = self.on_message
        client.subscribe(self.topic)
        logger.info("Subscribed to timeline feed %s", self.topic)

    def on_message(self, client, userdata, msg):
        # paho network thread
        self.run_coroutine_safe(self.ingest(msg.payload))

    def run_coroutine_safe(self, coro: Coroutine):
        """Run a coroutine on the event loop from a non-asyncio thread."""
        if self._event_loop is None:
            logger.error("Event loop not set. Cannot run coroutine.")
            coro.close()
            return

        future = asyncio.run_coroutine_threadsafe(coro, self._event_loop)

        def log_exception(fut):
            try:
                fut.result()
            except Exception as e:
                logger.error("Unhandled exception in feed coroutine: %s", e, exc_info=True)

        future.add_done_callback(log_exception)
