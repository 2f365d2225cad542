import logging
import threading
from datetime import datetime

from fixihub.hub import BroadcastHub
from fixihub.models import Envelope, LogEntry

logger = logging.getLogger(__name__)


class CounterService:
    """The counter value and its event log, pushed through the counter hub."""

    def __init__(self, hub: BroadcastHub):
        self.hub = hub
        self.count = 0
        self.events: list[LogEntry] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def _push_event(self, text: str) -> LogEntry:
        entry = LogEntry(id=self._next_id, text=text)
        self._next_id += 1
        self.events.append(entry)
        return entry

    async def increment(self) -> int:
        with self._lock:
            self.count += 1
            count = self.count
            entry = self._push_event(
                f"Incremented to <b>{count}</b> @ {datetime.now().strftime('%H:%M:%S')}"
            )

        await self.hub.publish(
            Envelope(
                target="#event-log",
                swap_strategy="beforeend",
                payload=f"<div>{entry.text}</div>",
            )
        )
        return count

    def get_events(self) -> list[LogEntry]:
        with self._lock:
            return list(self.events)
