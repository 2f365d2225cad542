"""
Subscriber registry shared by the event loop and the feed listener thread.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field

from .sinks import Sink

logger = logging.getLogger(__name__)

_subscription_ids = itertools.count(1)


@dataclass(frozen=True, eq=False)
class Subscription:
    sink: Sink
    id: int = field(default_factory=lambda: next(_subscription_ids))


class SubscriberRegistry:
    """Set of live subscriptions keyed by sink identity.

    The lock is only held while the membership dict is touched; delivery
    iterates over a snapshot so a slow sink never blocks register/unregister.
    """

    def __init__(self):
        self._subscriptions: dict[int, Subscription] = {}
        self._lock = threading.Lock()

    def register(self, sink: Sink) -> Subscription:
        with self._lock:
            existing = self._subscriptions.get(id(sink))
            if existing is not None:
                return existing
            subscription = Subscription(sink=sink)
            self._subscriptions[id(sink)] = subscription
            total = len(self._subscriptions)
        logger.debug("Registered subscription %d (total: %d)", subscription.id, total)
        return subscription

    def unregister(self, subscription: Subscription) -> bool:
        with self._lock:
            current = self._subscriptions.get(id(subscription.sink))
            if current is not subscription:
                return False
            del self._subscriptions[id(subscription.sink)]
            total = len(self._subscriptions)
        logger.debug("Unregistered subscription %d (total: %d)", subscription.id, total)
        return True

    def snapshot(self) -> tuple[Subscription, ...]:
        with self._lock:
            return tuple(self._subscriptions.values())

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, subscription: Subscription) -> bool:
        with self._lock:
            return self._subscriptions.get(id(subscription.sink)) is subscription
