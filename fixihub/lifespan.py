import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .hub import BroadcastHub
from .mqtt import MQTTResource
from .services.counter_service import CounterService
from .services.feed_service import FeedService
from .settings import Settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    counter_hub = BroadcastHub("counter", write_timeout=settings.write_timeout)
    timeline_hub = BroadcastHub("timeline", write_timeout=settings.write_timeout)
    app.state.counter_hub = counter_hub
    app.state.timeline_hub = timeline_hub
    app.state.counter_service = CounterService(counter_hub)
    feed_service = FeedService(
        timeline_hub,
        topic=settings.mqtt_feed_topic,
        cache_size=settings.timeline_cache_size,
    )
    app.state.feed_service = feed_service

    mqtt_resource = MQTTResource(settings)
    if mqtt_resource.connect():
        feed_service.attach(mqtt_resource.get_client())

    try:
        yield
    finally:
        mqtt_resource.disconnect()
        close_hubs(app)


def close_hubs(app: FastAPI):
    """Drop every subscriber so open event streams finish. Safe to repeat."""
    hubs = [
        getattr(app.state, name, None) for name in ("counter_hub", "timeline_hub")
    ]
    for hub in hubs:
        if hub is not None:
            hub.close()
    logger.info("Broadcast hubs closed")
