"""
SSE endpoints streaming live updates from the counter and timeline hubs.
"""

import logging

from fastapi import APIRouter, Depends, Request

from fixihub.dependencies import get_counter_hub, get_settings, get_timeline_hub
from fixihub.hub import BroadcastHub
from fixihub.settings import Settings
from fixihub.streaming import event_stream_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.get("/events")
async def counter_events(
    request: Request,
    hub: BroadcastHub = Depends(get_counter_hub),
    settings: Settings = Depends(get_settings),
):
    logger.info("%s %s (open events)", request.method, request.url.path)
    return event_stream_response(hub, settings)


@router.get("/timeline/events")
async def timeline_events(
    request: Request,
    hub: BroadcastHub = Depends(get_timeline_hub),
    settings: Settings = Depends(get_settings),
):
    logger.info("%s %s (open timeline events)", request.method, request.url.path)
    return event_stream_response(hub, settings)
