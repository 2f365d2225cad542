import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from fixihub import views
from fixihub.dependencies import get_counter_service, get_feed_service
from fixihub.services.counter_service import CounterService
from fixihub.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    counter_service: CounterService = Depends(get_counter_service),
    feed_service: FeedService = Depends(get_feed_service),
):
    """Full page with the current counter, log and timeline."""
    logger.info("%s %s", request.method, request.url.path)
    return views.home_page(
        counter_service.count,
        counter_service.get_events(),
        feed_service.recent_notes(),
    )
