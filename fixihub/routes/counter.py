import logging
import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from fixihub import views
from fixihub.dependencies import (
    get_counter_service,
    get_feed_service,
    is_fixi_request,
)
from fixihub.services.counter_service import CounterService
from fixihub.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/counter", tags=["counter"])


def fragment(content: str) -> HTMLResponse:
    logger.info("Sending HTML patch: %s", re.sub(r"\s+", " ", content).strip())
    return HTMLResponse(content)


@router.get("", response_class=HTMLResponse)
async def get_counter(
    request: Request,
    counter_service: CounterService = Depends(get_counter_service),
    feed_service: FeedService = Depends(get_feed_service),
):
    fixi = is_fixi_request(request)
    logger.info("%s %s %s", request.method, request.url.path, "(fx)" if fixi else "(full)")
    if fixi:
        return fragment(views.counter(counter_service.count))
    return HTMLResponse(
        views.home_page(
            counter_service.count,
            counter_service.get_events(),
            feed_service.recent_notes(),
        )
    )


@router.post("")
async def increment_counter(
    request: Request,
    counter_service: CounterService = Depends(get_counter_service),
):
    """Increment and broadcast the log line; fixi gets the new counter block."""
    fixi = is_fixi_request(request)
    logger.info(
        "%s %s %s",
        request.method,
        request.url.path,
        "(increment, fx)" if fixi else "(increment, full)",
    )
    count = await counter_service.increment()

    if fixi:
        return fragment(views.counter(count))
    # Post/Redirect/Get so a reload does not resubmit
    logger.info("PRG redirect -> / (303) after POST /counter")
    return RedirectResponse("/", status_code=303)
