from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from fixihub import views
from fixihub.dependencies import get_feed_service
from fixihub.services.feed_service import FeedService

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_class=HTMLResponse)
async def get_timeline(
    feed_service: FeedService = Depends(get_feed_service),
):
    """Cached notes, newest first."""
    return views.timeline(feed_service.recent_notes())
