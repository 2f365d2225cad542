from fastapi import Request

from fixihub.hub import BroadcastHub
from fixihub.services.counter_service import CounterService
from fixihub.services.feed_service import FeedService
from fixihub.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_counter_hub(request: Request) -> BroadcastHub:
    return request.app.state.counter_hub


def get_timeline_hub(request: Request) -> BroadcastHub:
    return request.app.state.timeline_hub


def get_counter_service(request: Request) -> CounterService:
    return request.app.state.counter_service


def get_feed_service(request: Request) -> FeedService:
    return request.app.state.feed_service


def is_fixi_request(request: Request) -> bool:
    fx_request = request.headers.get("fx-request", "").lower()
    return fx_request in ("true", "1")
