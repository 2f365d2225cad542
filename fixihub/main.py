import logging
import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from fixihub.lifespan import lifespan
from fixihub.routes.counter import router as counter_router
from fixihub.routes.events import router as events_router
from fixihub.routes.pages import router as pages_router
from fixihub.routes.timeline import router as timeline_router
from fixihub.settings import Settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(lifespan=lifespan, debug=settings.debug)
    app.state.settings = settings

    app.include_router(pages_router)
    app.include_router(counter_router)
    app.include_router(events_router)
    app.include_router(timeline_router)
    # Without a static directory /static/* falls through to 404
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/static", StaticFiles(directory=settings.static_dir), name="static"
        )
    return app


app = create_app()
