from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request

from balloontrack.api import api_router
from balloontrack.config import settings
from balloontrack.services.tracking_session import TrackingSession

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("balloontrack")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tracking session for this application run."""

    session = TrackingSession()
    app.state.tracking_session = session
    logger.info("Tracking session created")

    if settings.refresh_on_startup:
        result = await session.refresh()
        logger.info("Startup reconstruction produced %s tracks", len(result.tracks))

    try:
        yield
    finally:
        session.clear_wind_cache()
        app.state.tracking_session = None
        logger.info("Tracking session closed")


app = FastAPI(title="Balloon Track Reconstruction", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "Balloon track service is running"}
