"""API routers for the balloontrack service."""

from fastapi import APIRouter

from .errors import router as errors_router
from .health import router as health_router
from .tracks import router as tracks_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(tracks_router)
api_router.include_router(errors_router)

__all__ = ["api_router"]
