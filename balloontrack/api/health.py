"""Liveness check for the balloon tracking service."""

from fastapi import APIRouter

from balloontrack.config import settings

router = APIRouter(tags=["health"])


@router.get("/healthz", summary="Service liveness")
def health_check() -> dict[str, str]:
    """Report that the process is up; does not touch the snapshot or wind providers."""

    return {"status": "ok", "env": settings.balloontrack_env}
