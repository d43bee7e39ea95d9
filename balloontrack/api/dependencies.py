"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from balloontrack.services.tracking_session import TrackingSession


def get_tracking_session(request: Request) -> TrackingSession:
    """Return the session created by the application lifespan."""

    session: TrackingSession | None = getattr(request.app.state, "tracking_session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tracking session not initialized",
        )
    return session


__all__ = ["get_tracking_session"]
