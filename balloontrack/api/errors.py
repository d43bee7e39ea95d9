"""Error report endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from balloontrack.api.dependencies import get_tracking_session
from balloontrack.models.errors import ErrorReport
from balloontrack.services.tracking_session import TrackingSession

router = APIRouter(prefix="/api/v1", tags=["errors"])

logger = logging.getLogger("balloontrack.api.errors")


@router.get("/errors", response_model=ErrorReport, summary="Current error report")
def get_error_report(
    session: TrackingSession = Depends(get_tracking_session),
) -> ErrorReport:
    return session.error_report()


@router.delete(
    "/errors", status_code=status.HTTP_204_NO_CONTENT, summary="Clear recorded errors"
)
def clear_errors(session: TrackingSession = Depends(get_tracking_session)) -> None:
    session.clear_errors()
    logger.info("Error report cleared")
