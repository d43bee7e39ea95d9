"""Track reconstruction, nowcast and wind-layer endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from balloontrack.api.dependencies import get_tracking_session
from balloontrack.models.nowcast import NowcastPrediction
from balloontrack.models.track import ReconstructionResult, Track
from balloontrack.models.wind import LayerTransition
from balloontrack.services.tracking_session import TrackingSession, TrackNotFoundError

router = APIRouter(prefix="/api/v1", tags=["tracks"])

logger = logging.getLogger("balloontrack.api.tracks")


class WindTransitionsResponse(BaseModel):
    """Wind-layer transitions detected along a track."""

    track_id: str
    count: int = Field(..., description="Number of detected transitions")
    transitions: list[LayerTransition] = Field(default_factory=list)


def _track_not_found(track_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Track {track_id} not found in the latest reconstruction",
    )


@router.post(
    "/tracks/refresh",
    response_model=ReconstructionResult,
    summary="Fetch the latest snapshots and rebuild tracks",
)
async def refresh_tracks(
    session: TrackingSession = Depends(get_tracking_session),
) -> ReconstructionResult:
    return await session.refresh()


@router.get(
    "/tracks",
    response_model=ReconstructionResult,
    summary="Latest reconstruction result",
)
async def list_tracks(
    session: TrackingSession = Depends(get_tracking_session),
) -> ReconstructionResult:
    if session.latest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No reconstruction available; refresh first",
        )
    return session.latest


@router.get("/tracks/{track_id}", response_model=Track, summary="Get a single track")
async def get_track(
    track_id: str, session: TrackingSession = Depends(get_tracking_session)
) -> Track:
    try:
        return session.get_track(track_id)
    except TrackNotFoundError:
        raise _track_not_found(track_id) from None


@router.get(
    "/tracks/{track_id}/nowcast",
    response_model=Optional[NowcastPrediction],
    summary="One-hour position nowcast for a track",
)
async def get_nowcast(
    track_id: str, session: TrackingSession = Depends(get_tracking_session)
) -> Optional[NowcastPrediction]:
    """Return the prediction, or null when there is no basis for one."""

    try:
        prediction = await session.nowcast(track_id)
    except TrackNotFoundError:
        raise _track_not_found(track_id) from None

    logger.info(
        "Nowcast for %s: %s",
        track_id,
        "unavailable" if prediction is None else f"confidence={prediction.confidence}",
    )
    return prediction


@router.get(
    "/tracks/{track_id}/wind-transitions",
    response_model=WindTransitionsResponse,
    summary="Wind-layer transitions along a track",
)
async def get_wind_transitions(
    track_id: str, session: TrackingSession = Depends(get_tracking_session)
) -> WindTransitionsResponse:
    try:
        transitions = await session.wind_transitions(track_id)
    except TrackNotFoundError:
        raise _track_not_found(track_id) from None

    return WindTransitionsResponse(
        track_id=track_id, count=len(transitions), transitions=transitions
    )
