"""Pydantic models for the balloontrack service."""

from .errors import ApiError, DataFileError, ErrorReport, TrackError
from .nowcast import NowcastPrediction, PredictedPosition
from .position import FrameFetchResult, Position, SnapshotCollection
from .track import (
    Match,
    MatchStatistics,
    ReconstructionResult,
    Track,
    TrackPoint,
    UnmatchedHour,
)
from .wind import (
    LayerTransition,
    WindCorrelation,
    WindFetchResult,
    WindSample,
    WindSeries,
    WindVector,
)

__all__ = [
    "ApiError",
    "DataFileError",
    "ErrorReport",
    "FrameFetchResult",
    "LayerTransition",
    "Match",
    "MatchStatistics",
    "NowcastPrediction",
    "Position",
    "PredictedPosition",
    "ReconstructionResult",
    "SnapshotCollection",
    "Track",
    "TrackError",
    "TrackPoint",
    "UnmatchedHour",
    "WindCorrelation",
    "WindFetchResult",
    "WindSample",
    "WindSeries",
    "WindVector",
]
