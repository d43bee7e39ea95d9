"""Session object wiring ingestion, reconstruction, wind lookups and errors."""

from __future__ import annotations

import logging
from typing import Optional

from balloontrack.config import settings
from balloontrack.ingestors.snapshots import SnapshotIngestor
from balloontrack.ingestors.wind import WindIngestor
from balloontrack.models.errors import ApiErrorType, ErrorReport
from balloontrack.models.nowcast import NowcastPrediction
from balloontrack.models.track import ReconstructionResult, Track, TrackPoint
from balloontrack.models.wind import LayerTransition, WindSample, WindSeries
from balloontrack.services.error_tracking import ErrorTracker
from balloontrack.services.nowcast import calculate_nowcast
from balloontrack.services.reconstruction import ReconstructionConfig, reconstruct_tracks
from balloontrack.services.wind_cache import WindCache
from balloontrack.services.wind_correlation import get_wind_at_time
from balloontrack.services.wind_transitions import detect_layer_transitions

logger = logging.getLogger("balloontrack.tracking_session")

SNAPSHOT_ENDPOINT = "snapshots"
WIND_ENDPOINT = "open-meteo"


class TrackNotFoundError(LookupError):
    """Raised when a track id is not part of the latest reconstruction."""


def _classify_error(message: str) -> ApiErrorType:
    lowered = message.lower()
    if "timed out" in lowered or "timeout" in lowered:
        return "timeout"
    if lowered.startswith("http 429"):
        return "rate_limit"
    if "network" in lowered:
        return "network"
    if "parse" in lowered or "invalid data format" in lowered:
        return "parse"
    return "unknown"


class TrackingSession:
    """State owned by one application session.

    Holds the error tracker, the wind cache and the latest reconstruction.
    Track ids are only meaningful against the result they came from, so
    lookups always use the most recent ``refresh``.
    """

    def __init__(
        self,
        *,
        snapshot_ingestor: Optional[SnapshotIngestor] = None,
        wind_ingestor: Optional[WindIngestor] = None,
        wind_cache: Optional[WindCache] = None,
        error_tracker: Optional[ErrorTracker] = None,
        config: Optional[ReconstructionConfig] = None,
    ) -> None:
        self.wind_cache = wind_cache or WindCache(ttl_seconds=settings.wind_cache_ttl_seconds)
        self.snapshot_ingestor = snapshot_ingestor or SnapshotIngestor()
        self.wind_ingestor = wind_ingestor or WindIngestor(cache=self.wind_cache)
        self.error_tracker = error_tracker or ErrorTracker()
        self.config = config or ReconstructionConfig(
            bridge_missing_hours=settings.bridge_missing_hours
        )
        self.latest: Optional[ReconstructionResult] = None

    async def refresh(self) -> ReconstructionResult:
        collection = await self.snapshot_ingestor.fetch_all()
        self.error_tracker.analyze_snapshot_collection(collection)

        result = reconstruct_tracks(collection, config=self.config)
        self.error_tracker.clear_track_errors()
        if collection.success_count > 0:
            self.error_tracker.analyze_reconstruction(result)
        else:
            self.error_tracker.record_api_error(
                "unknown", "No data files were successfully fetched", SNAPSHOT_ENDPOINT
            )

        self.latest = result
        logger.info(
            "Reconstruction refreshed: %s tracks, %s matches, %s unusable hours",
            len(result.tracks),
            result.match_statistics.total_matches,
            len(result.unmatched_points),
        )
        return result

    def get_track(self, track_id: str) -> Track:
        track = self.latest.get_track(track_id) if self.latest else None
        if track is None:
            raise TrackNotFoundError(track_id)
        return track

    async def wind_series_for_point(self, point: TrackPoint) -> Optional[WindSeries]:
        result = await self.wind_ingestor.fetch_wind_for_altitude(
            point.latitude, point.longitude, point.altitude_km
        )
        if not result.success or result.data is None:
            message = result.error or "Failed to fetch wind data"
            self.error_tracker.record_api_error(
                _classify_error(message), message, WIND_ENDPOINT
            )
            return None
        return result.data

    async def wind_for_point(self, point: TrackPoint) -> Optional[WindSample]:
        series = await self.wind_series_for_point(point)
        if series is None:
            return None
        return get_wind_at_time(series, point.timestamp)

    async def nowcast(self, track_id: str) -> Optional[NowcastPrediction]:
        track = self.get_track(track_id)
        wind = await self.wind_for_point(track.last_point)
        if wind is None:
            self.error_tracker.record_track_error(
                track_id, "no_wind_data", "No wind sample near the latest position"
            )
        return calculate_nowcast(track, wind)

    async def wind_transitions(self, track_id: str) -> list[LayerTransition]:
        track = self.get_track(track_id)
        series = await self.wind_series_for_point(track.last_point)
        if series is None:
            return []
        return detect_layer_transitions(track, series)

    def error_report(self) -> ErrorReport:
        return self.error_tracker.generate_report()

    def clear_errors(self) -> None:
        self.error_tracker.clear_all()

    def clear_wind_cache(self) -> None:
        self.wind_cache.clear()


__all__ = ["TrackNotFoundError", "TrackingSession"]
