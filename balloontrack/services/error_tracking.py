"""Collect data-file, track and upstream API errors for reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Optional

from balloontrack.models.errors import (
    ApiError,
    ApiErrorType,
    DataFileError,
    ErrorReport,
    TrackError,
    TrackIssue,
)
from balloontrack.models.position import SnapshotCollection
from balloontrack.models.track import ReconstructionResult

logger = logging.getLogger("balloontrack.error_tracking")

MAX_API_ERRORS = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ErrorTrackingState:
    """Mutable error state; copies are handed out by ``ErrorTracker.state``."""

    data_file_errors: dict[int, DataFileError] = field(default_factory=dict)
    track_errors: dict[str, TrackError] = field(default_factory=dict)
    api_errors: list[ApiError] = field(default_factory=list)
    last_successful_fetch: Optional[datetime] = None


class ErrorTracker:
    """Error bookkeeping for one application session.

    Data-file errors are keyed by hour and track errors by track id, so a
    later success for the same key clears the earlier failure. API errors
    are kept as a bounded history.
    """

    def __init__(self) -> None:
        self._state = ErrorTrackingState()

    def record_data_file_error(
        self, hour: int, error: str, retry_count: Optional[int] = None
    ) -> None:
        self._state.data_file_errors[hour] = DataFileError(
            hour=hour, error=error, timestamp=_utcnow(), retry_count=retry_count
        )

    def clear_data_file_error(self, hour: int) -> None:
        self._state.data_file_errors.pop(hour, None)

    def record_track_error(self, track_id: str, issue: TrackIssue, description: str) -> None:
        self._state.track_errors[track_id] = TrackError(
            track_id=track_id, issue=issue, description=description, timestamp=_utcnow()
        )

    def clear_track_errors(self) -> None:
        """Drop every track error; ids are only meaningful within one run."""

        self._state.track_errors.clear()

    def clear_track_error(self, track_id: str) -> None:
        self._state.track_errors.pop(track_id, None)

    def record_api_error(
        self,
        type: ApiErrorType,
        message: str,
        endpoint: Optional[str] = None,
        retry_count: Optional[int] = None,
    ) -> None:
        logger.info("API error recorded (%s) for %s: %s", type, endpoint, message)
        self._state.api_errors.append(
            ApiError(
                type=type,
                message=message,
                timestamp=_utcnow(),
                endpoint=endpoint,
                retry_count=retry_count,
            )
        )
        if len(self._state.api_errors) > MAX_API_ERRORS:
            self._state.api_errors = self._state.api_errors[-MAX_API_ERRORS:]

    def record_successful_fetch(self) -> None:
        self._state.last_successful_fetch = _utcnow()

    def analyze_snapshot_collection(self, collection: SnapshotCollection) -> None:
        for result in collection.results:
            if result.success:
                self.clear_data_file_error(result.hour)
            else:
                self.record_data_file_error(
                    result.hour,
                    result.error or "Unknown error",
                    retry_count=result.retry_count or None,
                )

        if collection.success_count > 0:
            self.record_successful_fetch()

    def analyze_reconstruction(self, result: ReconstructionResult) -> None:
        for track in result.tracks:
            if len(track.points) < 2:
                self.record_track_error(
                    track.track_id,
                    "incomplete",
                    f"Track has only {len(track.points)} point(s), expected at least 2",
                )
            else:
                self.clear_track_error(track.track_id)

    def generate_report(self) -> ErrorReport:
        data_file_errors = list(self._state.data_file_errors.values())
        track_errors = list(self._state.track_errors.values())
        api_errors = list(self._state.api_errors)
        return ErrorReport(
            data_file_errors=data_file_errors,
            track_errors=track_errors,
            api_errors=api_errors,
            last_successful_fetch=self._state.last_successful_fetch,
            total_errors=len(data_file_errors) + len(track_errors) + len(api_errors),
            generated_at=_utcnow(),
        )

    def state(self) -> ErrorTrackingState:
        return ErrorTrackingState(
            data_file_errors=dict(self._state.data_file_errors),
            track_errors=dict(self._state.track_errors),
            api_errors=list(self._state.api_errors),
            last_successful_fetch=self._state.last_successful_fetch,
        )

    def clear_all(self) -> None:
        """Drop every recorded error but keep the last successful fetch time."""

        self._state = ErrorTrackingState(
            last_successful_fetch=self._state.last_successful_fetch
        )

    def has_errors(self) -> bool:
        return bool(
            self._state.data_file_errors
            or self._state.track_errors
            or self._state.api_errors
        )


__all__ = ["ErrorTracker", "ErrorTrackingState", "MAX_API_ERRORS"]
