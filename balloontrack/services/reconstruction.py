"""Reconstruct balloon tracks from 24 hourly snapshots of anonymous positions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

from balloontrack.domain.geometry import distance_km
from balloontrack.models.position import Position, SnapshotCollection
from balloontrack.models.track import (
    Match,
    MatchStatistics,
    ReconstructionResult,
    Track,
    TrackPoint,
    UnmatchedHour,
)
from balloontrack.services.association import AssociationConfig, find_matches
from balloontrack.services.frame_parser import parse_snapshot

logger = logging.getLogger("balloontrack.reconstruction")


@dataclass(frozen=True)
class ReconstructionConfig:
    """Tunable behavior of a reconstruction run."""

    association: AssociationConfig = field(default_factory=AssociationConfig)
    # When False, frames are only associated if their hours are adjacent, so a
    # missing hour ends every track alive at that point.
    bridge_missing_hours: bool = False


def summarize_track(track_id: str, points: list[TrackPoint]) -> Track:
    """Build a Track with its derived metadata from a non-empty point list."""

    ordered = sorted(points, key=lambda p: p.timestamp)
    start_time = ordered[0].timestamp
    end_time = ordered[-1].timestamp
    duration_hours = (end_time - start_time).total_seconds() / 3600.0

    total_distance_km = sum(
        distance_km(previous, current) for previous, current in zip(ordered, ordered[1:])
    )
    average_speed_kmh = total_distance_km / duration_hours if duration_hours > 0 else 0.0

    altitudes = [p.altitude_km for p in ordered]
    min_altitude_km = min(altitudes)
    max_altitude_km = max(altitudes)

    return Track(
        track_id=track_id,
        points=ordered,
        start_time=start_time,
        end_time=end_time,
        duration_hours=duration_hours,
        total_distance_km=total_distance_km,
        average_speed_kmh=average_speed_kmh,
        min_altitude_km=min_altitude_km,
        max_altitude_km=max_altitude_km,
        altitude_range_km=max_altitude_km - min_altitude_km,
    )


class TrackAssembler:
    """Grow tracks frame by frame, oldest hour first.

    For the most recently added frame the assembler keeps the id of the
    track that owns each position, so matches are resolved to tracks by
    index rather than by comparing coordinates.
    """

    def __init__(self, *, now: datetime, config: Optional[ReconstructionConfig] = None) -> None:
        self.now = now
        self.config = config or ReconstructionConfig()
        self.matches: list[Match] = []
        self._points: dict[str, list[TrackPoint]] = {}
        self._next_id = 1
        self._previous_hour: Optional[int] = None
        self._previous_positions: list[Position] = []
        self._previous_owners: list[str] = []

    def add_frame(self, hour: int, positions: list[Position]) -> None:
        if self._previous_hour is not None and hour >= self._previous_hour:
            raise ValueError(
                f"Frames must be added oldest first: hour {hour} after {self._previous_hour}"
            )

        timestamp = self.now - timedelta(hours=hour)
        points = [
            TrackPoint(
                latitude=p.latitude,
                longitude=p.longitude,
                altitude_km=p.altitude_km,
                timestamp=timestamp,
                hour=hour,
            )
            for p in positions
        ]
        owners: list[Optional[str]] = [None] * len(points)

        if self._should_associate(hour):
            frame_matches = find_matches(
                self._previous_positions, positions, self.config.association
            )
            self.matches.extend(frame_matches)
            extended: set[str] = set()
            for match in frame_matches:
                track_id = self._previous_owners[match.from_index]
                # Only newer indices are unique; a second claim on the same
                # older position starts its own track below.
                if track_id in extended:
                    continue
                self._points[track_id].append(points[match.to_index])
                owners[match.to_index] = track_id
                extended.add(track_id)

        resolved: list[str] = []
        for index, owner in enumerate(owners):
            resolved.append(owner if owner is not None else self._start_track(points[index]))

        self._previous_hour = hour
        self._previous_positions = list(positions)
        self._previous_owners = resolved

    def tracks(self) -> list[Track]:
        return [
            summarize_track(track_id, points)
            for track_id, points in self._points.items()
            if points
        ]

    def _should_associate(self, hour: int) -> bool:
        if self._previous_hour is None or not self._previous_positions:
            return False
        if self.config.bridge_missing_hours:
            return True
        return self._previous_hour - hour == 1

    def _start_track(self, point: TrackPoint) -> str:
        track_id = f"track-{self._next_id}"
        self._next_id += 1
        self._points[track_id] = [point]
        return track_id


def _match_statistics(matches: list[Match]) -> MatchStatistics:
    if not matches:
        return MatchStatistics()
    total = len(matches)
    return MatchStatistics(
        total_matches=total,
        average_distance_km=sum(m.distance_km for m in matches) / total,
        average_confidence=sum(m.confidence for m in matches) / total,
    )


def _collect_frames(
    collection: SnapshotCollection,
) -> tuple[dict[int, list[Position]], list[int]]:
    frames: dict[int, list[Position]] = {}
    unmatched: dict[int, None] = {}

    for result in collection.results:
        positions = parse_snapshot(result.data) if result.success else []
        if result.hour in frames or result.hour in unmatched:
            logger.debug("Duplicate snapshot for hour %s; keeping the latest", result.hour)
        if positions:
            frames[result.hour] = positions
            unmatched.pop(result.hour, None)
        else:
            frames.pop(result.hour, None)
            unmatched[result.hour] = None

    return frames, list(unmatched)


def reconstruct_tracks(
    collection: SnapshotCollection,
    *,
    now: Optional[datetime] = None,
    config: Optional[ReconstructionConfig] = None,
) -> ReconstructionResult:
    """Associate positions across hours and return tracks with statistics.

    Never raises on malformed snapshots: unusable hours are reported in
    ``unmatched_points`` and otherwise skipped.
    """

    now = now or datetime.now(timezone.utc)
    frames, unmatched_hours = _collect_frames(collection)

    assembler = TrackAssembler(now=now, config=config)
    for hour in sorted(frames, reverse=True):
        assembler.add_frame(hour, frames[hour])

    result = ReconstructionResult(
        tracks=assembler.tracks(),
        unmatched_points=[UnmatchedHour(hour=hour) for hour in unmatched_hours],
        match_statistics=_match_statistics(assembler.matches),
    )
    logger.debug(
        "Reconstructed %s tracks from %s frames (%s matches, %s unusable hours)",
        len(result.tracks),
        len(frames),
        result.match_statistics.total_matches,
        len(unmatched_hours),
    )
    return result


__all__ = [
    "ReconstructionConfig",
    "TrackAssembler",
    "reconstruct_tracks",
    "summarize_track",
]
