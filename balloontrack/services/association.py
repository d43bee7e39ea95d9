"""Frame-to-frame association of anonymous position reports.

Every pair of positions from an older and a newer frame is gated by
one-hour plausibility limits, scored, and then resolved greedily:
candidates are accepted cheapest first as long as their newer-frame
position is still free. This is not a globally optimal assignment; an
exact solver could replace ``_assign`` without touching the gate or cost.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from balloontrack.domain.geometry import altitude_delta_km, distance_km
from balloontrack.models.position import Position
from balloontrack.models.track import Match


@dataclass(frozen=True)
class AssociationConfig:
    """Gate and cost parameters for one hour of balloon drift."""

    max_distance_km: float = 600.0
    max_altitude_delta_km: float = 5.0
    altitude_weight: float = 10.0
    confidence_scale_km: float = 1200.0


@dataclass
class _Candidate:
    from_index: int
    to_index: int
    cost: float
    distance_km: float
    altitude_delta_km: float


DEFAULT_ASSOCIATION = AssociationConfig()


def match_cost(
    distance: float, altitude_delta: float, config: AssociationConfig = DEFAULT_ASSOCIATION
) -> float:
    """Horizontal drift plus a heavier penalty for altitude change."""

    return distance + config.altitude_weight * altitude_delta


def match_confidence(cost: float, config: AssociationConfig = DEFAULT_ASSOCIATION) -> float:
    return 1.0 - min(cost / config.confidence_scale_km, 1.0)


def _candidates(
    from_positions: Sequence[Position],
    to_positions: Sequence[Position],
    config: AssociationConfig,
) -> list[_Candidate]:
    candidates: list[_Candidate] = []
    for i, from_pos in enumerate(from_positions):
        for j, to_pos in enumerate(to_positions):
            distance = distance_km(from_pos, to_pos)
            altitude_delta = altitude_delta_km(from_pos, to_pos)
            if distance > config.max_distance_km or altitude_delta > config.max_altitude_delta_km:
                continue
            candidates.append(
                _Candidate(
                    from_index=i,
                    to_index=j,
                    cost=match_cost(distance, altitude_delta, config),
                    distance_km=distance,
                    altitude_delta_km=altitude_delta,
                )
            )
    return candidates


def _assign(candidates: list[_Candidate], config: AssociationConfig) -> list[Match]:
    matches: list[Match] = []
    claimed: set[int] = set()
    for candidate in sorted(candidates, key=lambda c: c.cost):
        if candidate.to_index in claimed:
            continue
        claimed.add(candidate.to_index)
        matches.append(
            Match(
                from_index=candidate.from_index,
                to_index=candidate.to_index,
                distance_km=candidate.distance_km,
                altitude_delta_km=candidate.altitude_delta_km,
                confidence=match_confidence(candidate.cost, config),
            )
        )
    return matches


def find_matches(
    from_positions: Sequence[Position],
    to_positions: Sequence[Position],
    config: AssociationConfig | None = None,
) -> list[Match]:
    """Match positions of an older frame to positions of the next frame.

    Returned matches are ordered by ascending cost. Only newer-frame
    indices are guaranteed unique; unmatched indices are not reported.
    """

    config = config or DEFAULT_ASSOCIATION
    if not from_positions or not to_positions:
        return []
    return _assign(_candidates(from_positions, to_positions, config), config)


__all__ = [
    "AssociationConfig",
    "DEFAULT_ASSOCIATION",
    "find_matches",
    "match_confidence",
    "match_cost",
]
