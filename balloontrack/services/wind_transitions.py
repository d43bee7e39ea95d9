"""Detect when a balloon moves between wind layers."""

from __future__ import annotations

from typing import Optional

from balloontrack.models.track import Track
from balloontrack.models.wind import LayerTransition, WindSample, WindSeries
from balloontrack.services.wind_correlation import get_wind_at_time

DIRECTION_THRESHOLD_DEG = 30.0
SPEED_THRESHOLD_KMH = 10.0


def _direction_change(previous: WindSample, current: WindSample) -> float:
    change = abs(current.direction_deg - previous.direction_deg)
    return min(change, 360.0 - change)


def detect_layer_transitions(track: Track, series: WindSeries) -> list[LayerTransition]:
    """Flag consecutive points whose winds differ by more than the thresholds.

    A point with no usable wind sample breaks the chain: neither the pair
    before it nor the pair after it is compared.
    """

    transitions: list[LayerTransition] = []
    if len(track.points) < 2:
        return transitions

    previous_wind: Optional[WindSample] = None
    for point in track.points:
        current_wind = get_wind_at_time(series, point.timestamp)

        if previous_wind is not None and current_wind is not None:
            direction_change = _direction_change(previous_wind, current_wind)
            speed_change = abs(current_wind.speed_kmh - previous_wind.speed_kmh)
            direction_shift = direction_change > DIRECTION_THRESHOLD_DEG
            speed_shift = speed_change > SPEED_THRESHOLD_KMH

            if direction_shift or speed_shift:
                if direction_shift and speed_shift:
                    transition_type = "both"
                elif direction_shift:
                    transition_type = "direction"
                else:
                    transition_type = "speed"
                transitions.append(
                    LayerTransition(
                        point=point,
                        previous_wind=previous_wind,
                        current_wind=current_wind,
                        transition_type=transition_type,
                        direction_change=direction_change,
                        speed_change=speed_change,
                    )
                )

        previous_wind = current_wind

    return transitions


def count_layer_transitions(track: Track, series: WindSeries) -> int:
    return len(detect_layer_transitions(track, series))


__all__ = [
    "DIRECTION_THRESHOLD_DEG",
    "SPEED_THRESHOLD_KMH",
    "count_layer_transitions",
    "detect_layer_transitions",
]
