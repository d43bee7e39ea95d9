"""Tracking, association and nowcast services."""

from .association import AssociationConfig, find_matches
from .error_tracking import ErrorTracker
from .frame_parser import parse_position, parse_snapshot
from .nowcast import calculate_nowcast, prediction_uncertainty
from .reconstruction import ReconstructionConfig, TrackAssembler, reconstruct_tracks
from .wind_cache import WindCache
from .wind_correlation import correlate_wind_with_track, get_wind_at_time, heading_wind_angle
from .wind_transitions import count_layer_transitions, detect_layer_transitions

__all__ = [
    "AssociationConfig",
    "ErrorTracker",
    "ReconstructionConfig",
    "TrackAssembler",
    "WindCache",
    "calculate_nowcast",
    "correlate_wind_with_track",
    "count_layer_transitions",
    "detect_layer_transitions",
    "find_matches",
    "get_wind_at_time",
    "heading_wind_angle",
    "parse_position",
    "parse_snapshot",
    "prediction_uncertainty",
    "reconstruct_tracks",
]
