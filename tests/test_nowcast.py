from datetime import datetime, timedelta, timezone

import pytest

from balloontrack.models.track import Track, TrackPoint
from balloontrack.models.wind import WindSample, WindVector
from balloontrack.services.nowcast import calculate_nowcast, prediction_uncertainty
from balloontrack.services.reconstruction import summarize_track

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _point(lat: float, lon: float, hours_ago: int = 0, alt: float = 15.0) -> TrackPoint:
    return TrackPoint(
        latitude=lat,
        longitude=lon,
        altitude_km=alt,
        timestamp=NOW - timedelta(hours=hours_ago),
        hour=hours_ago,
    )


def _empty_track() -> Track:
    return Track(
        track_id="track-empty",
        points=[],
        start_time=NOW,
        end_time=NOW,
        duration_hours=0,
        total_distance_km=0,
        average_speed_kmh=0,
        min_altitude_km=0,
        max_altitude_km=0,
        altitude_range_km=0,
    )


def test_empty_track_has_no_nowcast():
    assert calculate_nowcast(_empty_track()) is None
    assert calculate_nowcast(_empty_track(), WindVector(speed_kmh=50, direction_deg=90)) is None


def test_single_point_without_wind_has_no_nowcast():
    assert calculate_nowcast(summarize_track("track-1", [_point(40.0, -74.0)])) is None


def test_wind_driven_nowcast():
    track = summarize_track("track-1", [_point(40.0, -74.0)])
    wind = WindVector(speed_kmh=50.0, direction_deg=270.0)

    prediction = calculate_nowcast(track, wind)

    assert prediction is not None
    assert prediction.predicted_distance_km == pytest.approx(50.0)
    assert prediction.uncertainty_radius_km == pytest.approx(10.0)
    assert prediction.confidence == pytest.approx(0.8)
    assert prediction.predicted_position.latitude == pytest.approx(40.0, abs=1e-6)
    assert prediction.predicted_position.longitude < -74.0
    assert prediction.predicted_position.altitude_km == 15.0
    assert prediction.current_position == track.points[-1]
    assert prediction.wind_vector == wind


def test_wind_toward_north_moves_latitude():
    track = summarize_track("track-1", [_point(0.0, 10.0)])

    prediction = calculate_nowcast(track, WindVector(speed_kmh=111.0, direction_deg=0.0))

    assert prediction.predicted_position.latitude == pytest.approx(1.0)
    assert prediction.predicted_position.longitude == pytest.approx(10.0)


@pytest.mark.parametrize(
    ("speed", "confidence"),
    [(3.0, 0.6), (5.0, 0.8), (100.0, 0.8), (120.0, 0.7)],
)
def test_wind_confidence_bands(speed, confidence):
    track = summarize_track("track-1", [_point(10.0, 10.0)])

    prediction = calculate_nowcast(track, WindVector(speed_kmh=speed, direction_deg=45.0))

    assert prediction.confidence == pytest.approx(confidence)


def test_longitude_wraps_across_antimeridian():
    track = summarize_track("track-1", [_point(0.0, 179.9)])

    prediction = calculate_nowcast(track, WindVector(speed_kmh=50.0, direction_deg=90.0))

    assert -180.0 <= prediction.predicted_position.longitude < -179.0


def test_latitude_is_clamped_near_pole():
    track = summarize_track("track-1", [_point(89.9, 0.0)])

    prediction = calculate_nowcast(track, WindVector(speed_kmh=200.0, direction_deg=0.0))

    assert prediction.predicted_position.latitude == 90.0


def test_extrapolation_without_wind():
    track = summarize_track("track-1", [_point(0.0, 0.0, hours_ago=1), _point(0.0, 1.0)])

    prediction = calculate_nowcast(track)

    assert prediction is not None
    assert prediction.wind_vector is None
    assert prediction.confidence == pytest.approx(0.5)
    assert prediction.predicted_distance_km == pytest.approx(111.19, abs=0.01)
    assert prediction.uncertainty_radius_km == pytest.approx(
        prediction.predicted_distance_km * 0.3
    )
    assert prediction.predicted_position.latitude == pytest.approx(0.0, abs=1e-6)
    assert prediction.predicted_position.longitude == pytest.approx(2.0, abs=0.01)


def test_extrapolation_with_coincident_timestamps_returns_none():
    track = summarize_track("track-1", [_point(0.0, 0.0), _point(0.0, 1.0)])

    assert calculate_nowcast(track) is None


def test_wind_sample_details_are_serialized():
    track = summarize_track("track-1", [_point(40.0, -74.0)])
    sample = WindSample(
        latitude=40.0,
        longitude=-74.0,
        pressure_level_hpa=250,
        altitude_km=10.4,
        speed_kmh=40.0,
        direction_deg=90.0,
        timestamp=NOW,
    )

    dumped = calculate_nowcast(track, sample).model_dump()

    assert dumped["wind_vector"]["pressure_level_hpa"] == 250
    assert dumped["wind_vector"]["speed_kmh"] == 40.0


def test_prediction_uncertainty_without_history():
    wind = WindVector(speed_kmh=40.0, direction_deg=0.0)

    assert prediction_uncertainty(wind) == pytest.approx(8.0)
    assert prediction_uncertainty(wind, [wind]) == pytest.approx(8.0)


def test_prediction_uncertainty_from_historical_spread():
    wind = WindVector(speed_kmh=40.0, direction_deg=0.0)
    history = [
        WindVector(speed_kmh=10.0, direction_deg=0.0),
        WindVector(speed_kmh=20.0, direction_deg=0.0),
    ]

    assert prediction_uncertainty(wind, history) == pytest.approx(2.5)
