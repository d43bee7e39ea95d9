import pytest

from balloontrack.services.frame_parser import parse_position, parse_snapshot


def test_parse_position_accepts_valid_triple():
    position = parse_position([40.5, -74.25, 15.2])

    assert position is not None
    assert position.latitude == 40.5
    assert position.longitude == -74.25
    assert position.altitude_km == 15.2


def test_parse_position_accepts_tuples_and_integer_values():
    position = parse_position((10, 20, 0))

    assert position is not None
    assert position.altitude_km == 0.0


def test_parse_position_accepts_altitude_limit():
    assert parse_position([0.0, 0.0, 50.0]) is not None


@pytest.mark.parametrize(
    "entry",
    [
        [40.0, -74.0],
        [40.0, -74.0, 10.0, 1.0],
        [91.0, 0.0, 10.0],
        [0.0, -180.5, 10.0],
        [0.0, 0.0, -0.1],
        [0.0, 0.0, 50.1],
        ["40", -74.0, 10.0],
        [None, -74.0, 10.0],
        [True, 0.0, 10.0],
        [float("nan"), 0.0, 10.0],
        [0.0, float("inf"), 10.0],
        None,
        "40,-74,10",
        {"lat": 40.0},
    ],
)
def test_parse_position_rejects_malformed_entries(entry):
    assert parse_position(entry) is None


def test_parse_snapshot_drops_invalid_entries_silently():
    snapshot = [
        [40.0, -74.0, 15.0],
        [200.0, -74.0, 15.0],
        [41.0, -75.0],
        None,
        [42.0, -76.0, 16.0],
    ]

    positions = parse_snapshot(snapshot)

    assert [(p.latitude, p.longitude) for p in positions] == [(40.0, -74.0), (42.0, -76.0)]


def test_parse_snapshot_handles_missing_or_non_list_snapshot():
    assert parse_snapshot(None) == []
    assert parse_snapshot("not a snapshot") == []
    assert parse_snapshot({"data": []}) == []
    assert parse_snapshot([]) == []
