from datetime import datetime, timedelta, timezone

from balloontrack.models.wind import WindSeries
from balloontrack.services.wind_cache import WindCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def _series() -> WindSeries:
    return WindSeries(latitude=40.0, longitude=-74.0, pressure_level_hpa=250, altitude_km=10.4)


def test_cache_key_rounds_coordinates():
    assert cache_key(40.001, -74.004, 250) == cache_key(40.004, -73.996, 250)
    assert cache_key(40.0, -74.0, 250) != cache_key(40.0, -74.0, 200)


def test_get_returns_cached_series_before_expiry():
    clock = FakeClock()
    cache = WindCache(ttl_seconds=600, clock=clock)
    series = _series()

    cache.set(40.0, -74.0, 250, series)
    clock.advance(599)

    assert cache.get(40.0, -74.0, 250) is series
    assert len(cache) == 1


def test_expired_entries_are_evicted_on_read():
    clock = FakeClock()
    cache = WindCache(ttl_seconds=600, clock=clock)
    cache.set(40.0, -74.0, 250, _series())

    clock.advance(600)

    assert cache.get(40.0, -74.0, 250) is None
    assert len(cache) == 0


def test_missing_key_and_clear():
    cache = WindCache(clock=FakeClock())
    cache.set(40.0, -74.0, 250, _series())

    assert cache.get(41.0, -74.0, 250) is None

    cache.clear()

    assert len(cache) == 0
    assert cache.get(40.0, -74.0, 250) is None
