"""Time-boxed in-memory cache of wind series, owned by a tracking session."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from typing import Callable, Optional

from balloontrack.models.wind import WindSeries

logger = logging.getLogger("balloontrack.wind_cache")

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _CacheEntry:
    data: WindSeries
    expires_at: datetime


def cache_key(latitude: float, longitude: float, pressure_level_hpa: int) -> str:
    """Key rounded to 0.01 degree so nearby queries share a series."""

    return f"{round(latitude, 2)}_{round(longitude, 2)}_{pressure_level_hpa}"


class WindCache:
    """Wind series keyed by rounded location and pressure level."""

    def __init__(self, ttl_seconds: float = 600.0, clock: Optional[Clock] = None) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or _utcnow
        self._entries: dict[str, _CacheEntry] = {}

    def get(
        self, latitude: float, longitude: float, pressure_level_hpa: int
    ) -> Optional[WindSeries]:
        key = cache_key(latitude, longitude, pressure_level_hpa)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            logger.debug("Wind cache entry %s expired", key)
            del self._entries[key]
            return None
        return entry.data

    def set(
        self,
        latitude: float,
        longitude: float,
        pressure_level_hpa: int,
        data: WindSeries,
    ) -> None:
        key = cache_key(latitude, longitude, pressure_level_hpa)
        self._entries[key] = _CacheEntry(data=data, expires_at=self._clock() + self.ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["WindCache", "cache_key"]
