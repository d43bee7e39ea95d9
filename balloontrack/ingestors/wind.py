"""Pressure-level wind ingestion using Open-Meteo."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Optional

import httpx

from balloontrack.config import settings
from balloontrack.domain.pressure_levels import (
    altitude_to_pressure_level,
    pressure_level_to_altitude,
)
from balloontrack.models.wind import WindFetchResult, WindSample, WindSeries
from balloontrack.services.wind_cache import WindCache

logger = logging.getLogger("balloontrack.ingestors.wind")


def _parse_timestamp(ts: str) -> datetime:
    if ts.endswith("Z"):
        ts = ts.replace("Z", "+00:00")
    parsed = datetime.fromisoformat(ts)
    if parsed.tzinfo is None:
        # Requests ask for timezone=UTC, so naive times are UTC.
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _value_at(values: list | None, index: int) -> float:
    if not values or index >= len(values) or values[index] is None:
        return 0.0
    return float(values[index])


def parse_wind_response(payload: dict[str, Any], pressure_level_hpa: int) -> WindSeries:
    """Convert an Open-Meteo hourly response into a WindSeries."""

    altitude_km = pressure_level_to_altitude(pressure_level_hpa)
    hourly = payload.get("hourly") or {}
    times = hourly.get("time") or []
    speeds = hourly.get(f"wind_speed_{pressure_level_hpa}hPa")
    directions = hourly.get(f"wind_direction_{pressure_level_hpa}hPa")
    latitude = float(payload.get("latitude", 0.0))
    longitude = float(payload.get("longitude", 0.0))

    samples = [
        WindSample(
            latitude=latitude,
            longitude=longitude,
            pressure_level_hpa=pressure_level_hpa,
            altitude_km=altitude_km,
            speed_kmh=_value_at(speeds, index),
            direction_deg=_value_at(directions, index),
            timestamp=_parse_timestamp(time_str),
        )
        for index, time_str in enumerate(times)
    ]

    return WindSeries(
        latitude=latitude,
        longitude=longitude,
        pressure_level_hpa=pressure_level_hpa,
        altitude_km=altitude_km,
        samples=samples,
        start_time=samples[0].timestamp if samples else None,
        end_time=samples[-1].timestamp if samples else None,
    )


def _failure(error: str) -> WindFetchResult:
    return WindFetchResult(success=False, data=None, error=error)


class WindIngestor:
    """Fetch hourly wind series at a pressure level from Open-Meteo."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        past_days: int | None = None,
        cache: WindCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.wind_base_url
        self.timeout = timeout or settings.wind_timeout
        self.past_days = past_days or settings.wind_past_days
        self.cache = cache
        self.transport = transport

    async def fetch_wind(
        self,
        lat: float,
        lon: float,
        pressure_level_hpa: int,
        past_days: Optional[int] = None,
    ) -> WindFetchResult:
        if self.cache is not None:
            cached = self.cache.get(lat, lon, pressure_level_hpa)
            if cached is not None:
                logger.debug("Wind cache hit for %s,%s @ %shPa", lat, lon, pressure_level_hpa)
                return WindFetchResult(success=True, data=cached)

        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": f"wind_speed_{pressure_level_hpa}hPa,wind_direction_{pressure_level_hpa}hPa",
            "past_days": past_days or self.past_days,
            "timezone": "UTC",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Wind request timed out: %s", exc)
            return _failure("Request timed out")
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Wind service returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            return _failure(
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}"
            )
        except httpx.RequestError as exc:
            logger.warning("Wind request failed: %s", exc)
            return _failure(f"Network error: {exc}")

        try:
            payload = response.json()
            series = parse_wind_response(payload, pressure_level_hpa)
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Failed to parse wind response: %s", exc)
            return _failure(f"Parse error: {exc}")

        if self.cache is not None:
            self.cache.set(lat, lon, pressure_level_hpa, series)

        logger.debug(
            "Ingested %s wind samples at %shPa", len(series.samples), pressure_level_hpa
        )
        return WindFetchResult(success=True, data=series)

    async def fetch_wind_for_altitude(
        self,
        lat: float,
        lon: float,
        altitude_km: float,
        past_days: Optional[int] = None,
    ) -> WindFetchResult:
        pressure_level_hpa = altitude_to_pressure_level(altitude_km)
        return await self.fetch_wind(lat, lon, pressure_level_hpa, past_days)


__all__ = ["WindIngestor", "parse_wind_response"]
