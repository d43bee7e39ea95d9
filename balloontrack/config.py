"""Configuration settings for the balloontrack service."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    balloontrack_env: str = os.getenv("BALLOONTRACK_ENV", "local")
    log_level: str = os.getenv("BALLOONTRACK_LOG_LEVEL", "INFO")

    # Hourly position snapshots
    snapshot_base_url: str = os.getenv(
        "SNAPSHOT_BASE_URL", "https://a.windbornesystems.com/treasure"
    )
    snapshot_timeout: float = float(os.getenv("SNAPSHOT_TIMEOUT", "10.0"))
    snapshot_max_retries: int = int(os.getenv("SNAPSHOT_MAX_RETRIES", "3"))

    # Pressure-level wind series
    wind_base_url: str = os.getenv(
        "WIND_BASE_URL", "https://api.open-meteo.com/v1/forecast"
    )
    wind_timeout: float = float(os.getenv("WIND_TIMEOUT", "10.0"))
    wind_past_days: int = int(os.getenv("WIND_PAST_DAYS", "1"))
    wind_cache_ttl_seconds: float = float(os.getenv("WIND_CACHE_TTL_SECONDS", "600"))

    # Reconstruction
    bridge_missing_hours: bool = _get_bool("BALLOONTRACK_BRIDGE_MISSING_HOURS")
    refresh_on_startup: bool = _get_bool("BALLOONTRACK_REFRESH_ON_STARTUP")


settings = Settings()

__all__ = ["settings", "Settings"]
