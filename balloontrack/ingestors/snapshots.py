"""Fetch the 24 hourly balloon position snapshots."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
from typing import Any, Awaitable, Callable

import httpx

from balloontrack.config import settings
from balloontrack.ingestors.retry import is_retryable_error, retry_with_backoff
from balloontrack.models.position import FrameFetchResult, SnapshotCollection

logger = logging.getLogger("balloontrack.ingestors.snapshots")

LOOKBACK_HOURS = 24
INVALID_FORMAT_ERROR = "Invalid data format: expected an array of [lat, lon, alt] entries"


def _is_snapshot_payload(payload: Any) -> bool:
    # Individual rows are validated by the frame parser.
    return isinstance(payload, list)


def _failure(hour: int, error: str, retry_count: int = 0) -> FrameFetchResult:
    return FrameFetchResult(
        hour=hour,
        data=None,
        success=False,
        error=error,
        retry_count=retry_count,
        timestamp=datetime.now(timezone.utc),
    )


class SnapshotIngestor:
    """Fetch hourly snapshots of anonymous balloon positions."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.base_url = (base_url or settings.snapshot_base_url).rstrip("/")
        self.timeout = timeout or settings.snapshot_timeout
        self.max_retries = settings.snapshot_max_retries if max_retries is None else max_retries
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {self.max_retries}")
        self.transport = transport
        self._sleep = sleep

    def url_for_hour(self, hour: int) -> str:
        return f"{self.base_url}/{hour:02d}.json"

    async def fetch_hour(self, hour: int) -> FrameFetchResult:
        """Fetch one hour (0 = latest). Failures are returned, never raised."""

        if hour < 0 or hour >= LOOKBACK_HOURS:
            return _failure(hour, f"Invalid hour: {hour}. Must be between 0 and 23.")

        url = self.url_for_hour(hour)
        attempts = 0

        async def _request(attempt: int) -> httpx.Response:
            nonlocal attempts
            attempts = attempt
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
            response.raise_for_status()
            return response

        try:
            response = await retry_with_backoff(
                _request,
                max_retries=self.max_retries,
                retryable=is_retryable_error,
                sleep=self._sleep,
            )
        except httpx.TimeoutException as exc:
            logger.warning("Snapshot request for hour %02d timed out: %s", hour, exc)
            return _failure(hour, "Request timed out", attempts)
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Snapshot provider returned HTTP %s for hour %02d",
                exc.response.status_code,
                hour,
            )
            return _failure(
                hour,
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
                attempts,
            )
        except httpx.RequestError as exc:
            logger.warning("Snapshot request for hour %02d failed: %s", hour, exc)
            return _failure(hour, f"Network error: {exc}", attempts)

        if response.status_code != 200:
            return _failure(
                hour, f"HTTP {response.status_code}: {response.reason_phrase}", attempts
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse snapshot JSON for hour %02d: %s", hour, exc)
            return _failure(hour, INVALID_FORMAT_ERROR, attempts)

        if not _is_snapshot_payload(payload):
            return _failure(hour, INVALID_FORMAT_ERROR, attempts)

        return FrameFetchResult(
            hour=hour,
            data=payload,
            success=True,
            retry_count=attempts,
            timestamp=datetime.now(timezone.utc),
        )

    async def fetch_all(self) -> SnapshotCollection:
        """Fetch every hour of the lookback window concurrently."""

        results = await asyncio.gather(
            *(self.fetch_hour(hour) for hour in range(LOOKBACK_HOURS))
        )
        collection = SnapshotCollection(
            results=list(results), fetched_at=datetime.now(timezone.utc)
        )
        logger.info(
            "Fetched snapshots: %s succeeded, %s failed",
            collection.success_count,
            collection.failure_count,
        )
        return collection


__all__ = ["LOOKBACK_HOURS", "SnapshotIngestor"]
