"""Data ingestors for balloon snapshots and wind series."""

from .retry import is_retryable_error, retry_with_backoff
from .snapshots import SnapshotIngestor
from .wind import WindIngestor, parse_wind_response

__all__ = [
    "SnapshotIngestor",
    "WindIngestor",
    "is_retryable_error",
    "parse_wind_response",
    "retry_with_backoff",
]
