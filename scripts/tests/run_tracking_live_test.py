#!/usr/bin/env python
"""
Run this to fetch the live snapshots, rebuild tracks and nowcast the longest one.

Usage (from repo root):
    python scripts/tests/run_tracking_live_test.py
"""

import asyncio
from datetime import datetime, timezone

from balloontrack.services.tracking_session import TrackingSession


async def main() -> None:
    now = datetime.now(timezone.utc)
    session = TrackingSession()

    print(f"=== Live balloon tracking test (UTC now: {now.isoformat()}) ===\n")

    # --- Snapshots + reconstruction ---
    print("Fetching 24 hourly snapshots...")
    result = await session.refresh()
    stats = result.match_statistics
    print(
        f"\nReconstructed {len(result.tracks)} tracks from "
        f"{stats.total_matches} matches (avg confidence {stats.average_confidence:.3f})"
    )
    if result.unmatched_points:
        print(f"Unusable hours: {sorted(u.hour for u in result.unmatched_points)}")

    if not result.tracks:
        print("\nNo tracks reconstructed.")
        return

    longest = max(result.tracks, key=lambda t: len(t.points))
    print(
        f"\nLongest track {longest.track_id}: {len(longest.points)} points, "
        f"{longest.total_distance_km:.1f} km over {longest.duration_hours:.0f} h, "
        f"altitude {longest.min_altitude_km:.1f}-{longest.max_altitude_km:.1f} km"
    )

    # --- Wind + nowcast ---
    print("\nRequesting pressure-level wind from Open-Meteo...")
    prediction = await session.nowcast(longest.track_id)
    if prediction is None:
        print("\nNo nowcast available.")
    else:
        print("\nNowcastPrediction:")
        print(prediction.model_dump())

    transitions = await session.wind_transitions(longest.track_id)
    print(f"\nWind-layer transitions along {longest.track_id}: {len(transitions)}")

    report = session.error_report()
    print(f"\nErrors recorded: {report.total_errors}")


if __name__ == "__main__":
    asyncio.run(main())
