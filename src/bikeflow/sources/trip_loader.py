"""Utilities for reading raw trip CSV exports into a TripStore."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from bikeflow.traffic.domain_types import Trip
from bikeflow.traffic.errors import InvalidTimestamp
from bikeflow.traffic.trip_store import TripStore

logger = logging.getLogger(__name__)

TRIP_COLUMNS: Sequence[str] = [
    "start_station_id",
    "end_station_id",
    "started_at",
    "ended_at",
]


def load_trips(
    path: str | Path,
    *,
    strict: bool = False,
    timestamp_format: Optional[str] = None,
) -> TripStore:
    """Return a TripStore built from a trips CSV.

    Parameters
    ----------
    path:
        CSV (or CSV.GZ) with ``start_station_id``, ``end_station_id``,
        ``started_at`` and ``ended_at`` columns, e.g. a monthly bike-share
        trip export with timestamps like ``2024-03-20 08:18:13``.
    strict:
        Raise :class:`InvalidTimestamp` on the first unparseable timestamp
        instead of skipping the row.
    timestamp_format:
        Optional ``strftime`` format forwarded to :func:`pandas.to_datetime`;
        defaults to ``"ISO8601"`` so rows with and without fractional seconds
        both parse.

    Returns
    -------
    TripStore
        Trips in file order, with minute-of-day derived from the wall-clock
        hour and minute of each timestamp.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Trips CSV not found at {csv_path}")
    _check_columns(csv_path)
    df = pd.read_csv(
        csv_path,
        usecols=list(TRIP_COLUMNS),
        dtype={"start_station_id": str, "end_station_id": str},
    )
    if df.empty:
        logger.warning("Trips CSV at %s is empty", csv_path)
        return TripStore()

    date_format = timestamp_format or "ISO8601"
    started = pd.to_datetime(df["started_at"], errors="coerce", format=date_format)
    ended = pd.to_datetime(df["ended_at"], errors="coerce", format=date_format)
    bad_times = started.isna() | ended.isna()
    if strict and bad_times.any():
        row = int(bad_times.idxmax())
        raise InvalidTimestamp(
            f"Unparseable timestamp in {csv_path} at data row {row}: "
            f"started_at={df.at[row, 'started_at']!r}, ended_at={df.at[row, 'ended_at']!r}"
        )
    missing_ids = (
        df["start_station_id"].isna()
        | df["end_station_id"].isna()
        | (df["start_station_id"].str.strip() == "")
        | (df["end_station_id"].str.strip() == "")
    )
    keep = ~(bad_times | missing_ids)
    if bad_times.any():
        logger.warning("Skipped %d trips with unparseable timestamps in %s", int(bad_times.sum()), csv_path)
    if (missing_ids & ~bad_times).any():
        logger.warning(
            "Skipped %d trips with missing station ids in %s",
            int((missing_ids & ~bad_times).sum()),
            csv_path,
        )

    frame = pd.DataFrame(
        {
            "start_station_id": df.loc[keep, "start_station_id"].str.strip(),
            "end_station_id": df.loc[keep, "end_station_id"].str.strip(),
            "start_minute": started[keep].dt.hour * 60 + started[keep].dt.minute,
            "end_minute": ended[keep].dt.hour * 60 + ended[keep].dt.minute,
        }
    )

    trips: List[Trip] = [
        Trip(
            start_station_id=str(row.start_station_id),
            end_station_id=str(row.end_station_id),
            start_minute=int(row.start_minute),
            end_minute=int(row.end_minute),
        )
        for row in frame.itertuples(index=False)
    ]
    logger.info("Loaded %d trips from %s", len(trips), csv_path)
    return TripStore(trips)


def _check_columns(csv_path: Path) -> None:
    header_df = pd.read_csv(csv_path, nrows=0)
    available = set(header_df.columns)
    missing = [column for column in TRIP_COLUMNS if column not in available]
    if missing:
        raise ValueError(f"{csv_path} is missing required columns: {', '.join(missing)}")


__all__ = ["TRIP_COLUMNS", "load_trips"]
