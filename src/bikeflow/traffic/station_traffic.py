"""Entry point composing window selection and aggregation."""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd

from .aggregator import aggregate
from .domain_types import Station, TrafficSummary
from .minute_index import MinuteIndex
from .window_query import DEFAULT_RADIUS_MINUTES, select

SUMMARY_COLUMNS = ["station_id", "departures", "arrivals", "total"]
STATION_COLUMNS = ["name", "lat", "lon"]


def compute_traffic(
    stations: Sequence[Station],
    index: MinuteIndex,
    center: int | str,
    *,
    radius: int = DEFAULT_RADIUS_MINUTES,
) -> List[TrafficSummary]:
    """Return per-station traffic for the window centred on ``center``.

    Parameters
    ----------
    stations:
        Stations to report on; output order mirrors this sequence.
    index:
        Pre-built :class:`MinuteIndex`.
    center:
        Minute-of-day in [0, 1439], or ``-1`` / ``"all"`` for every trip.
    radius:
        Half-width of the window in minutes.
    """
    departure_trips = select(index.departures, center, radius=radius)
    arrival_trips = select(index.arrivals, center, radius=radius)
    return aggregate(stations, departure_trips, arrival_trips)


def summaries_to_dataframe(
    summaries: Sequence[TrafficSummary],
    stations: Optional[Sequence[Station]] = None,
) -> pd.DataFrame:
    """Convert summaries into a tidy DataFrame, optionally carrying station fields."""
    columns = list(SUMMARY_COLUMNS)
    if stations is not None:
        if len(stations) != len(summaries):
            raise ValueError("Stations and summaries must have the same length")
        columns += STATION_COLUMNS
    if not summaries:
        return pd.DataFrame(columns=columns)
    rows = []
    for position, summary in enumerate(summaries):
        row = summary.to_record()
        if stations is not None:
            station = stations[position]
            row.update({"name": station.name, "lat": station.lat, "lon": station.lon})
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


__all__ = ["SUMMARY_COLUMNS", "compute_traffic", "summaries_to_dataframe"]
