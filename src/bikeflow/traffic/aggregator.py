"""Reduce windowed trips into per-station departure/arrival counts."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Sequence

from .domain_types import Station, Trip, TrafficSummary
from .errors import MissingStationId


def _check_station_ids(stations: Sequence[Station]) -> None:
    for position, station in enumerate(stations):
        station_id = station.id
        if station_id is None or (isinstance(station_id, str) and not station_id.strip()):
            raise MissingStationId(f"Station at position {position} has no identifier")


def count_by(trips: Iterable[Trip], attribute: str) -> Dict[str, int]:
    """Grouped count of trips keyed by one of their station id attributes."""
    return dict(Counter(getattr(trip, attribute) for trip in trips))


def aggregate(
    stations: Sequence[Station],
    departure_trips: Iterable[Trip],
    arrival_trips: Iterable[Trip],
) -> List[TrafficSummary]:
    """One summary per station, in station order; unmatched trips are dropped."""
    _check_station_ids(stations)
    departures = count_by(departure_trips, "start_station_id")
    arrivals = count_by(arrival_trips, "end_station_id")
    return [
        TrafficSummary(
            station_id=station.id,  # type: ignore[arg-type]
            departures=departures.get(station.id, 0),
            arrivals=arrivals.get(station.id, 0),
        )
        for station in stations
    ]


__all__ = ["aggregate", "count_by"]
