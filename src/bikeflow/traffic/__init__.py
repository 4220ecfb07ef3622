"""Traffic package exports."""

from .aggregator import aggregate
from .domain_types import Station, TrafficSummary, Trip, minute_of_day
from .errors import InvalidQuery, InvalidTimestamp, MissingStationId, TrafficError
from .minute_index import ALL_TIMES, MinuteIndex, build, format_clock, parse_clock
from .station_traffic import compute_traffic, summaries_to_dataframe
from .trip_store import TripStore
from .window_query import DEFAULT_RADIUS_MINUTES, select, window_bounds

__all__ = [
    "ALL_TIMES",
    "DEFAULT_RADIUS_MINUTES",
    "InvalidQuery",
    "InvalidTimestamp",
    "MinuteIndex",
    "MissingStationId",
    "Station",
    "TrafficError",
    "TrafficSummary",
    "Trip",
    "TripStore",
    "aggregate",
    "build",
    "compute_traffic",
    "format_clock",
    "minute_of_day",
    "parse_clock",
    "select",
    "summaries_to_dataframe",
    "window_bounds",
]
