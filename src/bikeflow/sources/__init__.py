"""Readers that turn raw trip and station files into engine inputs."""

from .station_loader import DEFAULT_ID_FIELD, load_stations, stations_from_records
from .trip_loader import TRIP_COLUMNS, load_trips

__all__ = [
    "DEFAULT_ID_FIELD",
    "TRIP_COLUMNS",
    "load_stations",
    "load_trips",
    "stations_from_records",
]
