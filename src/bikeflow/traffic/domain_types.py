"""Core dataclasses shared across the traffic package."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

MINUTES_PER_DAY = 1440


def minute_of_day(dt: datetime) -> int:
    """Return ``hour * 60 + minute`` for a datetime, ignoring the date."""
    return int(dt.hour) * 60 + int(dt.minute)


@dataclass(frozen=True)
class Trip:
    """Single trip reduced to its stations and minute-of-day timestamps."""

    start_station_id: str
    end_station_id: str
    start_minute: int
    end_minute: int

    @classmethod
    def from_datetimes(
        cls,
        start_station_id: str,
        end_station_id: str,
        started_at: datetime,
        ended_at: datetime,
    ) -> "Trip":
        return cls(
            start_station_id=str(start_station_id),
            end_station_id=str(end_station_id),
            start_minute=minute_of_day(started_at),
            end_minute=minute_of_day(ended_at),
        )


@dataclass(frozen=True)
class Station:
    """Metadata describing a docking station."""

    id: Optional[str]
    name: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    metadata: Dict[str, object] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class TrafficSummary:
    """Departure/arrival counts for one station inside a query window."""

    station_id: str
    departures: int = 0
    arrivals: int = 0

    @property
    def total(self) -> int:
        return self.departures + self.arrivals

    def to_record(self) -> Dict[str, object]:
        return {
            "station_id": self.station_id,
            "departures": self.departures,
            "arrivals": self.arrivals,
            "total": self.total,
        }
