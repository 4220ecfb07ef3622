"""Library API that owns a minute index and answers station traffic queries."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import pandas as pd

from bikeflow.sources.station_loader import load_stations
from bikeflow.sources.trip_loader import load_trips
from bikeflow.traffic.domain_types import Station, TrafficSummary, Trip
from bikeflow.traffic.minute_index import MinuteIndex
from bikeflow.traffic.station_traffic import compute_traffic, summaries_to_dataframe
from bikeflow.traffic.trip_store import TripStore
from bikeflow.traffic.window_query import DEFAULT_RADIUS_MINUTES, check_radius

from .traffic_config import TrafficConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexGeneration:
    """One fully built trip store and its index, swapped in as a unit."""

    number: int
    store: TripStore
    index: MinuteIndex


class StationTrafficService:
    """Holds one immutable index generation; ``reload`` swaps in a new one whole."""

    def __init__(
        self,
        stations: Sequence[Station],
        trips: Iterable[Trip],
        *,
        radius: int = DEFAULT_RADIUS_MINUTES,
    ):
        self._stations: List[Station] = list(stations)
        self._radius = check_radius(radius)
        self._reload_lock = threading.Lock()
        self._current = self._build(trips, number=1)
        logger.info(
            "Indexed %d trips for %d stations (generation %d)",
            len(self._current.store),
            len(self._stations),
            self._current.number,
        )

    # ------------------------------------------------------------------ loaders
    @classmethod
    def from_config(cls, config: TrafficConfig) -> "StationTrafficService":
        if config.trips_csv is None or config.stations_json is None:
            raise ValueError("Traffic config must provide both trips_csv and stations_json")
        stations = load_stations(config.stations_json, id_field=config.station_id_field)
        trips = load_trips(config.trips_csv, strict=config.strict_timestamps)
        return cls(stations, trips, radius=config.window_radius_minutes)

    # ---------------------------------------------------------------- properties
    @property
    def stations(self) -> Sequence[Station]:
        return tuple(self._stations)

    @property
    def current(self) -> IndexGeneration:
        return self._current

    @property
    def index(self) -> MinuteIndex:
        return self._current.index

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def generation(self) -> int:
        return self._current.number

    @property
    def trip_count(self) -> int:
        return len(self._current.store)

    # --------------------------------------------------------------------- API
    def compute(self, center: int | str) -> List[TrafficSummary]:
        index = self._current.index
        return compute_traffic(self._stations, index, center, radius=self._radius)

    def compute_dataframe(self, center: int | str) -> pd.DataFrame:
        return summaries_to_dataframe(self.compute(center), self._stations)

    def reload(self, trips: Iterable[Trip]) -> int:
        """Replace the trip set; the live generation is untouched if the build fails."""
        with self._reload_lock:
            generation = self._build(trips, number=self._current.number + 1)
            self._current = generation
            logger.info(
                "Swapped in index generation %d with %d trips", generation.number, len(generation.store)
            )
            return generation.number

    # ----------------------------------------------------------------- helpers
    @staticmethod
    def _build(trips: Iterable[Trip], *, number: int) -> IndexGeneration:
        store = trips if isinstance(trips, TripStore) else TripStore(trips)
        return IndexGeneration(number=number, store=store, index=MinuteIndex.build(store))


__all__ = ["IndexGeneration", "StationTrafficService"]
