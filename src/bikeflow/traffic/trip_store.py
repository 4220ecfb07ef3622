"""Validated, immutable collection of trips."""

from __future__ import annotations

import logging
import numbers
from typing import Iterable, Iterator, Sequence, Tuple

from .domain_types import MINUTES_PER_DAY, Trip
from .errors import InvalidTimestamp

logger = logging.getLogger(__name__)


def check_minute(value: object, label: str) -> int:
    """Return ``value`` if it is an integer minute-of-day, else raise InvalidTimestamp."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidTimestamp(f"{label} must be an integer minute-of-day, got {value!r}")
    value = int(value)
    if value < 0 or value >= MINUTES_PER_DAY:
        raise InvalidTimestamp(f"{label} out of range [0, {MINUTES_PER_DAY - 1}]: {value}")
    return value


class TripStore:
    """Owns every Trip handed to the engine; indices only hold references into it."""

    def __init__(self, trips: Iterable[Trip] = ()):
        validated = []
        for position, trip in enumerate(trips):
            check_minute(trip.start_minute, f"trip[{position}].start_minute")
            check_minute(trip.end_minute, f"trip[{position}].end_minute")
            validated.append(trip)
        self._trips: Tuple[Trip, ...] = tuple(validated)
        logger.debug("TripStore holds %d trips", len(self._trips))

    @property
    def trips(self) -> Sequence[Trip]:
        return self._trips

    def __len__(self) -> int:
        return len(self._trips)

    def __iter__(self) -> Iterator[Trip]:
        return iter(self._trips)

    def __getitem__(self, position: int) -> Trip:
        return self._trips[position]


__all__ = ["TripStore", "check_minute"]
