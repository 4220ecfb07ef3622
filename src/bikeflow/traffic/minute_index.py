"""Minute-of-day index of departures and arrivals."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .domain_types import MINUTES_PER_DAY, Trip
from .trip_store import check_minute

logger = logging.getLogger(__name__)

ALL_TIMES = -1

Slots = Tuple[Tuple[Trip, ...], ...]


_CLOCK = re.compile(r"(\d{1,2}):(\d{2})")


def parse_clock(token: object) -> int:
    """Parse ``HH:MM`` (00:00 to 23:59) into a minute-of-day."""
    match = _CLOCK.fullmatch(token.strip()) if isinstance(token, str) else None
    if match is None or int(match.group(1)) > 23 or int(match.group(2)) > 59:
        raise ValueError(f"Clock value must be HH:MM between 00:00 and 23:59: {token!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def format_clock(minute: int) -> str:
    """Render a minute-of-day as a 12-hour label, e.g. ``8:05 AM``."""
    if minute < 0:
        return "All times"
    hours, mins = divmod(int(minute) % MINUTES_PER_DAY, 60)
    suffix = "AM" if hours < 12 else "PM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{mins:02d} {suffix}"


class MinuteIndex:
    """Two 1440-slot tables of trips keyed by start and end minute-of-day."""

    def __init__(self, departures: Slots, arrivals: Slots):
        if len(departures) != MINUTES_PER_DAY or len(arrivals) != MINUTES_PER_DAY:
            raise ValueError(f"MinuteIndex requires exactly {MINUTES_PER_DAY} slots per side")
        self._departures = departures
        self._arrivals = arrivals
        self._size = sum(len(slot) for slot in departures)

    # ------------------------------------------------------------------ builders
    @classmethod
    def build(cls, trips: Iterable[Trip]) -> "MinuteIndex":
        departures: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        arrivals: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
        for position, trip in enumerate(trips):
            start = check_minute(trip.start_minute, f"trip[{position}].start_minute")
            end = check_minute(trip.end_minute, f"trip[{position}].end_minute")
            departures[start].append(trip)
            arrivals[end].append(trip)
        index = cls(
            departures=tuple(tuple(slot) for slot in departures),
            arrivals=tuple(tuple(slot) for slot in arrivals),
        )
        logger.debug("Built minute index over %d trips", len(index))
        return index

    # ---------------------------------------------------------------- properties
    @property
    def departures(self) -> Slots:
        return self._departures

    @property
    def arrivals(self) -> Slots:
        return self._arrivals

    def __len__(self) -> int:
        return self._size

    # ------------------------------------------------------------------ profile
    def slots(self, kind: str) -> Slots:
        if kind == "departures":
            return self._departures
        if kind == "arrivals":
            return self._arrivals
        raise ValueError(f"Unknown slot kind {kind!r}; expected 'departures' or 'arrivals'")

    def slot_sizes(self, kind: str = "departures") -> np.ndarray:
        """Return per-minute trip counts as an int64 array of length 1440."""
        return np.fromiter(
            (len(slot) for slot in self.slots(kind)),
            dtype=np.int64,
            count=MINUTES_PER_DAY,
        )

    def peak_minute(self, kind: str = "departures") -> int:
        """Minute-of-day with the most trips; ties resolve to the earliest minute."""
        return int(np.argmax(self.slot_sizes(kind)))


def build(trips: Iterable[Trip]) -> MinuteIndex:
    return MinuteIndex.build(trips)


def flatten(slots: Sequence[Sequence[Trip]]) -> List[Trip]:
    return [trip for slot in slots for trip in slot]


__all__ = ["ALL_TIMES", "MinuteIndex", "build", "flatten", "format_clock", "parse_clock"]
