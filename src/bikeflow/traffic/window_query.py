"""Circular time-of-day window selection over a minute index."""

from __future__ import annotations

import numbers
from typing import List, Sequence, Tuple

from .domain_types import MINUTES_PER_DAY, Trip
from .errors import InvalidQuery
from .minute_index import ALL_TIMES, flatten

DEFAULT_RADIUS_MINUTES = 30


def _as_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        return None
    return int(value)


def is_all_times(center: object) -> bool:
    if isinstance(center, str):
        return center.strip().lower() == "all"
    return _as_int(center) == ALL_TIMES


def check_radius(radius: object) -> int:
    value = _as_int(radius)
    if value is None:
        raise InvalidQuery(f"Window radius must be an integer number of minutes, got {radius!r}")
    if value <= 0 or value * 2 >= MINUTES_PER_DAY:
        raise InvalidQuery(f"Window radius must lie in (0, {MINUTES_PER_DAY // 2}), got {value}")
    return value


def window_bounds(center: int, radius: int = DEFAULT_RADIUS_MINUTES) -> Tuple[int, int]:
    """Return the half-open circular bounds ``[lo, hi)`` around ``center``."""
    value = _as_int(center)
    if value is None:
        raise InvalidQuery(f"Window center must be an integer minute-of-day, got {center!r}")
    center = value
    if center < 0 or center >= MINUTES_PER_DAY:
        raise InvalidQuery(f"Window center out of range [0, {MINUTES_PER_DAY - 1}]: {center}")
    radius = check_radius(radius)
    lo = (center - radius + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (center + radius) % MINUTES_PER_DAY
    return lo, hi


def select(
    index_slots: Sequence[Sequence[Trip]],
    center: int | str,
    *,
    radius: int = DEFAULT_RADIUS_MINUTES,
) -> List[Trip]:
    """
    Return the trips whose slot falls inside the window centred on ``center``.

    ``center`` may be ``ALL_TIMES`` (-1) or ``"all"`` to take every slot. A
    window crossing midnight is the tail ``lo..1439`` followed by ``0..hi-1``.
    """
    if is_all_times(center):
        check_radius(radius)
        return flatten(index_slots)
    lo, hi = window_bounds(center, radius)  # type: ignore[arg-type]
    if lo <= hi:
        return flatten(index_slots[lo:hi])
    return flatten(index_slots[lo:]) + flatten(index_slots[:hi])


__all__ = ["DEFAULT_RADIUS_MINUTES", "check_radius", "is_all_times", "select", "window_bounds"]
