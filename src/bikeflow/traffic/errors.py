"""Error types raised by the station traffic engine."""

from __future__ import annotations


class TrafficError(ValueError):
    """Base class for recoverable traffic engine errors."""


class InvalidTimestamp(TrafficError):
    """A trip minute-of-day lies outside [0, 1439]."""


class InvalidQuery(TrafficError):
    """A window query was issued with an unsupported center or radius."""


class MissingStationId(TrafficError):
    """A station record has no usable identifier."""


__all__ = ["InvalidQuery", "InvalidTimestamp", "MissingStationId", "TrafficError"]
