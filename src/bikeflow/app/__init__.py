"""Configuration, service and CLI wiring for station traffic queries."""

from .traffic_config import TrafficConfig
from .traffic_service import StationTrafficService

__all__ = [
    "StationTrafficService",
    "TrafficConfig",
]
