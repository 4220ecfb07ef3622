from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping

import yaml

from bikeflow.sources.station_loader import DEFAULT_ID_FIELD
from bikeflow.traffic.errors import InvalidQuery
from bikeflow.traffic.window_query import DEFAULT_RADIUS_MINUTES, check_radius

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {
    "trips_csv",
    "stations_json",
    "station_id_field",
    "window_radius_minutes",
    "strict_timestamps",
}


def _optional_path(value: object, label: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, (str, Path)) or not str(value).strip():
        raise TypeError(f"'{label}' must be a non-empty path string")
    return Path(value)


@dataclass(frozen=True)
class TrafficConfig:
    """Where to find the trip/station data and how wide a query window is."""

    trips_csv: Path | None = None
    stations_json: Path | None = None
    station_id_field: str = DEFAULT_ID_FIELD
    window_radius_minutes: int = DEFAULT_RADIUS_MINUTES
    strict_timestamps: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.station_id_field, str) or not self.station_id_field.strip():
            raise ValueError("station_id_field must be a non-empty string")
        try:
            check_radius(self.window_radius_minutes)
        except InvalidQuery as exc:
            raise ValueError(str(exc)) from exc
        if not isinstance(self.strict_timestamps, bool):
            raise TypeError("strict_timestamps must be a boolean")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "TrafficConfig":
        if not isinstance(data, Mapping):
            raise TypeError("Traffic config must be a mapping at the top level")
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            logger.warning("Ignoring unknown traffic config keys: %s", ", ".join(unknown))
        radius = data.get("window_radius_minutes", DEFAULT_RADIUS_MINUTES)
        if isinstance(radius, bool) or not isinstance(radius, int):
            raise TypeError("window_radius_minutes must be an integer")
        return cls(
            trips_csv=_optional_path(data.get("trips_csv"), "trips_csv"),
            stations_json=_optional_path(data.get("stations_json"), "stations_json"),
            station_id_field=str(data.get("station_id_field") or DEFAULT_ID_FIELD),
            window_radius_minutes=radius,
            strict_timestamps=data.get("strict_timestamps", False),  # type: ignore[arg-type]
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TrafficConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Traffic config YAML not found at {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        return cls.from_mapping(data)

    def to_yaml(self, path: str | Path) -> None:
        output: Dict[str, object] = {
            "station_id_field": self.station_id_field,
            "window_radius_minutes": int(self.window_radius_minutes),
            "strict_timestamps": bool(self.strict_timestamps),
        }
        if self.trips_csv is not None:
            output["trips_csv"] = str(self.trips_csv)
        if self.stations_json is not None:
            output["stations_json"] = str(self.stations_json)
        dest = Path(path)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with dest.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(output, handle, sort_keys=True)


__all__ = ["TrafficConfig"]
