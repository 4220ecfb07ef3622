"""Loader for station information feeds."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from bikeflow.traffic.domain_types import Station
from bikeflow.traffic.errors import MissingStationId

logger = logging.getLogger(__name__)

DEFAULT_ID_FIELD = "short_name"


def load_stations(path: str | Path, *, id_field: str = DEFAULT_ID_FIELD) -> List[Station]:
    """Read stations from a GBFS-style JSON file.

    Accepts either ``{"data": {"stations": [...]}}`` or a bare list of station
    records. ``id_field`` names the key whose value matches trip station ids;
    bike-share trip exports typically use the station ``short_name``.
    """
    json_path = Path(path)
    if not json_path.exists():
        raise FileNotFoundError(f"Stations JSON not found at {json_path}")
    with json_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    records = _extract_records(payload)
    stations = stations_from_records(records, id_field=id_field)
    logger.info("Loaded %d stations from %s (id field %r)", len(stations), json_path, id_field)
    return stations


def stations_from_records(
    records: Iterable[Mapping[str, object]], *, id_field: str = DEFAULT_ID_FIELD
) -> List[Station]:
    stations: List[Station] = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise TypeError(f"Station entry at position {position} must be a mapping")
        raw_id = record.get(id_field)
        if raw_id is None or not str(raw_id).strip():
            raise MissingStationId(f"Station at position {position} is missing {id_field!r}")
        metadata = {key: value for key, value in record.items() if key not in (id_field, "name", "lat", "lon")}
        stations.append(
            Station(
                id=str(raw_id).strip(),
                name=_optional_str(record.get("name")),
                lat=_optional_float(record.get("lat"), "lat", raw_id),
                lon=_optional_float(record.get("lon"), "lon", raw_id),
                metadata=metadata,
            )
        )
    return stations


def _extract_records(payload: object) -> List[Mapping[str, object]]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        data = payload.get("data")
        if isinstance(data, Mapping) and isinstance(data.get("stations"), list):
            return data["stations"]
        if isinstance(payload.get("stations"), list):
            return payload["stations"]
    raise ValueError("Stations JSON must be a list or contain 'data.stations'")


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _optional_float(value: object, label: str, station_id: object) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Ignoring unparseable %s %r for station %s", label, value, station_id)
        return None


__all__ = ["DEFAULT_ID_FIELD", "load_stations", "stations_from_records"]
