"""CLI that computes per-station departures and arrivals for a time-of-day window."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from bikeflow.app.traffic_config import TrafficConfig
from bikeflow.app.traffic_service import StationTrafficService
from bikeflow.sources.station_loader import load_stations
from bikeflow.sources.trip_loader import load_trips
from bikeflow.traffic.errors import InvalidQuery, TrafficError
from bikeflow.traffic.minute_index import ALL_TIMES, format_clock, parse_clock

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML file with trips_csv, stations_json, station_id_field and window settings.",
    )
    parser.add_argument("--trips-csv", default=None, help="Trip export CSV (overrides the config).")
    parser.add_argument("--stations-json", default=None, help="Station information JSON (overrides the config).")
    parser.add_argument(
        "--station-id-field",
        default=None,
        help="Station record key matching trip station ids (default: short_name).",
    )
    parser.add_argument(
        "--center",
        default="all",
        help="Window center as minute-of-day (0-1439), HH:MM, or 'all' / -1 for every trip.",
    )
    parser.add_argument("--radius", type=int, default=None, help="Window half-width in minutes (default 30).")
    parser.add_argument(
        "--strict-timestamps",
        action="store_true",
        help="Fail on unparseable trip timestamps instead of skipping those rows.",
    )
    parser.add_argument("--output-csv",
    required=False,
    default="output/station_traffic.csv",
    help="Destination CSV for per-station traffic.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def parse_center(token: str) -> int:
    """Turn a CLI token into a window center understood by the query layer."""
    text = str(token).strip()
    if text.lower() == "all":
        return ALL_TIMES
    if ":" in text:
        try:
            return parse_clock(text)
        except ValueError as exc:
            raise InvalidQuery(str(exc)) from exc
    try:
        return int(text)
    except ValueError as exc:
        raise InvalidQuery(f"Unrecognised window center {token!r}") from exc


def _resolve_config(args: argparse.Namespace) -> TrafficConfig:
    base = TrafficConfig.from_yaml(args.config) if args.config else TrafficConfig()
    return TrafficConfig(
        trips_csv=Path(args.trips_csv) if args.trips_csv else base.trips_csv,
        stations_json=Path(args.stations_json) if args.stations_json else base.stations_json,
        station_id_field=args.station_id_field or base.station_id_field,
        window_radius_minutes=args.radius if args.radius is not None else base.window_radius_minutes,
        strict_timestamps=bool(args.strict_timestamps or base.strict_timestamps),
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    try:
        config = _resolve_config(args)
        center = parse_center(args.center)
    except (ValueError, TypeError) as exc:
        raise SystemExit(str(exc)) from exc
    if config.trips_csv is None or config.stations_json is None:
        raise SystemExit("Both --trips-csv and --stations-json (or a config providing them) are required.")

    try:
        service = _load_service_with_progress(config)
        dataframe = service.compute_dataframe(center)
    except TrafficError as exc:
        raise SystemExit(str(exc)) from exc

    peak = service.index.peak_minute("departures")
    logger.info(
        "Window %s: %d stations, %d indexed trips, busiest departure minute %s, max station total %d",
        format_clock(center),
        len(dataframe),
        service.trip_count,
        format_clock(peak),
        int(dataframe["total"].max()) if not dataframe.empty else 0,
    )
    _write_traffic_csv(args.output_csv, dataframe)
    logger.info("Wrote station traffic CSV with %d rows to %s", len(dataframe), args.output_csv)


def _write_traffic_csv(path: str | Path, dataframe) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    dataframe.to_csv(output_path, index=False)


def _load_service_with_progress(config: TrafficConfig) -> StationTrafficService:
    """Load stations and trips and build the index behind a spinner."""

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        transient=True,
    )

    with progress:
        task_id = progress.add_task("Loading stations", total=3)
        stations = load_stations(config.stations_json, id_field=config.station_id_field)
        progress.update(task_id, advance=1, description="Loading trips")
        trips = load_trips(config.trips_csv, strict=config.strict_timestamps)
        progress.update(task_id, advance=1, description="Building minute index")
        service = StationTrafficService(stations, trips, radius=config.window_radius_minutes)
        progress.advance(task_id)
    return service


if __name__ == "__main__":
    main()
