from __future__ import annotations

import argparse
import logging
import random
from typing import List

from bikeflow.traffic import ALL_TIMES, MinuteIndex, Station, Trip, compute_traffic, format_clock, parse_clock


SYNTH_STATIONS = ["B32006", "A32011", "M32042", "D32017"]

# (minute-of-day centre, spread in minutes, share of trips) for a weekday profile
SYNTH_PEAKS = [
    (8 * 60 + 15, 45, 0.40),
    (17 * 60 + 30, 60, 0.45),
    (23 * 60 + 50, 30, 0.15),
]


def _synthetic_trips(count: int, seed: int) -> List[Trip]:
    rng = random.Random(seed)
    trips: List[Trip] = []
    for _ in range(count):
        centre, spread, _ = rng.choices(SYNTH_PEAKS, weights=[p[2] for p in SYNTH_PEAKS])[0]
        start = int(rng.gauss(centre, spread)) % 1440
        duration = max(1, int(rng.expovariate(1 / 14.0)))
        start_id, end_id = rng.sample(SYNTH_STATIONS, 2)
        trips.append(Trip(start_id, end_id, start, (start + duration) % 1440))
    return trips


def main() -> None:
    parser = argparse.ArgumentParser(description="Station traffic smoke test on synthetic trips.")
    parser.add_argument("--trips", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--centers", nargs="*", default=["all", "08:15", "17:30", "23:50"])
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    stations = [Station(id=station_id) for station_id in SYNTH_STATIONS]
    index = MinuteIndex.build(_synthetic_trips(args.trips, args.seed))
    logging.info("Busiest departure minute: %s", format_clock(index.peak_minute()))

    for token in args.centers:
        center = ALL_TIMES if token == "all" else parse_clock(token)
        print(f"== {format_clock(center)}")
        for summary in compute_traffic(stations, index, center):
            print(
                f"  {summary.station_id:>8}  dep={summary.departures:5d}  "
                f"arr={summary.arrivals:5d}  total={summary.total:5d}"
            )


if __name__ == "__main__":
    main()
