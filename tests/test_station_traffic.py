from __future__ import annotations

import random
from collections import Counter

import pytest

from bikeflow.traffic.aggregator import aggregate
from bikeflow.traffic.domain_types import Station, Trip
from bikeflow.traffic.errors import InvalidQuery, MissingStationId
from bikeflow.traffic.minute_index import ALL_TIMES, build
from bikeflow.traffic.station_traffic import compute_traffic, summaries_to_dataframe


def _stations(*ids: str):
    return [Station(id=station_id, name=f"Station {station_id}", lat=42.36, lon=-71.09) for station_id in ids]


def _random_trips(count: int, station_ids, seed: int = 7):
    rng = random.Random(seed)
    return [
        Trip(
            start_station_id=rng.choice(station_ids),
            end_station_id=rng.choice(station_ids),
            start_minute=rng.randrange(1440),
            end_minute=rng.randrange(1440),
        )
        for _ in range(count)
    ]


def test_end_to_end_two_trips_three_stations():
    trips = [
        Trip(start_station_id="X", end_station_id="Y", start_minute=700, end_minute=705),
        Trip(start_station_id="Y", end_station_id="X", start_minute=710, end_minute=715),
    ]
    summaries = compute_traffic(_stations("X", "Y", "Z"), build(trips), 700)

    assert [(s.station_id, s.departures, s.arrivals, s.total) for s in summaries] == [
        ("X", 1, 1, 2),
        ("Y", 1, 1, 2),
        ("Z", 0, 0, 0),
    ]


def test_all_times_matches_naive_full_scan():
    station_ids = ["A", "B", "C", "D", "GONE"]
    trips = _random_trips(500, station_ids)
    stations = _stations("A", "B", "C", "D", "E")
    summaries = compute_traffic(stations, build(trips), ALL_TIMES)

    naive_departures = Counter(trip.start_station_id for trip in trips)
    naive_arrivals = Counter(trip.end_station_id for trip in trips)
    for station, summary in zip(stations, summaries):
        assert summary.station_id == station.id
        assert summary.departures == naive_departures.get(station.id, 0)
        assert summary.arrivals == naive_arrivals.get(station.id, 0)
        assert summary.total == summary.departures + summary.arrivals


def test_windowed_counts_match_naive_circular_filter():
    trips = _random_trips(400, ["A", "B", "C"], seed=11)
    stations = _stations("A", "B", "C")
    index = build(trips)
    for center in (0, 15, 30, 700, 1410, 1439):
        window = {(center + offset) % 1440 for offset in range(-30, 30)}
        summaries = compute_traffic(stations, index, center)
        for summary in summaries:
            expected_dep = sum(
                1 for trip in trips if trip.start_minute in window and trip.start_station_id == summary.station_id
            )
            expected_arr = sum(
                1 for trip in trips if trip.end_minute in window and trip.end_station_id == summary.station_id
            )
            assert (summary.departures, summary.arrivals) == (expected_dep, expected_arr)


def test_output_size_matches_station_count_for_empty_trips():
    stations = _stations("A", "B", "C")
    for center in (ALL_TIMES, 0, 720):
        summaries = compute_traffic(stations, build([]), center)
        assert len(summaries) == 3
        assert all(summary.total == 0 for summary in summaries)


def test_output_follows_station_order():
    trips = [Trip("B", "A", 100, 110)]
    summaries = compute_traffic(_stations("C", "A", "B"), build(trips), ALL_TIMES)
    assert [summary.station_id for summary in summaries] == ["C", "A", "B"]


def test_repeated_queries_are_identical():
    trips = _random_trips(200, ["A", "B"], seed=3)
    index = build(trips)
    stations = _stations("A", "B")
    assert compute_traffic(stations, index, 1439) == compute_traffic(stations, index, 1439)


def test_unmatched_station_ids_are_dropped():
    trips = [Trip("RETIRED", "A", 10, 20), Trip("A", "RETIRED", 10, 20)]
    summaries = aggregate(_stations("A"), trips, trips)
    assert len(summaries) == 1
    assert (summaries[0].departures, summaries[0].arrivals) == (1, 1)


def test_aggregate_counts_departures_and_arrivals_separately():
    departures = [Trip("A", "B", 0, 0), Trip("A", "C", 0, 0)]
    arrivals = [Trip("C", "B", 0, 0)]
    summaries = aggregate(_stations("A", "B", "C"), departures, arrivals)
    assert [(s.departures, s.arrivals) for s in summaries] == [(2, 0), (0, 1), (0, 0)]


@pytest.mark.parametrize("bad_id", [None, "", "   "])
def test_missing_station_id_is_rejected(bad_id):
    stations = [Station(id="A"), Station(id=bad_id)]
    with pytest.raises(MissingStationId):
        compute_traffic(stations, build([]), ALL_TIMES)


def test_invalid_center_returns_no_partial_result():
    with pytest.raises(InvalidQuery):
        compute_traffic(_stations("A"), build([]), 1440)


def test_summaries_to_dataframe_carries_station_fields():
    stations = _stations("X", "Y")
    trips = [Trip("X", "Y", 700, 705)]
    summaries = compute_traffic(stations, build(trips), ALL_TIMES)
    df = summaries_to_dataframe(summaries, stations)

    assert list(df.columns) == ["station_id", "departures", "arrivals", "total", "name", "lat", "lon"]
    assert df["station_id"].tolist() == ["X", "Y"]
    assert df["total"].tolist() == [1, 1]
    assert df.loc[0, "name"] == "Station X"
    assert df.loc[1, "lon"] == pytest.approx(-71.09)


def test_summaries_to_dataframe_empty():
    df = summaries_to_dataframe([])
    assert df.empty
    assert list(df.columns) == ["station_id", "departures", "arrivals", "total"]
