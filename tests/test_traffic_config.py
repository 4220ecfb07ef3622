from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from bikeflow.app.traffic_config import TrafficConfig


def test_traffic_config_roundtrip(tmp_path):
    yaml_text = textwrap.dedent(
        """
        trips_csv: data/bluebikes-traffic-2024-03.csv
        stations_json: data/bluebikes-stations.json
        station_id_field: short_name
        window_radius_minutes: 45
        strict_timestamps: true
        """
    ).strip()
    config_path = tmp_path / "traffic.yaml"
    config_path.write_text(yaml_text, encoding="utf-8")
    config = TrafficConfig.from_yaml(config_path)

    assert config.trips_csv == Path("data/bluebikes-traffic-2024-03.csv")
    assert config.stations_json == Path("data/bluebikes-stations.json")
    assert config.window_radius_minutes == 45
    assert config.strict_timestamps is True

    roundtrip_path = tmp_path / "nested" / "roundtrip.yaml"
    config.to_yaml(roundtrip_path)
    assert TrafficConfig.from_yaml(roundtrip_path) == config


def test_traffic_config_defaults_from_empty_file(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")
    config = TrafficConfig.from_yaml(config_path)
    assert config == TrafficConfig()
    assert config.window_radius_minutes == 30
    assert config.station_id_field == "short_name"
    assert config.trips_csv is None


def test_traffic_config_rejects_bad_radius():
    with pytest.raises(ValueError):
        TrafficConfig.from_mapping({"window_radius_minutes": 720})
    with pytest.raises(TypeError):
        TrafficConfig.from_mapping({"window_radius_minutes": "30"})


def test_traffic_config_rejects_non_boolean_strict_flag():
    with pytest.raises(TypeError):
        TrafficConfig.from_mapping({"strict_timestamps": "yes"})


def test_traffic_config_ignores_unknown_keys(caplog):
    with caplog.at_level("WARNING"):
        config = TrafficConfig.from_mapping({"colour_scale": "sqrt"})
    assert config == TrafficConfig()
    assert "colour_scale" in caplog.text


def test_traffic_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        TrafficConfig.from_yaml(tmp_path / "missing.yaml")
