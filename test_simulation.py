import math
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import pytest
import yaml

from subwaymap.config import DEFAULT_CONFIG, load_config, topology_params
from subwaymap.dijkstra import shortest_path
from subwaymap.errors import ConfigError
from subwaymap.metrics import RouteMetrics
from subwaymap.simulation import run_simulation
from subwaymap.topology import build_station_graph, create_subway_topology
from subwaymap.trips import generate_trips
from subwaymap.visualize import plot_subway_map


def test_defaults_without_file():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"node_count": 12, "seed": 3, "bounds": [0, 100]}))
    config = load_config(path)
    assert config["node_count"] == 12
    assert config["seed"] == 3
    assert config["max_connections"] == DEFAULT_CONFIG["max_connections"]

    params = topology_params(config)
    assert params == {
        "n": 12,
        "min_connections": 2,
        "max_connections": 4,
        "bounds": [0, 100],
        "seed": 3,
    }
    G = create_subway_topology(**params)
    assert G.number_of_nodes() == 12


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULT_CONFIG


def test_bad_configs_raise(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")

    not_a_mapping = tmp_path / "list.yaml"
    not_a_mapping.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigError):
        load_config(not_a_mapping)

    broken = tmp_path / "broken.yaml"
    broken.write_text("node_count: [1, 2\n")
    with pytest.raises(ConfigError):
        load_config(broken)


def test_example_config_loads():
    config = load_config(Path(__file__).parent / "config" / "example_config.yaml")
    assert config["node_count"] == 20
    assert config["bounds"] == [50, 450]


def test_trips_use_distinct_stations():
    G = create_subway_topology(n=10, seed=1)
    trips = generate_trips(G, num_trips=30, seed=7)
    assert len(trips) == 30
    assert [t["id"] for t in trips] == list(range(30))
    for trip in trips:
        assert trip["start"] != trip["end"]
        assert trip["start"] in G and trip["end"] in G
    assert trips == generate_trips(G, num_trips=30, seed=7)


def test_no_trips_on_single_station_map():
    G = create_subway_topology(n=1, seed=1)
    assert generate_trips(G, num_trips=5) == []


def test_route_metrics_summary():
    metrics = RouteMetrics()
    assert metrics.summary() == {"hops": 0.0, "length": 0.0, "reachable": 0.0}

    metrics.log([0, 1, 2], 20.0)
    metrics.log([3, 4], 10.0)
    metrics.log([], math.inf)
    summary = metrics.summary()
    assert summary["hops"] == pytest.approx(1.5)
    assert summary["length"] == pytest.approx(15.0)
    assert summary["reachable"] == pytest.approx(2 / 3)


def test_run_simulation_routes_every_trip(capsys):
    config = dict(DEFAULT_CONFIG, seed=5, num_trips=8, trip_seed=2)
    G, results, metrics = run_simulation(config, verbose=False)
    assert capsys.readouterr().out == ""
    assert len(results) == 8
    for result in results:
        assert result["path"] == shortest_path(G, result["start"], result["end"])
        if not result["path"]:
            assert math.isinf(result["length"])
    assert len(metrics.data["reachable"]) == 8


def test_run_simulation_prints_progress(capsys):
    config = dict(DEFAULT_CONFIG, seed=5, num_trips=2)
    run_simulation(config)
    out = capsys.readouterr().out
    assert "Generating subway map..." in out
    assert "[Trip 0]" in out
    assert "=== Simulation Complete ===" in out


def test_plot_subway_map(tmp_path):
    G = build_station_graph([(0, 0), (10, 0), (10, 10)], [(0, 1), (1, 2)])
    save_path = tmp_path / "map.png"
    ax = plot_subway_map(G, [0, 1, 2], save_path=save_path)
    assert save_path.exists()
    assert ax.get_title() == "Station 0 → Station 2"
    assert ax.yaxis_inverted()

    ax = plot_subway_map(G)
    assert ax.get_title() == "Subway Map"
