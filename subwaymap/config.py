"""
Config loading for SubwayMap runs.
A flat YAML mapping; missing keys fall back to DEFAULT_CONFIG.
"""

import yaml

from subwaymap.errors import ConfigError
from subwaymap.topology import (
    DEFAULT_BOUNDS,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MIN_CONNECTIONS,
    DEFAULT_NODE_COUNT,
)

DEFAULT_CONFIG = {
    "node_count": DEFAULT_NODE_COUNT,
    "min_connections": DEFAULT_MIN_CONNECTIONS,
    "max_connections": DEFAULT_MAX_CONNECTIONS,
    "bounds": list(DEFAULT_BOUNDS),
    "seed": None,          # None -> a fresh map on every run
    "num_trips": 5,
    "trip_seed": 42,
    "plot": True,
    "plot_path": None,
}


def load_config(path=None):
    """
    Read a YAML config and merge it over DEFAULT_CONFIG.
    With path=None the defaults are returned.
    """
    config = dict(DEFAULT_CONFIG)
    if path is None:
        return config

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    config.update(data)
    return config


def topology_params(config):
    """Keyword arguments for create_subway_topology taken from a config dict."""
    return {
        "n": config.get("node_count", DEFAULT_NODE_COUNT),
        "min_connections": config.get("min_connections", DEFAULT_MIN_CONNECTIONS),
        "max_connections": config.get("max_connections", DEFAULT_MAX_CONNECTIONS),
        "bounds": config.get("bounds", DEFAULT_BOUNDS),
        "seed": config.get("seed"),
    }
