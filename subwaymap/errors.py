"""
Exceptions raised by the subway map core.
Unreachable stations are not an error: the solver returns an empty route.
"""

import networkx as nx


class SubwayMapError(Exception):
    """Base error for map generation, routing and configuration."""


class InvalidNodeReference(SubwayMapError, nx.NodeNotFound):
    """A station id that does not exist in the map was used."""


class DegenerateGraph(SubwayMapError, ValueError):
    """Asked to generate a map without any stations."""


class InvalidParameters(SubwayMapError, ValueError):
    """Connection counts or coordinate bounds are out of range."""


class InvalidPath(SubwayMapError, ValueError):
    """A station sequence that does not follow the map's tracks."""


class ConfigError(SubwayMapError):
    """Config file is missing, unreadable, or invalid."""
