"""
Topology builder for SubwayMap
- Places stations uniformly at random inside a coordinate box
- Links every station to a few of its nearest neighbours (locality-biased tracks)
- Attaches per-node attributes: pos, seed_neighbors
- Attaches per-edge attributes: weight (Euclidean track length)
Usage:
    from subwaymap.topology import create_subway_topology, topology_summary
    G = create_subway_topology(n=20, min_connections=2, max_connections=4, seed=7)
    print(topology_summary(G))
"""

import math
import random
import numpy as np
import networkx as nx

from subwaymap.errors import DegenerateGraph, InvalidParameters

# --- Default constants (tweakable) ---
DEFAULT_NODE_COUNT = 20
DEFAULT_MIN_CONNECTIONS = 2
DEFAULT_MAX_CONNECTIONS = 4
DEFAULT_BOUNDS = (50.0, 450.0)   # same range on both axes


def euclidean_distance(p, q):
    """Straight-line distance between two (x, y) points."""
    return math.hypot(q[0] - p[0], q[1] - p[1])


def _normalize_bounds(bounds):
    """
    Accepts (lo, hi) for both axes or ((xlo, xhi), (ylo, yhi)).
    Returns ((xlo, xhi), (ylo, yhi)) as floats.
    """
    try:
        first, second = bounds
    except (TypeError, ValueError):
        raise InvalidParameters(f"bounds must be a pair, got {bounds!r}")

    if isinstance(first, (tuple, list)):
        axes = (first, second)
    else:
        axes = ((first, second), (first, second))

    out = []
    for axis in axes:
        try:
            lo, hi = float(axis[0]), float(axis[1])
        except (TypeError, ValueError, IndexError):
            raise InvalidParameters(f"bounds must hold numbers, got {bounds!r}")
        if not lo < hi:
            raise InvalidParameters(f"lower bound {lo} must be below upper bound {hi}")
        out.append((lo, hi))
    return tuple(out)


def _validate_counts(n, min_connections, max_connections):
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise DegenerateGraph(f"station count must be a positive integer, got {n!r}")
    for name, value in (("min_connections", min_connections),
                        ("max_connections", max_connections)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidParameters(f"{name} must be a non-negative integer, got {value!r}")
    if min_connections > max_connections:
        raise InvalidParameters(
            f"min_connections ({min_connections}) exceeds max_connections ({max_connections})"
        )


def create_subway_topology(
    n=DEFAULT_NODE_COUNT,
    min_connections=DEFAULT_MIN_CONNECTIONS,
    max_connections=DEFAULT_MAX_CONNECTIONS,
    bounds=DEFAULT_BOUNDS,
    seed=None,
    rng=None,
):
    """
    Create a random subway map as a frozen undirected graph.
    Parameters:
      - n: number of stations (ids 0..n-1)
      - min_connections, max_connections: range for each station's seed degree
      - bounds: (lo, hi) for both axes, or ((xlo, xhi), (ylo, yhi))
      - seed: RNG seed; None draws fresh entropy so every call gives a new map
      - rng: random.Random-like object, takes precedence over seed
    Returns:
      - networkx.Graph (frozen) with 'pos' and 'seed_neighbors' on nodes
        and 'weight' on edges
    Notes:
      - Each station seeds tracks to its k nearest stations, k drawn uniformly
        from [min_connections, max_connections]. Back-edges from stations that
        picked it can push the final degree above k.
      - The map is not guaranteed to be connected.
    """
    _validate_counts(n, min_connections, max_connections)
    (xlo, xhi), (ylo, yhi) = _normalize_bounds(bounds)
    if rng is None:
        rng = random.Random(seed)

    G = nx.Graph(
        node_count=n,
        min_connections=min_connections,
        max_connections=max_connections,
        bounds=((xlo, xhi), (ylo, yhi)),
    )

    for node in range(n):
        x = rng.uniform(xlo, xhi)
        y = rng.uniform(ylo, yhi)
        G.add_node(node, pos=(x, y))

    for node in range(n):
        here = G.nodes[node]['pos']
        by_distance = sorted(
            (euclidean_distance(here, G.nodes[other]['pos']), other)
            for other in range(n) if other != node
        )
        k = rng.randint(min_connections, max_connections)
        seeds = tuple(other for _dist, other in by_distance[:k])
        G.nodes[node]['seed_neighbors'] = seeds
        for other in seeds:
            G.add_edge(node, other, weight=euclidean_distance(here, G.nodes[other]['pos']))

    return nx.freeze(G)


def build_station_graph(positions, edges):
    """
    Build a frozen map from explicit coordinates and tracks.
    positions: {id: (x, y)} or a sequence indexed by id
    edges: iterable of (u, v) pairs
    """
    if not isinstance(positions, dict):
        positions = dict(enumerate(positions))
    if not positions:
        raise DegenerateGraph("a station graph needs at least one station")

    G = nx.Graph()
    for node in sorted(positions):
        x, y = positions[node]
        G.add_node(node, pos=(float(x), float(y)), seed_neighbors=())
    for u, v in edges:
        if u == v:
            raise InvalidParameters(f"self-loop on station {u}")
        if u not in positions or v not in positions:
            raise InvalidParameters(f"track {u}-{v} references an unknown station")
        G.add_edge(u, v, weight=euclidean_distance(positions[u], positions[v]))
    return nx.freeze(G)


# ----------------------
# Queries and summary
# ----------------------

def node_positions(G):
    """Map of station id -> (x, y), in the graph's node order."""
    return {node: tuple(data['pos']) for node, data in G.nodes(data=True)}


def connected_station_groups(G):
    """Connected components as sorted id lists, ordered by their lowest id."""
    groups = [sorted(c) for c in nx.connected_components(G)]
    return sorted(groups, key=lambda g: g[0])


def topology_summary(G):
    n = G.number_of_nodes()
    m = G.number_of_edges()
    degs = np.array([d for _, d in G.degree()], dtype=float)
    lengths = np.array([d.get('weight', 0.0) for _, _, d in G.edges(data=True)], dtype=float)
    return {
        'nodes': n,
        'edges': m,
        'avg_degree': float(degs.mean()) if degs.size else 0.0,
        'min_degree': int(degs.min()) if degs.size else 0,
        'max_degree': int(degs.max()) if degs.size else 0,
        'avg_track_length': float(lengths.mean()) if lengths.size else 0.0,
        'components': nx.number_connected_components(G) if n else 0,
    }


# If this module is run directly, generate a sample map and print summary
if __name__ == "__main__":
    G = create_subway_topology(n=20, seed=42)
    print("Subway map created. Summary:")
    print(topology_summary(G))
    print("Station groups:", connected_station_groups(G))
    u, v = list(G.edges())[0]
    print("Sample track attrs:", G[u][v])
