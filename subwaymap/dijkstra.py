"""
Shortest routes between stations of a subway map.
Plain O(V^2) Dijkstra with an explicit tie-break: among unvisited stations
with the same tentative distance, the lowest id is expanded first.
"""

import math

from subwaymap.errors import InvalidNodeReference, InvalidPath
from subwaymap.topology import euclidean_distance


def track_length(G, u, v):
    """Edge weight; falls back to the endpoints' distance when unset."""
    data = G[u][v]
    if 'weight' in data:
        return data['weight']
    return euclidean_distance(G.nodes[u]['pos'], G.nodes[v]['pos'])


def _check_station(G, node):
    if node not in G:
        raise InvalidNodeReference(f"Station {node!r} is not in the map")


def single_source_dijkstra(G, source, target=None):
    """
    Tentative distances and predecessors from source.
    Stops early once target is selected for expansion, or when every
    remaining unvisited station is unreachable.

    Returns:
        (dist, prev): dicts keyed by station id; unreached stations keep
        dist inf and prev None
    """
    _check_station(G, source)
    order = sorted(G.nodes())
    dist = {node: math.inf for node in order}
    prev = {node: None for node in order}
    visited = set()
    dist[source] = 0.0

    while len(visited) < len(order):
        current = None
        best = math.inf
        for node in order:
            if node not in visited and dist[node] < best:
                best = dist[node]
                current = node

        if current is None or current == target:
            break

        visited.add(current)

        for neighbor in G.neighbors(current):
            if neighbor in visited:
                continue
            candidate = dist[current] + track_length(G, current, neighbor)
            if candidate < dist[neighbor]:
                dist[neighbor] = candidate
                prev[neighbor] = current

    return dist, prev


def shortest_path(G, start, end):
    """
    Ordered station ids from start to end along the shortest route.
    Returns [start] when start == end and [] when end is unreachable.
    Raises InvalidNodeReference for ids that are not in the map.
    """
    _check_station(G, start)
    _check_station(G, end)
    if start == end:
        return [start]

    _dist, prev = single_source_dijkstra(G, start, target=end)

    path = []
    current = end
    while current is not None:
        path.append(current)
        if current == start:
            path.reverse()
            return path
        current = prev[current]
    return []


def path_length(G, path):
    """Sum of track lengths along path."""
    total = 0.0
    for u, v in zip(path[:-1], path[1:]):
        if u not in G or v not in G or not G.has_edge(u, v):
            raise InvalidPath(f"No track between stations {u!r} and {v!r}")
        total += track_length(G, u, v)
    return total


def run_dijkstra(G, source, target):
    """
    Runs Dijkstra's shortest path algorithm between two stations.
    Returns (path, cost), or ([], inf) when target is unreachable.
    """
    path = shortest_path(G, source, target)
    if not path:
        return [], math.inf
    return path, path_length(G, path)
