"""
Departure/arrival selection driving the route display.

States:
    NO_SELECTION    -> nothing picked yet
    START_SELECTED  -> departure picked, waiting for arrival
    PATH_COMPUTED   -> both picked, route computed once

Picking a station after a route is shown starts over with that station as
the new departure.
"""

import math

from subwaymap.dijkstra import path_length, shortest_path
from subwaymap.errors import InvalidNodeReference
from subwaymap.topology import euclidean_distance

NO_SELECTION = 'no_selection'
START_SELECTED = 'start_selected'
PATH_COMPUTED = 'path_computed'

STATION_RADIUS = 10   # hit radius in map units, matches drawn station size


def find_clicked_station(G, x, y, radius=STATION_RADIUS):
    """First station (in node order) whose centre is within radius of (x, y)."""
    for node, data in G.nodes(data=True):
        if euclidean_distance(data['pos'], (x, y)) < radius:
            return node
    return None


class RouteSelection:
    def __init__(self, G, solver=shortest_path):
        self.G = G
        self.solver = solver
        self.start = None
        self.end = None
        self.path = []

    @property
    def state(self):
        if self.start is None:
            return NO_SELECTION
        if self.end is None:
            return START_SELECTED
        return PATH_COMPUTED

    @property
    def selected(self):
        return [n for n in (self.start, self.end) if n is not None]

    def reset(self):
        self.start = None
        self.end = None
        self.path = []

    def select(self, node):
        """
        Apply one station pick and return the new state.
        The solver runs exactly once per completed departure/arrival pair.
        """
        if node not in self.G:
            raise InvalidNodeReference(f"Station {node!r} is not in the map")

        state = self.state
        if state == PATH_COMPUTED or state == NO_SELECTION:
            self.start = node
            self.end = None
            self.path = []
        elif node != self.start:
            self.end = node
            self.path = list(self.solver(self.G, self.start, node))
        return self.state

    def status_message(self):
        state = self.state
        if state == NO_SELECTION:
            return "Select a departure station"
        if state == START_SELECTED:
            return "Select an arrival station"
        if not self.path:
            return f"No route from station {self.start} to station {self.end}"
        route = " → ".join(str(n) for n in self.path)
        return f"Shortest route from station {self.start} to station {self.end}: {route}"

    # --- (de)serialisation for dashboard stores ---

    def to_dict(self):
        return {'start': self.start, 'end': self.end, 'path': list(self.path)}

    @classmethod
    def from_dict(cls, G, data, solver=shortest_path):
        selection = cls(G, solver=solver)
        if not data:
            return selection
        start, end = data.get('start'), data.get('end')
        if start is not None and start in G:
            selection.start = start
            if end is not None and end in G:
                selection.end = end
                selection.path = list(data.get('path') or [])
        return selection

    def __repr__(self):
        return f"RouteSelection(state={self.state!r}, start={self.start}, end={self.end}, path={self.path})"


def route_summary(G, selection):
    """Hops and length of the currently shown route (inf when unreachable)."""
    if selection.state != PATH_COMPUTED:
        return None
    if not selection.path:
        return {'hops': 0, 'length': math.inf}
    return {'hops': len(selection.path) - 1, 'length': path_length(G, selection.path)}
