from subwaymap.config import topology_params
from subwaymap.dijkstra import path_length
from subwaymap.metrics import RouteMetrics
from subwaymap.selection import RouteSelection
from subwaymap.topology import create_subway_topology, topology_summary
from subwaymap.trips import generate_trips


def run_simulation(config, verbose=True):
    """
    Build a map from config and route a batch of random trips over it.
    Each trip goes through a RouteSelection, the same way two clicks on the
    dashboard would. Returns (G, results, metrics).
    """
    if verbose:
        print("Generating subway map...")
    G = create_subway_topology(**topology_params(config))
    if verbose:
        print(topology_summary(G))

    trips = generate_trips(G, num_trips=config.get("num_trips", 5),
                           seed=config.get("trip_seed", 42))
    metrics = RouteMetrics()
    results = []

    for trip in trips:
        selection = RouteSelection(G)
        selection.select(trip["start"])
        selection.select(trip["end"])

        path = selection.path
        length = path_length(G, path) if path else float('inf')
        metrics.log(path, length)
        results.append({**trip, "path": path, "length": length})

        if verbose:
            if path:
                print(f"[Trip {trip['id']}] {' -> '.join(map(str, path))} ({length:.1f})")
            else:
                print(f"[Trip {trip['id']}] No route {trip['start']}-{trip['end']}")

    if verbose:
        print("\n=== Simulation Complete ===")
        print(metrics.summary())
    return G, results, metrics
