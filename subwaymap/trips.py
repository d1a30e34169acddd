import random


def generate_trips(G, num_trips=5, seed=42, rng=None):
    """
    Pick random departure/arrival pairs of distinct stations.

    Args:
        G: subway map graph
        num_trips: Number of trips to generate
        seed: Random seed for reproducibility (ignored when rng is given)
        rng: random.Random-like object

    Returns:
        List of trip dictionaries {"id", "start", "end"}
    """
    if rng is None:
        rng = random.Random(seed)
    nodes = list(G.nodes())
    if len(nodes) < 2:
        return []

    trips = []
    for i in range(num_trips):
        start, end = rng.sample(nodes, 2)
        trips.append({"id": i, "start": start, "end": end})
    return trips
