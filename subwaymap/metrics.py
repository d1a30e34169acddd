import math
import numpy as np


class RouteMetrics:
    def __init__(self):
        self.data = {
            "hops": [],
            "length": [],
            "reachable": []
        }

    def log(self, path, length):
        """Record one routed trip; unreachable trips count only towards the reachable rate."""
        reachable = bool(path) and not math.isinf(length)
        self.data["reachable"].append(1.0 if reachable else 0.0)
        if reachable:
            self.data["hops"].append(len(path) - 1)
            self.data["length"].append(length)

    def summary(self):
        return {k: float(np.mean(v)) if v else 0.0 for k, v in self.data.items()}
