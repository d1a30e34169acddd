import sys

import matplotlib.pyplot as plt

from subwaymap.config import load_config
from subwaymap.simulation import run_simulation
from subwaymap.visualize import plot_subway_map

if __name__ == "__main__":
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config/example_config.yaml"
    config = load_config(config_path)

    G, results, metrics = run_simulation(config)

    if config.get("plot", True):
        routed = [r for r in results if r["path"]]
        if routed:
            trip = routed[0]
            plot_subway_map(G, trip["path"], save_path=config.get("plot_path"))
        else:
            plot_subway_map(G, save_path=config.get("plot_path"))
        if not config.get("plot_path"):
            plt.show()
