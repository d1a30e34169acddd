import matplotlib.pyplot as plt
import networkx as nx

from subwaymap.topology import node_positions

TRACK_COLOR = 'gray'
ROUTE_COLOR = 'red'
STATION_COLOR = 'black'
START_COLOR = 'blue'
END_COLOR = 'green'


def plot_subway_map(G, path=None, start=None, end=None, ax=None, save_path=None):
    """
    Draw stations at their map coordinates with the route highlighted.
    start/end default to the ends of path. Returns the matplotlib Axes.
    """
    path = list(path or [])
    if path:
        start = path[0] if start is None else start
        end = path[-1] if end is None else end

    if ax is None:
        _fig, ax = plt.subplots(figsize=(7, 7))
    pos = node_positions(G)

    nx.draw_networkx_edges(G, pos, edge_color=TRACK_COLOR, width=1.0, ax=ax)
    if len(path) > 1:
        route_edges = list(zip(path[:-1], path[1:]))
        nx.draw_networkx_edges(G, pos, edgelist=route_edges, edge_color=ROUTE_COLOR,
                               width=2.0, ax=ax)

    colors = []
    for node in G.nodes():
        if node == start:
            colors.append(START_COLOR)
        elif node == end:
            colors.append(END_COLOR)
        else:
            colors.append(STATION_COLOR)
    nx.draw_networkx_nodes(G, pos, node_color=colors, node_size=250, ax=ax)
    nx.draw_networkx_labels(G, pos, font_color='white', font_size=8, ax=ax)

    # screen coordinates grow downwards
    if not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_aspect('equal')
    ax.set_axis_off()
    if start is not None and end is not None:
        ax.set_title(f"Station {start} → Station {end}")
    else:
        ax.set_title("Subway Map")

    if save_path:
        ax.figure.savefig(save_path, dpi=150, bbox_inches='tight')
    return ax
