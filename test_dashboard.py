import networkx as nx

from frontend.callbacks import (
    EMPTY_SELECTION,
    build_kpi_cards,
    clicked_station_id,
    generate_map_store,
    graph_from_json,
    graph_to_json,
    handle_station_click,
)
from frontend.layout import create_subway_figure, START_COLOR, END_COLOR
from subwaymap.selection import RouteSelection
from subwaymap.topology import build_station_graph, create_subway_topology


def square():
    positions = [(0, 0), (10, 0), (10, 10), (0, 10)]
    return build_station_graph(positions, [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2)])


def click_on(node, G):
    x, y = G.nodes[node]['pos']
    return {'points': [{'curveNumber': 2, 'pointNumber': node, 'x': x, 'y': y, 'customdata': node}]}


def test_graph_survives_the_store():
    G = create_subway_topology(n=12, seed=4)
    restored = graph_from_json(graph_to_json(G))
    assert nx.is_frozen(restored)
    assert list(restored.nodes()) == list(G.nodes())
    assert set(restored.edges()) == set(G.edges())
    for node in G.nodes():
        assert restored.nodes[node]['pos'] == G.nodes[node]['pos']
        assert restored.nodes[node]['seed_neighbors'] == G.nodes[node]['seed_neighbors']
    assert graph_from_json(None) is None


def test_generate_map_store_reports_errors():
    ok = generate_map_store(10, [2, 4], 1)
    assert ok['error'] is None
    assert graph_from_json(ok['G_json']).number_of_nodes() == 10

    bad = generate_map_store(10, [5, 2], 1)
    assert bad['G_json'] is None
    assert "min_connections" in bad['error']


def test_clicks_drive_the_selection():
    G = square()
    data = dict(EMPTY_SELECTION)
    data = handle_station_click(G, data, click_on(0, G))
    assert data == {'start': 0, 'end': None, 'path': []}
    data = handle_station_click(G, data, click_on(2, G))
    assert data == {'start': 0, 'end': 2, 'path': [0, 2]}
    data = handle_station_click(G, data, click_on(1, G))
    assert data == {'start': 1, 'end': None, 'path': []}


def test_click_without_station_is_ignored():
    G = square()
    data = {'start': 0, 'end': None, 'path': []}
    assert handle_station_click(G, data, None) == data
    far_away = {'points': [{'curveNumber': 0, 'x': 100, 'y': 100}]}
    assert handle_station_click(G, data, far_away) == data


def test_click_falls_back_to_hit_test():
    G = square()
    near_station_3 = {'points': [{'curveNumber': 0, 'x': -3, 'y': 13}]}
    assert clicked_station_id(G, near_station_3) == 3


def test_figure_highlights_route():
    G = square()
    fig = create_subway_figure(G, [0, 2], start=0, end=2)
    edge_trace, route_trace, node_trace = fig.data
    assert list(route_trace.x) == [0.0, 10.0]
    assert list(node_trace.customdata) == [0, 1, 2, 3]
    assert node_trace.marker.color[0] == START_COLOR
    assert node_trace.marker.color[2] == END_COLOR
    # three coordinates (two ends plus a gap) per track
    assert len(edge_trace.x) == 3 * G.number_of_edges()


def test_empty_figure_without_map():
    fig = create_subway_figure(None)
    assert len(fig.data) == 0


def test_kpi_cards():
    G = square()
    selection = RouteSelection(G)
    selection.select(0)
    selection.select(2)
    cards = build_kpi_cards(G, selection)
    assert len(cards) == 4
    assert cards[0].children[1].children == "4"
    assert cards[3].children[1].children == "14.1 (1 hops)"
    assert build_kpi_cards(None, None)[0].children[1].children == "N/A"
