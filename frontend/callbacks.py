import dash
from dash import Input, Output, State, callback_context
import networkx as nx

from .layout import (
    create_subway_figure,
    create_kpi_card,
    STATION_COLOR,
    TRACK_COLOR,
    START_COLOR,
    ROUTE_COLOR,
)

from subwaymap.errors import SubwayMapError
from subwaymap.selection import RouteSelection, find_clicked_station, route_summary
from subwaymap.topology import create_subway_topology, topology_summary


EMPTY_SELECTION = {'start': None, 'end': None, 'path': []}


# --- Store (de)serialisation ---

def graph_to_json(G):
    return nx.node_link_data(G, edges="links")


def graph_from_json(G_json):
    """Rebuild the frozen map from a dcc.Store payload (JSON turns tuples into lists)."""
    if not G_json:
        return None
    G = nx.node_link_graph(G_json, edges="links")
    for _node, data in G.nodes(data=True):
        data['pos'] = tuple(data['pos'])
        data['seed_neighbors'] = tuple(data.get('seed_neighbors', ()))
    return nx.freeze(G)


# --- Pure helpers used by the callbacks ---

def generate_map_store(num_nodes, connections, seed):
    """Build a new map; errors end up in the store instead of the server log."""
    min_c, max_c = connections
    try:
        G = create_subway_topology(n=num_nodes, min_connections=min_c,
                                   max_connections=max_c, seed=seed)
    except SubwayMapError as e:
        return {'G_json': None, 'error': str(e)}
    print(f"Created subway map: {topology_summary(G)}")
    return {'G_json': graph_to_json(G), 'error': None}


def clicked_station_id(G, click_data):
    """Station id behind a Plotly clickData payload, or None."""
    if not click_data or not click_data.get('points'):
        return None
    point = click_data['points'][0]
    node = point.get('customdata')
    if node is not None and node in G:
        return node
    if point.get('x') is None or point.get('y') is None:
        return None
    return find_clicked_station(G, point['x'], point['y'])


def handle_station_click(G, selection_data, click_data):
    """Apply one click to the stored selection and return the new store payload."""
    selection = RouteSelection.from_dict(G, selection_data)
    node = clicked_station_id(G, click_data)
    if node is None:
        return selection.to_dict()
    selection.select(node)
    return selection.to_dict()


def build_kpi_cards(G, selection):
    if G is None:
        return (
            create_kpi_card("Stations", "N/A", STATION_COLOR),
            create_kpi_card("Tracks", "N/A", TRACK_COLOR),
            create_kpi_card("Station Groups", "N/A", START_COLOR),
            create_kpi_card("Route Length", "N/A", ROUTE_COLOR),
        )
    summary = topology_summary(G)
    route = route_summary(G, selection)
    if route is None:
        route_text = "N/A"
    elif not selection.path:
        route_text = "No route"
    else:
        route_text = f"{route['length']:.1f} ({route['hops']} hops)"
    return (
        create_kpi_card("Stations", str(summary['nodes']), STATION_COLOR),
        create_kpi_card("Tracks", str(summary['edges']), TRACK_COLOR),
        create_kpi_card("Station Groups", str(summary['components']), START_COLOR),
        create_kpi_card("Route Length", route_text, ROUTE_COLOR),
    )


# --- Callback Registration ---

def register_callbacks(app):

    @app.callback(
        Output("collapse-controls", "is_open"),
        [Input("btn-toggle-controls", "n_clicks")],
        [State("collapse-controls", "is_open")],
    )
    def toggle_controls_collapse(n, is_open):
        if n: return not is_open
        return is_open

    @app.callback(
        [Output('store-map', 'data'),
         Output('store-selection', 'data')],
        [Input('btn-generate', 'n_clicks')],
        [State('slider-nodes', 'value'),
         State('slider-connections', 'value'),
         State('input-seed', 'value')]
    )
    def generate_map(n_clicks, num_nodes, connections, seed):
        """Runs on page load and on every 'Generate Map' click; the old map is replaced whole."""
        print(f"--- GENERATE MAP (stations={num_nodes}, connections={connections}, seed={seed}) ---")
        return generate_map_store(num_nodes, connections, seed), dict(EMPTY_SELECTION)

    @app.callback(
        Output('store-selection', 'data', allow_duplicate=True),
        [Input('graph-subway', 'clickData'),
         Input('btn-clear', 'n_clicks')],
        [State('store-map', 'data'),
         State('store-selection', 'data')],
        prevent_initial_call=True
    )
    def update_selection(click_data, clear_clicks, map_data, selection_data):
        ctx = callback_context
        if not ctx.triggered: raise dash.exceptions.PreventUpdate
        trigger_id = ctx.triggered[0]['prop_id'].split('.')[0]

        if trigger_id == 'btn-clear':
            return dict(EMPTY_SELECTION)

        G = graph_from_json(map_data.get('G_json'))
        if G is None:
            raise dash.exceptions.PreventUpdate
        return handle_station_click(G, selection_data, click_data)

    @app.callback(
        [Output('graph-subway', 'figure'),
         Output('route-status', 'children'),
         Output('kpi-stations', 'children'),
         Output('kpi-tracks', 'children'),
         Output('kpi-components', 'children'),
         Output('kpi-route', 'children')],
        [Input('store-map', 'data'),
         Input('store-selection', 'data')],
    )
    def render_map(map_data, selection_data):
        G = graph_from_json(map_data.get('G_json'))
        if G is None:
            status = f"Error: {map_data['error']}" if map_data.get('error') else "No map generated"
            return (create_subway_figure(None), status) + build_kpi_cards(None, None)

        selection = RouteSelection.from_dict(G, selection_data)
        fig = create_subway_figure(G, selection.path, selection.start, selection.end)
        return (fig, selection.status_message()) + build_kpi_cards(G, selection)
