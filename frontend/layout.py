import dash_bootstrap_components as dbc
from dash import dcc, html
import plotly.graph_objects as go

# --- Define colors for plots ---
PLOT_BG_COLOR = '#FFFFFF'
PLOT_FONT_COLOR = '#1D1D1D'
TRACK_COLOR = '#9CA3AF'      # Gray
ROUTE_COLOR = '#EF4444'      # Red
STATION_COLOR = '#111827'    # Black
START_COLOR = '#2563EB'      # Blue
END_COLOR = '#16A34A'        # Green
MUTED_COLOR = '#6B7280'
# ------------------------------------------------

STATION_SIZE = 20

# --- Plot & Card Creation Functions ---

def create_subway_figure(G=None, path=(), start=None, end=None):
    """Plotly figure of the map at the stations' own coordinates, route on top."""
    if G is None or G.number_of_nodes() == 0:
        return create_empty_figure("Subway Map")

    pos = {node: data['pos'] for node, data in G.nodes(data=True)}

    edge_x, edge_y = [], []
    for u, v in G.edges():
        x0, y0 = pos[u]
        x1, y1 = pos[v]
        edge_x += [x0, x1, None]
        edge_y += [y0, y1, None]
    edge_trace = go.Scatter(
        x=edge_x, y=edge_y, mode='lines', hoverinfo='skip',
        line=dict(width=1, color=TRACK_COLOR), name='Tracks'
    )

    path = list(path or [])
    route_x = [pos[n][0] for n in path]
    route_y = [pos[n][1] for n in path]
    route_trace = go.Scatter(
        x=route_x, y=route_y, mode='lines', hoverinfo='skip',
        line=dict(width=3, color=ROUTE_COLOR), name='Route'
    )

    node_x, node_y, node_color, node_text, node_ids = [], [], [], [], []
    for node, data in G.nodes(data=True):
        x, y = data['pos']
        node_x.append(x)
        node_y.append(y)
        node_ids.append(node)
        node_text.append(f"<b>Station {node}</b><br>Tracks: {G.degree(node)}<br>({x:.0f}, {y:.0f})")
        if node == start:
            node_color.append(START_COLOR)
        elif node == end:
            node_color.append(END_COLOR)
        else:
            node_color.append(STATION_COLOR)

    node_trace = go.Scatter(
        x=node_x, y=node_y, mode='markers+text',
        text=[str(n) for n in node_ids], textposition='middle center',
        textfont=dict(color='white', size=10),
        hovertext=node_text, hoverinfo='text',
        customdata=node_ids,
        marker=dict(color=node_color, size=STATION_SIZE, line_width=1, line_color='white'),
        name='Stations'
    )

    fig = go.Figure(
        data=[edge_trace, route_trace, node_trace],
        layout=go.Layout(
            title='Subway Map',
            showlegend=False,
            hovermode='closest',
            clickmode='event',
            margin=dict(b=0, l=0, r=0, t=40),
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            # screen coordinates: y grows downwards
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False,
                       autorange='reversed', scaleanchor='x', scaleratio=1),
            plot_bgcolor=PLOT_BG_COLOR,
            paper_bgcolor=PLOT_BG_COLOR,
            font_color=PLOT_FONT_COLOR,
        )
    )
    return fig

def create_empty_figure(title):
    """Creates a blank figure with a title, styled for the theme."""
    return go.Figure(
        layout=go.Layout(
            title=title,
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            paper_bgcolor=PLOT_BG_COLOR,
            plot_bgcolor=PLOT_BG_COLOR,
            font_color=PLOT_FONT_COLOR
        )
    )

def create_kpi_card(title, value, color):
    """Creates a single KPI stat card."""
    return html.Div(
        [
            html.P(title, className="card-title"),
            html.H3(value, className="card-text", style={'color': color}),
        ],
        className="kpi-card"
    )

# --- Layout Building Functions ---

def build_navbar():
    """Builds the top navigation bar."""
    return dbc.Navbar(
        dbc.Container([
            html.A(
                dbc.Row(
                    [
                        dbc.Col(html.Span("🚇", style={'fontSize': '1.5rem'})),
                        dbc.Col(
                            html.Div([
                                html.Span("SubwayMap"),
                                html.Span(" // Shortest Route Finder", className="navbar-brand-accent")
                            ],
                            className="navbar-brand",
                            )
                        ),
                    ],
                    align="center",
                    className="g-0",
                ),
                href="#",
                style={"textDecoration": "none"},
            )
        ], fluid=True),
        className="mb-4",
    )


def build_control_panel():
    """Builds the collapsible map generation panel."""
    return dbc.Card(
        dbc.CardBody([
            dbc.Row([
                dbc.Col(html.H5("Map Parameters"), width=12),
                dbc.Col([
                    dbc.Label("Number of Stations:"),
                    dcc.Slider(id="slider-nodes", min=5, max=60, step=5, value=20,
                               marks={i: str(i) for i in range(5, 61, 10)}),
                ], width=4),
                dbc.Col([
                    dbc.Label("Connections per Station:"),
                    dcc.RangeSlider(id="slider-connections", min=0, max=8, step=1, value=[2, 4],
                                    marks={i: str(i) for i in range(0, 9)}),
                ], width=4),
                dbc.Col([
                    dbc.Label("Random Seed (optional):"),
                    dbc.Input(id="input-seed", type="number", value=None, min=0, max=999999),
                    html.Small("Empty = new map every time", style={'color': MUTED_COLOR, 'fontStyle': 'italic'}),
                ], width=4),
            ]),
        ]),
    )

def build_layout():
    """Builds the main app layout."""
    return html.Div([
        dcc.Store(id='store-map', data={'G_json': None}),
        dcc.Store(id='store-selection', data={'start': None, 'end': None, 'path': []}),

        build_navbar(),

        dbc.Container([
            dbc.Row([
                dbc.Col([
                    html.H1("Subway Shortest Route", style={'fontWeight': '700'}),
                    html.P("Click a departure station, then an arrival station", className="lead", style={'color': MUTED_COLOR}),
                    html.Div("Select a departure station", id="route-status", className="mt-2 mb-3",
                             style={'color': MUTED_COLOR, 'fontFamily': 'monospace'}),
                    dbc.Button("Map Controls", id="btn-toggle-controls", color="primary", className="me-2"),
                    dbc.Button("⟳ Generate Map", id="btn-generate", color="success", n_clicks=0),
                    dbc.Button("✕ Clear Route", id="btn-clear", color="secondary", n_clicks=0, className="ms-2"),
                ], width=12),
            ]),

            dbc.Collapse(build_control_panel(), id="collapse-controls", is_open=False),

            dbc.Row([
                dbc.Col(create_kpi_card("Stations", "N/A", STATION_COLOR), id="kpi-stations", width=3),
                dbc.Col(create_kpi_card("Tracks", "N/A", TRACK_COLOR), id="kpi-tracks", width=3),
                dbc.Col(create_kpi_card("Station Groups", "N/A", START_COLOR), id="kpi-components", width=3),
                dbc.Col(create_kpi_card("Route Length", "N/A", ROUTE_COLOR), id="kpi-route", width=3),
            ], className="mt-4"),

            dbc.Row([
                dbc.Col(dbc.Card(dbc.CardBody(dcc.Graph(id="graph-subway", style={"height": "70vh"}))), width=12),
            ]),

        ], fluid=True, style={'padding': '0 2rem 2rem 2rem'})
    ])
