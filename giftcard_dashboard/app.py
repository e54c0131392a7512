"""
Gift Card Tracker — donated gift card dashboard
Run:  python -m giftcard_dashboard.app
Open: http://127.0.0.1:8070
"""

import os

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
import flask

from giftcard_dashboard import config
from giftcard_dashboard.utils.logging import setup_logging

# Logging first: data_state loads the fixtures on import
logger = setup_logging()

from giftcard_dashboard import data_state as ds  # noqa: E402

# ── Create the Dash app ──────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    ],
    assets_folder=os.path.join(os.path.dirname(__file__), "assets"),
    title="Gift Card Tracker",
)
server = app.server  # For deployment (Gunicorn)

# ── Sidebar navigation ──────────────────────────────────────────────────────
# (label, icon, path), one group per block between dividers
NAV_GROUPS = [
    [("Dashboard", "\U0001f4ca", "/")],
    [("Add Gift Card", "➕", "/add-card"),
     ("Spending", "\U0001f6d2", "/redemption"),
     ("Donations Given", "\U0001f49d", "/donations")],
    [("Inventory", "\U0001f4e6", "/inventory")],
]


def _nav_link(label, icon, path):
    return dbc.NavLink([html.Span(icon, className="nav-icon"), label], href=path, active="exact")


def _build_sidebar():
    links = []
    for i, group in enumerate(NAV_GROUPS):
        if i:
            links.append(html.Hr(className="sidebar-divider"))
        links.extend(_nav_link(*item) for item in group)
    brand = html.Div([html.H4("GIFT CARDS"), html.Small("Community Gift Card Tracker")],
                     className="sidebar-brand")
    return html.Div([brand, dbc.Nav(links, vertical=True, pills=True)], className="sidebar")


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout():
    summary = ds.STORE.summary()
    subtitle = "  |  ".join([
        f"{summary['cards']} cards",
        f"{summary['transactions']} transactions",
        f"{summary['donations']} donations",
        f"Remaining: {ds.money(summary['total_remaining'])} of {ds.money(summary['total_initial'])}",
    ])
    header = html.Div([
        html.H3(id="page-title"),
        html.Div(subtitle, className="header-subtitle", id="app-header-content"),
    ], className="app-header")
    return html.Div([
        dcc.Location(id="url", refresh=False),
        _build_sidebar(),
        html.Div([header, html.Div(id="page-content")], className="main-content"),
    ])


app.layout = serve_layout


# ── JSON endpoints ───────────────────────────────────────────────────────────
@server.route("/api/diagnostics")
def api_diagnostics():
    """Return store counts and totals as JSON for remote debugging."""
    return flask.jsonify(ds.STORE.summary())


@server.route("/api/reload", methods=["POST"])
def api_reload():
    """Discard in-memory changes and reseed the store from the fixture files."""
    try:
        summary = ds.reload_fixtures()
    except ValueError as e:
        logger.error("Reload failed: %s", e)
        return flask.jsonify({"status": "error", "error": str(e)}), 500
    return flask.jsonify({"status": "ok", **summary})


# ── Register callbacks ───────────────────────────────────────────────────────
# Callback modules import after `app` exists
from giftcard_dashboard.callbacks import (  # noqa: E402
    navigation_cb, overview_cb, add_card_cb, redemption_cb, inventory_cb, donations_cb,
)

for _module in (navigation_cb, overview_cb, add_card_cb, redemption_cb, inventory_cb, donations_cb):
    _module.register_callbacks(app)

# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    print("\n  Gift Card Tracker")
    print(f"  http://127.0.0.1:{config.PORT}")
    print(f"  {ds.STORE.summary()['cards']} cards loaded from {config.DATA_DIR}\n")
    app.run(debug=config.DEBUG, host="0.0.0.0", port=config.PORT)
