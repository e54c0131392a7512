"""URL routing: pathname -> (page layout, header title)."""
from dash import html, Input, Output

from giftcard_dashboard.pages import add_card, donations, inventory, overview, redemption
from giftcard_dashboard.theme import RED

ROUTES = {
    "/": (overview, "Dashboard"),
    "/add-card": (add_card, "Add Gift Card"),
    "/redemption": (redemption, "Card Inventory"),
    "/inventory": (inventory, "Inventory by Store"),
    "/donations": (donations, "Donations Given"),
}


def not_found(pathname):
    return html.Div([
        html.H3("404: Page Not Found", style={"color": RED}),
        html.P(f"No page at '{pathname}'"),
        html.A("Back to the dashboard", href="/"),
    ], style={"padding": "40px"})


def register_callbacks(app):
    @app.callback(
        Output("page-content", "children"),
        Output("page-title", "children"),
        Input("url", "pathname"),
    )
    def route_page(pathname):
        page, title = ROUTES.get(pathname or "/", (None, "Not Found"))
        if page is None:
            return not_found(pathname), title
        # layouts read the live store, so build them per request
        return page.layout(), title
