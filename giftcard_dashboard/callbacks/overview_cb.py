"""Overview page callbacks — activity chart time window."""
from dash import Input, Output

from giftcard_dashboard.pages.overview import build_activity_figure


def register_callbacks(app):
    @app.callback(
        Output("overview-activity-chart", "figure"),
        Input("overview-activity-period", "value"),
        prevent_initial_call=True,
    )
    def update_activity_chart(period):
        return build_activity_figure(period)
