"""Donations page callbacks — filters and CSV export."""
import logging

from dash import dcc, Input, Output, State, no_update

from giftcard_dashboard import reports
from giftcard_dashboard import data_state as ds
from giftcard_dashboard.pages.donations import build_stats, build_donation_table

logger = logging.getLogger(__name__)


def _filtered(period, start_date, end_date, store, recipient):
    return reports.filter_donations(
        ds.STORE.donation_log(), period=period, start_date=start_date or None,
        end_date=end_date or None, store=store or None,
        recipient=(recipient or "").strip() or None,
    )


def register_callbacks(app):
    @app.callback(
        Output("don-stats", "children"),
        Output("don-table", "children"),
        Input("don-period", "value"),
        Input("don-start-date", "value"),
        Input("don-end-date", "value"),
        Input("don-store", "value"),
        Input("don-recipient", "value"),
    )
    def update_donations(period, start_date, end_date, store, recipient):
        filtered = _filtered(period, start_date, end_date, store, recipient)
        return build_stats(filtered), build_donation_table(filtered)

    @app.callback(
        Output("don-download", "data"),
        Input("don-export-btn", "n_clicks"),
        State("don-period", "value"),
        State("don-start-date", "value"),
        State("don-end-date", "value"),
        State("don-store", "value"),
        State("don-recipient", "value"),
        prevent_initial_call=True,
    )
    def export_donations(n_clicks, period, start_date, end_date, store, recipient):
        if not n_clicks:
            return no_update
        filtered = _filtered(period, start_date, end_date, store, recipient)
        filename = reports.export_filename()
        logger.info("Exported %d donation(s) to %s", len(filtered), filename)
        return dcc.send_string(reports.export_donations_csv(filtered), filename)
