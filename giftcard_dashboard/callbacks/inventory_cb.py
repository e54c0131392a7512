"""Inventory page callbacks — category tab, rows per page and pagination."""
from dash import Input, Output, callback_context

from giftcard_dashboard import reports
from giftcard_dashboard import data_state as ds
from giftcard_dashboard.pages.inventory import build_stats, build_store_table
from giftcard_dashboard.pages.overview import build_treemap


def register_callbacks(app):
    @app.callback(
        Output("inv-stats", "children"),
        Output("inv-treemap", "figure"),
        Output("inv-store-table", "children"),
        Output("inv-pagination", "max_value"),
        Output("inv-pagination", "active_page"),
        Input("inv-category-tabs", "active_tab"),
        Input("inv-rows-per-page", "value"),
        Input("inv-pagination", "active_page"),
    )
    def update_inventory(category, rows_per_page, page):
        # a new category or page size starts back on page 1
        if callback_context.triggered_id in ("inv-category-tabs", "inv-rows-per-page"):
            page = 1
        breakdown = reports.store_breakdown(ds.STORE.cards, ds.STORE.transactions)
        filtered = reports.filter_by_category(breakdown, category)
        page_df, page, total_pages = reports.paginate(filtered, page, rows_per_page)
        return (build_stats(filtered), build_treemap(breakdown, category, height=300),
                build_store_table(page_df), total_pages, page)
