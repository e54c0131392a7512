"""Inventory page — category tabs, value treemap, per-store breakdown with paging."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from giftcard_dashboard.theme import *
from giftcard_dashboard import reports
from giftcard_dashboard.components.kpi import kpi_card
from giftcard_dashboard.components.cards import section, empty_state
from giftcard_dashboard.components.tables import balance_bar, simple_table
from giftcard_dashboard.pages.overview import build_treemap
from giftcard_dashboard import data_state as ds


def build_stats(breakdown):
    count = int(breakdown["count"].sum()) if len(breakdown) else 0
    remaining = float(breakdown["remaining"].sum()) if len(breakdown) else 0.0
    redeemed = float(breakdown["redeemed"].sum()) if len(breakdown) else 0.0
    donated = float(breakdown["donated"].sum()) if len(breakdown) else 0.0
    return html.Div([
        kpi_card("Total Cards", str(count), CYAN, f"{len(breakdown)} store(s)"),
        kpi_card("Total Remaining", ds.money(remaining), GREEN, "Available to spend or donate"),
        kpi_card("Total Redeemed", ds.money(redeemed), ORANGE,
                 "Total value spent or donated out from all cards"),
        kpi_card("Donated Out", ds.money(donated), BLUE, "Via recorded donations"),
    ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "16px"})


def build_store_table(page_df):
    """Per-store rows: category dot, card count, remaining gauge, redeemed, donated."""
    if len(page_df) == 0:
        return empty_state("No cards in this category.")
    rows = []
    for _, row in page_df.iterrows():
        cat_color = CATEGORY_COLORS.get(row["category"], GRAY)
        initial = row["remaining"] + row["redeemed"]
        rows.append(html.Tr([
            html.Td(html.Div(row["store"], style={"color": WHITE, "fontWeight": "600"})),
            html.Td([
                html.Span("● ", style={"color": cat_color, "fontSize": "10px"}),
                html.Span(row["category"], style={"color": GRAY, "fontSize": "12px"}),
            ]),
            html.Td(str(int(row["count"])), style={"textAlign": "center", "fontFamily": "monospace"}),
            html.Td([
                html.Div(ds.money(row["remaining"]), style={"color": GREEN, "fontFamily": "monospace"}),
                balance_bar(row["remaining"], initial),
            ], style={"textAlign": "right"}),
            html.Td(ds.money(row["redeemed"]), style={"textAlign": "right", "fontFamily": "monospace",
                                                      "color": ORANGE}),
            html.Td(ds.money(row["donated"]), style={"textAlign": "right", "fontFamily": "monospace",
                                                     "color": BLUE}),
        ]))
    return dbc.Table([
        html.Thead(html.Tr([
            html.Th("Store"),
            html.Th("Category"),
            html.Th("Cards", style={"textAlign": "center"}),
            html.Th("Remaining", style={"textAlign": "right"}),
            html.Th("Redeemed", style={"textAlign": "right"}),
            html.Th("Donated", style={"textAlign": "right"}),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")




def build_category_table(rollup):
    """One row per category: store count, card count, remaining and redeemed totals."""
    if len(rollup) == 0:
        return empty_state("No cards yet.")
    headers = ["Category", "Stores", "Cards", "Remaining", "Redeemed", "Donated"]
    rows = [
        [html.Span([html.Span("● ", style={"color": CATEGORY_COLORS.get(r["category"], GRAY)}),
                    r["category"]]),
         str(int(r["stores"])), str(int(r["count"])),
         ds.money(r["remaining"]), ds.money(r["redeemed"]), ds.money(r["donated"])]
        for _, r in rollup.iterrows()
    ]
    return simple_table(headers, rows, right_align=(3, 4, 5))


def layout():
    """Build the Inventory page."""
    breakdown = reports.store_breakdown(ds.STORE.cards, ds.STORE.transactions)
    rows_per_page = reports.ROWS_PER_PAGE_OPTIONS[0]
    page_df, page, total_pages = reports.paginate(breakdown, 1, rows_per_page)

    return html.Div([
        dbc.Tabs([dbc.Tab(label=c, tab_id=c) for c in reports.CATEGORIES],
                 id="inv-category-tabs", active_tab="All", className="mb-3"),

        html.Div(build_stats(breakdown), id="inv-stats"),

        section("Value Distribution", [
            dcc.Graph(id="inv-treemap", figure=build_treemap(breakdown, height=300),
                      config={"displayModeBar": False}),
        ], CYAN, subtitle="Tile size = remaining balance · hover for details"),

        section("By Category", [
            html.Div(build_category_table(reports.category_rollup(breakdown)),
                     id="inv-category-table"),
        ], PURPLE),

        section("By Store", [
            html.Div(build_store_table(page_df), id="inv-store-table"),
            html.Div([
                html.Div([
                    html.Span("Rows per page", style={"color": GRAY, "fontSize": "12px",
                                                      "marginRight": "8px"}),
                    dcc.Dropdown(
                        id="inv-rows-per-page",
                        options=[{"label": str(n), "value": n} for n in reports.ROWS_PER_PAGE_OPTIONS],
                        value=rows_per_page, clearable=False,
                        style={"width": "80px"}, className="dash-dropdown-dark",
                    ),
                ], style={"display": "flex", "alignItems": "center"}),
                dbc.Pagination(id="inv-pagination", max_value=total_pages, active_page=page,
                               fully_expanded=False, size="sm", className="mb-0 ms-auto"),
            ], style={"display": "flex", "alignItems": "center", "marginTop": "12px"}),
        ], ORANGE, subtitle="Remaining, redeemed and donated value per store"),
    ])
