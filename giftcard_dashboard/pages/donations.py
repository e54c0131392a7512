"""Donations page — period tabs, totals, filterable donation log, CSV export."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from giftcard_dashboard.theme import *
from giftcard_dashboard import reports
from giftcard_dashboard.components.kpi import kpi_card
from giftcard_dashboard.components.cards import section, empty_state
from giftcard_dashboard.components.tables import simple_table
from giftcard_dashboard import data_state as ds


def build_stats(filtered):
    totals = reports.donation_totals(filtered)
    return html.Div([
        kpi_card("Total Donations Distributed", str(totals["count"]), BLUE,
                 "Gift cards given in this view"),
        kpi_card("Total Dollar Value", ds.money(totals["total"]), GREEN,
                 "Total value distributed to community"),
    ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "16px"})


def build_donation_table(filtered):
    if len(filtered) == 0:
        return empty_state("No donations match these filters.")
    rows = []
    for _, d in filtered.iterrows():
        rows.append([
            str(d["date"])[:10],
            d["store"],
            ds.money(d["amount"]),
            d["volunteer"],
            d["recipient"] or "—",
            html.Span(d["notes"] or "—", style={"color": GRAY}),
        ])
    return simple_table(["Date", "Store", "Amount", "Volunteer", "Recipient", "Notes"],
                        rows, right_align=(2,))


def _filter(label, component):
    return html.Div([
        dbc.Label(label, style={"color": GRAY, "fontSize": "12px"}),
        component,
    ])


def layout():
    """Build the Donations page."""
    log = ds.STORE.donation_log()
    period = reports.TIME_PERIODS[0]
    filtered = reports.filter_donations(log, period=period)
    stores = sorted({d["store"] for d in log})

    return html.Div([
        dbc.RadioItems(
            id="don-period",
            options=[{"label": p, "value": p} for p in reports.TIME_PERIODS],
            value=period,
            inline=True, className="period-tabs mb-3",
            inputClassName="btn-check",
            labelClassName="btn btn-outline-secondary btn-sm",
            labelCheckedClassName="active",
        ),

        html.Div(build_stats(filtered), id="don-stats"),

        section("Donation Log", [
            dbc.Row([
                dbc.Col(_filter("Start Date", dbc.Input(id="don-start-date", type="date")), md=3),
                dbc.Col(_filter("End Date", dbc.Input(id="don-end-date", type="date")), md=3),
                dbc.Col(_filter("Store", dcc.Dropdown(
                    id="don-store",
                    options=[{"label": s, "value": s} for s in stores],
                    placeholder="All Stores", className="dash-dropdown-dark",
                )), md=3),
                dbc.Col(_filter("Recipient", dbc.Input(id="don-recipient",
                                                       placeholder="Search recipient...")), md=3),
            ], className="mb-3"),
            html.Div(build_donation_table(filtered), id="don-table"),
        ], GREEN, subtitle="Filter and export donation records",
            action=dbc.Button("Export CSV", id="don-export-btn", color="success", size="sm")),
        dcc.Download(id="don-download"),
    ])
