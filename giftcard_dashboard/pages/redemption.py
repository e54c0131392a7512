"""Redemption page — card list with filters, spend/donation forms, per-card history."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from giftcard_dashboard.theme import *
from giftcard_dashboard import reports
from giftcard_dashboard.components.kpi import kpi_card
from giftcard_dashboard.components.cards import section, status_badge, empty_state
from giftcard_dashboard.components.tables import balance_bar, transaction_history_table
from giftcard_dashboard import data_state as ds


def build_stats(cards):
    kpis = reports.card_kpis(cards)
    return html.Div([
        kpi_card("Total Cards", str(kpis["total"]), CYAN, "All gift cards in system"),
        kpi_card("Active Cards", str(kpis["active"]), GREEN, "Cards with remaining balance"),
        kpi_card("Total Remaining", ds.money(kpis["total_remaining"]), TEAL, "Available across all cards"),
        kpi_card("Total Initial", ds.money(kpis["total_initial"]), ORANGE, "Value of all cards received"),
    ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "16px"})


def build_card_list(cards, selected_id=None):
    """Clickable rows, one per card; the selected row is highlighted."""
    if not cards:
        return empty_state("No cards match your search.")
    items = []
    for card in cards:
        remaining = card["remaining_balance"]
        items.append(dbc.ListGroupItem(
            html.Div([
                html.Div(card["store"], style={"flex": "2", "fontWeight": "600", "color": WHITE}),
                html.Div(f"•••• {card['last4']}", style={"flex": "1", "fontFamily": "monospace",
                                                         "color": GRAY}),
                html.Div(ds.money(card["initial_balance"]), style={"flex": "1", "color": GRAY,
                                                                   "fontFamily": "monospace"}),
                html.Div([
                    html.Div(ds.money(remaining), style={
                        "color": GREEN if remaining > 0 else DARKGRAY,
                        "fontFamily": "monospace", "fontWeight": "600"}),
                    balance_bar(remaining, card["initial_balance"]),
                ], style={"flex": "1"}),
                html.Div(status_badge(card["status"]), style={"flex": "1"}),
                html.Div(card.get("added_by") or "—", style={"flex": "1", "color": GRAY,
                                                             "fontSize": "12px"}),
            ], style={"display": "flex", "alignItems": "center", "gap": "8px"}),
            id={"type": "red-card-row", "index": card["id"]},
            action=True,
            active=card["id"] == selected_id,
            n_clicks=0,
            className="card-row",
        ))
    return dbc.ListGroup(items, flush=True)


def build_card_detail(card):
    """Header + transaction history for the selected card."""
    if card is None:
        return empty_state("Select a card to record a spend, donation, or view history.")
    txns = ds.STORE.card_transactions(card["id"])
    return html.Div([
        html.Div([
            html.Span(f"{card['store']} •••• {card['last4']}",
                      style={"color": WHITE, "fontWeight": "bold", "fontSize": "16px"}),
            html.Span(status_badge(card["status"]), className="ms-2"),
            html.Span(f"{ds.money(card['remaining_balance'])} of {ds.money(card['initial_balance'])} left",
                      className="ms-auto", style={"color": GRAY, "fontFamily": "monospace"}),
        ], style={"display": "flex", "alignItems": "center", "marginBottom": "6px"}),
        html.Div(f"Added {card.get('added_date') or '—'} by {card.get('added_by') or '—'}"
                 + (f" · {card['notes']}" if card.get("notes") else ""),
                 style={"color": DARKGRAY, "fontSize": "11px", "marginBottom": "12px"}),
        html.Div("TRANSACTION HISTORY", style={"color": GRAY, "fontSize": "11px", "fontWeight": "600",
                                               "letterSpacing": "1.2px", "marginBottom": "6px"}),
        transaction_history_table(txns) if txns
        else empty_state("No transactions recorded for this card."),
    ])


def _volunteer_dropdown(dropdown_id):
    return dcc.Dropdown(
        id=dropdown_id,
        options=[{"label": v, "value": v} for v in ds.VOLUNTEERS],
        placeholder="Select volunteer",
        className="dash-dropdown-dark",
    )


def _spend_form():
    return html.Div([
        dbc.Row([
            dbc.Col([dbc.Label("Amount ($)", style={"color": GRAY, "fontSize": "12px"}),
                     dbc.Input(id="red-spend-amount", type="number", min=0.01, step=0.01,
                               placeholder="0.00")], md=4),
            dbc.Col([dbc.Label("Volunteer", style={"color": GRAY, "fontSize": "12px"}),
                     _volunteer_dropdown("red-spend-volunteer")], md=4),
            dbc.Col([dbc.Label("Notes (optional)", style={"color": GRAY, "fontSize": "12px"}),
                     dbc.Input(id="red-spend-notes", placeholder="e.g. Groceries for Family A")], md=4),
        ], className="mb-2"),
        html.Div(id="red-spend-error"),
        dbc.Button("Confirm Spend", id="red-spend-btn", color="warning", size="sm"),
    ], className="pt-3")


def _donate_form():
    return html.Div([
        dbc.Row([
            dbc.Col([dbc.Label("Recipient", style={"color": GRAY, "fontSize": "12px"}),
                     dbc.Input(id="red-donate-recipient", placeholder="e.g. Family A")], md=4),
            dbc.Col([dbc.Label("Volunteer", style={"color": GRAY, "fontSize": "12px"}),
                     _volunteer_dropdown("red-donate-volunteer")], md=4),
            dbc.Col([
                dbc.Label("Amount", style={"color": GRAY, "fontSize": "12px"}),
                dbc.RadioItems(id="red-donate-mode",
                               options=[{"label": "Full", "value": "full"},
                                        {"label": "Partial", "value": "partial"}],
                               value="full", inline=True),
                dbc.Input(id="red-donate-amount", type="number", min=0.01, step=0.01,
                          placeholder="0.00", disabled=True, size="sm", className="mt-1"),
            ], md=4),
        ], className="mb-2"),
        dbc.Label("Notes (optional)", style={"color": GRAY, "fontSize": "12px"}),
        dbc.Input(id="red-donate-notes", placeholder="e.g. Weekly groceries for the family",
                  className="mb-2"),
        html.Div(id="red-donate-error"),
        dbc.Button("Confirm Donation", id="red-donate-btn", color="success", size="sm"),
    ], className="pt-3")


def layout():
    """Build the Redemption page."""
    cards = ds.STORE.cards
    return html.Div([
        dcc.Store(id="red-selected-card"),
        dcc.Store(id="red-refresh", data=0),
        html.Div(id="red-toast"),

        html.Div(build_stats(cards), id="red-stats"),

        section("Gift Card Inventory", [
            dbc.Row([
                dbc.Col(dcc.Dropdown(
                    id="red-store-filter",
                    options=[{"label": s, "value": s} for s in ds.STORE.unique_stores()],
                    placeholder="All Stores",
                    className="dash-dropdown-dark",
                ), md=4),
                dbc.Col(dbc.Input(id="red-last4-filter", placeholder="Last 4 digits…",
                                  maxLength=4), md=3),
                dbc.Col(html.Div(id="red-list-count", style={"color": GRAY, "fontSize": "12px",
                                                              "textAlign": "right"}), md=5),
            ], className="mb-3", align="center"),
            html.Div(build_card_list(cards), id="red-card-list"),
        ], CYAN, subtitle="Click a row to record a spend, donation, or view history"),

        section("Selected Card", [
            html.Div(build_card_detail(None), id="red-card-detail"),
            html.Div(dbc.Tabs([
                dbc.Tab(_spend_form(), label="Record Spend", tab_id="spend"),
                dbc.Tab(_donate_form(), label="Record Donation", tab_id="donate"),
            ], active_tab="spend"), id="red-action-panel", style={"display": "none"},
                className="mt-3"),
        ], ORANGE),
    ])
