"""Redemption page callbacks — filter/select cards, record spends and donations."""
import logging
import re

from dash import Input, Output, State, ALL, callback_context, no_update
import dash_bootstrap_components as dbc

from giftcard_dashboard import reports
from giftcard_dashboard import data_state as ds
from giftcard_dashboard.components.cards import toast
from giftcard_dashboard.ledger import LedgerError
from giftcard_dashboard.pages.redemption import build_stats, build_card_list, build_card_detail

logger = logging.getLogger(__name__)


def _error(message):
    return dbc.Alert(message, color="danger", className="py-2", style={"fontSize": "12px"})


def spend_outcome(card_id, amount, volunteer, notes=""):
    """Record a spend on ds.STORE. Returns (error message, toast); one of them is None."""
    try:
        txn = ds.STORE.record_spend(card_id, amount, volunteer, notes or "")
    except LedgerError as e:
        logger.warning("Spend rejected for card %s: %s", card_id, e)
        return str(e), None
    card = ds.STORE.get_card(card_id)
    return None, toast(f"{ds.money(txn['amount'])} spent on {card['store']} ···· {card['last4']}",
                       "Spend Recorded", icon="warning")


def donation_outcome(card_id, volunteer, recipient, mode, amount=None, notes=""):
    """Record a full or partial donation on ds.STORE. Returns (error message, toast)."""
    try:
        txn = ds.STORE.record_donation(card_id, volunteer, recipient, amount=amount,
                                       full=mode != "partial", notes=notes or "")
    except LedgerError as e:
        logger.warning("Donation rejected for card %s: %s", card_id, e)
        return str(e), None
    return None, toast(f"{ds.money(txn['amount'])} donated to {txn['recipient']}", "Donation Recorded")


def register_callbacks(app):
    # ── Filters → list + stats ────────────────────────────────────────────
    @app.callback(
        Output("red-card-list", "children"),
        Output("red-list-count", "children"),
        Output("red-stats", "children"),
        Input("red-store-filter", "value"),
        Input("red-last4-filter", "value"),
        Input("red-selected-card", "data"),
        Input("red-refresh", "data"),
    )
    def render_card_list(store, last4, selected_id, _refresh):
        digits = re.sub(r"\D", "", last4 or "")
        cards = ds.STORE.cards
        filtered = reports.filter_cards(cards, store or "", digits)
        count = f"Showing {len(filtered)} of {len(cards)} cards"
        return build_card_list(filtered, selected_id), count, build_stats(cards)

    # ── Row click → selection (click again to collapse) ───────────────────
    @app.callback(
        Output("red-selected-card", "data"),
        Input({"type": "red-card-row", "index": ALL}, "n_clicks"),
        State("red-selected-card", "data"),
        prevent_initial_call=True,
    )
    def select_card(clicks, selected_id):
        trigger = callback_context.triggered_id
        if not trigger or not any(clicks or []):
            return no_update
        if not callback_context.triggered[0]["value"]:
            return no_update
        card_id = trigger["index"]
        return None if card_id == selected_id else card_id

    # ── Selection → detail + action forms ────────────────────────────────
    @app.callback(
        Output("red-card-detail", "children"),
        Output("red-action-panel", "style"),
        Output("red-donate-mode", "options"),
        Input("red-selected-card", "data"),
        Input("red-refresh", "data"),
    )
    def render_card_detail(selected_id, _refresh):
        card = ds.STORE.get_card(selected_id) if selected_id is not None else None
        style = {"display": "block"} if card and card["remaining_balance"] > 0 else {"display": "none"}
        full_label = f"Full ({ds.money(card['remaining_balance'])})" if card else "Full"
        options = [{"label": full_label, "value": "full"},
                   {"label": "Partial", "value": "partial"}]
        return build_card_detail(card), style, options

    @app.callback(
        Output("red-donate-amount", "disabled"),
        Input("red-donate-mode", "value"),
    )
    def toggle_partial_amount(mode):
        return mode != "partial"

    # ── Record spend ──────────────────────────────────────────────────────
    @app.callback(
        Output("red-spend-error", "children"),
        Output("red-refresh", "data", allow_duplicate=True),
        Output("red-toast", "children", allow_duplicate=True),
        Output("red-spend-amount", "value"),
        Output("red-spend-notes", "value"),
        Input("red-spend-btn", "n_clicks"),
        State("red-selected-card", "data"),
        State("red-spend-amount", "value"),
        State("red-spend-volunteer", "value"),
        State("red-spend-notes", "value"),
        State("red-refresh", "data"),
        prevent_initial_call=True,
    )
    def record_spend(n_clicks, card_id, amount, volunteer, notes, refresh):
        if not n_clicks:
            return no_update, no_update, no_update, no_update, no_update
        error, done = spend_outcome(card_id, amount, volunteer, notes)
        if error:
            return _error(error), no_update, no_update, no_update, no_update
        return None, (refresh or 0) + 1, done, None, ""

    # ── Record donation ───────────────────────────────────────────────────
    @app.callback(
        Output("red-donate-error", "children"),
        Output("red-refresh", "data", allow_duplicate=True),
        Output("red-toast", "children", allow_duplicate=True),
        Output("red-donate-recipient", "value"),
        Output("red-donate-amount", "value"),
        Output("red-donate-notes", "value"),
        Output("red-donate-mode", "value"),
        Input("red-donate-btn", "n_clicks"),
        State("red-selected-card", "data"),
        State("red-donate-recipient", "value"),
        State("red-donate-volunteer", "value"),
        State("red-donate-mode", "value"),
        State("red-donate-amount", "value"),
        State("red-donate-notes", "value"),
        State("red-refresh", "data"),
        prevent_initial_call=True,
    )
    def record_donation(n_clicks, card_id, recipient, volunteer, mode, amount, notes, refresh):
        if not n_clicks:
            return (no_update,) * 7
        error, done = donation_outcome(card_id, volunteer, recipient, mode, amount, notes)
        if error:
            return (_error(error),) + (no_update,) * 6
        return None, (refresh or 0) + 1, done, "", None, "", "full"
