"""Add Card page callbacks — form submit/confirm flow, live duplicate check, CSV import."""
import logging

from dash import html, dcc, Input, Output, State, callback_context, no_update
import dash_bootstrap_components as dbc

from giftcard_dashboard import csv_import
from giftcard_dashboard import data_state as ds
from giftcard_dashboard.ledger import LedgerError
from giftcard_dashboard.pages.add_card import FORM_FIELDS, existing_card_summary, csv_preview
from giftcard_dashboard.validators import validate_card_form

logger = logging.getLogger(__name__)

SHOW = {"display": "block"}
HIDE = {"display": "none"}

_FIELD_IDS = [f[1] for f in FORM_FIELDS]


def _panels(mode):
    """(form, confirm, success) panel styles for one of form/confirm/success."""
    return tuple(SHOW if mode == m else HIDE for m in ("form", "confirm", "success"))


def card_form_step(trigger, form, added_date=None, notes="", session_count=None):
    """
    Advance the single-entry form for one button press.

    ``trigger`` is the id of the pressed button and ``form`` the typed
    store/last4/amount/added_by values. Returns a dict with:
        mode           which panel to show: form, confirm or success
        errors         {field: message} from validation
        confirm        the existing card when a duplicate needs confirming
        card           the card committed by this step, if any
        session_count  cards added this session after this step
        status         ledger error message, if the commit was refused
        reset          True when the inputs should be blanked
    """
    step = {"mode": "form", "errors": {}, "confirm": None, "card": None,
            "session_count": session_count or 0, "status": None, "reset": False}

    if trigger in ("add-clear-btn", "add-another-btn"):
        step["reset"] = True
        return step
    if trigger == "add-back-btn":
        return step

    step["errors"] = validate_card_form(form)
    if step["errors"]:
        return step

    if trigger == "add-submit-btn":
        dup = ds.STORE.find_duplicate(form["store"], form["last4"].strip())
        if dup is not None:
            logger.info("Duplicate card on submit: %s ****%s", dup["store"], dup["last4"])
            step.update(mode="confirm", confirm=dup)
            return step

    try:
        card = ds.STORE.add_card(form["store"], form["last4"], form["amount"], form["added_by"],
                                 added_date=added_date or None, notes=notes or "")
    except LedgerError as e:
        logger.warning("Card rejected: %s", e)
        step["status"] = str(e)
        return step

    step.update(mode="success", card=card, session_count=step["session_count"] + 1)
    return step


def import_upload(upload, include_duplicates=False):
    """
    Import a stored upload into ds.STORE.

    Rows are classified again against the registry as it is now, so a card
    added since the preview is treated as a duplicate. Returns (rows, added).
    """
    rows = csv_import.parse_csv(upload["text"], ds.STORE.cards)
    added = csv_import.import_rows(ds.STORE, rows, include_duplicates=include_duplicates)
    return rows, added


def _success_body(card):
    return html.Div([
        html.Span(card["store"], style={"fontWeight": "600"}),
        html.Span(f" ···· {card['last4']} · "),
        html.Span(ds.money(card["initial_balance"]), style={"fontFamily": "monospace"}),
    ])


def register_callbacks(app):
    # ── Live duplicate warning ────────────────────────────────────────────
    @app.callback(
        Output("add-dup-warning", "children"),
        Input("add-store", "value"),
        Input("add-last4", "value"),
    )
    def live_duplicate_warning(store, last4):
        if not (store or "").strip() or not last4 or len(last4.strip()) != 4:
            return None
        dup = ds.STORE.find_duplicate(store, last4.strip())
        if dup is None:
            return None
        return dbc.Alert(
            f"A {dup['store']} card ending in {dup['last4']} was already added "
            f"on {dup.get('added_date') or 'an unknown date'} by {dup.get('added_by') or 'unknown'} "
            f"({ds.money(dup['remaining_balance'])} remaining).",
            color="warning", className="py-2", style={"fontSize": "12px"},
        )

    # ── Submit / confirm / reset state machine ────────────────────────────
    @app.callback(
        Output("add-form-panel", "style"),
        Output("add-confirm-panel", "style"),
        Output("add-success-panel", "style"),
        Output("add-confirm-body", "children"),
        Output("add-success-body", "children"),
        Output("add-session-summary", "children"),
        Output("add-session-count", "data"),
        Output("add-status", "children"),
        *[Output(fid, "invalid") for fid in _FIELD_IDS],
        *[Output(f"{fid}-feedback", "children") for fid in _FIELD_IDS],
        *[Output(fid, "value") for fid in _FIELD_IDS + ["add-notes"]],
        Input("add-submit-btn", "n_clicks"),
        Input("add-confirm-btn", "n_clicks"),
        Input("add-back-btn", "n_clicks"),
        Input("add-another-btn", "n_clicks"),
        Input("add-clear-btn", "n_clicks"),
        *[State(fid, "value") for fid in _FIELD_IDS],
        State("add-date", "value"),
        State("add-notes", "value"),
        State("add-session-count", "data"),
        prevent_initial_call=True,
    )
    def handle_card_form(*args):
        n_fields = len(_FIELD_IDS)
        field_values = args[5:5 + n_fields]
        added_date, notes, session_count = args[5 + n_fields:]
        form = {f[0]: v for f, v in zip(FORM_FIELDS, field_values)}
        step = card_form_step(callback_context.triggered_id, form, added_date, notes, session_count)

        card = step["card"]
        errors = step["errors"]
        if step["reset"]:
            values = [""] * (n_fields + 1)
        else:
            values = [no_update] * (n_fields + 1)
        return (
            *_panels(step["mode"]),
            existing_card_summary(step["confirm"]) if step["confirm"] else None,
            _success_body(card) if card else no_update,
            f"{step['session_count']} card{'s' if step['session_count'] != 1 else ''} added this session"
            if card else no_update,
            step["session_count"] if card else no_update,
            dbc.Alert(step["status"], color="danger") if step["status"] else None,
            *[f[0] in errors for f in FORM_FIELDS],
            *[errors.get(f[0]) for f in FORM_FIELDS],
            *values,
        )

    # ── CSV template download ─────────────────────────────────────────────
    @app.callback(
        Output("csv-template-download", "data"),
        Input("csv-template-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def download_template(n_clicks):
        if not n_clicks:
            return no_update
        return dcc.send_string(csv_import.CSV_TEMPLATE, csv_import.TEMPLATE_FILENAME)

    # ── CSV upload → parse ────────────────────────────────────────────────
    @app.callback(
        Output("csv-upload-data", "data"),
        Output("csv-status", "children"),
        Input("csv-upload", "contents"),
        State("csv-upload", "filename"),
        prevent_initial_call=True,
    )
    def upload_csv(contents, filename):
        if contents is None:
            return no_update, no_update
        try:
            text = csv_import.decode_upload(contents, filename)
        except csv_import.CSVUploadError as e:
            logger.warning("CSV upload rejected (%s): %s", filename, e)
            return None, dbc.Alert(str(e), color="danger")

        rows = csv_import.parse_csv(text, ds.STORE.cards)
        if not rows:
            logger.warning("CSV upload %s has no data rows", filename)
            return None, dbc.Alert(f"{filename} has no data rows", color="danger")

        counts = csv_import.count_statuses(rows)
        logger.info("CSV upload %s: %d valid, %d duplicate, %d error", filename,
                    counts["valid"], counts["duplicate"], counts["error"])
        return {"filename": filename, "text": text}, dbc.Alert(
            f"{filename}: {len(rows)} row(s), {counts['valid']} valid, "
            f"{counts['duplicate']} duplicate, {counts['error']} with errors",
            color="info",
        )

    # ── Preview table + import button state ───────────────────────────────
    @app.callback(
        Output("csv-preview", "children"),
        Output("csv-import-valid-btn", "disabled"),
        Output("csv-import-all-btn", "disabled"),
        Input("csv-upload-data", "data"),
    )
    def render_preview(upload):
        if not upload:
            return None, True, True
        rows = csv_import.parse_csv(upload["text"], ds.STORE.cards)
        counts = csv_import.count_statuses(rows)
        return (csv_preview(rows), counts["valid"] == 0,
                counts["valid"] + counts["duplicate"] == 0)

    # ── Import actions ────────────────────────────────────────────────────
    @app.callback(
        Output("csv-import-result", "children"),
        Output("csv-upload-data", "data", allow_duplicate=True),
        Output("csv-status", "children", allow_duplicate=True),
        Output("csv-upload", "contents"),
        Input("csv-import-valid-btn", "n_clicks"),
        Input("csv-import-all-btn", "n_clicks"),
        State("csv-upload-data", "data"),
        prevent_initial_call=True,
    )
    def import_csv(_valid_clicks, _all_clicks, upload):
        if not upload:
            return no_update, no_update, no_update, no_update
        include_duplicates = callback_context.triggered_id == "csv-import-all-btn"
        rows, added = import_upload(upload, include_duplicates=include_duplicates)
        skipped = len(rows) - len(added)
        if not added:
            return dbc.Alert("Nothing to import", color="warning"), no_update, no_update, no_update
        # clearing contents lets the same file be uploaded again
        return dbc.Alert([
            html.Span(f"Imported {len(added)} card(s) from {upload['filename']}"),
            html.Span(f", skipped {skipped}" if skipped else ""),
            html.Span(". "),
            dcc.Link("View cards", href="/redemption"),
        ], color="success"), None, None, None
