"""Add Card page — single-entry form with duplicate confirmation, CSV bulk import."""
from datetime import date

from dash import html, dcc
import dash_bootstrap_components as dbc

from giftcard_dashboard.theme import *
from giftcard_dashboard.components.cards import section, status_badge
from giftcard_dashboard.components.tables import simple_table
from giftcard_dashboard import data_state as ds

# (field, input id, label, placeholder, input type, datalist id)
FORM_FIELDS = [
    ("store", "add-store", "Store", "e.g. Walmart", "text", "store-options"),
    ("last4", "add-last4", "Last 4 Digits", "1234", "text", None),
    ("amount", "add-amount", "Amount ($)", "0.00", "text", None),
    ("added_by", "add-added-by", "Added By", "Volunteer name", "text", "volunteer-options"),
]


def _field(field, input_id, label, placeholder, input_type, list_id):
    kwargs = {"list": list_id} if list_id else {}
    return html.Div([
        dbc.Label(label, html_for=input_id, style={"color": GRAY, "fontSize": "12px"}),
        dbc.Input(id=input_id, type=input_type, placeholder=placeholder,
                  maxLength=4 if field == "last4" else None, **kwargs),
        dbc.FormFeedback(id=f"{input_id}-feedback", type="invalid"),
    ], className="mb-3")


def _form_panel():
    fields = [_field(*f) for f in FORM_FIELDS]
    return html.Div([
        html.Datalist(id="store-options", children=[html.Option(value=s) for s in ds.store_names()]),
        html.Datalist(id="volunteer-options", children=[html.Option(value=v) for v in ds.VOLUNTEERS]),
        dbc.Row([
            dbc.Col(fields[0], md=6),
            dbc.Col(fields[1], md=6),
        ]),
        dbc.Row([
            dbc.Col(fields[2], md=6),
            dbc.Col(html.Div([
                dbc.Label("Date Added", html_for="add-date", style={"color": GRAY, "fontSize": "12px"}),
                dbc.Input(id="add-date", type="date", value=date.today().isoformat()),
            ], className="mb-3"), md=6),
        ]),
        dbc.Row([
            dbc.Col(fields[3], md=6),
            dbc.Col(html.Div([
                dbc.Label("Notes (optional)", html_for="add-notes", style={"color": GRAY, "fontSize": "12px"}),
                dbc.Input(id="add-notes", placeholder="e.g. Donated at holiday drive"),
            ], className="mb-3"), md=6),
        ]),
        html.Div(id="add-dup-warning"),
        html.Div(id="add-status"),
        html.Div([
            dbc.Button("Add Gift Card", id="add-submit-btn", color="success"),
            dbc.Button("Clear", id="add-clear-btn", color="secondary", outline=True, className="ms-2"),
        ]),
    ], id="add-form-panel")


def _confirm_panel():
    return html.Div([
        dbc.Alert([
            html.H6("Possible duplicate card", style={"fontWeight": "bold"}),
            html.P("A card with this store and last 4 digits is already registered.",
                   style={"fontSize": "12px"}),
            html.Div(id="add-confirm-body"),
        ], color="warning"),
        dbc.Button("Add Anyway", id="add-confirm-btn", color="warning"),
        dbc.Button("Go Back & Edit", id="add-back-btn", color="secondary", outline=True, className="ms-2"),
    ], id="add-confirm-panel", style={"display": "none"})


def _success_panel():
    return html.Div([
        dbc.Alert([
            html.H5("Gift card added!", style={"fontWeight": "bold"}),
            html.Div(id="add-success-body"),
            html.Div(id="add-session-summary", style={"fontSize": "12px", "marginTop": "6px"}),
        ], color="success"),
        dbc.Button("Add Another Card", id="add-another-btn", color="success"),
        dcc.Link(dbc.Button("View Cards", color="secondary", outline=True, className="ms-2"),
                 href="/redemption"),
    ], id="add-success-panel", style={"display": "none"})


def existing_card_summary(card):
    """Details of the already-registered card shown in the duplicate confirmation."""
    return simple_table(
        ["Store", "Card", "Added", "Added By", "Remaining"],
        [[card["store"], f"···· {card['last4']}", card.get("added_date") or "—",
          card.get("added_by") or "—", ds.money(card["remaining_balance"])]],
        right_align=(4,),
    )


def csv_preview(rows):
    """Per-row classification table for an uploaded CSV."""
    table_rows = []
    for r in rows:
        notes = list(r["errors"])
        if r["repeat_of"]:
            notes.append(f"Repeat of row {r['repeat_of']}")
        table_rows.append([
            r["row_num"],
            status_badge(r["status"], ROW_STATUS_COLORS),
            r["store"] or "—",
            r["last4"] or "—",
            r["amount"] or "—",
            r["added_by"] or "—",
            html.Span("; ".join(notes), style={"color": RED if r["errors"] else GRAY,
                                               "fontSize": "12px"}),
        ])
    return simple_table(["#", "Status", "Store", "Last 4", "Amount", "Added By", "Notes"], table_rows)


def _csv_panel():
    return html.Div([
        html.P("Columns: store, last4, amount, added_by, notes. The header row is optional.",
               style={"color": GRAY, "fontSize": "12px"}),
        dbc.Button("Download Template", id="csv-template-btn", color="secondary",
                   outline=True, size="sm", className="mb-3"),
        dcc.Download(id="csv-template-download"),
        dcc.Upload(
            id="csv-upload",
            children=html.Div([
                html.Span("Drag & Drop or "),
                html.A("Click to Browse", style={"color": CYAN, "textDecoration": "underline"}),
            ], style={"color": GRAY, "fontSize": "13px"}),
            style={
                "width": "100%", "borderWidth": "2px", "borderStyle": "dashed",
                "borderColor": f"{CYAN}44", "borderRadius": "10px",
                "textAlign": "center", "padding": "20px",
                "cursor": "pointer",
            },
            accept=".csv",
            className="upload-zone mb-3",
        ),
        dcc.Store(id="csv-upload-data"),
        html.Div(id="csv-status"),
        html.Div(id="csv-preview"),
        html.Div([
            dbc.Button("Import Valid Only", id="csv-import-valid-btn", color="success", disabled=True),
            dbc.Button("Import Valid + Duplicates", id="csv-import-all-btn", color="warning",
                       outline=True, disabled=True, className="ms-2"),
        ], className="mt-3"),
        html.Div(id="csv-import-result", className="mt-3"),
    ])


def layout():
    """Build the Add Card page."""
    return html.Div([
        html.P("Register a new gift card, or bulk import a batch from a CSV file.",
               style={"color": GRAY, "fontSize": "13px", "marginBottom": "16px"}),
        dcc.Store(id="add-session-count", data=0, storage_type="session"),
        dbc.Tabs([
            dbc.Tab(section("Single Card", [
                _form_panel(),
                _confirm_panel(),
                _success_panel(),
            ], GREEN), label="Single Entry", tab_id="single"),
            dbc.Tab(section("Bulk Import", _csv_panel(), CYAN), label="CSV Import", tab_id="csv"),
        ], active_tab="single", className="mb-3"),
    ])
