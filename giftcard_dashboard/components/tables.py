"""Reusable table builders."""
from dash import html
import dash_bootstrap_components as dbc
from giftcard_dashboard.theme import *
from giftcard_dashboard.components.cards import status_badge
from giftcard_dashboard.validators import money


def balance_bar(remaining, initial):
    """Remaining-balance gauge: 8px bar, green/orange/red by percentage left."""
    if initial <= 0:
        return html.Div(style={"width": "80px", "display": "inline-block"})
    pct = max(0, min(100, (remaining / initial) * 100))
    color = GREEN if pct > 50 else (ORANGE if pct > 20 else RED)
    return html.Div([
        html.Div(style={"width": f"{max(pct, 4) if pct > 0 else 0}%", "height": "8px",
                         "background": f"linear-gradient(90deg, {color}88, {color})",
                         "borderRadius": "4px",
                         "transition": "width 0.3s ease"}),
    ], style={"width": "80px", "height": "8px", "backgroundColor": "#0d0d1a",
              "borderRadius": "4px", "display": "inline-block", "verticalAlign": "middle",
              "overflow": "hidden"})


def simple_table(headers, rows, right_align=()):
    """Striped dbc table from header labels and rows of cell values/components."""
    return dbc.Table([
        html.Thead(html.Tr([
            html.Th(h, style={"textAlign": "right"} if i in right_align else None)
            for i, h in enumerate(headers)
        ])),
        html.Tbody([
            html.Tr([
                html.Td(cell, style={"textAlign": "right", "fontFamily": "monospace"}
                        if i in right_align else None)
                for i, cell in enumerate(row)
            ])
            for row in rows
        ]),
    ], striped=True, hover=True, size="sm", className="mb-0")


def transaction_history_table(txns):
    """Per-card ledger: newest first, amounts shown as deductions."""
    rows = []
    for t in txns:
        rows.append([
            t["date"].replace("T", " ")[:16],
            status_badge(t["type"], TXN_COLORS),
            f"-{money(t['amount'])}",
            t["volunteer"],
            t.get("recipient") or "—",
            t.get("notes") or "—",
        ])
    return simple_table(["Date & Time", "Type", "Amount", "Volunteer", "Recipient", "Notes"],
                        rows, right_align=(2,))
