"""KPI pills and stat cards. Static styling is in assets/style.css (.kpi-*)."""
from dash import html
import dash_bootstrap_components as dbc


def icon_badge(text, color):
    """Round icon in the KPI accent color."""
    return html.Div(text, className="kpi-icon", style={
        "background": f"linear-gradient(135deg, {color}, {color}88)",
        "boxShadow": f"0 3px 10px {color}44",
    })


def kpi_pill(icon, label, value, color, subtitle="", tags=None):
    """Dashboard headline metric.

    ``tags`` are short strings (e.g. "3 Used") rendered as grey badges under
    the value, used for the status breakdown on the Active Cards pill.
    """
    lines = [
        html.Div(label, className="kpi-label"),
        html.Div(value, className="kpi-pill-value", style={"textShadow": f"0 0 12px {color}33"}),
    ]
    if subtitle:
        lines.append(html.Div(subtitle, className="kpi-subtitle"))
    if tags:
        lines.append(html.Div([dbc.Badge(t, color="secondary", className="me-1 kpi-tag") for t in tags],
                              className="mt-1"))
    return dbc.Card(
        dbc.CardBody([icon_badge(icon, color), html.Div(lines, className="kpi-pill-text")],
                     className="kpi-pill-body"),
        className="kpi-pill",
        style={"borderLeft": f"4px solid {color}"},
    )


def kpi_card(label, value, color, subtitle=""):
    """Centered stat card for the per-page stat strips."""
    body = [
        html.Div(label, className="kpi-label"),
        html.Div(value, className="kpi-value", style={"color": color}),
    ]
    if subtitle:
        body.append(html.Div(subtitle, className="kpi-subtitle"))
    return dbc.Card(dbc.CardBody(body, className="text-center"),
                    className="kpi-card-top", style={"borderTop": f"3px solid {color}"})
