"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from giftcard_dashboard.theme import *


def section(title, children, color=ORANGE, subtitle=None, action=None):
    """Titled section card with colored top border and an optional header action."""
    heading = [html.Span(title)]
    if subtitle:
        heading.append(html.Div(subtitle, className="section-subtitle"))
    header = [html.Div(heading)]
    if action is not None:
        header.append(html.Div(action, className="ms-auto"))
    return dbc.Card([
        dbc.CardHeader(header, className="section-header",
                       style={"color": color, "borderBottom": f"2px solid {color}"}),
        dbc.CardBody(children, className="section-body"),
    ], className="mb-3")


def chart_context(description, metrics=None):
    """Compact context block displayed above a chart."""
    children = [
        html.P(description, style={"color": GRAY, "margin": "0 0 6px 0", "fontSize": "12px"}),
    ]
    if metrics:
        metric_spans = []
        for label, value, color in metrics:
            metric_spans.append(html.Span([
                html.Span(f"{label}: ", style={"color": GRAY, "fontSize": "11px"}),
                html.Span(value, style={"color": color, "fontFamily": "monospace", "fontWeight": "bold"}),
            ], style={"marginRight": "16px", "whiteSpace": "nowrap"}))
        children.append(html.Div(metric_spans, style={"display": "flex", "flexWrap": "wrap"}))
    return html.Div(children, style={"borderLeft": f"3px solid {CYAN}", "paddingLeft": "10px",
                                     "marginBottom": "8px"})


def make_chart(fig, height=360, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def status_badge(status, colors=STATUS_COLORS):
    """Pill badge for a card status, CSV row status or transaction type."""
    color = colors.get(status, GRAY)
    return html.Span(status.capitalize() if status.islower() else status, style={
        "color": color, "backgroundColor": f"{color}22", "border": f"1px solid {color}66",
        "borderRadius": "12px", "padding": "2px 10px", "fontSize": "11px", "fontWeight": "600",
        "whiteSpace": "nowrap",
    })


def empty_state(message):
    return html.P(message, style={"color": GRAY, "textAlign": "center", "padding": "30px"})


def toast(message, header, icon="success"):
    return dbc.Toast(
        message,
        header=header,
        icon=icon,
        duration=3000,
        style=TOAST_STYLE,
    )
