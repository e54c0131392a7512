"""Overview page — KPI strip, value treemap, activity chart, low balances, recent activity."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from giftcard_dashboard.theme import *
from giftcard_dashboard import config, reports
from giftcard_dashboard.components.kpi import kpi_pill
from giftcard_dashboard.components.cards import section, chart_context, make_chart, status_badge, empty_state
from giftcard_dashboard import data_state as ds


QUICK_ACTIONS = [
    ("+", "Add Gift Card", "Register a new card or bulk import via CSV", "/add-card", CYAN),
    ("$", "Record Spend", "Log a purchase made with a gift card", "/redemption", ORANGE),
    ("♥", "Record Donation", "Give a card to a recipient in need", "/redemption", BLUE),
    ("▦", "View Inventory", "Browse all cards by store and category", "/inventory", PURPLE),
]


def build_treemap(breakdown, category="All", height=260):
    """Store tiles sized by remaining balance, colored by category."""
    data = reports.treemap_data(breakdown, category)
    fig = go.Figure()
    if len(data):
        fig.add_trace(go.Treemap(
            labels=list(data["store"]),
            parents=[""] * len(data),
            values=list(data["remaining"]),
            customdata=list(zip(data["redeemed"], data["category"])),
            marker=dict(colors=[CATEGORY_COLORS.get(c, BLUE) for c in data["category"]]),
            texttemplate="<b>%{label}</b><br>$%{value:,.2f}",
            hovertemplate=("<b>%{label}</b><br>Remaining: $%{value:,.2f}"
                           "<br>Redeemed: $%{customdata[0]:,.2f}<br>%{customdata[1]}<extra></extra>"),
        ))
    else:
        fig.add_annotation(text="No remaining balances", showarrow=False,
                           font=dict(color=GRAY, size=14))
    make_chart(fig, height, legend_h=False)
    fig.update_layout(margin=dict(t=10, b=10, l=10, r=10))
    return fig


def build_activity_figure(period="Last 3 months"):
    """Stacked daily spend + donation totals per category."""
    pivot = reports.activity_by_category(ds.STORE.transactions, ds.STORE.cards, period)
    fig = go.Figure()
    for cat in reports.CATEGORY_NAMES:
        if cat not in pivot.columns:
            continue
        color = CATEGORY_COLORS[cat]
        fig.add_trace(go.Scatter(
            x=list(pivot.index), y=list(pivot[cat]), name=cat,
            mode="lines", stackgroup="one", line=dict(color=color, width=1.5),
            hovertemplate=f"{cat}: $%{{y:,.2f}}<extra></extra>",
        ))
    make_chart(fig, 300)
    fig.update_layout(yaxis_tickprefix="$", hovermode="x unified")
    if len(pivot) == 0:
        fig.add_annotation(text=f"No activity in the {period.lower()}", showarrow=False,
                           font=dict(color=GRAY, size=14))
    return fig


def _category_legend():
    return html.Div([
        html.Span([
            html.Span("● ", style={"color": color}),
            html.Span(cat, style={"color": GRAY, "fontSize": "12px"}),
        ], style={"marginRight": "14px"})
        for cat, color in CATEGORY_COLORS.items()
    ], style={"textAlign": "center", "marginTop": "6px"})


def _quick_actions():
    cols = []
    for icon, title, desc, href, color in QUICK_ACTIONS:
        cols.append(dbc.Col(dcc.Link(dbc.Card(dbc.CardBody([
            html.Div(icon, style={"color": color, "fontSize": "20px", "fontWeight": "bold"}),
            html.Div(title, style={"color": WHITE, "fontWeight": "600", "fontSize": "14px"}),
            html.Div(desc, style={"color": GRAY, "fontSize": "11px"}),
        ]), className="quick-action h-100"), href=href, style={"textDecoration": "none"}),
            md=3, className="mb-2"))
    return dbc.Row(cols)


def _low_balance_alert():
    threshold = config.LOW_BALANCE_THRESHOLD
    low = reports.low_balance_cards(ds.STORE.cards, threshold)
    if not low:
        return None
    chips = [
        html.Span([
            html.Span(c["store"], style={"fontWeight": "600"}),
            html.Span(f" ···· {c['last4']} ", style={"color": GRAY}),
            html.Span(ds.money(c["remaining_balance"]), style={"color": YELLOW, "fontWeight": "bold"}),
        ], className="low-balance-chip")
        for c in low
    ]
    plural = "s" if len(low) != 1 else ""
    return dbc.Alert([
        html.H6(f"{len(low)} card{plural} running low", style={"fontWeight": "bold"}),
        html.P(f"These active cards have less than {ds.money(threshold)} remaining. "
               "Consider using or replacing them soon.", style={"fontSize": "12px"}),
        html.Div(chips, style={"display": "flex", "flexWrap": "wrap", "gap": "8px"}),
    ], color="warning", className="mb-3")


def _recent_transactions():
    recent = reports.recent_transactions(ds.STORE.transactions, ds.STORE.cards)
    if not recent:
        return empty_state("No transactions yet.")
    rows = []
    for t in recent:
        rows.append(html.Div([
            html.Div([
                html.Div(f"{t['store']} ···· {t['last4']}",
                         style={"color": WHITE, "fontSize": "13px"}),
                html.Div(f"{t['volunteer']} · {t['date'][:10]}",
                         style={"color": DARKGRAY, "fontSize": "11px"}),
            ]),
            html.Div([
                status_badge(t["type"], TXN_COLORS),
                html.Span(f" -{ds.money(t['amount'])}",
                          style={"fontFamily": "monospace", "marginLeft": "8px"}),
            ], className="ms-auto"),
        ], className="activity-row", style={"display": "flex", "alignItems": "center",
                                            "padding": "6px 0", "borderBottom": "1px solid #ffffff10"}))
    return html.Div(rows)


def _recent_donations():
    recent = reports.recent_donations(ds.STORE.donation_log())
    if not recent:
        return empty_state("No donations yet.")
    rows = []
    for d in recent:
        rows.append(html.Div([
            html.Div([
                html.Div(d["recipient"] or "—", style={"color": WHITE, "fontSize": "13px"}),
                html.Div(f"{d['store']} · {d['volunteer']} · {str(d['date'])[:10]}",
                         style={"color": DARKGRAY, "fontSize": "11px"}),
            ]),
            html.Span(ds.money(d["amount"]), className="ms-auto",
                      style={"color": GREEN, "fontFamily": "monospace"}),
        ], className="activity-row", style={"display": "flex", "alignItems": "center",
                                            "padding": "6px 0", "borderBottom": "1px solid #ffffff10"}))
    return html.Div(rows)


def layout():
    """Build the Overview page."""
    kpis = reports.card_kpis(ds.STORE.cards)
    given = reports.donation_kpis(ds.STORE.donation_log())
    breakdown = reports.store_breakdown(ds.STORE.cards, ds.STORE.transactions)

    return html.Div([
        html.P("Overview of gift card inventory, spending, and community impact.",
               style={"color": GRAY, "fontSize": "13px", "marginBottom": "16px"}),

        # KPI strip
        html.Div([
            kpi_pill("#", "Active Cards", str(kpis["active"]), GREEN,
                     tags=[f"{n} {status}" for status, n in kpis["by_status"].items()]),
            kpi_pill("$", "Available Balance", ds.money(kpis["total_remaining"]), TEAL,
                     "Across all cards"),
            kpi_pill("♥", "Total Donated Out", ds.money(given["total"]), BLUE,
                     f"{given['count']} gift cards distributed"),
            kpi_pill("☺", "Recipients Helped", str(given["recipients"]), PURPLE,
                     "Individuals and families"),
        ], style={"display": "flex", "gap": "12px", "flexWrap": "wrap", "marginBottom": "16px"}),

        section("Value Distribution", [
            dcc.Graph(figure=build_treemap(breakdown), config={"displayModeBar": False},
                      id="overview-treemap"),
            _category_legend(),
        ], CYAN, subtitle="Tile size = remaining balance · hover for details"),

        html.Div("QUICK ACTIONS", style={"color": GRAY, "fontSize": "11px", "fontWeight": "600",
                                         "letterSpacing": "1.5px", "marginBottom": "8px"}),
        _quick_actions(),

        _low_balance_alert(),

        section("Card Activity", [
            chart_context("Daily spend and donation totals by store category.", metrics=[
                ("Redeemed to date", ds.money(kpis["total_redeemed"]), ORANGE),
                ("Received", ds.money(kpis["total_initial"]), GREEN),
            ]),
            dcc.Graph(id="overview-activity-chart", figure=build_activity_figure(),
                      config={"displayModeBar": False}),
        ], ORANGE, action=dbc.RadioItems(
            id="overview-activity-period",
            options=[{"label": p, "value": p} for p in reports.TIME_PERIODS],
            value=reports.TIME_PERIODS[0],
            inline=True, className="period-tabs",
            inputClassName="btn-check",
            labelClassName="btn btn-outline-secondary btn-sm",
            labelCheckedClassName="active",
        )),

        dbc.Row([
            dbc.Col(section("Recent Transactions", _recent_transactions(), ORANGE,
                            subtitle="Latest card activity"), md=6),
            dbc.Col(section("Recent Donations Given", _recent_donations(), GREEN,
                            subtitle="Gift cards distributed to the community"), md=6),
        ]),
    ])
