"""
Theme constants: colors, chart layout, toast placement.
Import from here instead of hardcoding colors anywhere.
Page layout (sidebar, content margin) lives in assets/style.css.
"""

# ── Color Palette ────────────────────────────────────────────────────────────
GREEN = "#2ecc71"
RED = "#e74c3c"
BLUE = "#3498db"
ORANGE = "#f39c12"
PURPLE = "#9b59b6"
TEAL = "#1abc9c"
YELLOW = "#f1c40f"
WHITE = "#ffffff"
GRAY = "#aaaaaa"
DARKGRAY = "#666666"
CYAN = "#00d4ff"

# ── Store category colors (treemap, activity chart) ─────────────────────────
CATEGORY_COLORS = {
    "Grocery": "#22c55e",
    "Fast Food": "#f97316",
    "Clothing": "#8b5cf6",
    "Other": "#3b82f6",
}

# ── Card status colors ───────────────────────────────────────────────────────
STATUS_COLORS = {
    "Active": GREEN,
    "Used": GRAY,
    "Donated": BLUE,
    "Expired": YELLOW,
}

# ── CSV row status colors ────────────────────────────────────────────────────
ROW_STATUS_COLORS = {
    "valid": GREEN,
    "duplicate": ORANGE,
    "error": RED,
}

# ── Transaction type colors ─────────────────────────────────────────────────
TXN_COLORS = {
    "spend": ORANGE,
    "donation": GREEN,
}

# ── Plotly Chart Layout ──────────────────────────────────────────────────────
CHART_LAYOUT = dict(
    template="plotly_dark",
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font={"color": WHITE},
    margin=dict(t=50, b=30, l=60, r=20),
)


# ── Shared toast placement ──────────────────────────────────────────────────
TOAST_STYLE = {"position": "fixed", "top": 20, "right": 20, "zIndex": 9999}
