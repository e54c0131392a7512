"""
reports.py — Derived views over the card registry, ledger and donation log.

Everything here is a pure function of the records passed in; nothing is cached.
DataFrames are returned where a page renders a table or chart from them.
"""
import csv
from datetime import date, datetime

import pandas as pd

from giftcard_dashboard.ledger import STATUSES, STATUS_ACTIVE, TYPE_DONATION

# ── Store → category lookup ──────────────────────────────────────────────────
STORE_CATEGORIES = {
    "Walmart": "Grocery", "Target": "Grocery", "Kroger": "Grocery",
    "Costco": "Grocery", "Whole Foods": "Grocery", "Safeway": "Grocery",
    "Trader Joe's": "Grocery",
    "McDonald's": "Fast Food", "Starbucks": "Fast Food", "Subway": "Fast Food",
    "Chipotle": "Fast Food", "Panera Bread": "Fast Food", "Dunkin'": "Fast Food",
    "Taco Bell": "Fast Food", "Chick-fil-A": "Fast Food", "Olive Garden": "Fast Food",
    "Old Navy": "Clothing", "Gap": "Clothing", "TJ Maxx": "Clothing",
    "Kohl's": "Clothing", "Macy's": "Clothing",
    "Amazon": "Other", "CVS Pharmacy": "Other", "Best Buy": "Other",
    "Home Depot": "Other",
}
CATEGORY_NAMES = ["Grocery", "Fast Food", "Clothing", "Other"]
CATEGORIES = ["All"] + CATEGORY_NAMES

TIME_PERIODS = ["Last 3 months", "Last 30 days", "Last 7 days"]
ROWS_PER_PAGE_OPTIONS = [10, 20, 50]

BREAKDOWN_COLUMNS = ["store", "category", "count", "remaining", "redeemed", "donated"]
DONATION_COLUMNS = ["id", "date", "store", "amount", "volunteer", "recipient", "notes"]
EXPORT_HEADERS = ["Date", "Store", "Amount", "Volunteer", "Recipient", "Notes"]


def category_for(store):
    return STORE_CATEGORIES.get(store, "Other")


def period_cutoff(period, now=None):
    """Start of a named time window, counted back in calendar units from now."""
    now = pd.Timestamp(now or datetime.now())
    if period == "Last 7 days":
        return now - pd.Timedelta(days=7)
    if period == "Last 30 days":
        return now - pd.Timedelta(days=30)
    if period == "Last 3 months":
        return now - pd.DateOffset(months=3)
    return None


def _parse_dates(series):
    """ISO dates/timestamps → naive Timestamps (unparseable → NaT)."""
    parsed = pd.to_datetime(series, format="ISO8601", errors="coerce", utc=True)
    return parsed.dt.tz_localize(None)


# ══════════════════════════════════════════════════════════════════════════════
#  CARD AGGREGATES
# ══════════════════════════════════════════════════════════════════════════════

def card_kpis(cards):
    total_remaining = round(sum(c["remaining_balance"] for c in cards), 2)
    total_initial = round(sum(c["initial_balance"] for c in cards), 2)
    by_status = {}
    for status in STATUSES:
        n = sum(1 for c in cards if c["status"] == status)
        if n:
            by_status[status] = n
    return {
        "total": len(cards),
        "active": by_status.get(STATUS_ACTIVE, 0),
        "total_remaining": total_remaining,
        "total_initial": total_initial,
        "total_redeemed": round(total_initial - total_remaining, 2),
        "by_status": by_status,
    }


def store_breakdown(cards, transactions):
    """Per-store count / remaining / redeemed / donated, largest remaining first."""
    if not cards:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

    df = pd.DataFrame(cards)
    df["redeemed"] = df["initial_balance"] - df["remaining_balance"]
    grouped = df.groupby("store", sort=False).agg(
        count=("id", "count"),
        remaining=("remaining_balance", "sum"),
        redeemed=("redeemed", "sum"),
    ).reset_index()

    store_by_card = dict(zip(df["id"], df["store"]))
    donated = {}
    for txn in transactions:
        if txn["type"] != TYPE_DONATION:
            continue
        store = store_by_card.get(txn["card_id"])
        if store is not None:
            donated[store] = donated.get(store, 0.0) + txn["amount"]

    grouped["donated"] = grouped["store"].map(lambda s: donated.get(s, 0.0))
    grouped["category"] = grouped["store"].map(category_for)
    for col in ("remaining", "redeemed", "donated"):
        grouped[col] = grouped[col].astype(float).round(2)
    return (grouped[BREAKDOWN_COLUMNS]
            .sort_values("remaining", ascending=False, kind="stable")
            .reset_index(drop=True))


def filter_by_category(breakdown, category="All"):
    if category in (None, "", "All"):
        return breakdown
    return breakdown[breakdown["category"] == category].reset_index(drop=True)


def category_rollup(breakdown):
    """Sum the store breakdown per category."""
    if len(breakdown) == 0:
        return pd.DataFrame(columns=["category", "stores", "count", "remaining", "redeemed", "donated"])
    rolled = breakdown.groupby("category").agg(
        stores=("store", "count"),
        count=("count", "sum"),
        remaining=("remaining", "sum"),
        redeemed=("redeemed", "sum"),
        donated=("donated", "sum"),
    ).reset_index()
    for col in ("remaining", "redeemed", "donated"):
        rolled[col] = rolled[col].round(2)
    return rolled.sort_values("remaining", ascending=False, kind="stable").reset_index(drop=True)


def treemap_data(breakdown, category="All"):
    """Stores with money left, for a treemap sized by remaining balance."""
    source = filter_by_category(breakdown, category)
    return source[source["remaining"] > 0][["store", "category", "remaining", "redeemed"]].reset_index(drop=True)


def low_balance_cards(cards, threshold=20):
    low = [c for c in cards
           if c["status"] == STATUS_ACTIVE and 0 < c["remaining_balance"] < threshold]
    return sorted(low, key=lambda c: c["remaining_balance"])


def filter_cards(cards, store="", last4_prefix=""):
    """Redemption list filter: exact store, last4 starting with the typed digits."""
    out = []
    for card in cards:
        if store and card["store"] != store:
            continue
        if last4_prefix and not card["last4"].startswith(last4_prefix):
            continue
        out.append(card)
    return out


def paginate(df, page, rows_per_page):
    """Slice one page. Returns (page_df, page, total_pages) with page clamped."""
    rows_per_page = max(1, int(rows_per_page or ROWS_PER_PAGE_OPTIONS[0]))
    total_pages = max(1, -(-len(df) // rows_per_page))
    page = min(max(1, int(page or 1)), total_pages)
    start = (page - 1) * rows_per_page
    return df.iloc[start:start + rows_per_page], page, total_pages


# ══════════════════════════════════════════════════════════════════════════════
#  ACTIVITY
# ══════════════════════════════════════════════════════════════════════════════

def recent_transactions(transactions, cards, n=5):
    cards_by_id = {c["id"]: c for c in cards}
    newest = sorted(transactions, key=lambda t: t["date"], reverse=True)[:n]
    out = []
    for txn in newest:
        card = cards_by_id.get(txn["card_id"], {})
        out.append({**txn, "store": card.get("store", "Unknown"), "last4": card.get("last4", "")})
    return out


def recent_donations(donations, n=5):
    if not donations:
        return []
    df = pd.DataFrame(donations)
    df["_when"] = _parse_dates(df["date"])
    df = df.sort_values("_when", ascending=False, kind="stable").head(n)
    return df.drop(columns="_when").to_dict("records")


def donation_kpis(donations):
    """Donated-out totals for the dashboard strip."""
    recipients = {(d.get("recipient") or "").strip().lower() for d in donations}
    recipients.discard("")
    return {
        "count": len(donations),
        "total": round(sum(d["amount"] for d in donations), 2),
        "recipients": len(recipients),
    }


def activity_by_category(transactions, cards, period="Last 3 months", now=None):
    """Daily spend + donation totals per category inside a time window."""
    if not transactions:
        return pd.DataFrame(columns=CATEGORY_NAMES)
    store_by_card = {c["id"]: c["store"] for c in cards}
    df = pd.DataFrame(transactions)
    df["category"] = df["card_id"].map(lambda cid: category_for(store_by_card.get(cid, "")))
    df["day"] = _parse_dates(df["date"]).dt.normalize()
    cutoff = period_cutoff(period, now)
    if cutoff is not None:
        df = df[df["day"] >= cutoff.normalize()]
    df = df.dropna(subset=["day"])
    if len(df) == 0:
        return pd.DataFrame(columns=CATEGORY_NAMES)
    pivot = df.pivot_table(index="day", columns="category", values="amount",
                           aggfunc="sum", fill_value=0)
    return pivot.reindex(columns=CATEGORY_NAMES, fill_value=0).sort_index()


# ══════════════════════════════════════════════════════════════════════════════
#  DONATIONS REPORT
# ══════════════════════════════════════════════════════════════════════════════

def filter_donations(donations, period=None, start_date=None, end_date=None,
                     store=None, recipient=None, now=None):
    """Donation log rows matching every active filter, newest first."""
    if not donations:
        return pd.DataFrame(columns=DONATION_COLUMNS)
    df = pd.DataFrame(donations).reindex(columns=DONATION_COLUMNS)
    df["notes"] = df["notes"].fillna("")
    df["recipient"] = df["recipient"].fillna("")
    when = _parse_dates(df["date"])

    mask = pd.Series(True, index=df.index)
    cutoff = period_cutoff(period, now)
    if cutoff is not None:
        mask &= when >= cutoff
    if start_date:
        mask &= when >= pd.Timestamp(start_date)
    if end_date:
        # inclusive of the whole end day
        mask &= when < pd.Timestamp(end_date) + pd.Timedelta(days=1)
    if store:
        mask &= df["store"] == store
    if recipient:
        mask &= df["recipient"].str.contains(recipient, case=False, regex=False)

    out = df[mask].assign(_when=when[mask])
    out = out.sort_values("_when", ascending=False, kind="stable").drop(columns="_when")
    return out.reset_index(drop=True)


def donation_totals(filtered):
    return {
        "count": len(filtered),
        "total": round(float(filtered["amount"].sum()), 2) if len(filtered) else 0.0,
    }


def _export_amount(amount):
    text = f"{float(amount):.2f}".rstrip("0").rstrip(".")
    return f"${text}"


def export_donations_csv(filtered):
    """Quoted CSV text for the filtered donation log."""
    out = pd.DataFrame({
        "Date": filtered["date"],
        "Store": filtered["store"],
        "Amount": filtered["amount"].map(_export_amount),
        "Volunteer": filtered["volunteer"],
        "Recipient": filtered["recipient"],
        "Notes": filtered["notes"].fillna(""),
    }, columns=EXPORT_HEADERS)
    return out.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def export_filename(today=None):
    today = today or date.today()
    return f"donations-{today.isoformat()}.csv"
