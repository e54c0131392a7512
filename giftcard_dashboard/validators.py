"""
giftcard_dashboard/validators.py
--------------------------------
Pure-Python validation for gift card intake.
Form validators return a dict of field -> error_message.
An empty dict means all fields are valid.
"""
import math
import re

LAST4_RE = re.compile(r"[0-9]{4}")
AMOUNT_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def parse_amount(raw):
    """
    Parse a user-entered dollar amount.

    Accepts numbers or plain decimal strings like "25", "25.5", ".75".
    Currency symbols, thousands separators and exponents are rejected.
    Returns the value rounded to cents, or None when it is not a finite number.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not AMOUNT_RE.fullmatch(text):
            return None
        value = float(text)
    if math.isnan(value) or math.isinf(value):
        return None
    return round(value, 2)


def money(val):
    """Format a number as $X,XXX.XX."""
    if val < 0:
        return f"-${abs(val):,.2f}"
    return f"${val:,.2f}"


def is_valid_last4(last4):
    return bool(LAST4_RE.fullmatch(last4 or ""))


def validate_card_form(form_data: dict) -> dict:
    """
    Validate raw single-entry form data for a new gift card.

    Args:
        form_data: dict with keys store, last4, amount, added_by
                   (values as typed; None is treated as empty)

    Returns:
        dict of {field_name: error_message} — empty if all valid.
    """
    errors = {}

    # ── store ─────────────────────────────────────────────────────
    store = (form_data.get("store") or "").strip()
    if not store:
        errors["store"] = "Store is required"

    # ── last4 ─────────────────────────────────────────────────────
    last4 = (form_data.get("last4") or "").strip()
    if not is_valid_last4(last4):
        errors["last4"] = "Must be exactly 4 digits"

    # ── amount ────────────────────────────────────────────────────
    amount = parse_amount(form_data.get("amount"))
    if amount is None or amount <= 0:
        errors["amount"] = "Enter a valid dollar amount"

    # ── added_by ──────────────────────────────────────────────────
    added_by = (form_data.get("added_by") or "").strip()
    if not added_by:
        errors["added_by"] = "Added by is required"

    return errors


def validate_csv_fields(store, last4, amount, added_by) -> list:
    """Row-level version of validate_card_form, returning messages in column order."""
    errors = []
    if not store:
        errors.append("Store missing")
    if not is_valid_last4(last4):
        errors.append("Last 4 must be 4 digits")
    parsed = parse_amount(amount) if amount else None
    if parsed is None or parsed <= 0:
        errors.append("Invalid amount")
    if not added_by:
        errors.append("Added by missing")
    return errors
