"""
csv_import.py — Bulk card import from plain comma-separated text.

Format: store,last4,amount,added_by,notes (header optional). There is no
quoting support; anything after the fourth comma is kept as notes.
"""
import base64
import logging

from giftcard_dashboard.ledger import find_duplicate
from giftcard_dashboard.validators import validate_csv_fields

logger = logging.getLogger(__name__)

ROW_VALID = "valid"
ROW_DUPLICATE = "duplicate"
ROW_ERROR = "error"

CSV_TEMPLATE = (
    "store,last4,amount,added_by,notes\n"
    "Walmart,1234,100.00,Sarah Johnson,Example card\n"
    "Target,5678,50.00,Mike Davis,"
)
TEMPLATE_FILENAME = "gift_card_import_template.csv"


class CSVUploadError(ValueError):
    """The uploaded file as a whole could not be read."""


def decode_upload(contents, filename):
    """Turn a dcc.Upload data URL into text. Raises CSVUploadError."""
    if not filename or not filename.lower().endswith(".csv"):
        raise CSVUploadError("Only .csv files can be imported")
    try:
        _content_type, content_string = contents.split(",", 1)
        decoded = base64.b64decode(content_string)
    except (ValueError, AttributeError) as e:
        raise CSVUploadError(f"Could not read upload: {e}") from e
    try:
        return decoded.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CSVUploadError("File is not valid UTF-8 text") from e


def parse_csv(text, existing_cards):
    """
    Split, validate and classify every data row.

    Duplicate status is checked against existing_cards only. A repeat of an
    earlier row in the same file is noted in repeat_of but stays "valid".
    """
    lines = (text or "").strip().splitlines()
    if lines and "store" in lines[0].lower():
        lines = lines[1:]

    rows = []
    seen = {}
    for line in lines:
        if not line.strip():
            continue
        parts = [p.strip() for p in line.split(",")]
        parts += [""] * (4 - len(parts))
        store, last4, amount, added_by = parts[:4]
        notes = ",".join(parts[4:]).strip()
        row_num = len(rows) + 1

        errors = validate_csv_fields(store, last4, amount, added_by)
        if errors:
            status = ROW_ERROR
        elif find_duplicate(store, last4, existing_cards):
            status = ROW_DUPLICATE
        else:
            status = ROW_VALID

        key = (store.lower(), last4)
        rows.append({
            "row_num": row_num,
            "store": store,
            "last4": last4,
            "amount": amount,
            "added_by": added_by,
            "notes": notes,
            "status": status,
            "errors": errors,
            "repeat_of": seen.get(key),
        })
        seen.setdefault(key, row_num)
    return rows


def count_statuses(rows):
    counts = {ROW_VALID: 0, ROW_DUPLICATE: 0, ROW_ERROR: 0}
    for row in rows:
        counts[row["status"]] += 1
    return counts


def rows_to_import(rows, include_duplicates=False):
    """Rows accepted by an import action. Error rows are never accepted."""
    accepted = {ROW_VALID, ROW_DUPLICATE} if include_duplicates else {ROW_VALID}
    return [r for r in rows if r["status"] in accepted]


def import_rows(store, rows, include_duplicates=False, added_date=None):
    """Append the accepted rows to the store. Returns the new cards."""
    chosen = rows_to_import(rows, include_duplicates)
    if not chosen:
        return []
    added = store.add_cards(chosen, added_date=added_date)
    logger.info("CSV import: %d of %d row(s) imported (duplicates %s)",
                len(added), len(rows), "included" if include_duplicates else "skipped")
    return added
