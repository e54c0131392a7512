import base64

import pytest

from giftcard_dashboard import csv_import
from giftcard_dashboard.csv_import import (
    CSVUploadError, count_statuses, decode_upload, import_rows, parse_csv, rows_to_import,
)

EXAMPLE_ROW = "Walmart,1234,100.00,Sarah Johnson,Example card"


def _data_url(text, encoding="utf-8"):
    return "data:text/csv;base64," + base64.b64encode(text.encode(encoding)).decode()


# ── decode_upload ─────────────────────────────────────────────────

def test_decode_upload_returns_text():
    assert decode_upload(_data_url("store,last4\n"), "cards.CSV") == "store,last4\n"


def test_decode_upload_strips_utf8_bom():
    assert decode_upload(_data_url("\ufeffstore\n"), "cards.csv") == "store\n"


def test_decode_upload_rejects_other_extensions():
    with pytest.raises(CSVUploadError, match="Only .csv files"):
        decode_upload(_data_url("x"), "cards.xlsx")


def test_decode_upload_rejects_non_utf8():
    raw = "data:text/csv;base64," + base64.b64encode(b"\xff\xfe\xfa").decode()
    with pytest.raises(CSVUploadError, match="UTF-8"):
        decode_upload(raw, "cards.csv")


def test_decode_upload_rejects_malformed_payload():
    with pytest.raises(CSVUploadError):
        decode_upload("no-comma-here", "cards.csv")


# ── parse_csv ─────────────────────────────────────────────────────

def test_single_example_row_is_valid():
    rows = parse_csv(EXAMPLE_ROW, [])
    assert len(rows) == 1
    row = rows[0]
    assert row["status"] == "valid"
    assert row["row_num"] == 1
    assert (row["store"], row["last4"], row["amount"], row["added_by"], row["notes"]) == (
        "Walmart", "1234", "100.00", "Sarah Johnson", "Example card")
    assert row["repeat_of"] is None


def test_repeat_within_batch_stays_valid_and_notes_first_row():
    rows = parse_csv(f"{EXAMPLE_ROW}\n{EXAMPLE_ROW}", [])
    assert [r["status"] for r in rows] == ["valid", "valid"]
    assert rows[1]["repeat_of"] == 1


def test_header_row_is_skipped_and_rows_numbered_after_it():
    rows = parse_csv(csv_import.CSV_TEMPLATE, [])
    assert [r["row_num"] for r in rows] == [1, 2]
    assert rows[1]["store"] == "Target"
    assert rows[1]["notes"] == ""


def test_first_line_without_store_is_data():
    rows = parse_csv("Target,5678,50,Mike Davis", [])
    assert rows[0]["store"] == "Target"


def test_blank_lines_are_ignored():
    rows = parse_csv(f"\n{EXAMPLE_ROW}\n\n   \nTarget,5678,50,Mike Davis\n", [])
    assert [r["row_num"] for r in rows] == [1, 2]


def test_extra_commas_are_kept_in_notes():
    rows = parse_csv("Target,5678,50,Mike Davis,Drive, week 2, box A", [])
    assert rows[0]["notes"] == "Drive,week 2,box A"
    assert rows[0]["status"] == "valid"


def test_error_rows_list_every_problem():
    rows = parse_csv(",12,abc,", [])
    assert rows[0]["status"] == "error"
    assert rows[0]["errors"] == [
        "Store missing", "Last 4 must be 4 digits", "Invalid amount", "Added by missing",
    ]


def test_short_row_is_padded_and_flagged():
    rows = parse_csv("Target,5678", [])
    assert rows[0]["status"] == "error"
    assert rows[0]["errors"] == ["Invalid amount", "Added by missing"]


@pytest.mark.parametrize("amount", ["0", "-10", "ten", "$100.00", "1e3"])
def test_non_positive_or_bad_amount_is_error(amount):
    rows = parse_csv(f"Target,5678,{amount},Mike Davis", [])
    assert rows[0]["errors"] == ["Invalid amount"]


def test_existing_card_match_is_duplicate(cards):
    rows = parse_csv("walmart,4821,25,Amy Brown\nWalmart,4822,25,Amy Brown", cards)
    assert [r["status"] for r in rows] == ["duplicate", "valid"]


def test_error_takes_precedence_over_duplicate(cards):
    rows = parse_csv("Walmart,4821,0,Amy Brown", cards)
    assert rows[0]["status"] == "error"


# ── import actions ────────────────────────────────────────────────

def _mixed_rows(cards):
    text = "\n".join([
        "store,last4,amount,added_by,notes",
        "Subway,0001,10,Amy Brown,",
        "Walmart,4821,25,Amy Brown,dup",
        "Subway,00x1,10,Amy Brown,",
    ])
    return parse_csv(text, cards)


def test_count_statuses(cards):
    assert count_statuses(_mixed_rows(cards)) == {"valid": 1, "duplicate": 1, "error": 1}


def test_rows_to_import_never_includes_errors(cards):
    rows = _mixed_rows(cards)
    assert [r["row_num"] for r in rows_to_import(rows)] == [1]
    assert [r["row_num"] for r in rows_to_import(rows, include_duplicates=True)] == [1, 2]


def test_import_valid_only(store, cards):
    added = import_rows(store, _mixed_rows(cards))
    assert [(c["store"], c["last4"]) for c in added] == [("Subway", "0001")]
    assert len(store.cards) == 5


def test_import_valid_and_duplicates(store, cards):
    added = import_rows(store, _mixed_rows(cards), include_duplicates=True, added_date="2026-10-19")
    assert [c["last4"] for c in added] == ["0001", "4821"]
    assert added[1]["notes"] == "dup"
    assert added[1]["initial_balance"] == 25.0
    assert added[1]["id"] == added[0]["id"] + 1


def test_import_with_nothing_accepted_adds_nothing(store):
    rows = parse_csv(",,,", [])
    assert import_rows(store, rows) == []
    assert len(store.cards) == 4
