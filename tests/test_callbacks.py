import pytest

from giftcard_dashboard import data_state as ds
from giftcard_dashboard.callbacks.add_card_cb import card_form_step, import_upload
from giftcard_dashboard.callbacks.redemption_cb import donation_outcome, spend_outcome


@pytest.fixture(autouse=True)
def fresh_store():
    ds.reload_fixtures()
    yield
    ds.reload_fixtures()


def _form(**overrides):
    form = {"store": "Subway", "last4": "0001", "amount": "15", "added_by": "Amy Brown"}
    form.update(overrides)
    return form


# ── Add card form ─────────────────────────────────────────────────

def test_submit_without_duplicate_commits_and_counts():
    before = len(ds.STORE.cards)
    step = card_form_step("add-submit-btn", _form(), "2026-10-19", "", 2)
    assert step["mode"] == "success"
    assert step["card"]["store"] == "Subway"
    assert step["card"]["added_date"] == "2026-10-19"
    assert step["session_count"] == 3
    assert len(ds.STORE.cards) == before + 1


def test_submit_duplicate_asks_for_confirmation_without_committing():
    before = len(ds.STORE.cards)
    step = card_form_step("add-submit-btn", _form(store="walmart", last4="4821"))
    assert step["mode"] == "confirm"
    assert step["confirm"]["id"] == 1
    assert step["card"] is None
    assert step["session_count"] == 0
    assert len(ds.STORE.cards) == before


def test_add_anyway_commits_the_duplicate():
    before = len(ds.STORE.cards)
    step = card_form_step("add-confirm-btn", _form(store="Walmart", last4="4821"), session_count=1)
    assert step["mode"] == "success"
    assert step["session_count"] == 2
    assert len(ds.STORE.cards) == before + 1
    assert len([c for c in ds.STORE.cards if c["last4"] == "4821"]) == 2


def test_go_back_keeps_typed_values():
    step = card_form_step("add-back-btn", _form(store="Walmart", last4="4821"), session_count=1)
    assert step["mode"] == "form"
    assert step["reset"] is False
    assert step["session_count"] == 1


@pytest.mark.parametrize("trigger", ["add-clear-btn", "add-another-btn"])
def test_clear_and_add_another_blank_the_form(trigger):
    before = len(ds.STORE.cards)
    step = card_form_step(trigger, _form())
    assert (step["mode"], step["reset"]) == ("form", True)
    assert len(ds.STORE.cards) == before


def test_invalid_form_reports_errors_and_stays_on_form():
    before = len(ds.STORE.cards)
    step = card_form_step("add-submit-btn", _form(last4="12", amount="$15"))
    assert step["mode"] == "form"
    assert step["errors"] == {"last4": "Must be exactly 4 digits",
                              "amount": "Enter a valid dollar amount"}
    assert len(ds.STORE.cards) == before


# ── CSV import ────────────────────────────────────────────────────

def test_import_reclassifies_against_cards_added_after_preview():
    upload = {"filename": "cards.csv",
              "text": "store,last4,amount,added_by\nSubway,0001,15,Amy Brown\nGap,0002,20,Amy Brown"}
    ds.STORE.add_card("Subway", "0001", 15, "Amy Brown")
    before = len(ds.STORE.cards)
    rows, added = import_upload(upload)
    assert [r["status"] for r in rows] == ["duplicate", "valid"]
    assert [c["store"] for c in added] == ["Gap"]
    assert len(ds.STORE.cards) == before + 1


def test_import_all_includes_duplicates():
    upload = {"filename": "cards.csv", "text": "Walmart,4821,10,Amy Brown"}
    rows, added = import_upload(upload, include_duplicates=True)
    assert rows[0]["status"] == "duplicate"
    assert len(added) == 1


# ── Spend / donation ──────────────────────────────────────────────

def test_spend_over_balance_shows_error_and_leaves_card_alone():
    error, done = spend_outcome(1, "50", "Amy Brown")
    assert error == "Exceeds remaining balance of $44.50."
    assert done is None
    assert ds.STORE.get_card(1)["remaining_balance"] == 44.5


def test_spend_success_returns_toast():
    error, done = spend_outcome(1, "4.50", "Amy Brown", "Milk")
    assert error is None
    assert done.header == "Spend Recorded"
    assert ds.STORE.get_card(1)["remaining_balance"] == 40.0


def test_spend_on_unknown_card():
    assert spend_outcome(None, "5", "Amy Brown") == ("Card not found.", None)


def test_donation_without_recipient_is_rejected():
    error, done = donation_outcome(1, "Amy Brown", "", "full")
    assert error == "Please enter a recipient name."
    assert ds.STORE.get_card(1)["remaining_balance"] == 44.5


def test_full_donation_empties_card():
    error, done = donation_outcome(1, "Amy Brown", "Family C", "full")
    assert error is None
    assert done.header == "Donation Recorded"
    card = ds.STORE.get_card(1)
    assert (card["remaining_balance"], card["status"]) == (0.0, "Donated")


def test_partial_donation_uses_amount():
    error, _ = donation_outcome(1, "Amy Brown", "Family C", "partial", "10")
    assert error is None
    assert ds.STORE.get_card(1)["remaining_balance"] == 34.5
