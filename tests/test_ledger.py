import pytest

from giftcard_dashboard.ledger import GiftCardStore, LedgerError, find_duplicate

from conftest import NOW, make_card

NOW_MS = int(NOW.timestamp() * 1000)


# ── Duplicate detection ───────────────────────────────────────────

def test_duplicate_match_ignores_store_case_and_whitespace(cards):
    assert find_duplicate("walmart", "4821", cards)["id"] == 1
    assert find_duplicate("  WALMART ", "4821", cards)["id"] == 1


def test_duplicate_requires_exact_last4(cards):
    assert find_duplicate("Walmart", "4822", cards) is None
    assert find_duplicate("Target", "4821", cards) is None


def test_duplicate_returns_first_match():
    cards = [make_card(1, "Target", "1111", 10), make_card(2, "target", "1111", 20)]
    assert find_duplicate("TARGET", "1111", cards)["id"] == 1


# ── Card intake ───────────────────────────────────────────────────

def test_add_card_creates_active_card_with_full_balance(store):
    card = store.add_card(" Kroger ", "5502", "75.00", "Lisa Chen", notes=" Food drive ")
    assert card["store"] == "Kroger"
    assert card["initial_balance"] == card["remaining_balance"] == 75.0
    assert card["status"] == "Active"
    assert card["added_date"] == "2026-10-19"
    assert card["notes"] == "Food drive"
    assert store.get_card(card["id"]) is card


def test_add_card_ids_are_timestamp_based_and_unique(store):
    first = store.add_card("Kroger", "5502", 75, "Lisa Chen")
    second = store.add_card("Kroger", "5503", 75, "Lisa Chen")
    assert first["id"] == NOW_MS
    assert second["id"] == NOW_MS + 1


def test_add_card_uses_given_date(store):
    card = store.add_card("Kroger", "5502", 75, "Lisa Chen", added_date="2026-10-01")
    assert card["added_date"] == "2026-10-01"


def test_add_card_rejects_invalid_input_without_mutating(store):
    before = len(store.cards)
    with pytest.raises(LedgerError, match="Must be exactly 4 digits"):
        store.add_card("Kroger", "55", 75, "Lisa Chen")
    assert len(store.cards) == before


def test_add_card_does_not_block_duplicates(store):
    card = store.add_card("walmart", "4821", 10, "Amy Brown")
    assert store.find_duplicate("Walmart", "4821")["id"] == 1
    assert card in store.cards


def test_add_cards_uses_consecutive_ids(store):
    rows = [
        {"store": "Subway", "last4": "0001", "amount": "10", "added_by": "Amy Brown", "notes": ""},
        {"store": "Subway", "last4": "0002", "amount": "15.50", "added_by": "Amy Brown"},
    ]
    added = store.add_cards(rows, added_date="2026-10-18")
    assert [c["id"] for c in added] == [NOW_MS, NOW_MS + 1]
    assert added[1]["initial_balance"] == 15.5
    assert all(c["added_date"] == "2026-10-18" for c in added)


# ── Spend ─────────────────────────────────────────────────────────

def test_spend_reduces_balance_and_appends_transaction(store):
    txn = store.record_spend(1, "20.25", "Amy Brown", notes="Groceries")
    card = store.get_card(1)
    assert card["remaining_balance"] == 24.25
    assert card["status"] == "Active"
    assert txn == {
        "id": 4, "card_id": 1, "date": "2026-10-19T12:00:00", "type": "spend",
        "amount": 20.25, "volunteer": "Amy Brown", "recipient": None, "notes": "Groceries",
    }


def test_spend_of_full_balance_marks_card_used(store):
    store.record_spend(1, 44.50, "Amy Brown")
    card = store.get_card(1)
    assert card["remaining_balance"] == 0
    assert card["status"] == "Used"


def test_spend_rounding_reaches_exact_zero():
    store = GiftCardStore([make_card(1, "Subway", "1111", 0.3)], clock=lambda: NOW)
    store.record_spend(1, 0.1, "Amy Brown")
    store.record_spend(1, 0.2, "Amy Brown")
    assert store.get_card(1)["remaining_balance"] == 0
    assert store.get_card(1)["status"] == "Used"


@pytest.mark.parametrize("amount", [0, -5, "abc", None, ""])
def test_spend_rejects_invalid_amount(store, amount):
    with pytest.raises(LedgerError, match="Enter a valid amount."):
        store.record_spend(1, amount, "Amy Brown")


def test_spend_over_balance_leaves_state_untouched(store):
    with pytest.raises(LedgerError) as exc:
        store.record_spend(1, 44.51, "Amy Brown")
    assert str(exc.value) == "Exceeds remaining balance of $44.50."
    assert store.get_card(1)["remaining_balance"] == 44.50
    assert len(store.transactions) == 3


def test_spend_requires_volunteer(store):
    with pytest.raises(LedgerError, match="Please select a volunteer."):
        store.record_spend(1, 5, "  ")


def test_spend_unknown_card(store):
    with pytest.raises(LedgerError, match="Card not found."):
        store.record_spend(999, 5, "Amy Brown")


def test_expired_card_with_balance_can_be_spent(store):
    store.record_spend(4, 10, "Amy Brown")
    card = store.get_card(4)
    assert card["remaining_balance"] == 30.0
    assert card["status"] == "Expired"


def test_used_card_status_never_reverts(store):
    store.record_spend(3, 12.25, "Amy Brown")
    with pytest.raises(LedgerError, match=r"Exceeds remaining balance of \$0.00."):
        store.record_spend(3, 1, "Amy Brown")
    assert store.get_card(3)["status"] == "Used"


# ── Donation ──────────────────────────────────────────────────────

def test_full_donation_zeroes_card_and_marks_donated(store):
    txn = store.record_donation(3, "Amy Brown", "Family C")
    card = store.get_card(3)
    assert txn["amount"] == 12.25
    assert txn["type"] == "donation"
    assert txn["recipient"] == "Family C"
    assert card["remaining_balance"] == 0
    assert card["status"] == "Donated"


def test_partial_donation_keeps_card_active(store):
    store.record_donation(1, "Amy Brown", "Family C", amount="10", full=False)
    card = store.get_card(1)
    assert card["remaining_balance"] == 34.5
    assert card["status"] == "Active"


def test_partial_donation_of_remaining_balance_marks_donated(store):
    store.record_donation(1, "Amy Brown", "Family C", amount=44.5, full=False)
    assert store.get_card(1)["status"] == "Donated"


def test_donation_checks_volunteer_before_recipient(store):
    with pytest.raises(LedgerError, match="Please select a volunteer."):
        store.record_donation(1, "", "")
    with pytest.raises(LedgerError, match="Please enter a recipient name."):
        store.record_donation(1, "Amy Brown", " ")


def test_partial_donation_over_balance_is_rejected(store):
    with pytest.raises(LedgerError, match=r"Exceeds remaining balance of \$44.50."):
        store.record_donation(1, "Amy Brown", "Family C", amount=50, full=False)
    assert store.get_card(1)["remaining_balance"] == 44.5


def test_full_donation_of_empty_card_is_rejected(store):
    with pytest.raises(LedgerError, match="Card has no remaining balance."):
        store.record_donation(2, "Amy Brown", "Family C")
    assert len(store.transactions) == 3


# ── Lookups / donation log ────────────────────────────────────────

def test_card_transactions_newest_first(store):
    store.record_spend(1, 4.5, "Amy Brown")
    assert [t["id"] for t in store.card_transactions(1)] == [4, 1]


def test_donation_log_projects_ledger_donations(store):
    log = store.donation_log()
    assert [d["id"] for d in log] == [1, 2, "txn-2"]
    projected = log[-1]
    assert projected["store"] == "Target"
    assert projected["recipient"] == "Family B"
    assert projected["amount"] == 50.0


def test_recorded_donation_appears_in_donation_log(store):
    store.record_donation(1, "Amy Brown", "Family C", amount=4.5, full=False)
    assert store.donation_log()[-1]["id"] == "txn-4"
    assert store.donation_log()[-1]["store"] == "Walmart"


def test_spends_are_not_in_donation_log(store):
    store.record_spend(1, 4.5, "Amy Brown")
    assert len(store.donation_log()) == 3


def test_summary_counts_and_totals(store):
    assert store.summary() == {
        "cards": 4,
        "transactions": 3,
        "donations": 3,
        "total_remaining": 96.75,
        "total_initial": 215.0,
    }


def test_replace_swaps_all_records(store):
    store.replace([make_card(9, "Gap", "0009", 10)], [], [])
    assert [c["id"] for c in store.cards] == [9]
    assert store.transactions == []
    assert store.donation_log() == []


def test_unique_stores_sorted(store):
    assert store.unique_stores() == ["Gap", "Starbucks", "Target", "Walmart"]
