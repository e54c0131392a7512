import json
import os
import tempfile
from datetime import datetime

import pytest

# Keep test runs from writing into the project's logs/ directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="giftcard-logs-"))

from giftcard_dashboard.ledger import GiftCardStore

NOW = datetime(2026, 10, 19, 12, 0, 0)


def make_card(card_id, store, last4, initial, remaining=None, status="Active", **extra):
    card = {
        "id": card_id,
        "store": store,
        "last4": last4,
        "initial_balance": initial,
        "remaining_balance": initial if remaining is None else remaining,
        "status": status,
        "added_date": "2026-09-01",
        "added_by": "Sarah Johnson",
        "notes": "",
    }
    card.update(extra)
    return card


# ── Fixtures ──────────────────────────────────────────────────────

@pytest.fixture
def cards():
    return [
        make_card(1, "Walmart", "4821", 100.00, 44.50),
        make_card(2, "Target", "1937", 50.00, 0.00, status="Donated"),
        make_card(3, "Starbucks", "3310", 25.00, 12.25),
        make_card(4, "Gap", "8120", 40.00, 40.00, status="Expired"),
    ]


@pytest.fixture
def transactions():
    return [
        {"id": 1, "card_id": 1, "date": "2026-10-01T10:00:00", "type": "spend", "amount": 55.50,
         "volunteer": "Mike Davis", "recipient": None, "notes": ""},
        {"id": 2, "card_id": 2, "date": "2026-10-10T15:30:00", "type": "donation", "amount": 50.00,
         "volunteer": "Lisa Chen", "recipient": "Family B", "notes": "School supplies"},
        {"id": 3, "card_id": 3, "date": "2026-10-15T09:15:00", "type": "spend", "amount": 12.75,
         "volunteer": "James Lee", "recipient": None, "notes": ""},
    ]


@pytest.fixture
def donations():
    return [
        {"id": 1, "date": "2026-07-08", "store": "Target", "amount": 50.0, "volunteer": "Sarah Johnson",
         "recipient": "Family A", "notes": "Back-to-school clothes"},
        {"id": 2, "date": "2026-10-12", "store": "Walmart", "amount": 100.0, "volunteer": "Mike Davis",
         "recipient": "Rivera Family", "notes": ""},
    ]


@pytest.fixture
def store(cards, transactions, donations):
    """A GiftCardStore seeded from in-test records with a fixed clock."""
    return GiftCardStore(cards, transactions, donations, clock=lambda: NOW)


@pytest.fixture
def empty_store():
    return GiftCardStore(clock=lambda: NOW)


@pytest.fixture
def fixture_dir(tmp_path, cards, transactions, donations):
    """A temporary data directory holding cards.json and donations.json."""
    (tmp_path / "cards.json").write_text(json.dumps({"cards": cards, "transactions": transactions}))
    (tmp_path / "donations.json").write_text(json.dumps(donations))
    return tmp_path
