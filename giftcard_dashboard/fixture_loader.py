"""
fixture_loader.py — Load seed data for the in-memory store from JSON fixtures.

Returns the structures GiftCardStore expects:
  CARDS        — list[dict] (cards.json → cards[])
  TRANSACTIONS — list[dict] (cards.json → transactions[])
  DONATIONS    — list[dict] (donations.json, optional)

Fixtures may use either snake_case or the camelCase keys of the exported
JSON; camelCase keys are renamed on load.
"""

import json
import logging
import os

from giftcard_dashboard import config

logger = logging.getLogger(__name__)

CARDS_FILE = "cards.json"
DONATIONS_FILE = "donations.json"

_CARD_RENAMES = {
    "initialBalance": "initial_balance",
    "remainingBalance": "remaining_balance",
    "addedDate": "added_date",
    "addedBy": "added_by",
}
_TXN_RENAMES = {
    "cardId": "card_id",
}

_CARD_REQUIRED = {"id", "store", "last4", "initial_balance", "remaining_balance", "status"}
_TXN_REQUIRED = {"id", "card_id", "date", "type", "amount", "volunteer"}
_DONATION_REQUIRED = {"id", "date", "store", "amount", "volunteer", "recipient"}


class FixtureError(ValueError):
    """A fixture file is missing or does not have the expected shape."""


def _read_json(path):
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise FixtureError(f"Fixture not found: {path}") from e
    except json.JSONDecodeError as e:
        raise FixtureError(f"Invalid JSON in {path}: {e}") from e


def _normalize(rows, renames, required, label, path):
    if not isinstance(rows, list):
        raise FixtureError(f"{label} in {path} must be a list")
    out = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise FixtureError(f"{label}[{i}] in {path} is not an object")
        row = {renames.get(k, k): v for k, v in row.items()}
        missing = required - set(row)
        if missing:
            raise FixtureError(f"{label}[{i}] in {path} missing: {', '.join(sorted(missing))}")
        out.append(row)
    return out


def _clean_card(card):
    card["last4"] = str(card["last4"]).zfill(4)
    card["initial_balance"] = round(float(card["initial_balance"]), 2)
    card["remaining_balance"] = round(float(card["remaining_balance"]), 2)
    card.setdefault("added_date", "")
    card.setdefault("added_by", "")
    card.setdefault("notes", "")
    return card


def _clean_amount(row):
    row["amount"] = round(float(row["amount"]), 2)
    row.setdefault("notes", "")
    return row


def load_cards(data_dir=None):
    path = os.path.join(data_dir or config.DATA_DIR, CARDS_FILE)
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise FixtureError(f"{path} must hold an object with 'cards' and 'transactions'")
    cards = _normalize(raw.get("cards", []), _CARD_RENAMES, _CARD_REQUIRED, "cards", path)
    txns = _normalize(raw.get("transactions", []), _TXN_RENAMES, _TXN_REQUIRED, "transactions", path)
    for txn in txns:
        txn.setdefault("recipient", None)
    return [_clean_card(c) for c in cards], [_clean_amount(t) for t in txns]


def load_donations(data_dir=None):
    path = os.path.join(data_dir or config.DATA_DIR, DONATIONS_FILE)
    if not os.path.exists(path):
        return []
    rows = _normalize(_read_json(path), {}, _DONATION_REQUIRED, "donations", path)
    return [_clean_amount(r) for r in rows]


def load_data(data_dir=None) -> dict:
    """
    Load all fixture data.

    Returns
    -------
    dict with keys: CARDS (list), TRANSACTIONS (list), DONATIONS (list)
    """
    data_dir = data_dir or config.DATA_DIR
    cards, txns = load_cards(data_dir)
    donations = load_donations(data_dir)
    logger.info("Loaded fixtures from %s: %d cards, %d transactions, %d donations",
                data_dir, len(cards), len(txns), len(donations))
    return {
        "CARDS": cards,
        "TRANSACTIONS": txns,
        "DONATIONS": donations,
    }
