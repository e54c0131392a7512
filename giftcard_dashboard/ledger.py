"""
ledger.py — Card registry + transaction ledger.

GiftCardStore owns every card, transaction and seeded donation record for the
running process. Pages and callbacks read from it; only the methods here mutate it.
"""
import logging
import threading
from datetime import datetime

from giftcard_dashboard.validators import money, parse_amount, validate_card_form

logger = logging.getLogger(__name__)

# ── Card statuses ────────────────────────────────────────────────────────────
STATUS_ACTIVE = "Active"
STATUS_USED = "Used"
STATUS_DONATED = "Donated"
STATUS_EXPIRED = "Expired"
STATUSES = [STATUS_ACTIVE, STATUS_USED, STATUS_DONATED, STATUS_EXPIRED]

TYPE_SPEND = "spend"
TYPE_DONATION = "donation"


class LedgerError(ValueError):
    """A rejected card or ledger operation. The message is user-facing."""


def find_duplicate(store, last4, cards):
    """First card with the same store (case-insensitive) and last4, else None."""
    key = (store or "").strip().lower()
    for card in cards:
        if card["store"].strip().lower() == key and card["last4"] == last4:
            return card
    return None


class GiftCardStore:
    """In-memory registry of gift cards and their spend/donation ledger."""

    def __init__(self, cards=None, transactions=None, donations=None, clock=None):
        self._lock = threading.RLock()
        self._clock = clock or datetime.now
        self.cards: list[dict] = []
        self.transactions: list[dict] = []
        self.donations: list[dict] = []
        self.replace(cards or [], transactions or [], donations or [])

    def replace(self, cards, transactions, donations):
        """Swap in a fresh set of records (fixture load / reload)."""
        with self._lock:
            self.cards = [dict(c) for c in cards]
            self.transactions = [dict(t) for t in transactions]
            self.donations = [dict(d) for d in donations]

    # ── Lookups ──────────────────────────────────────────────────────────────

    def get_card(self, card_id):
        for card in self.cards:
            if card["id"] == card_id:
                return card
        return None

    def find_duplicate(self, store, last4):
        return find_duplicate(store, last4, self.cards)

    def card_transactions(self, card_id):
        """Transactions for one card, newest first."""
        txns = [t for t in self.transactions if t["card_id"] == card_id]
        return sorted(txns, key=lambda t: t["date"], reverse=True)

    def unique_stores(self):
        return sorted({c["store"] for c in self.cards})

    # ── Card intake ──────────────────────────────────────────────────────────

    def _next_card_id(self):
        stamp = int(self._clock().timestamp() * 1000)
        highest = max((c["id"] for c in self.cards), default=0)
        return max(stamp, highest + 1)

    def _new_card(self, card_id, store, last4, amount, added_by, added_date, notes):
        return {
            "id": card_id,
            "store": store.strip(),
            "last4": last4.strip(),
            "initial_balance": amount,
            "remaining_balance": amount,
            "status": STATUS_ACTIVE,
            "added_date": added_date or self._clock().date().isoformat(),
            "added_by": added_by.strip(),
            "notes": (notes or "").strip(),
        }

    def add_card(self, store, last4, amount, added_by, added_date=None, notes=""):
        """Append one Active card. Duplicates are the caller's decision."""
        errors = validate_card_form({
            "store": store, "last4": last4, "amount": amount, "added_by": added_by,
        })
        if errors:
            raise LedgerError("; ".join(errors.values()))
        with self._lock:
            card = self._new_card(self._next_card_id(), store, last4,
                                  parse_amount(amount), added_by, added_date, notes)
            self.cards.append(card)
        logger.info("Added card %s %s ****%s (%s) by %s",
                    card["id"], card["store"], card["last4"],
                    money(card["initial_balance"]), card["added_by"])
        return card

    def add_cards(self, rows, added_date=None):
        """Append imported rows (dicts with store/last4/amount/added_by/notes)."""
        added = []
        with self._lock:
            base = self._next_card_id()
            for i, row in enumerate(rows):
                card = self._new_card(base + i, row["store"], row["last4"],
                                      parse_amount(row["amount"]), row["added_by"],
                                      added_date, row.get("notes", ""))
                self.cards.append(card)
                added.append(card)
        logger.info("Imported %d card(s)", len(added))
        return added

    # ── Ledger application ──────────────────────────────────────────────────

    def _require_card(self, card_id):
        card = self.get_card(card_id)
        if card is None:
            raise LedgerError("Card not found.")
        return card

    @staticmethod
    def _check_amount(card, raw_amount):
        amount = parse_amount(raw_amount)
        if amount is None or amount <= 0:
            raise LedgerError("Enter a valid amount.")
        if amount > card["remaining_balance"]:
            raise LedgerError(
                f"Exceeds remaining balance of {money(card['remaining_balance'])}.")
        return amount

    def _apply(self, card, amount, txn_type, volunteer, recipient, notes, zero_status):
        new_balance = round(card["remaining_balance"] - amount, 2)
        card["remaining_balance"] = new_balance
        if new_balance == 0:
            card["status"] = zero_status
        txn = {
            "id": max((t["id"] for t in self.transactions), default=0) + 1,
            "card_id": card["id"],
            "date": self._clock().isoformat(timespec="seconds"),
            "type": txn_type,
            "amount": amount,
            "volunteer": volunteer.strip(),
            "recipient": recipient.strip() if recipient else None,
            "notes": (notes or "").strip(),
        }
        self.transactions.append(txn)
        return txn

    def record_spend(self, card_id, amount, volunteer, notes=""):
        """Spend against a card. Raises LedgerError and leaves state untouched on bad input."""
        with self._lock:
            card = self._require_card(card_id)
            value = parse_amount(amount)
            if value is None or value <= 0:
                raise LedgerError("Enter a valid amount.")
            if not (volunteer or "").strip():
                raise LedgerError("Please select a volunteer.")
            value = self._check_amount(card, value)
            txn = self._apply(card, value, TYPE_SPEND, volunteer, None, notes, STATUS_USED)
        logger.info("Spend %s on card %s by %s (remaining %s)",
                    money(value), card_id, txn["volunteer"], money(card["remaining_balance"]))
        return txn

    def record_donation(self, card_id, volunteer, recipient, amount=None, full=True, notes=""):
        """Donate all (full=True) or part of a card's balance to a recipient."""
        with self._lock:
            card = self._require_card(card_id)
            if not (volunteer or "").strip():
                raise LedgerError("Please select a volunteer.")
            if not (recipient or "").strip():
                raise LedgerError("Please enter a recipient name.")
            if full:
                value = card["remaining_balance"]
                if value <= 0:
                    raise LedgerError("Card has no remaining balance.")
            else:
                value = self._check_amount(card, amount)
            txn = self._apply(card, value, TYPE_DONATION, volunteer, recipient, notes,
                              STATUS_DONATED)
        logger.info("Donation %s from card %s to %s by %s (remaining %s)",
                    money(value), card_id, txn["recipient"], txn["volunteer"],
                    money(card["remaining_balance"]))
        return txn

    # ── Donation log ─────────────────────────────────────────────────────────

    def donation_log(self):
        """Seeded donation records plus every ledger donation, in one shape."""
        cards_by_id = {c["id"]: c for c in self.cards}
        rows = [dict(d) for d in self.donations]
        for txn in self.transactions:
            if txn["type"] != TYPE_DONATION:
                continue
            card = cards_by_id.get(txn["card_id"])
            rows.append({
                "id": f"txn-{txn['id']}",
                "date": txn["date"],
                "store": card["store"] if card else "Unknown",
                "amount": txn["amount"],
                "volunteer": txn["volunteer"],
                "recipient": txn["recipient"] or "",
                "notes": txn.get("notes") or "",
            })
        return rows

    def summary(self):
        """Counts + totals for diagnostics."""
        return {
            "cards": len(self.cards),
            "transactions": len(self.transactions),
            "donations": len(self.donation_log()),
            "total_remaining": round(sum(c["remaining_balance"] for c in self.cards), 2),
            "total_initial": round(sum(c["initial_balance"] for c in self.cards), 2),
        }
