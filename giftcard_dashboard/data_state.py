"""
data_state.py — The process-wide gift card store and its reload hook.
This is the single source of truth for dashboard data.
Every page/callback reads ds.STORE instead of keeping its own copies.
"""

import logging

from giftcard_dashboard.fixture_loader import load_data as _load_data
from giftcard_dashboard.ledger import GiftCardStore
from giftcard_dashboard.validators import money  # noqa: F401  (re-exported for pages)

logger = logging.getLogger(__name__)

# ── Rosters ──────────────────────────────────────────────────────────────────
VOLUNTEERS = ["Amy Brown", "James Lee", "Lisa Chen", "Mike Davis", "Sarah Johnson"]

STORE_OPTIONS = sorted([
    "Amazon", "Applebee's", "Best Buy", "Burger King", "Chick-fil-A", "Chipotle",
    "Costco", "CVS Pharmacy", "Dollar General", "Domino's", "Dunkin'", "Gap",
    "Home Depot", "IHOP", "KFC", "Kohl's", "Kroger", "Macy's", "McDonald's",
    "Old Navy", "Olive Garden", "Panera Bread", "Pizza Hut", "Safeway", "Starbucks",
    "Subway", "Taco Bell", "Target", "Trader Joe's", "TJ Maxx", "Walgreens",
    "Walmart", "Wendy's", "Whole Foods",
])


# ══════════════════════════════════════════════════════════════════════════════
#  LOAD ALL DATA
# ══════════════════════════════════════════════════════════════════════════════

_fx = _load_data()
STORE = GiftCardStore(_fx["CARDS"], _fx["TRANSACTIONS"], _fx["DONATIONS"])


def store_names():
    """Suggestion list: known stores plus any store already in the registry."""
    return sorted(set(STORE_OPTIONS) | set(STORE.unique_stores()))


def reload_fixtures(data_dir=None):
    """Throw away in-memory changes and reseed STORE from the fixture files."""
    fresh = _load_data(data_dir)
    STORE.replace(fresh["CARDS"], fresh["TRANSACTIONS"], fresh["DONATIONS"])
    logger.info("Store reseeded from fixtures")
    return STORE.summary()
