"""
config.py — Environment-driven settings.
Values come from the process environment, with a project-root .env loaded first.
"""
import os

from dotenv import load_dotenv

# BASE_DIR points to the project root (parent of giftcard_dashboard/)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

load_dotenv(os.path.join(BASE_DIR, ".env"))


def _env_bool(name, default=False):
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


DATA_DIR = os.environ.get("GIFTCARD_DATA_DIR") or os.path.join(BASE_DIR, "data")
LOG_DIR = os.environ.get("LOG_DIR") or os.path.join(BASE_DIR, "logs")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

PORT = int(os.environ.get("PORT", 8070))
DEBUG = _env_bool("DASH_DEBUG")

# Active cards under this balance are flagged on the dashboard
LOW_BALANCE_THRESHOLD = float(os.environ.get("LOW_BALANCE_THRESHOLD", 20))
