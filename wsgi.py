"""
WSGI entry point for deployment (Gunicorn).
    gunicorn -c gunicorn.conf.py wsgi:server
"""
from giftcard_dashboard.app import server  # noqa: F401
