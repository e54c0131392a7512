"""Gunicorn config.

The card store lives in process memory, so every request must hit the same
worker: one worker, several threads.
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8070')}"
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
timeout = 60


def post_worker_init(worker):
    """Log what the worker loaded so a bad fixture set shows up in the deploy log."""
    from giftcard_dashboard import data_state as ds

    summary = ds.STORE.summary()
    worker.log.info(
        f"Store ready: {summary['cards']} cards, {summary['transactions']} transactions, "
        f"{summary['donations']} donations"
    )
