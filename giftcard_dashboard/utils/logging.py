"""
giftcard_dashboard/utils/logging.py
───────────────────────────────────
Configures file + stdout logging for the dashboard server.
"""
import os
import logging
from logging.handlers import RotatingFileHandler

from flask import request, has_request_context

from giftcard_dashboard import config


class RequestFormatter(logging.Formatter):
    """
    Formatter that injects request info (URL, remote address)
    into log records when a request context is active.
    """
    def format(self, record):
        if has_request_context():
            record.url = request.url
            record.remote_addr = request.remote_addr
        else:
            record.url = None
            record.remote_addr = None
        return super().format(record)


def setup_logging(log_dir=None, level=None):
    """
    Configure rotating file logging (logs/app.log, 5MB x 5 backups)
    plus a stdout stream handler on the package logger.

    Call before anything that logs at import time (data_state loads the
    fixtures on import). The Flask server's logger is named after the app
    module, a child of the package logger, so its records propagate here.
    """
    log_dir = log_dir or config.LOG_DIR
    level = getattr(logging, (level or config.LOG_LEVEL), logging.INFO)
    package_logger = logging.getLogger("giftcard_dashboard")
    # Avoid stacking handlers when the app module is re-imported
    if getattr(package_logger, "_giftcard_configured", False):
        return package_logger

    file_error = None

    # 1. File logger (skipped on read-only filesystems)
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "app.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setFormatter(RequestFormatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(remote_addr)s | %(url)s | %(message)s"
        ))
        file_handler.setLevel(level)
        package_logger.addHandler(file_handler)
    except OSError as e:
        file_error = e

    # 2. Stdout logger
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    ))
    stream_handler.setLevel(level)
    package_logger.addHandler(stream_handler)

    package_logger.setLevel(level)
    package_logger.propagate = False
    package_logger._giftcard_configured = True
    package_logger.info("Gift card dashboard startup")
    if file_error is not None:
        package_logger.warning("File logging disabled (%s): %s", log_dir, file_error)
    return package_logger
