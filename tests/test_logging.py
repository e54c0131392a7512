import logging

import pytest

from giftcard_dashboard.fixture_loader import load_data
from giftcard_dashboard.utils.logging import setup_logging


@pytest.fixture
def fresh_package_logger():
    """Unconfigured package logger; the previous handlers come back afterwards."""
    logger = logging.getLogger("giftcard_dashboard")
    saved = (logger.handlers[:], logger.level, logger.propagate,
             getattr(logger, "_giftcard_configured", False))
    logger.handlers = []
    logger._giftcard_configured = False
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers, logger.level, logger.propagate, logger._giftcard_configured = saved


def _log_lines(log_dir):
    for handler in logging.getLogger("giftcard_dashboard").handlers:
        handler.flush()
    return (log_dir / "app.log").read_text().splitlines()


def test_fixture_load_after_setup_is_written(fresh_package_logger, tmp_path, fixture_dir):
    log_dir = tmp_path / "logs"
    setup_logging(log_dir=str(log_dir))
    load_data(str(fixture_dir))
    lines = _log_lines(log_dir)
    assert sum("Loaded fixtures" in line for line in lines) == 1


def test_server_logger_records_are_written_once(fresh_package_logger, tmp_path):
    setup_logging(log_dir=str(tmp_path))
    logging.getLogger("giftcard_dashboard.app").info("reload requested")
    lines = _log_lines(tmp_path)
    assert sum("reload requested" in line for line in lines) == 1
    assert sum("Gift card dashboard startup" in line for line in lines) == 1


def test_setup_twice_does_not_stack_handlers(fresh_package_logger, tmp_path):
    setup_logging(log_dir=str(tmp_path))
    count = len(fresh_package_logger.handlers)
    setup_logging(log_dir=str(tmp_path))
    assert len(fresh_package_logger.handlers) == count == 2
