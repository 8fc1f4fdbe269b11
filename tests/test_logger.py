# File: tests/test_logger.py
import logging

import pytest

from aeo_scout.logger import LOGGER_NAME, audit_logger, configure, init_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    configure(level="WARNING")


def test_file_logging_with_url_prefix(tmp_path):
    log_file = tmp_path / "aeo.log"
    init_logging(level="DEBUG", log_file=log_file)

    audit_logger("https://example.com/").info("Audit started")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    line = log_file.read_text(encoding="utf-8").strip()
    assert "| INFO     | AeoScout | [https://example.com/] Audit started" in line


def test_reconfigure_replaces_handlers(tmp_path):
    configure(level="INFO", log_file=tmp_path / "a.log")
    lg = configure(level="ERROR")
    assert len(lg.handlers) == 1
    assert lg.level == logging.ERROR
    assert lg.propagate is False


def test_append_handlers():
    configure(level="INFO")
    lg = configure(level="INFO", replace_handlers=False)
    assert len(lg.handlers) == 2
