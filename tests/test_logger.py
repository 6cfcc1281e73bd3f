"""
Tests for the logging setup.
"""

import logging
import logging.handlers

import pytest

from marketplace_scraper.utils import logger as logger_module
from marketplace_scraper.utils.logger import get_logger


@pytest.fixture
def fresh_name(request):
    name = f"marketplace_scraper.tests.{request.node.name}"
    yield name
    test_logger = logging.getLogger(name)
    for handler in list(test_logger.handlers):
        test_logger.removeHandler(handler)
        handler.close()


def test_second_call_returns_configured_logger(monkeypatch, fresh_name):
    monkeypatch.setattr(logger_module, "LOG_FILE", "")

    first = get_logger(fresh_name)
    second = get_logger(fresh_name)

    assert first is second
    assert len(second.handlers) == 1


def test_empty_log_file_keeps_console_only(monkeypatch, fresh_name):
    monkeypatch.setattr(logger_module, "LOG_FILE", "")

    test_logger = get_logger(fresh_name)

    assert [type(h) for h in test_logger.handlers] == [logging.StreamHandler]
    assert test_logger.propagate


def test_log_file_adds_rotating_handler(monkeypatch, tmp_path, fresh_name):
    monkeypatch.setattr(logger_module, "LOG_FILE", "scraper.log")
    monkeypatch.setattr(logger_module, "LOGS_DIR", tmp_path / "logs")

    test_logger = get_logger(fresh_name)
    test_logger.error("Skipping acme-addon: no category on component page")

    file_handlers = [
        h for h in test_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    file_handlers[0].flush()
    assert "acme-addon" in (tmp_path / "logs" / "scraper.log").read_text(encoding="utf-8")
