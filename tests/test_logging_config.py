"""
Tests for root logger setup.
"""

import logging
import logging.handlers

import pytest
from rich.logging import RichHandler

from mountflow.config import Settings
from mountflow.logging_config import get_app_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in root.handlers[:]:
        if isinstance(handler, (RichHandler, logging.handlers.TimedRotatingFileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


def test_console_and_file_handlers(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "mountflow.log"
    settings = Settings(log_file_path=str(log_file), log_level="DEBUG", log_retention_days=3)

    handlers = setup_logging(settings)

    assert restore_root_logger.handlers == handlers
    assert restore_root_logger.level == logging.DEBUG
    console, file_handler = handlers
    assert isinstance(console, RichHandler)
    assert isinstance(file_handler, logging.handlers.TimedRotatingFileHandler)
    assert file_handler.backupCount == 3

    get_app_logger().warning("mount aws failed")
    file_handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert "WARNING - mountflow - mount aws failed" in content


def test_empty_log_path_is_console_only(tmp_path, restore_root_logger, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(log_file_path="", log_console_width=80)

    handlers = setup_logging(settings)

    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].console.width == 80
    assert list(tmp_path.iterdir()) == []


def test_existing_handlers_are_replaced(tmp_path, restore_root_logger):
    stale = logging.NullHandler()
    restore_root_logger.addHandler(stale)

    setup_logging(Settings(log_file_path=str(tmp_path / "app.log")))

    assert stale not in restore_root_logger.handlers
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
