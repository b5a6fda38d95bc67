"""Tests for the logging setup."""
import logging

import pytest

from chat_room_api.app.core.logging_config import (
    CONSOLE_HANDLER,
    FILE_HANDLER,
    UVICORN_LOGGERS,
    setup_logging,
)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def named(logger, name):
    return [h for h in logger.handlers if h.get_name() == name]


def test_handlers_installed_once(root_logger, tmp_path):
    logfile = tmp_path / "chat.log"

    setup_logging("DEBUG", str(logfile))
    setup_logging("DEBUG", str(logfile))

    assert len(named(root_logger, CONSOLE_HANDLER)) == 1
    assert len(named(root_logger, FILE_HANDLER)) == 1
    assert root_logger.level == logging.DEBUG


def test_uvicorn_loggers_share_root_handlers(root_logger, tmp_path):
    logfile = tmp_path / "chat.log"
    logging.getLogger("uvicorn.access").addHandler(logging.NullHandler())

    setup_logging("INFO", str(logfile))
    logging.getLogger("uvicorn.access").info("GET /participants 200")
    for handler in named(root_logger, FILE_HANDLER):
        handler.flush()

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        assert uvicorn_logger.handlers == []
        assert uvicorn_logger.propagate
    assert "uvicorn.access: GET /participants 200" in logfile.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")

    assert root_logger.level == logging.INFO
