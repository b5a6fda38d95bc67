"""
Logging configuration for the chat room service.

``setup_logging`` installs one console handler (and a file handler when
``LOG_FILE`` is set) on the root logger and routes uvicorn's own
loggers through them, so request logs, presence sweeps and store
failures all come out in a single format and, when configured, in the
same file.  ``run.py`` starts uvicorn with ``log_config=None`` so that
uvicorn does not install competing handlers.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER = "chat_room.console"
FILE_HANDLER = "chat_room.file"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _installed(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and uvicorn's loggers.

    Safe to call more than once: handlers are identified by name and
    never added twice, which matters because ``create_app`` runs once
    per application instance.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a log file.  If omitted or empty, only the console
        handler is installed.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _installed(root, CONSOLE_HANDLER):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and not _installed(root, FILE_HANDLER):
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
        uvicorn_logger.setLevel(numeric_level)
