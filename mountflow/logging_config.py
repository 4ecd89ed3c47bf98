import logging
import logging.handlers
from typing import List

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

APP_LOGGER_NAME = "mountflow"

FILE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Per-request access lines duplicate the middleware's debug logging
QUIET_LOGGERS = ("uvicorn.access",)


def get_app_logger() -> logging.Logger:
    """Named logger for services that keep a logger reference."""
    return logging.getLogger(APP_LOGGER_NAME)


def _console_handler(settings: Settings) -> logging.Handler:
    handler = RichHandler(
        console=Console(width=settings.log_console_width),
        markup=True,
        rich_tracebacks=True,
    )
    handler.setLevel(settings.log_level)
    return handler


def _file_handler(settings: Settings) -> logging.Handler:
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    handler.setLevel(settings.log_level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(settings: Settings) -> List[logging.Handler]:
    """
    Route the root logger to a rich console and, when a log file is set,
    a file rotated at midnight.

    Replaces any handlers already on the root logger and returns the new ones.
    """
    handlers = [_console_handler(settings)]
    if settings.log_file_path:
        handlers.append(_file_handler(settings))

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    target = settings.log_file_path or "console only"
    logging.info(f"[bold green]Logging initialized[/] - {target}, level {settings.log_level}")
    return handlers
