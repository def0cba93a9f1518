"""Log file setup for the Grove launcher.

Grove's modules log through ``logging.getLogger(__name__)``, so everything
they emit lands under the ``grove`` package logger. :func:`setup_logging`
attaches Grove's handlers there, leaving the root logger to the host
application.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from ..services.settings import Settings

__all__ = ["LOG_FILE_NAME", "log_path_for", "setup_logging"]

LOG_FILE_NAME = "grove.log"
_PACKAGE_LOGGER = "grove"
_DEFAULT_LOG_DIR = Path.home() / ".grove" / "logs"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_installed: list[logging.Handler] = []


def log_path_for(settings: Settings) -> Path:
    """Return the log file selected by ``settings.log_dir``."""

    base = Path(settings.log_dir).expanduser() if settings.log_dir else _DEFAULT_LOG_DIR
    return base / LOG_FILE_NAME


def setup_logging(
    settings: Settings,
    *,
    debug: bool = False,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """Send Grove's log records to a rotating file and, optionally, stderr.

    The level is DEBUG when ``debug`` or ``settings.debug_logging`` is set,
    INFO otherwise. Calling again swaps out the handlers installed by the
    previous call, so settings changes take effect without duplicates.
    """

    level = logging.DEBUG if debug or settings.debug_logging else logging.INFO
    log_path = log_path_for(settings)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    _remove_installed(package_logger)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        _installed.append(handler)
    package_logger.setLevel(level)
    return log_path


def _remove_installed(package_logger: logging.Logger) -> None:
    while _installed:
        handler = _installed.pop()
        package_logger.removeHandler(handler)
        handler.close()
