"""Logging setup for the metatag editor.

All modules log through the stdlib tree under ``metatags``. Qt's own
diagnostics are forwarded to :data:`QT_LOGGER_NAME` by the Qt message
handler the app installs, so they land in the same rotating file.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any

from ..services.settings import SETTINGS_DIR, Settings

__all__ = [
    "LOG_FILENAME",
    "QT_LOGGER_NAME",
    "get_log_path",
    "level_for_settings",
    "log_qt_message",
    "setup_logging",
]

LOG_FILENAME = "metatags.log"
QT_LOGGER_NAME = "metatags.qt"
_LOG_DIR_ENV = "METATAGS_LOG_DIR"
_DEFAULT_LOG_DIR = SETTINGS_DIR / "logs"
_QT_LEVELS: dict[str, int] = {
    "QtDebugMsg": logging.DEBUG,
    "QtInfoMsg": logging.INFO,
    "QtWarningMsg": logging.WARNING,
    "QtCriticalMsg": logging.ERROR,
    "QtFatalMsg": logging.CRITICAL,
}
_CONFIGURED = False
_LOG_PATH: Path | None = None


def level_for_settings(settings: Settings | None, *, debug: bool = False) -> int:
    """DEBUG when forced by the caller or enabled in settings, else INFO."""

    if debug or (settings is not None and settings.debug_logging):
        return logging.DEBUG
    return logging.INFO


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Write ``metatags.log`` under the log directory, plus the console.

    Repeated calls are ignored unless ``force`` is set, which is how the
    app raises the level once settings enable debug logging.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    target_dir = Path(log_dir or os.environ.get(_LOG_DIR_ENV) or _DEFAULT_LOG_DIR).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    log_path = target_dir / LOG_FILENAME

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    # Qt chatter stays at WARNING and above unless debugging.
    logging.getLogger(QT_LOGGER_NAME).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    _CONFIGURED = True
    _LOG_PATH = log_path
    logging.getLogger(__name__).debug("Logging to %s (level=%s)", log_path, logging.getLevelName(level))
    return log_path


def log_qt_message(mode: Any, message: str) -> None:
    """Forward one Qt diagnostic, mapping its ``QtMsgType`` to a log level."""

    name = getattr(mode, "name", str(mode))
    logging.getLogger(QT_LOGGER_NAME).log(_QT_LEVELS.get(name, logging.INFO), message)


def get_log_path() -> Path | None:
    return _LOG_PATH
