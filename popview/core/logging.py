from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Final, Optional, Protocol

from popview.utils.helpers import data_app_path

if TYPE_CHECKING:
    from popview.core.logcat import LogLevel

_LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"

VERBOSE: Final[int] = 5

logging.addLevelName(VERBOSE, "VERBOSE")


def _log_file_path() -> Path:
    # data_app/log/app.log
    return data_app_path("app.log", folder_name="data_app/log")


def configure_root_logging(*, level: int | None = None) -> None:
    """Configure root logging (idempotent best-effort).

    Safe to call multiple times; it won't add duplicate handlers. The root
    level is only changed when ``level`` is given (INFO on first setup).
    Handlers pass everything through so the root level alone decides.
    """

    root = logging.getLogger()
    if level is not None:
        root.setLevel(level)

    for h in list(root.handlers):
        # If a file handler already exists, assume logging was configured.
        if isinstance(h, RotatingFileHandler):
            return

    if level is None:
        root.setLevel(logging.INFO)

    try:
        log_path = _log_file_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        handler.setLevel(logging.NOTSET)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

        # Also emit to console during development.
        console = logging.StreamHandler()
        console.setLevel(logging.NOTSET)
        console.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(console)
    except OSError:
        # Never block app startup due to logging.
        logging.getLogger(__name__).warning("File logging unavailable")


def get_logger(name: str, *, level: int | None = None) -> logging.Logger:
    """Get a module/component logger, ensuring root logging is configured."""

    configure_root_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Resolve "VERBOSE", "debug", "WARN"... into a stdlib logging level."""

    key = str(name or "").strip().upper()
    if key == "WARN":
        key = "WARNING"
    if key == "WTF":
        key = "CRITICAL"
    value = logging.getLevelName(key)
    return value if isinstance(value, int) else default


class LogSink(Protocol):
    """Where LogCat finally writes one (already chunked) message."""

    def log(
        self,
        level: "LogLevel",
        tag: str,
        msg: str,
        tr: Optional[BaseException] = None,
    ) -> None: ...


class LoggingSink:
    """Platform sink backed by the stdlib logging module.

    Every tag becomes a logger of the same name, so handlers and levels can be
    tuned per tag with the usual logging configuration.
    """

    def __init__(self, *, configure: bool = True):
        self._configure = configure

    def _logger(self, tag: str) -> logging.Logger:
        if self._configure:
            return get_logger(tag)
        return logging.getLogger(tag)

    def log(
        self,
        level: "LogLevel",
        tag: str,
        msg: str,
        tr: Optional[BaseException] = None,
    ) -> None:
        exc_info = (type(tr), tr, tr.__traceback__) if tr is not None else None
        self._logger(tag).log(level.logging_level, msg, exc_info=exc_info)
