from __future__ import annotations

import traceback
from typing import Optional

from popview.core.logging import get_logger
from popview.utils.helpers import data_app_path


class ApplicationStateError(RuntimeError):
    """Raised when the application handle is used in the wrong state."""


class ApplicationNotInitializedError(ApplicationStateError):
    def __init__(self, message: str = "Application instance is not initialized."):
        super().__init__(message)


class ApplicationAlreadyInitializedError(ApplicationStateError):
    def __init__(
        self, message: str = "Application instance is already initialized."
    ):
        super().__init__(message)


def capture_traceback() -> str:
    """Best-effort capture of the current exception traceback."""

    try:
        return traceback.format_exc()
    except Exception:
        return ""


def write_error_log_sync(
    text: str, *, log_filename: str = "error.log", folder_name: str = "data_app/log"
) -> None:
    """Append text to the application's error log."""

    if not text:
        return

    log_path = data_app_path(log_filename, folder_name=folder_name)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as f:
        f.write(text)
        if not text.endswith("\n"):
            f.write("\n")
        f.write("\n")


def report_exception_sync(
    exc: BaseException,
    *,
    where: str,
    env_lower: str,
    logger_name: str = "errors",
    traceback_text: Optional[str] = None,
) -> None:
    """Log an exception and, in production, persist its traceback to error.log.

    In non-production environments the traceback goes to stderr instead.
    """

    logger = get_logger(logger_name)

    try:
        logger.error("%s: %s", where, exc, exc_info=exc)
    except Exception:
        pass

    tb = traceback_text if traceback_text is not None else capture_traceback()

    if str(env_lower or "production").strip().lower() == "production":
        try:
            write_error_log_sync(tb)
        except OSError:
            logger.warning("Could not write error.log")
    else:
        try:
            traceback.print_exception(exc)
        except Exception:
            pass
