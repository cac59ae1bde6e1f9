"""LogCat: tagged logging facade with hooks, chunking and JSON output.

Messages go through an ordered hook chain, get an optional ``...(file:line)``
suffix pointing at the caller, and are split into 3800-character chunks
before they reach the sink.
"""
from __future__ import annotations

import json as _json
import logging
import os
import sys
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Final, Optional, Protocol, Union

from popview.core.logging import VERBOSE, LoggingSink, LogSink

DEFAULT_TAG: Final[str] = "Logger"
MAX_CHUNK: Final[int] = 3800
PARSE_JSON_ERROR: Final[str] = "Parse json error"


class LogLevel(Enum):
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    WTF = "WTF"

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS: Final[dict[LogLevel, int]] = {
    LogLevel.VERBOSE: VERBOSE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WTF: logging.CRITICAL,
}


@dataclass(frozen=True, slots=True)
class CallSite:
    """Source location of a log call."""

    file_name: str
    line_number: int

    @classmethod
    def capture(cls, depth: int = 0) -> Optional["CallSite"]:
        """Location of the caller ``depth`` frames above the one calling this.

        ``capture()`` returns the line that called ``capture`` itself.
        """
        try:
            frame = sys._getframe(depth + 1)
        except ValueError:
            return None
        return cls(os.path.basename(frame.f_code.co_filename), frame.f_lineno)

    @property
    def stem(self) -> str:
        return self.file_name.split(".", 1)[0]

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_number}"


class _Capture:
    def __repr__(self) -> str:
        return "CAPTURE"


# Default for ``occurred``: record the caller's location automatically.
CAPTURE: Final[Any] = _Capture()

Occurred = Union[CallSite, None, _Capture]


@dataclass(slots=True)
class LogInfo:
    """One log call as seen by hooks. Setting ``msg`` to None drops it."""

    level: LogLevel
    msg: Optional[str]
    tag: str
    tr: Optional[BaseException] = None
    occurred: Optional[CallSite] = None


class LogHook(Protocol):
    def hook(self, info: LogInfo) -> None: ...


@dataclass(frozen=True, slots=True)
class LogCatConfig:
    tag: str = DEFAULT_TAG
    enabled: bool = True
    trace_enabled: bool = True
    hooks: tuple[LogHook, ...] = field(default_factory=tuple)

    def with_hook(self, hook: LogHook) -> "LogCatConfig":
        return replace(self, hooks=(*self.hooks, hook))

    def without_hook(self, hook: LogHook) -> "LogCatConfig":
        hooks = list(self.hooks)
        try:
            hooks.remove(hook)
        except ValueError:
            return self
        return replace(self, hooks=tuple(hooks))


def _site(occurred: Occurred) -> Optional[CallSite]:
    # _site <- level method <- caller
    if occurred is CAPTURE:
        return CallSite.capture(2)
    return occurred


class LogCat:
    """Logging facade.

    Configuration (tag, switches, hooks) lives in an immutable
    :class:`LogCatConfig` snapshot; every emission reads one snapshot, and
    mutators swap in a new one.
    """

    def __init__(
        self,
        config: LogCatConfig | None = None,
        *,
        sink: LogSink | None = None,
    ):
        self._config = config or LogCatConfig()
        self._sink: LogSink = sink or LoggingSink()
        self._config_lock = threading.Lock()
        self._chunk_lock = threading.Lock()

    # -- configuration ---------------------------------------------------

    @property
    def config(self) -> LogCatConfig:
        return self._config

    def _update(self, **changes: Any) -> None:
        with self._config_lock:
            self._config = replace(self._config, **changes)

    @property
    def tag(self) -> str:
        return self._config.tag

    @tag.setter
    def tag(self, value: str) -> None:
        self._update(tag=value)

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._update(enabled=bool(value))

    @property
    def trace_enabled(self) -> bool:
        return self._config.trace_enabled

    @trace_enabled.setter
    def trace_enabled(self, value: bool) -> None:
        self._update(trace_enabled=bool(value))

    @property
    def hooks(self) -> tuple[LogHook, ...]:
        return self._config.hooks

    def set_debug(self, enabled: bool, tag: str | None = None) -> None:
        with self._config_lock:
            self._config = replace(
                self._config,
                enabled=bool(enabled),
                tag=self._config.tag if tag is None else tag,
            )

    def add_hook(self, hook: LogHook) -> None:
        with self._config_lock:
            self._config = self._config.with_hook(hook)

    def remove_hook(self, hook: LogHook) -> None:
        with self._config_lock:
            self._config = self._config.without_hook(hook)

    # -- levels ----------------------------------------------------------

    def v(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        self._print(LogLevel.VERBOSE, msg, tag, tr, _site(occurred))

    def d(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        self._print(LogLevel.DEBUG, msg, tag, tr, _site(occurred))

    def i(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        self._print(LogLevel.INFO, msg, tag, tr, _site(occurred))

    def w(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        self._print(LogLevel.WARN, msg, tag, tr, _site(occurred))

    def e(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        """Log at ERROR. ``e(exc)`` logs the exception with an empty message."""
        if tr is None and isinstance(msg, BaseException):
            msg, tr = "", msg
        self._print(LogLevel.ERROR, msg, tag, tr, _site(occurred))

    def wtf(
        self,
        msg: Any,
        tag: str | None = None,
        tr: BaseException | None = None,
        occurred: Occurred = CAPTURE,
    ) -> None:
        self._print(LogLevel.WTF, msg, tag, tr, _site(occurred))

    def json(
        self,
        json: Any,
        tag: str | None = None,
        msg: str = "",
        level: LogLevel = LogLevel.INFO,
        occurred: Occurred = CAPTURE,
    ) -> None:
        """Log ``json`` pretty-printed with two-space indentation.

        Text that does not parse is replaced by ``"Parse json error"``; the
        caller location is added once, right after ``msg``.
        """
        config = self._config
        if not config.enabled or json is None:
            return

        site = _site(occurred)
        where = f" ({site})" if config.trace_enabled and site is not None else ""

        if isinstance(json, (dict, list)):
            body = _json.dumps(json, indent=2, ensure_ascii=False, default=str)
        else:
            text = str(json)
            if not text.strip():
                self._print(level, f"{msg}{where}\n{text}", tag, None, None)
                return
            body = _format_json(text)

        self._print(level, f"{msg}{where}\n{body}", tag, None, None)

    # -- emission --------------------------------------------------------

    def _print(
        self,
        level: LogLevel,
        msg: Any,
        tag: str | None,
        tr: BaseException | None,
        occurred: CallSite | None,
    ) -> None:
        config = self._config
        if not config.enabled or msg is None:
            return

        info = LogInfo(
            level=level,
            msg=str(msg),
            tag=config.tag if tag is None else tag,
            tr=tr,
            occurred=occurred,
        )
        for log_hook in config.hooks:
            log_hook.hook(info)
            if info.msg is None:
                return

        message = str(info.msg)
        real_tag = info.tag
        if config.trace_enabled and info.occurred is not None:
            message += f" ...({info.occurred})"
            if real_tag == DEFAULT_TAG:
                real_tag = info.occurred.stem

        if len(message) > MAX_CHUNK:
            with self._chunk_lock:
                for chunk in split_chunks(message):
                    self._sink.log(level, real_tag, chunk, info.tr)
        else:
            self._sink.log(level, real_tag, message, info.tr)


def split_chunks(message: str, size: int = MAX_CHUNK) -> list[str]:
    """Split ``message`` into consecutive pieces of at most ``size`` chars."""

    if size <= 0:
        raise ValueError("size must be positive")
    return [message[start : start + size] for start in range(0, len(message), size)]


def _format_json(text: str) -> str:
    try:
        obj = _json.loads(text)
    except ValueError:
        return PARSE_JSON_ERROR
    if isinstance(obj, (dict, list)):
        return _json.dumps(obj, indent=2, ensure_ascii=False)
    return _json.dumps(obj, ensure_ascii=False)
