import logging
from logging.handlers import RotatingFileHandler

import pytest

from popview.core.context import build_context
from popview.core.logcat import LogCat, LogCatConfig, LogLevel
from popview.core.logging import (
    VERBOSE,
    LoggingSink,
    configure_root_logging,
    get_logger,
    level_from_name,
)
from popview.services.config_service import get_config_path


@pytest.mark.parametrize("level, expected", [
    (LogLevel.VERBOSE, VERBOSE),
    (LogLevel.DEBUG, logging.DEBUG),
    (LogLevel.INFO, logging.INFO),
    (LogLevel.WARN, logging.WARNING),
    (LogLevel.ERROR, logging.ERROR),
    (LogLevel.WTF, logging.CRITICAL),
])
def test_sink_maps_levels_and_tag(caplog, level, expected):
    caplog.set_level(VERBOSE)
    LoggingSink(configure=False).log(level, "MyTag", "hello")
    assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
        ("MyTag", expected, "hello")
    ]


def test_sink_attaches_exception(caplog):
    caplog.set_level(logging.INFO)
    try:
        raise ValueError("boom")
    except ValueError as ex:
        err = ex
    LoggingSink(configure=False).log(LogLevel.ERROR, "T", "failed", err)
    record = caplog.records[0]
    assert record.exc_info[1] is err
    assert "ValueError: boom" in caplog.text


def test_logcat_through_logging_sink(caplog):
    caplog.set_level(VERBOSE)
    logcat = LogCat(LogCatConfig(tag="Pop"), sink=LoggingSink(configure=False))
    logcat.v("verbose line", occurred=None)
    assert caplog.records[0].levelname == "VERBOSE"
    assert caplog.records[0].name == "Pop"


@pytest.mark.parametrize("name, expected", [
    ("verbose", VERBOSE),
    ("DEBUG", logging.DEBUG),
    ("warn", logging.WARNING),
    ("WTF", logging.CRITICAL),
    ("nonsense", logging.INFO),
    ("", logging.INFO),
])
def test_level_from_name(name, expected):
    assert level_from_name(name) == expected


def test_configure_root_logging_is_idempotent(data_dir):
    configure_root_logging(level=logging.DEBUG)
    configure_root_logging(level=logging.DEBUG)
    root = logging.getLogger()
    file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert (data_dir / "data_app" / "log" / "app.log").exists()


def test_get_logger_sets_level():
    logger = get_logger("popview.test", level=logging.WARNING)
    assert logger.name == "popview.test"
    assert logger.level == logging.WARNING


def test_get_logger_keeps_configured_root_level():
    configure_root_logging(level=logging.DEBUG)
    get_logger("popview.first")
    LoggingSink().log(LogLevel.DEBUG, "popview.second", "again")
    assert logging.getLogger().level == logging.DEBUG


def test_first_setup_defaults_to_info():
    logging.getLogger().setLevel(logging.WARNING)
    configure_root_logging()
    assert logging.getLogger().level == logging.INFO


# ---- Config level through the default sink ---------------------------------

@pytest.mark.parametrize("level_name, expected", [
    ("DEBUG", [("debug 1", logging.DEBUG), ("debug 2", logging.DEBUG)]),
    ("VERBOSE", [
        ("debug 1", logging.DEBUG),
        ("verbose 1", VERBOSE),
        ("debug 2", logging.DEBUG),
        ("verbose 2", VERBOSE),
    ]),
])
def test_configured_level_reaches_output(caplog, level_name, expected):
    get_config_path().write_text(
        f'[LOGCAT]\nlevel = "{level_name}"\n', encoding="utf-8"
    )
    ctx = build_context(None, sink=LoggingSink())

    for n in (1, 2):
        ctx.logcat.d(f"debug {n}", occurred=None)
        ctx.logcat.v(f"verbose {n}", occurred=None)

    records = [(r.getMessage(), r.levelno) for r in caplog.records if r.name == "Logger"]
    assert records == expected
    assert logging.getLogger().level == level_from_name(level_name)
