import logging

import pytest

from popview.core.errors import report_exception_sync, write_error_log_sync
from popview.core.safe import safe_event


def error_log(data_dir):
    return data_dir / "data_app" / "log" / "error.log"


def test_write_error_log_appends(data_dir):
    write_error_log_sync("first")
    write_error_log_sync("second\n")
    write_error_log_sync("")
    assert error_log(data_dir).read_text(encoding="utf-8") == "first\n\nsecond\n\n"


def test_report_exception_production_writes_file(data_dir, caplog):
    caplog.set_level(logging.ERROR)
    report_exception_sync(
        ValueError("boom"),
        where="loading",
        env_lower="production",
        traceback_text="Traceback: boom",
    )
    assert "loading: boom" in caplog.text
    assert "Traceback: boom" in error_log(data_dir).read_text(encoding="utf-8")


def test_report_exception_development_prints(data_dir, capsys):
    report_exception_sync(ValueError("boom"), where="dev", env_lower="development")
    assert "ValueError: boom" in capsys.readouterr().err
    assert not error_log(data_dir).exists()


def test_safe_event_swallows_and_reports(data_dir):
    def handler(_e):
        raise RuntimeError("click failed")

    wrapped = safe_event(handler, label="button")
    assert wrapped(None) is None
    assert "click failed" in error_log(data_dir).read_text(encoding="utf-8")


def test_safe_event_reraises_when_asked():
    def handler(_e):
        raise RuntimeError("loud")

    wrapped = safe_event(handler, label="button", env_lower="test", swallow=False)
    with pytest.raises(RuntimeError, match="loud"):
        wrapped(None)


def test_safe_event_passes_result_and_handles_none():
    assert safe_event(lambda e: e * 2, label="double")(21) == 42
    assert safe_event(None, label="missing")("event") is None
