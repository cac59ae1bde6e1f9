from popview.core.context import build_context, build_logcat
from popview.core.logcat import LogLevel
from popview.services.config_service import LogConfig, get_config_path


def test_build_logcat_applies_config(sink):
    logcat = build_logcat(LogConfig(enabled=True, tag="Ctx", trace_enabled=False), sink=sink)
    logcat.i("hello")
    assert sink.records == [(LogLevel.INFO, "Ctx", "hello", None)]


def test_build_logcat_disabled(sink):
    logcat = build_logcat(LogConfig(enabled=False), sink=sink)
    logcat.e("never")
    assert sink.records == []


def test_build_context_reads_config(sink):
    get_config_path().write_text(
        '[APPLICATION]\nenvironment = "Development"\n[LOGCAT]\ntag = "Pop"\n',
        encoding="utf-8",
    )
    ctx = build_context(None, sink=sink)
    assert ctx.page is None
    assert ctx.env_lower == "development"
    assert ctx.logcat.tag == "Pop"
    assert ctx.application.is_initialized is False
    assert ctx.logger.name == "popview"


def test_contexts_do_not_share_state(sink):
    a = build_context(None, sink=sink)
    b = build_context(None, sink=sink)
    a.application.init("app")
    a.logcat.enabled = False
    assert not b.application.is_initialized
    assert b.logcat.enabled is True
