from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import flet as ft

from popview.core.application import ApplicationModule
from popview.core.logcat import LogCat, LogCatConfig
from popview.core.logging import (
    LogSink,
    configure_root_logging,
    get_logger,
    level_from_name,
)
from popview.services.config_service import (
    ApplicationConfig,
    LogConfig,
    get_application_config,
    get_log_config,
)


@dataclass(slots=True)
class AppContext:
    """Shared application context.

    Passed explicitly to the components that need it instead of reaching for
    module-level singletons.
    """

    page: ft.Page | None
    app: ApplicationConfig
    log: LogConfig
    logcat: LogCat
    application: ApplicationModule[Any] = field(default_factory=ApplicationModule)
    logger_name: str = "popview"

    @property
    def logger(self):
        return get_logger(self.logger_name)

    @property
    def env_lower(self) -> str:
        return str(self.app.environment or "production").strip().lower()


def build_logcat(cfg: LogConfig, *, sink: LogSink | None = None) -> LogCat:
    return LogCat(
        LogCatConfig(
            tag=cfg.tag,
            enabled=cfg.enabled,
            trace_enabled=cfg.trace_enabled,
        ),
        sink=sink,
    )


def build_context(
    page: ft.Page | None,
    *,
    logger_name: str = "popview",
    sink: LogSink | None = None,
) -> AppContext:
    app_cfg, _app_err = get_application_config()
    log_cfg, _log_err = get_log_config()

    configure_root_logging(level=level_from_name(log_cfg.level))
    ctx = AppContext(
        page=page,
        app=app_cfg,
        log=log_cfg,
        logcat=build_logcat(log_cfg, sink=sink),
        logger_name=logger_name,
    )
    for err in (_app_err, _log_err):
        if err:
            ctx.logger.warning("Config fallback to defaults: %s", err)
    return ctx
