from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from popview.utils.helpers import data_app_path

DEFAULT_CONFIG_TOML = """[APPLICATION]
environment = "production"
# Name shown on the greeting button ("Hello <name>!")
name = "Android"

[LOGCAT]
# Global switch for LogCat output
enabled = true
# Default tag. When left as "Logger", the caller's file name is used instead.
tag = "Logger"
# Append " ...(file:line)" to every message
trace_enabled = true
# Minimum level written by the root logger: VERBOSE, DEBUG, INFO, WARN, ERROR
level = "INFO"
"""


def get_config_path() -> Path:
    # Stored under: data_app/settings/config.toml
    return data_app_path("config.toml", folder_name="data_app/settings")


def ensure_default_config() -> tuple[Path, bool, str | None]:
    """Ensure config.toml exists; create with defaults if missing.

    Returns:
        (path, created_template, error_message)
    """
    path = get_config_path()
    if path.exists():
        return path, False, None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML, encoding="utf-8")
        return path, True, None
    except OSError as ex:
        return path, False, str(ex)


def _toml_loads(text: str) -> dict[str, Any]:
    """Parse TOML into a python dict.

    Uses stdlib `tomllib` when available; falls back to `tomli`.
    """
    try:
        import tomllib  # py>=3.11

        return tomllib.loads(text)
    except ModuleNotFoundError:
        import tomli  # type: ignore

        return tomli.loads(text)


def load_config_toml() -> tuple[dict[str, Any], Path, str | None]:
    """Load the application config TOML from data_app/settings/config.toml.

    Returns:
        (config_dict, path, error_message)
    """
    path, _created, err = ensure_default_config()
    if err:
        return {}, path, err

    try:
        raw = path.read_text(encoding="utf-8-sig")
        return _toml_loads(raw or ""), path, None
    except Exception as ex:
        return {}, path, str(ex)


@dataclass(frozen=True)
class ApplicationConfig:
    environment: str = "production"
    name: str = "Android"


@dataclass(frozen=True)
class LogConfig:
    enabled: bool = True
    tag: str = "Logger"
    trace_enabled: bool = True
    level: str = "INFO"


_LEVELS = ("VERBOSE", "DEBUG", "INFO", "WARN", "ERROR")


def _to_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    s = str(v or "").strip().lower()
    if s in ("true", "1", "yes", "y", "on"):
        return True
    if s in ("false", "0", "no", "n", "off"):
        return False
    return default


def get_application_config() -> tuple[ApplicationConfig, str | None]:
    cfg, _path, err = load_config_toml()
    if err:
        return ApplicationConfig(), err

    app = cfg.get("APPLICATION") if isinstance(cfg, dict) else None
    if not isinstance(app, dict):
        app = {}

    env = str(app.get("environment", "production") or "production").strip()
    name = str(app.get("name", "Android") or "Android").strip()

    return ApplicationConfig(
        environment=env or "production", name=name or "Android"
    ), None


def get_log_config() -> tuple[LogConfig, str | None]:
    """Read LogCat settings from the [LOGCAT] section.

    Env overrides:
    - POPVIEW_LOG_ENABLED: "true"/"false"
    - POPVIEW_LOG_TAG: default tag
    """

    env_enabled = str(os.environ.get("POPVIEW_LOG_ENABLED", "") or "").strip()
    env_tag = str(os.environ.get("POPVIEW_LOG_TAG", "") or "").strip()

    cfg, _path, err = load_config_toml()
    if err:
        # Even if config fails, honor env overrides.
        defaults = LogConfig()
        return (
            LogConfig(
                enabled=_to_bool(env_enabled, defaults.enabled),
                tag=env_tag or defaults.tag,
            ),
            err,
        )

    sec = cfg.get("LOGCAT") if isinstance(cfg, dict) else None
    if not isinstance(sec, dict):
        sec = {}

    def _s(key: str, default: str) -> str:
        return str(sec.get(key, default) or "").strip() or default

    enabled = _to_bool(sec.get("enabled", True), True)
    if env_enabled:
        enabled = _to_bool(env_enabled, enabled)

    level = _s("level", "INFO").upper()
    if level not in _LEVELS:
        level = "INFO"

    return (
        LogConfig(
            enabled=enabled,
            tag=env_tag or _s("tag", "Logger"),
            trace_enabled=_to_bool(sec.get("trace_enabled", True), True),
            level=level,
        ),
        None,
    )
