from __future__ import annotations

from collections.abc import Callable
from typing import Any

from popview.core.errors import report_exception_sync


def safe_event(
    handler: Callable[[Any], Any] | None,
    *,
    label: str,
    env_lower: str = "production",
    swallow: bool = True,
) -> Callable[[Any], Any]:
    """Wrap a Flet event handler with consistent exception reporting."""

    def _wrapped(e: Any) -> Any:
        if handler is None:
            return None
        try:
            return handler(e)
        except Exception as ex:
            report_exception_sync(
                ex, where=f"Unhandled exception in {label}", env_lower=env_lower
            )
            if not swallow:
                raise
            return None

    return _wrapped
