from __future__ import annotations

from collections.abc import Callable
from typing import Any

import flet as ft


def greeting_text(name: str) -> str:
    return f"Hello {name}!"


class Greeting(ft.ElevatedButton):
    """Button labelled ``Hello <name>!``."""

    def __init__(self, name: str, *, on_click: Callable[[Any], Any] | None = None):
        super().__init__(text=greeting_text(name), on_click=on_click)
        self.greeting_name = name
