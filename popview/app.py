from __future__ import annotations

import flet as ft

from popview.components.greeting import Greeting
from popview.core.context import AppContext
from popview.core.safe import safe_event


class PopViewApp(ft.Container):
    """Single screen: one greeting button filling a padded column."""

    def __init__(self, ctx: AppContext):
        super().__init__(expand=True, padding=ft.padding.all(8))
        self._ctx = ctx
        self._clicks = 0

        self.handle_click = safe_event(
            self._on_greeting_click,
            label="greeting.on_click",
            env_lower=ctx.env_lower,
        )
        self.greeting = Greeting(ctx.app.name, on_click=self.handle_click)
        self.content = ft.Column(controls=[self.greeting])

    @property
    def clicks(self) -> int:
        return self._clicks

    def _on_greeting_click(self, _e=None) -> None:
        self._clicks += 1
        self._ctx.logcat.d(f"{self.greeting.text} clicked {self._clicks}x")
