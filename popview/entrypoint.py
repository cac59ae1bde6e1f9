from __future__ import annotations

import flet as ft

from popview.app import PopViewApp
from popview.core.context import build_context
from popview.utils.helpers import get_data_app_dir


def _main(page: ft.Page) -> None:
    page.title = "PopView"
    page.padding = 0
    page.theme_mode = ft.ThemeMode.SYSTEM

    ctx = build_context(page, logger_name="popview")
    app = PopViewApp(ctx)
    ctx.application.init(app)
    ctx.logcat.i(f"{page.title} started ({ctx.env_lower})")

    page.add(app)
    page.update()


def run() -> None:
    # Ensure the data folders exist before logging/config touch them.
    get_data_app_dir(folder_name="data_app/log")
    get_data_app_dir(folder_name="data_app/settings")

    ft.app(target=_main)
