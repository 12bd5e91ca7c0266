"""Main application window using PySide6-Fluent-Widgets FluentWindow."""

from __future__ import annotations

import asyncio

from PySide6.QtCore import QSize
from PySide6.QtWidgets import QApplication

from qfluentwidgets import (
    FluentWindow,
    FluentIcon as FIF,
    setTheme,
    Theme,
)

from app.i18n import t
from app.core.collection import CollectionStore
from app.models.game_entry import ThemeMode
from app.ui.pages.collection_page import CollectionPage


class MainWindow(FluentWindow):
    """Main Fluent-style window hosting the collection page."""

    def __init__(self, store: CollectionStore, loop: asyncio.AbstractEventLoop) -> None:
        super().__init__()
        self._store = store
        self._loop = loop
        self._init_window()
        self._init_pages()
        self._apply_theme(store.theme.value)

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _init_window(self) -> None:
        self.setWindowTitle(t("app.name"))
        self.setMinimumSize(QSize(960, 640))
        self.resize(1100, 720)

        # Center on screen
        desktop = QApplication.primaryScreen().availableGeometry()
        x = (desktop.width() - self.width()) // 2
        y = (desktop.height() - self.height()) // 2
        self.move(x, y)

    def _init_pages(self) -> None:
        self.collection_page = CollectionPage(self._store, self._loop, self)
        self.collection_page.theme_changed.connect(self._apply_theme)
        self.addSubInterface(self.collection_page, FIF.GAME, t("nav.collection"))

    def _apply_theme(self, mode: str) -> None:
        setTheme(Theme.DARK if mode == ThemeMode.DARK.value else Theme.LIGHT)
