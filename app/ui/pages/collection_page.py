"""Collection page: search, filter, summarize and edit the game catalog."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Sequence, TypeVar

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QGridLayout
from qfluentwidgets import (
    SubtitleLabel, BodyLabel, SearchLineEdit, ComboBox, PrimaryPushButton,
    ToolButton, FluentIcon as FIF, InfoBar, InfoBarPosition, MessageBox,
)
from loguru import logger

from app.i18n import t
from app.core.collection import CollectionStore
from app.core.errors import PersistenceError, ValidationError
from app.core.view import ALL, ViewFilter, distinct_platforms, empty_state, summarize
from app.models.game_entry import GameEntry, GameStatus, ThemeMode
from app.ui.components.add_game_dialog import AddGameDialog
from app.ui.components.game_table import GameTable
from app.ui.components.stat_card import StatCard

T = TypeVar("T")


class CollectionPage(QWidget):
    """The catalog view.  All edits go through the :class:`CollectionStore`.

    Store coroutines run to completion one at a time on *loop*, so intents
    are serialized by construction.
    """

    theme_changed = Signal(str)

    def __init__(
        self,
        store: CollectionStore,
        loop: asyncio.AbstractEventLoop,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("collection_page")
        self._store = store
        self._loop = loop
        self._filter = ViewFilter()
        self._init_ui()
        unsubscribe = store.subscribe(self._refresh)
        self.destroyed.connect(lambda *_: unsubscribe())
        self._refresh()

    # ------------------------------------------------------------------
    # UI Setup
    # ------------------------------------------------------------------

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(36, 20, 36, 20)
        layout.setSpacing(16)

        header = QHBoxLayout()
        header.addWidget(SubtitleLabel(t("app.name"), self))
        header.addStretch()
        self._theme_btn = ToolButton(self)
        self._theme_btn.setToolTip(t("collection.toggle_theme"))
        self._theme_btn.clicked.connect(self._on_toggle_theme)
        header.addWidget(self._theme_btn)
        layout.addLayout(header)

        # Search / filters / add
        bar = QHBoxLayout()
        self._search = SearchLineEdit(self)
        self._search.setPlaceholderText(t("collection.search_placeholder"))
        self._search.textChanged.connect(self._on_search)
        bar.addWidget(self._search, stretch=1)

        self._platform_filter = ComboBox(self)
        self._platform_filter.currentIndexChanged.connect(self._on_platform_filter)
        bar.addWidget(self._platform_filter)

        self._status_filter = ComboBox(self)
        self._status_filter.addItem(t("collection.all_statuses"), userData=ALL)
        for status in GameStatus:
            self._status_filter.addItem(t(f"status.{status.value}"), userData=status.value)
        self._status_filter.setCurrentIndex(0)
        self._status_filter.currentIndexChanged.connect(self._on_status_filter)
        bar.addWidget(self._status_filter)

        self._add_btn = PrimaryPushButton(FIF.ADD, t("collection.add_game"), self)
        self._add_btn.clicked.connect(self._on_add)
        bar.addWidget(self._add_btn)
        layout.addLayout(bar)

        # Summary
        stats = QGridLayout()
        stats.setSpacing(12)
        self._total_card = StatCard(t("stats.total"), self)
        self._playing_card = StatCard(t("stats.playing"), self)
        self._completed_card = StatCard(t("stats.completed"), self)
        self._unplayed_card = StatCard(t("stats.unplayed"), self)
        for col, card in enumerate((
            self._total_card, self._playing_card,
            self._completed_card, self._unplayed_card,
        )):
            stats.addWidget(card, 0, col)
        layout.addLayout(stats)

        self._table = GameTable(self)
        self._table.status_changed.connect(self._on_status_changed)
        self._table.delete_requested.connect(self._on_delete)
        layout.addWidget(self._table, stretch=1)

        self._placeholder = BodyLabel("", self)
        self._placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._placeholder)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        entries = self._store.entries
        self._refresh_platforms(entries)
        visible = self._filter.apply(entries)

        stats = summarize(entries)
        self._total_card.set_value(stats.total)
        self._playing_card.set_value(stats.playing)
        self._completed_card.set_value(stats.completed)
        self._unplayed_card.set_value(stats.unplayed)

        self._table.set_entries(visible)
        state = empty_state(entries, visible)
        self._table.setVisible(state is None)
        self._placeholder.setVisible(state is not None)
        if state is not None:
            self._placeholder.setText(t(f"collection.{state}"))

        dark = self._store.theme is ThemeMode.DARK
        self._theme_btn.setIcon(FIF.BRIGHTNESS if dark else FIF.QUIET_HOURS)

    def _refresh_platforms(self, entries: Sequence[GameEntry]) -> None:
        platforms = distinct_platforms(entries)
        selected = self._filter.platform
        if selected != ALL and selected not in platforms:
            selected = ALL
            self._filter = ViewFilter(self._filter.search_term, ALL, self._filter.status)

        self._platform_filter.blockSignals(True)
        self._platform_filter.clear()
        self._platform_filter.addItem(t("collection.all_platforms"), userData=ALL)
        for p in platforms:
            self._platform_filter.addItem(p, userData=p)
        self._platform_filter.setCurrentIndex(
            0 if selected == ALL else platforms.index(selected) + 1
        )
        self._platform_filter.blockSignals(False)

    # ------------------------------------------------------------------
    # Filter inputs
    # ------------------------------------------------------------------

    def _on_search(self, text: str) -> None:
        self._filter = ViewFilter(text, self._filter.platform, self._filter.status)
        self._refresh()

    def _on_platform_filter(self, index: int) -> None:
        platform = self._platform_filter.itemData(index) or ALL
        self._filter = ViewFilter(self._filter.search_term, platform, self._filter.status)
        self._refresh()

    def _on_status_filter(self, index: int) -> None:
        status = self._status_filter.itemData(index) or ALL
        self._filter = ViewFilter(self._filter.search_term, self._filter.platform, status)
        self._refresh()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def _run(self, coro: Awaitable[T]) -> T:
        self.setEnabled(False)
        try:
            return self._loop.run_until_complete(coro)
        finally:
            self.setEnabled(True)

    def _on_add(self) -> None:
        dialog = AddGameDialog(self.window())
        if not dialog.exec() or dialog.draft is None:
            return
        try:
            self._run(self._store.add(dialog.draft))
        except ValidationError as e:
            self._warn(t("form.required"), str(e))
        except PersistenceError as e:
            self._save_failed(e)

    def _on_delete(self, entry_id: int) -> None:
        entry = self._store.get(entry_id)
        if entry is None:
            return
        box = MessageBox(
            t("collection.confirm_delete"),
            t("collection.confirm_delete_detail", title=entry.title),
            self.window(),
        )
        if not box.exec():
            return
        try:
            self._run(self._store.remove(entry_id))
        except PersistenceError as e:
            self._save_failed(e)

    def _on_status_changed(self, entry_id: int, status: str) -> None:
        try:
            self._run(self._store.update_status(entry_id, status))
        except ValidationError as e:
            self._warn(t("common.warning"), str(e))
        except PersistenceError as e:
            self._save_failed(e)

    def _on_toggle_theme(self) -> None:
        saved = self._run(self._store.toggle_theme())
        if not saved:
            self._warn(t("common.warning"), t("collection.theme_save_failed"))
        self.theme_changed.emit(self._store.theme.value)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _save_failed(self, error: PersistenceError) -> None:
        logger.error("Save failed: {}", error)
        InfoBar.error(
            title=t("common.error"),
            content=t("collection.save_failed"),
            parent=self,
            position=InfoBarPosition.TOP,
            duration=5000,
        )

    def _warn(self, title: str, content: str) -> None:
        InfoBar.warning(
            title=title,
            content=content,
            parent=self,
            position=InfoBarPosition.TOP,
            duration=3000,
        )
