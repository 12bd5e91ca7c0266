"""Reusable game table component."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHeaderView, QTableWidgetItem, QAbstractItemView
from qfluentwidgets import TableWidget, ComboBox, TransparentToolButton, FluentIcon as FIF

from app.i18n import t
from app.models.game_entry import GameEntry, GameStatus, status_style

# Badge text colours per status style key.
_STYLE_COLORS: dict[str, str] = {
    "gray": "#6b7280",
    "blue": "#1d4ed8",
    "green": "#15803d",
    "yellow": "#a16207",
}

_COLUMNS = ("title", "platform", "genre", "status", "purchase_date", "notes")


class GameTable(QWidget):
    """Table of entries with an inline status selector and a delete button per row.

    Entry ids are epoch milliseconds and exceed a C ``int``, so signals
    carry them as ``object``.
    """

    status_changed = Signal(object, str)  # (entry id, new status value)
    delete_requested = Signal(object)  # entry id

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._entries: list[GameEntry] = []
        self._init_ui()

    def _init_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._table = TableWidget(self)
        self._table.setColumnCount(len(_COLUMNS) + 1)
        self._table.setHorizontalHeaderLabels(
            [t(f"field.{c}") for c in _COLUMNS] + [""]
        )
        header = self._table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(len(_COLUMNS), QHeaderView.ResizeMode.Fixed)
        self._table.setColumnWidth(len(_COLUMNS), 48)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.verticalHeader().hide()
        self._table.setBorderVisible(True)
        self._table.setBorderRadius(8)
        layout.addWidget(self._table, stretch=1)

    def set_entries(self, entries: list[GameEntry]) -> None:
        self._entries = list(entries)
        self._refresh()

    def _refresh(self) -> None:
        self._table.setRowCount(0)
        for entry in self._entries:
            row = self._table.rowCount()
            self._table.insertRow(row)
            self._table.setItem(row, 0, QTableWidgetItem(entry.title))
            self._table.setItem(row, 1, QTableWidgetItem(entry.platform))
            self._table.setItem(row, 2, QTableWidgetItem(entry.genre))
            self._table.setCellWidget(row, 3, self._status_combo(entry))
            self._table.setItem(row, 4, QTableWidgetItem(entry.purchase_date or "-"))
            self._table.setItem(row, 5, QTableWidgetItem(entry.notes))

            delete_btn = TransparentToolButton(FIF.DELETE, self)
            delete_btn.setToolTip(t("common.delete"))
            delete_btn.clicked.connect(
                lambda _=False, eid=entry.id: self.delete_requested.emit(eid)
            )
            self._table.setCellWidget(row, len(_COLUMNS), delete_btn)

    def _status_combo(self, entry: GameEntry) -> ComboBox:
        combo = ComboBox(self)
        for status in GameStatus:
            combo.addItem(t(f"status.{status.value}"), userData=status.value)
        combo.setCurrentIndex(list(GameStatus).index(entry.status))
        color = _STYLE_COLORS[status_style(entry.status)]
        combo.setStyleSheet(f"ComboBox {{ color: {color}; }}")
        combo.currentIndexChanged.connect(
            lambda index, eid=entry.id: self.status_changed.emit(
                eid, list(GameStatus)[index].value
            )
        )
        return combo
