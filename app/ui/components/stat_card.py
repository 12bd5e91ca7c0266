"""Stat card: a small card showing one summary number."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QVBoxLayout
from qfluentwidgets import CardWidget, CaptionLabel, TitleLabel


class StatCard(CardWidget):
    """Compact card with a large count and a caption underneath."""

    def __init__(self, caption: str = "", parent=None) -> None:
        super().__init__(parent)
        self.setFixedHeight(80)
        self._init_ui(caption)

    def _init_ui(self, caption: str) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 10, 16, 10)
        layout.setSpacing(2)

        self._value = TitleLabel("0", self)
        self._value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._value)

        self._caption = CaptionLabel(caption, self)
        self._caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._caption)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_value(self, value: int) -> None:
        self._value.setText(str(value))

    def set_caption(self, text: str) -> None:
        self._caption.setText(text)
