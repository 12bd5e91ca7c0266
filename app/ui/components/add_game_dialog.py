"""Dialog for entering a new game."""

from __future__ import annotations

from PySide6.QtWidgets import QGridLayout
from qfluentwidgets import (
    MessageBoxBase, SubtitleLabel, CaptionLabel, LineEdit, ComboBox,
)

from app.i18n import t
from app.core.errors import ValidationError
from app.models.game_entry import GameDraft, GameStatus


class AddGameDialog(MessageBoxBase):
    """Collects a :class:`GameDraft`; the OK button stays blocked until it validates."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self._draft: GameDraft | None = None
        self._init_content()

    @property
    def draft(self) -> GameDraft | None:
        """The validated draft, set once the dialog was accepted."""
        return self._draft

    def _init_content(self) -> None:
        self.titleLabel = SubtitleLabel(t("form.heading"), self)
        self.viewLayout.addWidget(self.titleLabel)

        grid = QGridLayout()
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(10)

        self._title = LineEdit(self)
        self._title.setPlaceholderText(t("form.title_placeholder"))
        self._platform = LineEdit(self)
        self._platform.setPlaceholderText(t("form.platform_placeholder"))
        self._genre = LineEdit(self)
        self._genre.setPlaceholderText(t("form.genre_placeholder"))

        self._status = ComboBox(self)
        for status in GameStatus:
            self._status.addItem(t(f"status.{status.value}"), userData=status.value)
        self._status.setCurrentIndex(0)

        self._purchase_date = LineEdit(self)
        self._purchase_date.setPlaceholderText(f"{t('field.purchase_date')} (YYYY-MM-DD)")
        self._notes = LineEdit(self)
        self._notes.setPlaceholderText(t("form.notes_placeholder"))

        grid.addWidget(self._title, 0, 0)
        grid.addWidget(self._platform, 0, 1)
        grid.addWidget(self._genre, 1, 0)
        grid.addWidget(self._status, 1, 1)
        grid.addWidget(self._purchase_date, 2, 0)
        grid.addWidget(self._notes, 2, 1)
        self.viewLayout.addLayout(grid)

        self._error = CaptionLabel("", self)
        self._error.setStyleSheet("color: #dc2626;")
        self._error.hide()
        self.viewLayout.addWidget(self._error)

        self.widget.setMinimumWidth(520)
        self.yesButton.setText(t("common.add"))
        self.cancelButton.setText(t("common.cancel"))

    def _collect(self) -> GameDraft:
        return GameDraft(
            title=self._title.text(),
            platform=self._platform.text(),
            genre=self._genre.text(),
            status=list(GameStatus)[self._status.currentIndex()],
            purchase_date=self._purchase_date.text(),
            notes=self._notes.text(),
        )

    def validate(self) -> bool:
        try:
            self._draft = self._collect().validate()
        except ValidationError as e:
            if e.field in ("title", "platform"):
                self._error.setText(t("form.required"))
            else:
                self._error.setText(str(e))
            self._error.show()
            return False
        self._error.hide()
        return True
