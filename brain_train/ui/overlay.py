"""In-window overlay announcing a cleared level."""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QLabel,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from brain_train.ui.colors import GameColors


def _card_container(object_name: str = "overlayContainer") -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(360)
    container.setMaximumWidth(480)
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(24)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(0, 0, 0, 90))
    container.setGraphicsEffect(shadow)
    return container


def _card_style(object_name: str, flawless: bool, radius: int = 20) -> str:
    border = GameColors.OVERLAY_FLAWLESS if flawless else "rgba(0, 131, 143, 0.25)"
    width = 3 if flawless else 1
    return f"""
        QFrame#{object_name} {{
            background: {GameColors.OVERLAY_CARD};
            border: {width}px solid {border};
            border-radius: {radius}px;
        }}
    """


class LevelPassedOverlay(QWidget):
    """Dimmed backdrop with a card showing the headline and level lines.

    The engine decides when it is shown and hidden; the overlay is purely a view
    and swallows mouse clicks so the grid underneath cannot be tapped.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        backdrop = QWidget(self)
        backdrop.setStyleSheet("background: rgba(0, 0, 0, 0.45);")
        backdrop.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        backdrop.setMinimumSize(1, 1)
        main_layout.addWidget(backdrop, 0, 0)

        self._container = _card_container(object_name="levelPassedContainer")
        self._container.setStyleSheet(_card_style("levelPassedContainer", flawless=False))
        content = QVBoxLayout(self._container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(12)

        self._headline = QLabel("")
        self._headline.setAlignment(Qt.AlignCenter)
        self._headline.setWordWrap(True)
        self._headline.setStyleSheet(f"color: {GameColors.PRIMARY}; font-size: 22px; font-weight: 800;")
        content.addWidget(self._headline)

        self._passed = QLabel("")
        self._passed.setAlignment(Qt.AlignCenter)
        self._passed.setStyleSheet("color: #1a3a3a; font-size: 16px; font-weight: 600;")
        content.addWidget(self._passed)

        self._next = QLabel("")
        self._next.setAlignment(Qt.AlignCenter)
        self._next.setStyleSheet("color: #4a6572; font-size: 14px; font-weight: 500;")
        content.addWidget(self._next)

        main_layout.addWidget(self._container, 0, 0, 1, 1, Qt.AlignCenter)
        self.hide()

    def set_lines(self, lines: Sequence[str], flawless: bool) -> None:
        padded = list(lines) + [""] * (3 - len(lines))
        self._headline.setText(padded[0])
        self._passed.setText(padded[1])
        self._next.setText(padded[2])
        self._container.setStyleSheet(_card_style("levelPassedContainer", flawless))

    def _update_geometry(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())

    def mousePressEvent(self, event) -> None:
        event.accept()

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self._update_geometry()
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._update_geometry()
        self.raise_()
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)
