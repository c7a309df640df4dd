"""Painted game grid: active cursor, confirmed cells, mistake flash and celebration blink."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from brain_train.core.engine import GameSnapshot
from brain_train.ui.colors import GameColors, blend_hex

CELL_SIZE = 80
CELL_SPACING = 10


class GridWidget(QWidget):
    """Draws a ``GameSnapshot`` as a rows x cols board of rounded cells."""

    cell_clicked = Signal(int, int)  # row, col

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._snapshot: Optional[GameSnapshot] = None
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(2 * CELL_SIZE + CELL_SPACING, 5 * CELL_SIZE + 4 * CELL_SPACING)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def set_snapshot(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        self.update()

    def _cell_size(self) -> float:
        snap = self._snapshot
        if snap is None:
            return float(CELL_SIZE)
        fit_w = (self.width() - (snap.cols - 1) * CELL_SPACING) / max(1, snap.cols)
        fit_h = (self.height() - (snap.rows - 1) * CELL_SPACING) / max(1, snap.rows)
        return max(24.0, min(float(CELL_SIZE), fit_w, fit_h))

    def _origin(self, size: float) -> tuple[float, float]:
        snap = self._snapshot
        total_w = snap.cols * size + (snap.cols - 1) * CELL_SPACING
        total_h = snap.rows * size + (snap.rows - 1) * CELL_SPACING
        return (self.width() - total_w) / 2, (self.height() - total_h) / 2

    def _cell_rect(self, row: int, col: int) -> QRectF:
        size = self._cell_size()
        x0, y0 = self._origin(size)
        return QRectF(x0 + col * (size + CELL_SPACING), y0 + row * (size + CELL_SPACING), size, size)

    def cell_at(self, x: float, y: float) -> Optional[tuple[int, int]]:
        """Map a widget-local point to a grid cell, or None between/outside cells."""
        snap = self._snapshot
        if snap is None:
            return None
        for row in range(snap.rows):
            for col in range(snap.cols):
                if self._cell_rect(row, col).contains(x, y):
                    return (row, col)
        return None

    def mousePressEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        cell = self.cell_at(pos.x(), pos.y())
        if cell is not None:
            self.cell_clicked.emit(*cell)
        super().mousePressEvent(event)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        snap = self._snapshot
        if snap is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        radius = max(6.0, self._cell_size() * 0.15)

        for row in range(snap.rows):
            for col in range(snap.cols):
                cell = (row, col)
                fill = GameColors.CELL
                border = QPen(QColor(GameColors.CELL_BORDER), 2)

                if cell in snap.visited:
                    fill = GameColors.CELL_SAFE
                if snap.wrong_cell == cell:
                    fill = GameColors.CELL_WRONG
                if snap.blink_on and cell in snap.blink_cells:
                    fill = GameColors.CELL_BLINK
                    border = QPen(QColor(blend_hex(GameColors.CELL_BLINK, "#FFFFFF", 0.4)), 3)
                elif row != snap.cursor[0] and cell not in snap.visited:
                    fill = blend_hex(fill, GameColors.BG_BOTTOM, 0.35)
                if cell == snap.cursor and not snap.blink_cells:
                    border = QPen(QColor(GameColors.CELL_ACTIVE_BORDER), 4)

                painter.setBrush(QColor(fill))
                painter.setPen(border)
                painter.drawRoundedRect(self._cell_rect(row, col).adjusted(2, 2, -2, -2), radius, radius)
        painter.end()
