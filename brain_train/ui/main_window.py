from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from brain_train.core.engine import GameEngine, GameEvent, GameSnapshot
from brain_train.ui.colors import TIMER_BUCKET_COLORS, GameColors
from brain_train.ui.grid_widget import GridWidget
from brain_train.ui.overlay import LevelPassedOverlay
from brain_train.ui.sound import TonePlayer

logger = logging.getLogger(__name__)


def _control_button_style() -> str:
    return f"""
        QPushButton {{
            background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                stop:0 {GameColors.PRIMARY_LIGHT}, stop:1 {GameColors.PRIMARY});
            color: white;
            min-width: 64px;
            min-height: 52px;
            border: none;
            border-radius: 14px;
            font-size: 22px;
            font-weight: 800;
        }}
        QPushButton:hover {{ background: {GameColors.PRIMARY}; }}
        QPushButton:disabled {{ background: #3d4478; color: #9aa3c7; }}
    """


class MainWindow(QMainWindow):
    """Single-screen game window; renders engine snapshots and forwards input."""

    def __init__(self, engine: GameEngine, tones: Optional[TonePlayer] = None) -> None:
        super().__init__()
        self._engine = engine
        self._tones = tones
        self._timer_flash_on = False
        self._last_snapshot: Optional[GameSnapshot] = None
        self.setWindowTitle("Brain Train - Memory Challenge")
        self._build_ui()
        self._unsubscribe = engine.subscribe(self._on_engine_event)
        self._render(engine.snapshot())

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("gameRoot")
        root.setStyleSheet(
            f"""
            QWidget#gameRoot {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {GameColors.BG_TOP}, stop:1 {GameColors.BG_BOTTOM});
            }}
            QLabel {{ color: {GameColors.TEXT_PRIMARY}; }}
            """
        )
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 20, 24, 20)
        layout.setSpacing(14)

        title = QLabel("Brain Train - Memory Challenge")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 26px; font-weight: 900;")
        layout.addWidget(title)

        hud = QHBoxLayout()
        hud.setSpacing(24)
        self._level_label = QLabel("")
        self._level_label.setStyleSheet("font-size: 16px; font-weight: 700;")
        self._score_label = QLabel("")
        self._score_label.setStyleSheet("font-size: 16px; font-weight: 700;")
        self._timer_label = QLabel("")
        self._timer_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        hud.addWidget(self._level_label)
        hud.addWidget(self._score_label)
        hud.addStretch(1)
        hud.addWidget(self._timer_label)
        layout.addLayout(hud)

        self._grid = GridWidget()
        self._grid.cell_clicked.connect(self._engine.select_cell_at)
        layout.addWidget(self._grid, 1)

        controls = QHBoxLayout()
        controls.setSpacing(10)
        controls.addStretch(1)
        self._buttons: list[QPushButton] = []
        for text, label, slot in (
            ("←", "Move left", self._engine.move_left),
            ("↑", "Move up", self._engine.move_up),
            ("→", "Move right", self._engine.move_right),
            ("✔", "Select", self._engine.select_cell),
        ):
            btn = QPushButton(text)
            btn.setAccessibleName(label)
            btn.setToolTip(label)
            btn.setFocusPolicy(Qt.NoFocus)
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
            btn.setStyleSheet(_control_button_style())
            btn.clicked.connect(slot)
            controls.addWidget(btn)
            self._buttons.append(btn)
        controls.addStretch(1)
        layout.addLayout(controls)

        self._status_label = QLabel("")
        self._status_label.setAlignment(Qt.AlignCenter)
        self._status_label.setStyleSheet(f"color: {GameColors.TEXT_MUTED}; font-size: 15px;")
        layout.addWidget(self._status_label)

        self.setCentralWidget(root)
        self._flash_timer = QTimer(self)
        self._flash_timer.setInterval(250)
        self._flash_timer.timeout.connect(self._toggle_timer_flash)
        self._overlay = LevelPassedOverlay(root)
        self.setFocusPolicy(Qt.StrongFocus)

    def _on_engine_event(self, event: GameEvent) -> None:
        if event is GameEvent.STATE_CHANGED:
            self._render(self._engine.snapshot())
        elif self._tones is not None:
            self._tones.on_event(event)

    def _render(self, snap: GameSnapshot) -> None:
        self._last_snapshot = snap
        self._grid.set_snapshot(snap)
        self._level_label.setText(f"Level {snap.level}")
        self._score_label.setText(f"Score {snap.score}")
        self._render_timer(snap)
        self._status_label.setText(snap.status_text)
        for btn in self._buttons:
            btn.setEnabled(not snap.input_locked)

        if snap.overlay_visible:
            self._overlay.set_lines(snap.overlay_lines, snap.overlay_flawless)
            if not self._overlay.isVisible():
                self._overlay.show()
        elif self._overlay.isVisible():
            self._overlay.hide()

    def _render_timer(self, snap: GameSnapshot) -> None:
        if snap.timer_flashing:
            if not self._flash_timer.isActive():
                self._timer_flash_on = True
                self._flash_timer.start()
            self._timer_label.setText("Time's up!")
            color = GameColors.TIMER_DANGER if self._timer_flash_on else GameColors.TEXT_MUTED
        else:
            self._flash_timer.stop()
            self._timer_label.setText(f"⏱ {snap.remaining_seconds}s")
            color = TIMER_BUCKET_COLORS.get(snap.timer_bucket, GameColors.TEXT_PRIMARY)
        self._timer_label.setStyleSheet(f"color: {color}; font-size: 20px; font-weight: 900;")

    def _toggle_timer_flash(self) -> None:
        self._timer_flash_on = not self._timer_flash_on
        if self._last_snapshot is not None:
            self._render_timer(self._last_snapshot)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key.Key_Left:
            self._engine.move_left()
        elif key == Qt.Key.Key_Right:
            self._engine.move_right()
        elif key == Qt.Key.Key_Up:
            self._engine.move_up()
        elif key in (Qt.Key.Key_Space, Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self._engine.select_cell()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop pending engine timers before the window goes away."""
        self._unsubscribe()
        self._engine.stop()
        if self._tones is not None:
            self._tones.close()
        super().closeEvent(event)
