"""``Scheduler`` backed by Qt single-shot timers on the GUI thread."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer


class QtHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None

    def _finished(self) -> None:
        if self._timer is not None:
            self._timer.deleteLater()
            self._timer = None


class QtScheduler:
    """Each ``call_later`` owns a one-shot ``QTimer`` parented to ``parent``."""

    def __init__(self, parent: QObject) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = QtHandle(timer)

        def _on_timeout() -> None:
            handle._finished()
            callback()

        timer.timeout.connect(_on_timeout)
        timer.start(max(0, int(delay_ms)))
        return handle
