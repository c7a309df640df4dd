"""Application entry point and setup for Brain Train."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from brain_train.core.config import load_config
from brain_train.core.engine import GameEngine
from brain_train.ui.main_window import MainWindow
from brain_train.ui.qt_scheduler import QtScheduler
from brain_train.ui.sound import TonePlayer


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def apply_application_font(app: QApplication) -> None:
    """Use the platform UI font with emoji fallbacks for the control glyphs."""
    app_font = QFont(app.font())
    app_font.setFamilies(
        [
            app_font.family(),
            "Noto Color Emoji",  # Linux (common)
            "Segoe UI Emoji",  # Windows
            "Apple Color Emoji",  # macOS
        ]
    )
    app_font.setPointSize(11)
    app.setFont(app_font)
    QGuiApplication.setFont(app_font)


def run() -> None:
    """Initialize the application, build the engine, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Brain Train")
    app.setApplicationDisplayName("Brain Train")
    apply_application_font(app)

    config = load_config()
    engine = GameEngine(QtScheduler(app), config=config)
    tones = TonePlayer(app)

    window = MainWindow(engine=engine, tones=tones)
    window.resize(520, 760)
    window.show()
    engine.start()
    logging.info("Brain Train started")

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
