"""
Run with: python -m geometrylabs
"""
from __future__ import annotations

import logging
import sys

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QMessageBox

from geometrylabs.app.application import create_app
from geometrylabs.app.ui.main_window import MainWindow
from geometrylabs.config import LOG_FILE_PATH, SETTINGS_LOG_LEVEL
from geometrylabs.logging_config import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the application."""
    app = create_app()

    # Logging level is a user preference (INI settings), default INFO
    level = level_from_name(QSettings().value(SETTINGS_LOG_LEVEL, "INFO", type=str))
    try:
        setup_logging(level=level, log_file=LOG_FILE_PATH)
    except OSError as e:
        QMessageBox.critical(None, "Geometry Labs", f"Cannot open the log file:\n{e}")
        return 1

    try:
        win = MainWindow()
    except Exception as e:
        logger.exception("Startup failed.")
        QMessageBox.critical(None, "Geometry Labs", f"Startup failed:\n{e}")
        return 1

    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
