from __future__ import annotations

"""Box Breathing entry point.

Builds the Qt application, the frame clock and the session controller,
then opens the main window.
"""

import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from boxbreath.core.clock import QtFrameClock
from boxbreath.core.config import SessionConfig
from boxbreath.core.controller import SessionController
from boxbreath.ui.main_window import MainWindow
from boxbreath.ui.styles import apply_theme


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Guided box breathing (inhale, hold, exhale, hold)")
    parser.add_argument("--breaths", type=int, default=SessionConfig.total_breaths,
                        help="Number of breaths in a session (default: %(default)s)")
    parser.add_argument("--log-level", default=os.environ.get("BOXBREATH_LOG_LEVEL", "WARNING"),
                        help="Logging level (default: $BOXBREATH_LOG_LEVEL or WARNING)")
    return parser.parse_args(argv)


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> int:
    app = QApplication(sys.argv)
    args = parse_args(app.arguments()[1:])
    configure_logging(args.log_level)
    apply_theme(app)

    clock = QtFrameClock(parent=app)
    controller = SessionController(clock, SessionConfig(total_breaths=args.breaths))
    window = MainWindow(controller)

    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
