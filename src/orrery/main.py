"""
Application Initialization
==========================
This module constructs the application and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging from the command line.
2. Instantiates the shared state (AnimationState, SelectionState).
3. Instantiates the Main Window (View), passing the state in.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from orrery import config
from orrery.logging_config import setup_logging
from orrery.model.state import AnimationState, SelectionState
from orrery.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    """Split our options from the ones meant for Qt."""
    parser = argparse.ArgumentParser(prog="orrery", description=VISIBLE_APP_NAME)
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--textures", default=config.TEXTURES_PATH, help="Directory with planet textures")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the starfield")
    return parser.parse_known_args(list(argv))


def main(argv: Optional[Sequence[str]] = None) -> None:
    args, qt_args = parse_args(sys.argv[1:] if argv is None else argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # 2. Create the Qt Application
    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the shared state
    animation = AnimationState()
    selection = SelectionState()

    # 4. Initialize the Main Window, passing the state
    logger.info(f"Textures directory: {args.textures}")
    window = MainWindow(animation, selection, textures_dir=args.textures, star_seed=args.seed)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
