"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths (e.g., "C:/Users/...") scattered
   throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (textures) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    TEXTURES_PATH (str): Absolute path to the planet texture directory.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/orrery/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
TEXTURES_PATH: str = os.path.join(ASSETS_PATH, "textures")

# Frame loop
FRAME_INTERVAL_MS: int = 16  # ~60 Hz
NOMINAL_FRAME_UNITS: float = 1.0  # angle units advanced per frame, not scaled by real elapsed time

# Starfield
STAR_COUNT: int = 10000
STAR_SPREAD: float = 2000.0

# Camera
TRANSITION_DURATION_MS: float = 1000.0
CLICK_TOLERANCE_PX: int = 4

if not os.path.exists(TEXTURES_PATH):
    logger.debug(f"Textures path not found at {TEXTURES_PATH}")
