"""
Configuration & Constants
=========================
This module serves as the central registry for resolved constants and paths.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (zoom limits, margins, tolerances)
   from being scattered throughout the geometry engine.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   place the log file when the app is frozen into an executable.

Exports:
    PX_PER_CM_RANGE (tuple): Allowed zoom range in pixels per distance unit.
    DEFAULT_PX_PER_CM (float): Zoom used by a freshly created viewport.
    ANCHOR_OFFSET_PX (float): Default inward margin for corner anchoring.
    EPSILON (float): Tolerance used before dividing by lengths/denominators.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/geometrylabs/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Viewport
PX_PER_CM_RANGE: tuple[float, float] = (10.0, 100.0)
DEFAULT_PX_PER_CM: float = 20.0
SCROLL_COEFFICIENT: float = 0.1
DRAGGING_COEFFICIENT: float = 1.0
ANCHOR_OFFSET_PX: float = 50.0

# Numerics
EPSILON: float = 1e-6
MIN_RADIUS: float = 0.1

# Frame driver (Qt canvas)
ANIMATION_INTERVAL_MS: int = 16

# QSettings keys
SETTINGS_LOG_LEVEL: str = "logging/level"
SETTINGS_LAST_LAB: str = "ui/last_lab"

LOG_FILE_PATH: str = get_resource_path("geometrylabs.log")
