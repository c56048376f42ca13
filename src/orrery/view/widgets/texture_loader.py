"""
Background Texture Loading (Threading)
======================================
This module contains a QThread subclass that reads planet textures off the
GUI thread.

Why is this file needed?
------------------------
1. Responsiveness: The scene is built and animating immediately with
   placeholder colours; textures are swapped in as they arrive.
2. Signals: Results cross back to the GUI thread through Qt Signals, where
   they are applied to the actors.

Classes:
    TextureLoaderWorker: Reads every texture in a manifest.
"""
import logging
import os

import pyvista as pv
from PySide6.QtCore import QThread, Signal

logger = logging.getLogger(__name__)


class TextureLoaderWorker(QThread):
    # Signals to update the UI from the background
    texture_ready = Signal(str, object)  # (logical name, pv.Texture)
    load_failed = Signal(str, str)  # (logical name, reason)
    progress_changed = Signal(int, int, str)  # (loaded, total, logical name)
    all_loaded = Signal()

    def __init__(self, manifest: dict[str, str], parent=None):
        super().__init__(parent)
        self.manifest = dict(manifest)
        self.is_running = True

    def run(self):
        total = len(self.manifest)
        logger.info(f"Loading {total} textures in background thread...")

        for loaded, (name, path) in enumerate(self.manifest.items(), start=1):
            if not self.is_running:
                break
            try:
                if not os.path.isfile(path):
                    raise FileNotFoundError(f"No such file: {path}")
                texture = pv.read_texture(path)
                self.texture_ready.emit(name, texture)
            except Exception as e:
                # Placeholder colour stays on the affected bodies
                logger.warning(f"Texture '{name}' could not be loaded: {e}")
                self.load_failed.emit(name, str(e))

            logger.info(f"Loaded {loaded} of {total} files.")
            self.progress_changed.emit(loaded, total, name)

        self.all_loaded.emit()

    def stop(self) -> None:
        self.is_running = False
