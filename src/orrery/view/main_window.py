"""
Main Application Window
=======================
The primary GUI container: control panel on the left, 3D viewport on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It builds the scene and connects the control panel's signals to
   the viewport.
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QSplitter
from PySide6.QtCore import Qt

from orrery import config
from orrery.controller.camera_rig import CameraRig
from orrery.model.catalog import PLANET_CATALOG, SUN
from orrery.model.scene_graph import SceneGraph, SceneGraphBuilder
from orrery.model.state import AnimationState, SelectionState
from orrery.view.widgets.control_panel import ControlPanel
from orrery.view.widgets.solar_view import SolarView


VISIBLE_APP_NAME = "Orrery: Solar System"


class MainWindow(QMainWindow):
    def __init__(
        self,
        animation: AnimationState,
        selection: SelectionState,
        textures_dir: str = config.TEXTURES_PATH,
        star_seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.animation = animation
        self.selection = selection

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self.rig = CameraRig(transition_duration=config.TRANSITION_DURATION_MS)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.control_panel = ControlPanel(self.animation)
        splitter.addWidget(self.control_panel)

        # --- RIGHT SIDE: 3D Visualization ---
        self.graph = SceneGraph()
        self.visualizer = SolarView(self.graph, self.animation, self.selection, self.rig, star_seed=star_seed)
        splitter.addWidget(self.visualizer)

        # Set initial proportions (1 part sidebar : 5 parts 3D view)
        splitter.setSizes([250, 1150])

        # --- SCENE ---
        # The viewport listens to the graph, so nodes get actors as they are built
        builder = SceneGraphBuilder(self.graph)
        sun_index = builder.build_star(SUN)
        self.handles = builder.build(PLANET_CATALOG)
        self.visualizer.attach_scene(self.handles, star=SUN, sun_index=sun_index, textures_dir=textures_dir)

        # --- SIGNAL CONNECTIONS ---
        self.control_panel.orbit_paths_toggled.connect(self.visualizer.set_orbit_paths_visible)
        self.control_panel.glow_changed.connect(self.visualizer.set_glow_intensity)
        self.control_panel.reset_camera_requested.connect(self.visualizer.reset_camera)
        self.visualizer.body_focused.connect(self.control_panel.show_focus)

    def closeEvent(self, event) -> None:
        self.visualizer.close()
        super().closeEvent(event)
