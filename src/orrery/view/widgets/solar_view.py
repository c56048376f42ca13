"""
3D Solar System Viewport (PyVista Wrapper)
"""

from __future__ import annotations

from typing import Optional, Sequence
import logging

import numpy as np
import pyvista as pv

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QElapsedTimer, QEvent, QObject, QTimer, Qt, Signal
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor

from orrery import config
from orrery.controller.animator import OrbitAnimator
from orrery.controller.camera_rig import CameraRig
from orrery.controller.frame_loop import FrameLoop
from orrery.controller.picking import PickingService, pixel_to_ndc
from orrery.model.catalog import Appearance, StarDefinition, texture_manifest
from orrery.model.scene_graph import BodyHandle, NodeKind, SceneGraph, SceneNode
from orrery.model.starfield import generate_starfield
from orrery.model.state import AnimationState, SelectionState
from orrery.view.widgets.overlays import HoverLabel, LoadingOverlay
from orrery.view.widgets.texture_loader import TextureLoaderWorker

logger = logging.getLogger(__name__)

SPHERE_RESOLUTION = 32
ORBIT_PATH_HALF_WIDTH = 0.05
ORBIT_PATH_SEGMENTS = 128
RING_SEGMENTS = 64
BASE_AMBIENT = 0.3  # planet self-illumination at the default glow
DEFAULT_GLOW = 1.2


class SolarView(QWidget):
    body_focused = Signal(str)

    def __init__(
        self,
        graph: SceneGraph,
        animation: AnimationState,
        selection: SelectionState,
        rig: CameraRig,
        star_seed: Optional[int] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.graph = graph
        self.animation = animation
        self.selection = selection
        self.rig = rig

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()
        self._init_lights()

        # --- Actors state ---
        self._node_actors: dict[int, pv.Actor] = {}  # follow their node every frame
        self._planet_actors: list[pv.Actor] = []  # take the glow-scaled ambient term
        self._orbit_path_actors: list[pv.Actor] = []
        self._texture_targets: dict[str, list[pv.Actor]] = {}
        self._sun_glow_actor: Optional[pv.Actor] = None
        self._star_actor: Optional[pv.Actor] = None

        self._add_starfield(star_seed)

        # New nodes get placeholder geometry as soon as they exist
        self.graph.register_listener(self._on_node_added)

        # --- Controllers (bound in attach_scene) ---
        self.picking: Optional[PickingService] = None
        self.frame_loop: Optional[FrameLoop] = None
        self._loader: Optional[TextureLoaderWorker] = None

        # --- Overlays ---
        self.hover_label = HoverLabel(self)
        self.loading_overlay = LoadingOverlay(self)
        self.loading_overlay.setGeometry(self.rect())

        # --- Pointer state ---
        self._drag_button: Optional[Qt.MouseButton] = None
        self._press_pos: Optional[tuple[float, float]] = None
        self._last_pos: Optional[tuple[float, float]] = None
        self.plotter.setMouseTracking(True)
        self.plotter.installEventFilter(self)

        # --- Frame clock ---
        self._clock = QElapsedTimer()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def attach_scene(
        self,
        handles: Sequence[BodyHandle],
        star: Optional[StarDefinition] = None,
        sun_index: Optional[int] = None,
        textures_dir: str = config.TEXTURES_PATH,
    ) -> None:
        """
        Bind the built scene: apply appearances, wire picking and the frame
        loop, start texture loading and the animation timer.
        """
        for handle in handles:
            body = handle.definition
            self._apply_appearance(handle.body, body.appearance)
            if body.moon is not None and handle.moon_body is not None:
                self._apply_appearance(handle.moon_body, body.moon.appearance)
            if body.rings is not None and handle.ring is not None:
                ring_actor = self._node_actors[handle.ring]
                ring_actor.prop.color = body.rings.base_color
                ring_actor.prop.opacity = body.rings.opacity
                self._texture_targets.setdefault(body.rings.texture, []).append(ring_actor)

        if star is not None and sun_index is not None:
            self._star_actor = self._node_actors[sun_index]
            self._star_actor.prop.color = star.appearance.base_color
            self._texture_targets.setdefault(star.appearance.texture, []).append(self._star_actor)
            self._add_sun_glow(star)

        self.picking = PickingService(handles, self.selection, self.rig, label=self.hover_label)
        self.frame_loop = FrameLoop(
            graph=self.graph,
            handles=handles,
            animator=OrbitAnimator(),
            rig=self.rig,
            animation=self.animation,
            render=self._render_frame,
            sun_index=sun_index,
            sun_rotation_speed=star.rotation_speed if star is not None else 0.0,
            dt_units=config.NOMINAL_FRAME_UNITS,
        )

        self.set_orbit_paths_visible(self.animation.show_orbit_paths, render=False)
        self.set_glow_intensity(self.animation.glow_intensity, render=False)

        manifest = texture_manifest([h.definition for h in handles], star, textures_dir)
        self._start_texture_loading(manifest)

        self._clock.start()
        self._frame_timer.start()
        self._render_frame()

    def set_orbit_paths_visible(self, visible: bool, render: bool = True) -> None:
        for actor in self._orbit_path_actors:
            actor.SetVisibility(visible)
        if render:
            self.plotter.render()

    def set_glow_intensity(self, value: float, render: bool = True) -> None:
        """Scale the sun halo and the planets' self-illumination."""
        if self._sun_glow_actor is not None:
            self._sun_glow_actor.prop.opacity = min(1.0, 0.25 * value)
            self._sun_glow_actor.SetVisibility(value > 0.0)
        for actor in self._planet_actors:
            actor.GetProperty().SetAmbient(BASE_AMBIENT * value / DEFAULT_GLOW)
        if render:
            self.plotter.render()

    def reset_camera(self) -> None:
        self.rig.reset()
        self._render_frame()

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("black")
        self.plotter.enable_anti_aliasing("fxaa")
        self.plotter.camera.view_angle = self.rig.fov_deg
        self._apply_camera_pose()

    def _init_lights(self) -> None:
        self.plotter.remove_all_lights()
        # Fill light from a fixed direction
        self.plotter.add_light(pv.Light(
            position=(5.0, 3.0, 5.0),
            focal_point=(0.0, 0.0, 0.0),
            light_type="scene light",
            intensity=0.6,
        ))
        # The sun
        self.plotter.add_light(pv.Light(
            position=(0.0, 0.0, 0.0),
            light_type="scene light",
            positional=True,
            cone_angle=180.0,
            intensity=1.0,
        ))

    def _add_starfield(self, seed: Optional[int]) -> None:
        stars = pv.PolyData(generate_starfield(config.STAR_COUNT, config.STAR_SPREAD, seed=seed))
        self.plotter.add_mesh(
            stars,
            style="points",
            color="white",
            point_size=1.0,
            lighting=False,
            pickable=False,
            show_scalar_bar=False,
        )

    def _on_node_added(self, node: SceneNode) -> None:
        """Create placeholder geometry for a node as it enters the graph."""
        match node.kind:
            case NodeKind.STAR:
                sphere = self._make_sphere(node.radius)
                actor = self.plotter.add_mesh(sphere, color="yellow", lighting=False, pickable=False)
                self._node_actors[node.index] = actor

            case NodeKind.BODY:
                sphere = self._make_sphere(node.radius)
                actor = self.plotter.add_mesh(
                    sphere, color="white", smooth_shading=True, pickable=False, show_scalar_bar=False
                )
                actor.GetProperty().SetAmbient(BASE_AMBIENT)
                self._node_actors[node.index] = actor
                self._planet_actors.append(actor)

                orbit = self.graph.node(node.parent)
                if orbit.parent is None:
                    self._add_orbit_path(float(np.linalg.norm(node.offset)))

            case NodeKind.RING:
                disc = pv.Disc(
                    inner=node.inner_radius,
                    outer=node.outer_radius,
                    normal=(0.0, 1.0, 0.0),
                    c_res=RING_SEGMENTS,
                )
                disc.texture_map_to_plane(inplace=True)
                actor = self.plotter.add_mesh(disc, color="white", opacity=0.9, pickable=False)
                actor.GetProperty().SetAmbient(0.2)
                self._node_actors[node.index] = actor

            case _:
                # Orbit pivots are invisible
                pass

    def _add_orbit_path(self, distance: float) -> None:
        path = pv.Disc(
            inner=distance - ORBIT_PATH_HALF_WIDTH,
            outer=distance + ORBIT_PATH_HALF_WIDTH,
            normal=(0.0, 1.0, 0.0),
            c_res=ORBIT_PATH_SEGMENTS,
        )
        actor = self.plotter.add_mesh(path, color="white", opacity=0.5, lighting=False, pickable=False)
        self._orbit_path_actors.append(actor)

    def _add_sun_glow(self, star: StarDefinition) -> None:
        halo = self._make_sphere(star.glow_radius)
        # Front faces culled so only the far side shows around the sun
        self._sun_glow_actor = self.plotter.add_mesh(
            halo,
            color=(1.0, 0.8, 0.0),
            opacity=min(1.0, 0.25 * self.animation.glow_intensity),
            culling="front",
            lighting=False,
            pickable=False,
        )

    def _apply_appearance(self, index: int, appearance: Appearance) -> None:
        actor = self._node_actors[index]
        actor.prop.color = appearance.base_color
        actor.GetProperty().SetAmbientColor(*appearance.glow_rgb)
        self._texture_targets.setdefault(appearance.texture, []).append(actor)

    @staticmethod
    def _make_sphere(radius: float) -> pv.PolyData:
        # Poles on Y so spin and tilt match the scene graph
        sphere = pv.Sphere(
            radius=radius,
            direction=(0.0, 1.0, 0.0),
            theta_resolution=SPHERE_RESOLUTION,
            phi_resolution=SPHERE_RESOLUTION,
        )
        sphere.texture_map_to_sphere(inplace=True)
        return sphere

    # ------------------------------------------------------------------------------
    # Internal: Textures
    # ------------------------------------------------------------------------------

    def _start_texture_loading(self, manifest: dict[str, str]) -> None:
        self.loading_overlay.set_progress(0, len(manifest))
        self.loading_overlay.raise_()

        self._loader = TextureLoaderWorker(manifest, self)
        self._loader.texture_ready.connect(self._on_texture_ready)
        self._loader.load_failed.connect(self.loading_overlay.note_failure)
        self._loader.progress_changed.connect(self.loading_overlay.set_progress)
        self._loader.all_loaded.connect(self.loading_overlay.fade_out)
        self._loader.start()

    def _on_texture_ready(self, name: str, texture: pv.Texture) -> None:
        for actor in self._texture_targets.get(name, []):
            actor.texture = texture
            # Untinted so the texture shows its own colours
            actor.prop.color = "white"
        logger.debug(f"Applied texture '{name}'")

    # ------------------------------------------------------------------------------
    # Internal: Frame
    # ------------------------------------------------------------------------------

    def _on_frame(self) -> None:
        if self.frame_loop is not None:
            self.frame_loop.tick(float(self._clock.elapsed()))

    def _render_frame(self) -> None:
        for index, actor in self._node_actors.items():
            actor.user_matrix = self.graph.world_matrix(index)
        self._apply_camera_pose()
        self.plotter.render()

    def _apply_camera_pose(self) -> None:
        pose = self.rig.pose
        camera = self.plotter.camera
        camera.position = tuple(pose.position)
        camera.focal_point = tuple(pose.focal_point)
        camera.up = tuple(pose.up)
        self.plotter.renderer.ResetCameraClippingRange()

    def _now(self) -> float:
        return float(self._clock.elapsed()) if self._clock.isValid() else 0.0

    def _aspect(self) -> float:
        h = max(1, self.plotter.height())
        return self.plotter.width() / h

    # ------------------------------------------------------------------------------
    # Internal: Pointer input
    # ------------------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is not self.plotter:
            return super().eventFilter(watched, event)

        match event.type():
            case QEvent.Type.MouseButtonPress:
                self._on_mouse_press(event)
                return True
            case QEvent.Type.MouseMove:
                self._on_mouse_move(event)
                return True
            case QEvent.Type.MouseButtonRelease:
                self._on_mouse_release(event)
                return True
            case QEvent.Type.MouseButtonDblClick:
                return True
            case QEvent.Type.Leave:
                if self.picking is not None:
                    self.picking.on_pointer_leave()
                return False
            case QEvent.Type.Wheel:
                steps = event.angleDelta().y() / 120.0
                self.rig.zoom(steps)
                return True
        return super().eventFilter(watched, event)

    def _on_mouse_press(self, event) -> None:
        pos = event.position()
        self._drag_button = event.button()
        self._press_pos = (pos.x(), pos.y())
        self._last_pos = self._press_pos

    def _on_mouse_move(self, event) -> None:
        pos = event.position()
        x, y = pos.x(), pos.y()

        if self._drag_button is not None and self._last_pos is not None:
            dx, dy = x - self._last_pos[0], y - self._last_pos[1]
            if self._drag_button == Qt.MouseButton.LeftButton:
                self.rig.rotate_by_pixels(dx, dy, self.plotter.height())
            else:
                self.rig.pan(dx, dy, self.plotter.height())
            self._last_pos = (x, y)

        if self.picking is not None:
            ndc = pixel_to_ndc(x, y, self.plotter.width(), self.plotter.height())
            self.picking.on_pointer_move(ndc, self.rig.pose, self._aspect(), (int(x), int(y)))

    def _on_mouse_release(self, event) -> None:
        pos = event.position()
        x, y = pos.x(), pos.y()
        is_click = (
            event.button() == Qt.MouseButton.LeftButton
            and self._press_pos is not None
            and abs(x - self._press_pos[0]) + abs(y - self._press_pos[1]) <= config.CLICK_TOLERANCE_PX
        )
        self._drag_button = None
        self._press_pos = None
        self._last_pos = None

        if is_click and self.picking is not None:
            ndc = pixel_to_ndc(x, y, self.plotter.width(), self.plotter.height())
            hit = self.picking.on_pointer_click(ndc, self.rig.pose, self._aspect(), self._now())
            if hit is not None:
                self.body_focused.emit(hit.name)

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # VTK keeps the camera pose and picks up the new aspect on its own
        self.loading_overlay.setGeometry(self.rect())

    def closeEvent(self, event: QCloseEvent) -> None:
        self._frame_timer.stop()
        if self._loader is not None and self._loader.isRunning():
            self._loader.stop()
            self._loader.wait()
        self.plotter.close()
        event.accept()
