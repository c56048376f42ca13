"""
Viewer Control Panel
"""
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QDoubleSpinBox, QGroupBox, QFormLayout, QCheckBox
)
from PySide6.QtCore import Signal, Qt

from orrery.model.state import AnimationState, GLOW_RANGE, SPEED_RANGE


class ControlPanel(QWidget):
    orbit_paths_toggled = Signal(bool)
    glow_changed = Signal(float)
    reset_camera_requested = Signal()

    def __init__(self, animation: AnimationState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.animation = animation

        layout = QVBoxLayout(self)

        # --- Display Group ---
        grp = QGroupBox("Display")
        form = QFormLayout(grp)

        # 1. Orbit paths
        self.chk_orbits = QCheckBox("")
        self.chk_orbits.setChecked(self.animation.show_orbit_paths)
        self.chk_orbits.toggled.connect(self.on_orbits_toggled)
        form.addRow("Show Orbit Paths", self.chk_orbits)

        # 2. Animation speed
        self.spin_speed = QDoubleSpinBox()
        self.spin_speed.setRange(*SPEED_RANGE)
        self.spin_speed.setSingleStep(0.1)
        self.spin_speed.setDecimals(1)
        self.spin_speed.setValue(self.animation.speed_multiplier)
        self.spin_speed.setSuffix(" ×")
        self.spin_speed.valueChanged.connect(self.on_speed_changed)
        form.addRow("Animation Speed:", self.spin_speed)

        # 3. Glow
        self.spin_glow = QDoubleSpinBox()
        self.spin_glow.setRange(*GLOW_RANGE)
        self.spin_glow.setSingleStep(0.1)
        self.spin_glow.setDecimals(1)
        self.spin_glow.setValue(self.animation.glow_intensity)
        self.spin_glow.valueChanged.connect(self.on_glow_changed)
        form.addRow("Glow Intensity:", self.spin_glow)

        layout.addWidget(grp)

        # --- Actions ---
        self.btn_reset = QPushButton("Reset Camera")
        self.btn_reset.setMinimumHeight(40)
        self.btn_reset.clicked.connect(self.reset_camera_requested.emit)
        layout.addWidget(self.btn_reset)

        # --- Status Info ---
        self.lbl_focus = QLabel("Click a planet to fly to it.")
        self.lbl_focus.setAlignment(Qt.AlignCenter)
        self.lbl_focus.setStyleSheet("color: gray;")
        self.lbl_focus.setWordWrap(True)
        layout.addWidget(self.lbl_focus)

        layout.addStretch()

    # --- SLOTS ---

    def on_orbits_toggled(self, checked: bool) -> None:
        self.animation.set_show_orbit_paths(checked)
        self.orbit_paths_toggled.emit(checked)

    def on_speed_changed(self, value: float) -> None:
        self.animation.set_speed_multiplier(value)

    def on_glow_changed(self, value: float) -> None:
        self.animation.set_glow_intensity(value)
        self.glow_changed.emit(value)

    def show_focus(self, name: str) -> None:
        self.lbl_focus.setText(f"Focused: {name}")
        self.lbl_focus.setStyleSheet("color: black; font-weight: bold;")
