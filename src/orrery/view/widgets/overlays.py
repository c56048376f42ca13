"""
Viewport Overlays
Floating Qt widgets drawn on top of the 3D view: the planet hover label and
the loading screen.
"""
from __future__ import annotations

from PySide6.QtCore import Qt, QPropertyAnimation, QEasingCurve
from PySide6.QtWidgets import (
    QWidget, QLabel, QFrame, QVBoxLayout, QProgressBar, QGraphicsOpacityEffect
)


class HoverLabel(QLabel):
    """Name tag that follows the pointer while a planet is hovered."""
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet("""
            QLabel {
                background-color: rgba(0, 0, 0, 178);
                color: white;
                padding: 5px 10px;
                border-radius: 5px;
                font-family: Arial, sans-serif;
                font-size: 14px;
            }
        """)
        # Must never steal clicks from the viewport underneath
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.hide()

    def show_label(self, text: str, x: int, y: int) -> None:
        self.setText(text)
        self.adjustSize()
        self.move_label(x, y)
        self.show()
        self.raise_()

    def move_label(self, x: int, y: int) -> None:
        self.move(int(x), int(y))

    def hide_label(self) -> None:
        self.hide()


class LoadingOverlay(QFrame):
    """Full-viewport curtain with a progress bar; fades out once loading completes."""
    FADE_MS = 1000

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet("""
            QFrame { background-color: black; }
            QLabel { color: white; font-size: 18px; }
            QProgressBar { max-width: 320px; }
        """)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.lbl_status = QLabel("Loading Solar System...")
        self.lbl_status.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.lbl_status)

        self.progress = QProgressBar()
        self.progress.setTextVisible(True)
        self.progress.setValue(0)
        layout.addWidget(self.progress, 0, Qt.AlignmentFlag.AlignHCenter)

        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(1.0)
        self.setGraphicsEffect(self._effect)

        self._fade = QPropertyAnimation(self._effect, b"opacity", self)
        self._fade.setDuration(self.FADE_MS)
        self._fade.setStartValue(1.0)
        self._fade.setEndValue(0.0)
        self._fade.setEasingCurve(QEasingCurve.Type.OutQuad)
        self._fade.finished.connect(self.hide)

        self.failed: list[str] = []

    def set_progress(self, loaded: int, total: int, name: str = "") -> None:
        self.progress.setMaximum(max(1, total))
        self.progress.setValue(loaded)
        if name:
            self.lbl_status.setText(f"Loading {name}...")

    def note_failure(self, name: str, reason: str) -> None:
        """Remember a texture that could not be read; its body keeps the placeholder colour."""
        self.failed.append(name)
        self.lbl_status.setText(f"Missing {name}")
        self.lbl_status.setToolTip(reason)

    def fade_out(self) -> None:
        if self.failed:
            self.lbl_status.setText(f"Ready ({len(self.failed)} textures missing)")
        else:
            self.lbl_status.setText("Ready")
        self._fade.start()
