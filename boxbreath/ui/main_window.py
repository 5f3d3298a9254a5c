from __future__ import annotations

from PyQt6.QtCore import QElapsedTimer, QRectF, Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence, QPainter
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from boxbreath.core.config import ConfigurationError
from boxbreath.core.controller import SessionController, SessionState
from boxbreath.core.engine import CycleState, Phase, phase_label
from boxbreath.core.position import Position
from boxbreath.scenes.base import BaseScene
from boxbreath.scenes.box import BoxScene


COMPLETE_SCREEN_DELAY_MS = 1000


class SceneWidget(QWidget):
    def __init__(self, scene: BaseScene, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(420, 420)
        self._scene = scene
        self._marker: Position | None = None
        self._time_s = 0.0

    @property
    def scene(self) -> BaseScene:
        return self._scene

    def set_state(self, marker: Position | None, time_s: float) -> None:
        self._marker = marker
        self._time_s = time_s
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect().adjusted(10, 10, -10, -10))
        self._scene.render(painter, rect, self._marker, self._time_s)


class MainWindow(QMainWindow):
    """Routes between the landing, countdown, breathing and completion screens."""

    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self.setWindowTitle("Box Breathing")
        self.resize(720, 720)

        self.controller = controller
        self.elapsed = QElapsedTimer()
        self.elapsed.start()

        self._build_ui()
        self._connect_signals()
        self.stack.setCurrentWidget(self.landing_page)

    def _build_ui(self) -> None:
        self.stack = QStackedWidget(self)
        self.setCentralWidget(self.stack)

        self.landing_page = QWidget()
        landing = QVBoxLayout(self.landing_page)
        landing.addStretch()
        title = QLabel("Box Breathing")
        title.setObjectName("Heading")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        intro = QLabel("A simple breathing exercise to calm your mind and body.")
        intro.setObjectName("MutedText")
        intro.setAlignment(Qt.AlignmentFlag.AlignCenter)
        pattern = QLabel("Inhale → Hold → Exhale → Hold. Each for 4 counts.")
        pattern.setObjectName("MutedText")
        pattern.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.start_btn = QPushButton("Start")
        self.start_btn.setObjectName("PrimaryButton")
        landing.addWidget(title)
        landing.addWidget(intro)
        landing.addWidget(pattern)
        landing.addSpacing(24)
        landing.addWidget(self.start_btn, alignment=Qt.AlignmentFlag.AlignCenter)
        landing.addStretch()

        self.countdown_page = QWidget()
        countdown = QVBoxLayout(self.countdown_page)
        countdown.addStretch()
        self.countdown_label = QLabel("")
        self.countdown_label.setObjectName("CountdownLabel")
        self.countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        ready = QLabel("Get ready to breathe…")
        ready.setObjectName("MutedText")
        ready.setAlignment(Qt.AlignmentFlag.AlignCenter)
        countdown.addWidget(self.countdown_label)
        countdown.addWidget(ready)
        countdown.addStretch()

        self.breathing_page = QWidget()
        breathing = QVBoxLayout(self.breathing_page)
        self.guidance_label = QLabel("")
        self.guidance_label.setObjectName("GuidanceLabel")
        self.guidance_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scene_widget = SceneWidget(BoxScene(self.controller.config.square_size))
        self.breath_label = QLabel("")
        self.breath_label.setObjectName("BreathLabel")
        self.breath_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        breathing.addWidget(self.guidance_label)
        breathing.addWidget(self.scene_widget, 1)
        breathing.addWidget(self.breath_label)

        self.complete_page = QWidget()
        complete = QVBoxLayout(self.complete_page)
        complete.addStretch()
        sparkle = QLabel("✨")
        sparkle.setObjectName("Sparkle")
        sparkle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        done = QLabel("Well done")
        done.setObjectName("Heading")
        done.setAlignment(Qt.AlignmentFlag.AlignCenter)
        notice = QLabel("Take a moment to notice how you feel.")
        notice.setObjectName("MutedText")
        notice.setAlignment(Qt.AlignmentFlag.AlignCenter)
        buttons = QHBoxLayout()
        self.restart_btn = QPushButton("Restart")
        self.restart_btn.setObjectName("PrimaryButton")
        self.exit_btn = QPushButton("Exit")
        self.exit_btn.setObjectName("SecondaryButton")
        buttons.addStretch()
        buttons.addWidget(self.restart_btn)
        buttons.addWidget(self.exit_btn)
        buttons.addStretch()
        complete.addWidget(sparkle)
        complete.addWidget(done)
        complete.addWidget(notice)
        complete.addSpacing(24)
        complete.addLayout(buttons)
        complete.addStretch()

        for page in (self.landing_page, self.countdown_page, self.breathing_page, self.complete_page):
            self.stack.addWidget(page)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self._space_pressed)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.start_session)
        self.restart_btn.clicked.connect(self.restart_session)
        self.exit_btn.clicked.connect(self.exit_session)
        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.countdown_changed.connect(self._on_countdown_changed)
        self.controller.phase_changed.connect(self._on_phase_changed)
        self.controller.ticked.connect(self._on_tick)
        self.controller.session_completed.connect(self._on_session_completed)

    def _space_pressed(self) -> None:
        current = self.stack.currentWidget()
        if current is self.landing_page:
            self.start_session()
        elif current is self.complete_page:
            self.restart_session()

    def start_session(self) -> None:
        try:
            self.controller.start()
        except ConfigurationError as exc:
            QMessageBox.warning(self, "Box Breathing", f"Cannot start the session: {exc}")

    def restart_session(self) -> None:
        try:
            self.controller.restart()
        except ConfigurationError as exc:
            QMessageBox.warning(self, "Box Breathing", f"Cannot restart the session: {exc}")

    def exit_session(self) -> None:
        self.controller.exit()

    def _on_state_changed(self, state: SessionState) -> None:
        self.scene_widget.scene.on_session_state_changed(state)
        if state == SessionState.IDLE:
            self.stack.setCurrentWidget(self.landing_page)
        elif state == SessionState.COUNTING:
            self.stack.setCurrentWidget(self.countdown_page)
        elif state == SessionState.RUNNING:
            self.scene_widget.set_state(self.controller.position, self.elapsed.elapsed() / 1000.0)
            self.stack.setCurrentWidget(self.breathing_page)

    def _on_countdown_changed(self, count: int) -> None:
        self.countdown_label.setText(str(count) if count > 0 else "")

    def _on_phase_changed(self, phase: Phase, breath_index: int) -> None:
        self.guidance_label.setText(phase_label(phase))
        self.breath_label.setText(f"Breath {breath_index} of {self.controller.config.total_breaths}")

    def _on_tick(self, _state: CycleState, position: Position) -> None:
        self.scene_widget.set_state(position, self.elapsed.elapsed() / 1000.0)

    def _on_session_completed(self) -> None:
        self.scene_widget.set_state(None, self.elapsed.elapsed() / 1000.0)
        QTimer.singleShot(COMPLETE_SCREEN_DELAY_MS, self._show_complete)

    def _show_complete(self) -> None:
        if self.controller.state == SessionState.FINISHED:
            self.stack.setCurrentWidget(self.complete_page)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.controller.exit()
        event.accept()
