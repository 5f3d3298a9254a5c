from __future__ import annotations

"""Box scene: square outline, travelling marker and drifting particles."""

import random
from dataclasses import dataclass
from math import pi, sin

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QLinearGradient, QPainter, QPen

from boxbreath.core.assets import load_pixmap
from boxbreath.core.controller import SessionState
from boxbreath.core.position import Position
from boxbreath.scenes.base import BaseScene


MARKER_DIAMETER = 20.0
PARTICLE_COUNT = 5


@dataclass(frozen=True)
class Particle:
    left: float
    drift: float
    duration_s: float
    delay_s: float


class BoxScene(BaseScene):
    name = "Box"

    def __init__(self, square_size: float, seed: int | None = None) -> None:
        self._square_size = square_size
        self._pixmap = load_pixmap("scenes/box_background.png")
        rng = random.Random(seed)
        self._particles = [
            Particle(
                left=0.1 + rng.random() * 0.8,
                drift=rng.random() * 100 - 50,
                duration_s=8 + rng.random() * 4,
                delay_s=rng.random() * 8,
            )
            for _ in range(PARTICLE_COUNT)
        ]
        self._dimmed = False

    def on_session_state_changed(self, state: SessionState) -> None:
        self._dimmed = state == SessionState.FINISHED

    def square_rect(self, rect: QRectF) -> QRectF:
        side = min(self._square_size, min(rect.width(), rect.height()) * 0.8)
        return QRectF(rect.center().x() - side / 2, rect.center().y() - side / 2, side, side)

    def render(self, painter: QPainter, rect: QRectF, marker: Position | None, time_s: float) -> None:
        if self._pixmap is not None:
            painter.drawPixmap(rect.toRect(), self._pixmap)
        else:
            gradient = QLinearGradient(rect.topLeft(), rect.bottomRight())
            gradient.setColorAt(0.0, QColor(56, 178, 172, 26))
            gradient.setColorAt(0.35, QColor(59, 130, 246, 26))
            gradient.setColorAt(0.7, QColor(139, 92, 246, 26))
            gradient.setColorAt(1.0, QColor(34, 197, 94, 26))
            painter.fillRect(rect, QBrush(gradient))

        self._draw_particles(painter, rect, time_s)

        square = self.square_rect(rect)
        glow = QColor(56, 178, 172, 60 if self._dimmed else 77)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(glow, 10))
        painter.drawRect(square)
        painter.setPen(QPen(QColor(56, 178, 172, 204), 2))
        painter.drawRect(square)

        if marker is not None:
            self._draw_marker(painter, square, marker)

    def _draw_marker(self, painter: QPainter, square: QRectF, marker: Position) -> None:
        scale = square.width() / self._square_size
        center = QPointF(square.left() + marker.x * scale, square.top() + marker.y * scale)
        radius = MARKER_DIAMETER / 2

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(239, 68, 68, 70)))
        painter.drawEllipse(center, radius * 2, radius * 2)
        painter.setBrush(QBrush(QColor("#ef4444")))
        painter.setPen(QPen(QColor("#ffffff"), 2))
        painter.drawEllipse(center, radius, radius)

    def _draw_particles(self, painter: QPainter, rect: QRectF, time_s: float) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        for particle in self._particles:
            if time_s < particle.delay_s:
                continue
            t = ((time_s - particle.delay_s) % particle.duration_s) / particle.duration_s
            opacity = 0.6 * sin(t * pi)
            x = rect.left() + rect.width() * particle.left + particle.drift * t
            y = rect.bottom() - 20 - 80 * t
            painter.setBrush(QBrush(QColor(255, 255, 255, int(255 * opacity))))
            painter.drawEllipse(QRectF(x, y, 8, 8))
