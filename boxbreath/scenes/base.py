from __future__ import annotations

from abc import ABC, abstractmethod

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QPainter

from boxbreath.core.controller import SessionState
from boxbreath.core.position import Position


class BaseScene(ABC):
    name: str

    @abstractmethod
    def render(self, painter: QPainter, rect: QRectF, marker: Position | None, time_s: float) -> None:
        """Render the scene in `rect`; `marker` is None when no marker should show."""

    def on_session_state_changed(self, state: SessionState) -> None:
        """Hook for scene-specific state updates."""
