from __future__ import annotations

from dataclasses import dataclass

from boxbreath.core.config import SessionConfig
from boxbreath.core.engine import CycleState, Phase


@dataclass(frozen=True)
class Position:
    x: float
    y: float


def position_for(phase: Phase, progress: float, square_size: float) -> Position:
    """Point on the square perimeter, in square-local coordinates.

    One edge per phase, clockwise from the top-left corner: top edge
    left to right, right edge downwards, bottom edge right to left, left
    edge upwards. The end of each edge is the start of the next one.
    """
    travelled = max(0.0, min(1.0, progress)) * square_size
    phase = Phase(phase)
    if phase == Phase.INHALE:
        return Position(travelled, 0.0)
    if phase == Phase.HOLD1:
        return Position(square_size, travelled)
    if phase == Phase.EXHALE:
        return Position(square_size - travelled, square_size)
    return Position(0.0, square_size - travelled)


def position_for_state(state: CycleState, config: SessionConfig) -> Position:
    return position_for(state.phase, state.progress, config.square_size)
