from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from boxbreath.core.config import PHASE_COUNT, SessionConfig


logger = logging.getLogger(__name__)


class Phase(int, Enum):
    INHALE = 0
    HOLD1 = 1
    EXHALE = 2
    HOLD2 = 3


PHASE_LABELS = {
    Phase.INHALE: "Inhale…",
    Phase.HOLD1: "Hold…",
    Phase.EXHALE: "Exhale…",
    Phase.HOLD2: "Hold…",
}


def phase_label(phase: Phase) -> str:
    return PHASE_LABELS[Phase(phase)]


@dataclass(frozen=True)
class CycleState:
    """Immutable snapshot of a breathing session.

    `elapsed_ms` is the last accepted sample of cumulative running time,
    `phase_elapsed_ms` the part of it spent in the current phase.
    """

    phase_index: int = 0
    phase_elapsed_ms: float = 0.0
    breath_index: int = 1
    finished: bool = False
    elapsed_ms: float = 0.0
    progress: float = 0.0

    @property
    def phase(self) -> Phase:
        return Phase(self.phase_index)

    @property
    def phases_completed(self) -> int:
        return (self.breath_index - 1) * PHASE_COUNT + self.phase_index


def initial_state() -> CycleState:
    return CycleState()


def advance(elapsed_ms: float, state: CycleState, config: SessionConfig) -> CycleState:
    """Fold a cumulative running-time sample into the next cycle state.

    Phase boundaries sit at whole multiples of `phase_duration_ms`, so the
    result depends only on the sample, not on how many samples came before
    it. Any number of phases may be crossed by a single call.
    """
    if state.finished:
        return state

    if elapsed_ms < state.elapsed_ms:
        logger.debug("Clock went back by %.1f ms, holding position", state.elapsed_ms - elapsed_ms)
        elapsed_ms = state.elapsed_ms

    duration = config.phase_duration_ms
    completed = state.phases_completed
    since_phase_start = max(0.0, elapsed_ms - completed * duration)

    if since_phase_start < duration:
        return replace(
            state,
            phase_elapsed_ms=since_phase_start,
            elapsed_ms=elapsed_ms,
            progress=_progress(since_phase_start, duration),
        )

    crossed, overflow = divmod(since_phase_start, duration)
    completed += int(crossed)
    if completed >= config.total_breaths * PHASE_COUNT:
        return CycleState(
            phase_index=0,
            phase_elapsed_ms=0.0,
            breath_index=config.total_breaths + 1,
            finished=True,
            elapsed_ms=elapsed_ms,
            progress=0.0,
        )

    breaths_done, phase_index = divmod(completed, PHASE_COUNT)
    return CycleState(
        phase_index=phase_index,
        phase_elapsed_ms=overflow,
        breath_index=breaths_done + 1,
        finished=False,
        elapsed_ms=elapsed_ms,
        progress=_progress(overflow, duration),
    )


def _progress(phase_elapsed_ms: float, duration_ms: int) -> float:
    return max(0.0, min(1.0, phase_elapsed_ms / duration_ms))
