from __future__ import annotations

import logging
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from boxbreath.core.clock import ClockSource, Subscription
from boxbreath.core.config import SessionConfig, validate_config
from boxbreath.core.engine import CycleState, advance, initial_state
from boxbreath.core.position import Position, position_for_state


logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    COUNTING = "counting"
    RUNNING = "running"
    FINISHED = "finished"


class SessionController(QObject):
    """Owns the breathing session lifecycle and its clock subscriptions.

    Idle -> Counting -> Running -> Finished. `reset()` and `exit()` return
    to Idle from anywhere, `restart()` goes through Idle straight back into
    Counting. Every callback handed to the clock is tagged with the run it
    belongs to, so nothing scheduled before a reset can touch the new run.
    """

    state_changed = pyqtSignal(object)
    countdown_changed = pyqtSignal(int)
    ticked = pyqtSignal(object, object)
    phase_changed = pyqtSignal(object, int)
    session_completed = pyqtSignal()

    def __init__(self, clock: ClockSource, config: SessionConfig | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._clock = clock
        self._config = config if config is not None else SessionConfig()
        self._state = SessionState.IDLE
        self._cycle = initial_state()
        self._position = position_for_state(self._cycle, self._config)
        self._countdown = self._config.countdown_from
        self._running_started_ms: float | None = None
        self._frames: Subscription | None = None
        self._pending: Subscription | None = None
        self._run = 0
        self._completed_runs = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def cycle_state(self) -> CycleState:
        return self._cycle

    @property
    def position(self) -> Position:
        return self._position

    @property
    def countdown(self) -> int:
        return self._countdown

    @property
    def completed_runs(self) -> int:
        return self._completed_runs

    @property
    def is_active(self) -> bool:
        return self._state in {SessionState.COUNTING, SessionState.RUNNING}

    def start(self) -> bool:
        if self._state != SessionState.IDLE:
            logger.debug("start() ignored while %s", self._state.value)
            return False
        validate_config(self._config)

        self._run += 1
        self._cycle = initial_state()
        self._position = position_for_state(self._cycle, self._config)
        self._countdown = self._config.countdown_from
        self._set_state(SessionState.COUNTING)
        self.countdown_changed.emit(self._countdown)
        self._schedule_countdown(self._run)
        return True

    def reset(self) -> None:
        self._release()
        self._run += 1
        self._cycle = initial_state()
        self._position = position_for_state(self._cycle, self._config)
        self._countdown = self._config.countdown_from
        self._running_started_ms = None
        self._set_state(SessionState.IDLE)

    def restart(self) -> bool:
        logger.info("Restarting breathing session")
        self.reset()
        return self.start()

    def exit(self) -> None:
        if self._state != SessionState.IDLE:
            logger.info("Leaving breathing session from %s", self._state.value)
        self.reset()

    def _schedule_countdown(self, run: int) -> None:
        if self._countdown > 0:
            self._pending = self._clock.call_later(
                self._config.countdown_step_ms, lambda: self._on_countdown_step(run)
            )
        else:
            self._pending = self._clock.call_later(
                self._config.countdown_grace_ms, lambda: self._begin_running(run)
            )

    def _on_countdown_step(self, run: int) -> None:
        if not self._is_current(run, SessionState.COUNTING):
            return
        self._countdown -= 1
        self.countdown_changed.emit(self._countdown)
        self._schedule_countdown(run)

    def _begin_running(self, run: int) -> None:
        if not self._is_current(run, SessionState.COUNTING):
            return
        self._pending = None
        self._running_started_ms = self._clock.now_ms()
        self._set_state(SessionState.RUNNING)
        self.phase_changed.emit(self._cycle.phase, self._cycle.breath_index)
        self._frames = self._clock.subscribe(lambda now_ms: self._on_frame(run, now_ms))

    def _on_frame(self, run: int, now_ms: float) -> None:
        if not self._is_current(run, SessionState.RUNNING) or self._running_started_ms is None:
            return
        previous = self._cycle
        self._cycle = advance(now_ms - self._running_started_ms, previous, self._config)
        if self._cycle.finished:
            self._finish()
            return

        self._position = position_for_state(self._cycle, self._config)
        if self._cycle.phases_completed != previous.phases_completed:
            logger.debug("Breath %d: %s", self._cycle.breath_index, self._cycle.phase.name)
            self.phase_changed.emit(self._cycle.phase, self._cycle.breath_index)
        self.ticked.emit(self._cycle, self._position)

    def _finish(self) -> None:
        self._release()
        self._completed_runs += 1
        self._set_state(SessionState.FINISHED)
        logger.info(
            "Breathing session complete: %d breaths in %.0f ms",
            self._config.total_breaths,
            self._cycle.elapsed_ms,
        )
        self.session_completed.emit()

    def _is_current(self, run: int, state: SessionState) -> bool:
        if run != self._run or self._state != state:
            logger.debug("Dropping callback from run %d (current run %d, %s)", run, self._run, self._state.value)
            return False
        return True

    def _release(self) -> None:
        if self._frames is not None:
            self._frames.cancel()
            self._frames = None
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        logger.info("Session %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state)
