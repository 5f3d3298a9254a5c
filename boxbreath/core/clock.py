from __future__ import annotations

"""Clock sources feeding the breathing session.

A clock hands out monotonic millisecond samples to frame subscribers and
runs one-shot delayed callbacks. `QtFrameClock` is driven by the Qt event
loop; `ManualClock` only moves when told to.
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer


TickCallback = Callable[[float], None]


class Subscription:
    """Handle for a frame subscription or a pending one-shot."""

    def __init__(self, on_cancel: Callable[[], None]) -> None:
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._on_cancel()

    def _expire(self) -> None:
        self._active = False


class ClockSource(ABC):
    @abstractmethod
    def now_ms(self) -> float:
        """Monotonic time in milliseconds."""

    @abstractmethod
    def subscribe(self, callback: TickCallback) -> Subscription:
        """Call `callback(now_ms)` on every frame until cancelled."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Subscription:
        """Call `callback()` once after `delay_ms` unless cancelled first."""


class QtFrameClock(ClockSource):
    """Frame clock on top of the Qt event loop."""

    def __init__(self, interval_ms: int = 16, parent: QObject | None = None) -> None:
        self._parent = parent
        self._elapsed = QElapsedTimer()
        self._elapsed.start()
        self._frame_timer = QTimer(parent)
        self._frame_timer.setInterval(interval_ms)
        self._frame_timer.timeout.connect(self._on_frame)
        self._subscribers: dict[int, TickCallback] = {}
        self._ids = itertools.count()
        self._one_shots: dict[int, QTimer] = {}

    def now_ms(self) -> float:
        return self._elapsed.nsecsElapsed() / 1_000_000

    def subscribe(self, callback: TickCallback) -> Subscription:
        key = next(self._ids)
        self._subscribers[key] = callback
        if not self._frame_timer.isActive():
            self._frame_timer.start()
        return Subscription(lambda: self._unsubscribe(key))

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Subscription:
        key = next(self._ids)
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        subscription = Subscription(lambda: self._drop_one_shot(key))

        def fire() -> None:
            self._drop_one_shot(key)
            subscription._expire()  # noqa: SLF001
            callback()

        timer.timeout.connect(fire)
        self._one_shots[key] = timer
        timer.start(max(0, int(round(delay_ms))))
        return subscription

    def _unsubscribe(self, key: int) -> None:
        self._subscribers.pop(key, None)
        if not self._subscribers:
            self._frame_timer.stop()

    def _drop_one_shot(self, key: int) -> None:
        timer = self._one_shots.pop(key, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _on_frame(self) -> None:
        now = self.now_ms()
        for key, callback in list(self._subscribers.items()):
            if key in self._subscribers:
                callback(now)


class ManualClock(ClockSource):
    """Deterministic clock; time moves only through `advance`."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._subscribers: dict[int, TickCallback] = {}
        self._ids = itertools.count()
        self._timers: list[tuple[float, int, Callable[[], None], Subscription]] = []

    def now_ms(self) -> float:
        return self._now

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def pending_count(self) -> int:
        return sum(1 for *_rest, sub in self._timers if sub.active)

    def subscribe(self, callback: TickCallback) -> Subscription:
        key = next(self._ids)
        self._subscribers[key] = callback
        return Subscription(lambda: self._subscribers.pop(key, None))

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Subscription:
        key = next(self._ids)
        subscription = Subscription(lambda: None)
        heapq.heappush(self._timers, (self._now + max(0.0, delay_ms), key, callback, subscription))
        return subscription

    def advance(self, ms: float, step_ms: float | None = None) -> None:
        """Move time forward by `ms`, ticking subscribers every `step_ms`.

        Without `step_ms` subscribers see a single sample at the end.
        One-shots due on the way fire in time order before each tick.
        """
        if ms < 0:
            raise ValueError("ManualClock cannot go backwards")
        start = self._now
        if step_ms is None or step_ms <= 0:
            marks = [start + ms]
        else:
            count = int(ms // step_ms)
            marks = [start + step_ms * i for i in range(1, count + 1)]
            if not marks or marks[-1] < start + ms:
                marks.append(start + ms)
        for mark in marks:
            self._run_timers_until(mark)
            self._now = mark
            self.tick()

    def tick(self) -> None:
        """Deliver a sample at the current time to every subscriber."""
        for key, callback in list(self._subscribers.items()):
            if key in self._subscribers:
                callback(self._now)

    def _run_timers_until(self, mark: float) -> None:
        while self._timers and self._timers[0][0] <= mark:
            due, _key, callback, subscription = heapq.heappop(self._timers)
            if not subscription.active:
                continue
            subscription._expire()  # noqa: SLF001
            self._now = due
            callback()
