"""Single-shot turn timers.

`arm` always replaces whatever was pending, so at most one expiry is ever
outstanding. The engine owns exactly one timer and re-arms it every turn.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

TimerCallback = Callable[[], None]


class TurnTimer:
    def arm(self, delay_ms: int, callback: TimerCallback) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError

    def remaining_ms(self) -> int:
        raise NotImplementedError

    @property
    def delay_ms(self) -> int:
        raise NotImplementedError

    @property
    def armed(self) -> bool:
        raise NotImplementedError


class ThreadingTurnTimer(TurnTimer):
    """Wall-clock timer backed by one daemon `threading.Timer` per arming."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._deadline: Optional[float] = None
        self._delay_ms = 0

    def arm(self, delay_ms: int, callback: TimerCallback) -> None:
        with self._lock:
            self._cancel_locked()
            self._delay_ms = int(delay_ms)
            self._deadline = time.monotonic() + delay_ms / 1000.0
            timer = threading.Timer(delay_ms / 1000.0, self._fire, args=(callback,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, callback: TimerCallback) -> None:
        with self._lock:
            if self._timer is threading.current_thread():
                self._timer = None
                self._deadline = None
        callback()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._deadline = None

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def remaining_ms(self) -> int:
        with self._lock:
            if self._deadline is None:
                return 0
            return max(0, int((self._deadline - time.monotonic()) * 1000))

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def armed(self) -> bool:
        with self._lock:
            return self._timer is not None


class ManualTurnTimer(TurnTimer):
    """Simulated clock that only moves when `advance` is called."""

    def __init__(self) -> None:
        self._callback: Optional[TimerCallback] = None
        self._delay_ms = 0
        self._elapsed_ms = 0

    def arm(self, delay_ms: int, callback: TimerCallback) -> None:
        self._delay_ms = int(delay_ms)
        self._elapsed_ms = 0
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None
        self._elapsed_ms = 0

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing every expiry crossed. Returns the number fired."""
        fired = 0
        remaining = int(ms)
        while self._callback is not None and remaining >= self._delay_ms - self._elapsed_ms:
            remaining -= self._delay_ms - self._elapsed_ms
            callback = self._callback
            self._callback = None
            self._elapsed_ms = 0
            fired += 1
            callback()
        if self._callback is not None:
            self._elapsed_ms += remaining
        return fired

    def expire(self) -> int:
        """Jump straight to the pending deadline."""
        if self._callback is None:
            return 0
        return self.advance(self._delay_ms - self._elapsed_ms)

    def remaining_ms(self) -> int:
        if self._callback is None:
            return 0
        return self._delay_ms - self._elapsed_ms

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def armed(self) -> bool:
        return self._callback is not None
