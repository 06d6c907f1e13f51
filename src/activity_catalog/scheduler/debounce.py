"""Cancellable delayed delivery of rapidly changing input."""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TimerFactory = Callable[..., Any]


class Debouncer(Generic[T]):
    """Delivers the latest triggered value once input has been idle long enough.

    Every ``trigger`` cancels the pending timer and arms a new one, so at most
    one delivery is outstanding.
    """

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[[T], None],
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        self._delay = delay_seconds
        self._callback = callback
        self._timer_factory = timer_factory
        self._timer: Any | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self, value: T) -> None:
        """Restart the delay with ``value`` as the candidate to deliver."""

        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._timer = self._timer_factory(self._delay, self._fire, args=(self._generation, value))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        """Drop the pending delivery, if any."""

        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int, value: T) -> None:
        with self._lock:
            # A timer can start running just before it is cancelled.
            if generation != self._generation:
                return
            self._timer = None
        logger.debug("Delivering debounced value %r", value)
        self._callback(value)
