"""Repeating timer that forces periodic flushes."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from loguru import logger


class FlushTimer:
    """Calls a target every ``interval_ms`` milliseconds on a daemon thread.

    The timer fires unconditionally; it is not reset when the target runs
    for other reasons. Call ``stop()`` (or ``dispose()``) to cancel it,
    otherwise it lives until the process exits.
    """

    def __init__(self, target: Callable[[], object], interval_ms: int, name: str = "flush-timer"):
        """Initialize the flush timer.

        Args:
            target: Called with no arguments on every tick
            interval_ms: Milliseconds between ticks, must be positive
            name: Name of the background thread
        """
        if interval_ms <= 0:
            raise ValueError(f"Flush interval must be positive, got {interval_ms}")

        self.target = target
        self.interval_ms = interval_ms
        self.name = name

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._fire_count = 0

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    @property
    def fire_count(self) -> int:
        with self._lock:
            return self._fire_count

    def start(self) -> None:
        """Start the timer thread."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                logger.warning("Flush timer is already running")
                return

            # Each thread gets its own event so a late stop() cannot touch a restarted timer
            self._stop_event = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stop_event,), name=self.name, daemon=True)
            self._thread.start()

        logger.debug(f"Started flush timer with interval {self.interval_ms}ms")

    def stop(self, timeout: float = 5.0) -> None:
        """Cancel the timer and wait for its thread to exit."""
        with self._lock:
            thread = self._thread
            self._thread = None
            if thread is None:
                return
            self._stop_event.set()
            fire_count = self._fire_count

        if thread is not threading.current_thread():
            thread.join(timeout=timeout)

        logger.debug(f"Stopped flush timer after {fire_count} ticks")

    dispose = stop

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval_seconds):
            with self._lock:
                self._fire_count += 1
            try:
                self.target()
            except Exception:
                logger.exception("Flush timer target failed")

    def __enter__(self) -> FlushTimer:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
