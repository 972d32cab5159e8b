"""In-memory batching queue for analytics events.

Events are held together with a completion callback until the queue is
flushed. Flushing "sends" every held event by invoking its callback, which is
all a caller can observe of a real analytics transport. A flush happens when
the queue reaches ``flush_at`` entries, when the flush timer fires, or when
``flush()`` is called directly.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import DEFAULT_FLUSH_INTERVAL_MS

Callback = Callable[[], None]


def noop() -> None:
    """Completion callback used when the caller supplies none."""


class BatchConfig(BaseModel):
    """Configuration for the batching queue, fixed at construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    flush_at: Optional[int] = Field(default=None, ge=1, description="Queue length that triggers a flush, None for no limit")
    flush_interval_ms: int = Field(default=DEFAULT_FLUSH_INTERVAL_MS, ge=0, description="Milliseconds between timed flushes, 0 disables")
    isolate_callbacks: bool = Field(default=True, description="Log a failing callback and keep flushing the rest")


@dataclass(frozen=True)
class QueuedEvent:
    """An event waiting to be flushed."""

    payload: Any
    on_complete: Callback


class BatchQueue:
    """Thread-safe queue that flushes on a size threshold."""

    def __init__(self, config: Optional[BatchConfig] = None):
        """Initialize the batch queue.

        Args:
            config: Batch configuration
        """
        self.config = config or BatchConfig()
        self._queue: List[QueuedEvent] = []
        self._lock = threading.RLock()

        # Statistics
        self._total_enqueued = 0
        self._total_flushed = 0
        self._total_flushes = 0
        self._total_callback_errors = 0

    def enqueue(self, payload: Any, on_complete: Optional[Callback] = None) -> None:
        """Add an event to the tail of the queue.

        Flushes before returning if the queue has reached ``flush_at``, so
        every queued callback may run inside this call.

        Args:
            payload: Event payload, not inspected
            on_complete: Invoked with no arguments when the event is flushed
        """
        with self._lock:
            self._queue.append(QueuedEvent(payload, on_complete or noop))
            self._total_enqueued += 1
            size = len(self._queue)

        logger.debug(f"Enqueued event, queue size: {size}")

        if self.config.flush_at is not None and size >= self.config.flush_at:
            logger.debug(f"Queue reached flush threshold of {self.config.flush_at}")
            self.flush()

    def flush(self) -> int:
        """Invoke the callback of every queued event, in insertion order.

        The queue is emptied before any callback runs. Events enqueued by a
        callback land in a fresh queue and wait for the next flush.

        Returns:
            Number of events flushed
        """
        with self._lock:
            if not self._queue:
                return 0
            batch = self._queue
            self._queue = []
            self._total_flushes += 1

        logger.debug(f"Flushing {len(batch)} events")

        for flushed, entry in enumerate(batch):
            try:
                entry.on_complete()
            except Exception:
                with self._lock:
                    self._total_callback_errors += 1
                if not self.config.isolate_callbacks:
                    # Remaining entries of this pass are dropped uninvoked
                    self._record_flushed(flushed + 1)
                    raise
                logger.exception("Event callback failed during flush")

        self._record_flushed(len(batch))
        return len(batch)

    def _record_flushed(self, count: int) -> None:
        with self._lock:
            self._total_flushed += count

    def size(self) -> int:
        """Return the current queue size."""
        with self._lock:
            return len(self._queue)

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        with self._lock:
            return len(self._queue) == 0

    def pending(self) -> List[Any]:
        """Return the payloads currently queued, oldest first."""
        with self._lock:
            return [entry.payload for entry in self._queue]

    def get_stats(self) -> Dict[str, Any]:
        """Get queue statistics."""
        with self._lock:
            return {
                "current_size": len(self._queue),
                "total_enqueued": self._total_enqueued,
                "total_flushed": self._total_flushed,
                "total_flushes": self._total_flushes,
                "total_callback_errors": self._total_callback_errors,
                "config": {
                    "flush_at": self.config.flush_at,
                    "flush_interval_ms": self.config.flush_interval_ms,
                    "isolate_callbacks": self.config.isolate_callbacks,
                },
            }
