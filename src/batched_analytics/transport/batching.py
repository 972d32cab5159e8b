"""Batching transport that mimics an analytics client without sending.

Used when building in test mode, and in unit tests, to catch analytics calls
and keep them from leaving the process. Tracked events are queued and their
callbacks fire when the queue flushes, on the same schedule a hosted
analytics client would send them.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from loguru import logger

from ..core.constants import DEFAULT_FLUSH_INTERVAL_MS
from ..queuer import BatchConfig, BatchQueue
from ..timer import FlushTimer


class BatchingTransport:
    """Queues tracked events and flushes them by size and by interval."""

    def __init__(self, config: Optional[BatchConfig] = None):
        """Initialize the transport and start its flush timer.

        Args:
            config: Batch configuration
        """
        self.config = config or BatchConfig()
        self.queue = BatchQueue(self.config)

        self.timer: Optional[FlushTimer] = None
        if self.config.flush_interval_ms > 0:
            self.timer = FlushTimer(self.queue.flush, self.config.flush_interval_ms, name="analytics-flush-timer")
            self.timer.start()

        logger.info(f"Initialized batching transport (flush_at={self.config.flush_at}, flush_interval_ms={self.config.flush_interval_ms})")

    def track(self, payload: Any, callback: Optional[Callable[[], None]] = None) -> None:
        """Queue an event, flushing if the queue reaches ``flush_at``."""
        self.queue.enqueue(payload, callback)

    def page(self, *args: Any, **kwargs: Any) -> None:
        # noop: page results are never awaited
        pass

    def identify(self, *args: Any, **kwargs: Any) -> None:
        # noop: identify results are never awaited
        pass

    def flush(self) -> int:
        """Immediately send all queued events."""
        return self.queue.flush()

    def close(self) -> None:
        """Stop the flush timer. Queued events are left in place."""
        if self.timer is not None:
            self.timer.stop()
            self.timer = None
            logger.info("Closed batching transport")

    dispose = close

    def get_stats(self) -> Dict[str, Any]:
        """Get transport statistics."""
        return {
            "queue": self.queue.get_stats(),
            "timer_running": self.timer.is_running if self.timer else False,
            "timer_fire_count": self.timer.fire_count if self.timer else 0,
        }

    def __enter__(self) -> BatchingTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_batching_transport(
    flush_at: Optional[int] = None,
    flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS,
    isolate_callbacks: bool = True,
) -> BatchingTransport:
    """Create a batching transport.

    Args:
        flush_at: Number of events to queue before flushing, None for no limit
        flush_interval_ms: Milliseconds between timed flushes, 0 disables
        isolate_callbacks: Keep flushing when a callback raises

    Returns:
        Batching transport with its timer running
    """
    config = BatchConfig(
        flush_at=flush_at,
        flush_interval_ms=flush_interval_ms,
        isolate_callbacks=isolate_callbacks,
    )

    return BatchingTransport(config)
