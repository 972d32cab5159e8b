"""Event queuing module for the analytics client."""

from .batch_queue import BatchConfig, BatchQueue, QueuedEvent, noop

__all__ = ["BatchQueue", "BatchConfig", "QueuedEvent", "noop"]
