"""Batched analytics - in-process analytics transport with size and interval flushing."""

from .config import get_config_manager, setup_logging
from .core import track_metrics_event
from .queuer import BatchConfig, BatchQueue
from .timer import FlushTimer
from .transport import AnalyticsTransport, BatchingTransport, DirectTransport, create_batching_transport, create_transport

__version__ = "1.0.0"

__all__ = [
    "AnalyticsTransport",
    "BatchConfig",
    "BatchQueue",
    "BatchingTransport",
    "DirectTransport",
    "FlushTimer",
    "create_batching_transport",
    "create_transport",
    "get_config_manager",
    "setup_logging",
    "track_metrics_event",
]
