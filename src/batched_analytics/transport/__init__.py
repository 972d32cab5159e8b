"""Analytics transports."""

from .base import AnalyticsTransport
from .batching import BatchingTransport, create_batching_transport
from .direct import DirectTransport, log_sink
from .factory import create_transport

__all__ = ["AnalyticsTransport", "BatchingTransport", "DirectTransport", "create_batching_transport", "create_transport", "log_sink"]
