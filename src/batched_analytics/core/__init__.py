"""Core event models and tracking helpers."""

from .constants import ANONYMOUS_ID, DEFAULT_FLUSH_INTERVAL_MS
from .events import BACKGROUND_PAGE_OBJECT, AppInfo, EventContext, MetricsEventOptions, MetricsEventPayload, PageObject
from .tracking import build_track_message, track_metrics_event

__all__ = [
    "ANONYMOUS_ID",
    "BACKGROUND_PAGE_OBJECT",
    "DEFAULT_FLUSH_INTERVAL_MS",
    "AppInfo",
    "EventContext",
    "MetricsEventOptions",
    "MetricsEventPayload",
    "PageObject",
    "build_track_message",
    "track_metrics_event",
]
