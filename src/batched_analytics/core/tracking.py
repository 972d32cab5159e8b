"""Helpers for turning event payloads into transport calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

from loguru import logger

from .constants import ANONYMOUS_ID
from .events import BACKGROUND_PAGE_OBJECT, EventContext, MetricsEventOptions, MetricsEventPayload

if TYPE_CHECKING:
    from ..transport.base import AnalyticsTransport


def build_track_message(
    payload: MetricsEventPayload,
    metrics_id: Optional[str],
    properties: Dict[str, Any],
    exclude_metrics_id: bool = False,
) -> Dict[str, Any]:
    """Build the dict handed to ``transport.track`` for one event."""
    context = (payload.event_context or EventContext(page=BACKGROUND_PAGE_OBJECT)).to_wire()

    message: Dict[str, Any] = {
        "event": payload.event,
        "properties": {
            **properties,
            "category": payload.category,
            "environment_type": payload.environment_type,
        },
        "context": context,
    }

    for key in ("revenue", "currency", "value"):
        if (field_value := getattr(payload, key)) is not None:
            message["properties"][key] = field_value

    if exclude_metrics_id or not metrics_id:
        message["anonymousId"] = ANONYMOUS_ID
    else:
        message["userId"] = metrics_id

    return message


def track_metrics_event(
    transport: AnalyticsTransport,
    payload: Union[MetricsEventPayload, Dict[str, Any]],
    options: Optional[MetricsEventOptions] = None,
    callback: Optional[Callable[[], None]] = None,
    metrics_id: Optional[str] = None,
) -> None:
    """Track an event through a transport.

    Sensitive properties are sent first in a separate event that never
    carries the user's metrics id. The main event follows, and ``callback``
    is attached to it. When ``options.flush_immediately`` is set the
    transport is flushed afterwards so the callback fires before returning.

    Args:
        transport: Transport to track through
        payload: Event payload or a dict accepted by ``MetricsEventPayload``
        options: Tracking options
        callback: Invoked once the main event is considered sent
        metrics_id: The user's metrics id, if they have one
    """
    if not isinstance(payload, MetricsEventPayload):
        payload = MetricsEventPayload.model_validate(payload)
    options = options or MetricsEventOptions()

    user_id = options.metrics_id or metrics_id

    if payload.sensitive_properties:
        sensitive_message = build_track_message(
            payload,
            metrics_id=None,
            properties={**payload.properties, **payload.sensitive_properties},
            exclude_metrics_id=True,
        )
        transport.track(sensitive_message)
        logger.debug(f"Tracked sensitive variant of {payload.event}")

    message = build_track_message(
        payload,
        metrics_id=user_id,
        properties=payload.properties,
        exclude_metrics_id=options.exclude_metrics_id,
    )
    transport.track(message, callback)

    if options.flush_immediately:
        transport.flush()
