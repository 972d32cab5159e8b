"""Pydantic models for analytics event payloads.

These describe the shape of what callers hand to a transport. Only the
shape is checked; property names and values belong to the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import BACKGROUND_PAGE_PATH, BACKGROUND_PAGE_TITLE, ENVIRONMENT_BACKGROUND


class PageObject(BaseModel):
    """The page an event was triggered from."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    path: Optional[str] = Field(None, description="Path of the current page, e.g. /home")
    title: Optional[str] = Field(None, description="Title of the current page")
    url: Optional[str] = Field(None, description="Fully qualified url of the current page")


BACKGROUND_PAGE_OBJECT = PageObject(path=BACKGROUND_PAGE_PATH, title=BACKGROUND_PAGE_TITLE, url=BACKGROUND_PAGE_PATH)


class AppInfo(BaseModel):
    """Application tracking the event."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Application name")
    version: str = Field(..., min_length=1, description="Application version")


class EventContext(BaseModel):
    """Context attached to every event to qualify it."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="allow")

    app: Optional[AppInfo] = Field(None, description="Application tracking the event")
    user_agent: Optional[str] = Field(None, description="User agent string of the user")
    page: Optional[PageObject] = Field(None, description="Page the event occurred on")
    referrer_url: Optional[str] = Field(None, description="Origin that triggered the interaction")

    def to_wire(self) -> Dict[str, Any]:
        """Convert to the nested dict attached to a tracked event."""
        data: Dict[str, Any] = {}
        if self.app:
            data["app"] = self.app.model_dump()
        if self.user_agent:
            data["userAgent"] = self.user_agent
        if self.page:
            data["page"] = self.page.model_dump(exclude_none=True)
        if self.referrer_url:
            data["referrer"] = {"url": self.referrer_url}
        data.update(self.model_extra or {})
        return data


class MetricsEventPayload(BaseModel):
    """An event to track."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    event: str = Field(..., min_length=1, description="Event name to track")
    category: str = Field(..., min_length=1, description="Category to associate the event to")
    environment_type: str = Field(default=ENVIRONMENT_BACKGROUND, description="Environment the event occurred in")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Custom values to track")
    sensitive_properties: Dict[str, Any] = Field(
        default_factory=dict, description="Values sent in a separate event without the user's metrics id"
    )
    revenue: Optional[float] = Field(None, description="Currency amount the event creates in revenue")
    currency: Optional[str] = Field(None, description="ISO 4217 currency for revenue, defaults to USD")
    value: Optional[float] = Field(None, description="Abstract business value of the event")
    event_context: Optional[EventContext] = Field(None, description="Additional context for the event")


class MetricsEventOptions(BaseModel):
    """Options controlling how an event is tracked."""

    model_config = ConfigDict(extra="forbid")

    flush_immediately: bool = Field(default=False, description="Flush the transport queue right after tracking")
    exclude_metrics_id: bool = Field(default=False, description="Send with the anonymous id instead of the user's")
    metrics_id: Optional[str] = Field(None, description="Override for the user's metrics id")
