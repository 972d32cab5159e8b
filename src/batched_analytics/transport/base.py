"""Interface shared by analytics transports."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class AnalyticsTransport(Protocol):
    """Protocol for recording analytics calls.

    Callers depend on this protocol only, so a batching transport used in
    tests and development can replace one that forwards every call.
    """

    def track(self, payload: Any, callback: Optional[Callable[[], None]] = None) -> None:
        """Track an event; ``callback`` fires once it is considered sent."""
        ...

    def page(self, *args: Any, **kwargs: Any) -> None:
        """Record a page view."""
        ...

    def identify(self, *args: Any, **kwargs: Any) -> None:
        """Associate traits with a user."""
        ...

    def flush(self) -> int:
        """Send everything pending and return how many events were sent."""
        ...
