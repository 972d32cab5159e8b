"""Pass-through transport that hands every call to a sink immediately."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from loguru import logger

Sink = Callable[[str, Dict[str, Any]], None]


def log_sink(method: str, message: Dict[str, Any]) -> None:
    """Default sink: record the call in the log."""
    logger.info(f"analytics {method}: {message}")


class DirectTransport:
    """Transport without a queue.

    ``track`` completes as soon as the sink returns, so callbacks run
    synchronously. ``page`` and ``identify`` are forwarded as well.
    """

    def __init__(self, sink: Optional[Sink] = None):
        """Initialize the transport.

        Args:
            sink: Receives ``(method, message)`` for every call
        """
        self.sink = sink or log_sink
        self._total_calls = 0

    def track(self, payload: Any, callback: Optional[Callable[[], None]] = None) -> None:
        self._send("track", {"payload": payload})
        if callback is not None:
            callback()

    def page(self, *args: Any, **kwargs: Any) -> None:
        self._send("page", {"args": args, "kwargs": kwargs})

    def identify(self, *args: Any, **kwargs: Any) -> None:
        self._send("identify", {"args": args, "kwargs": kwargs})

    def flush(self) -> int:
        """Nothing is ever pending."""
        return 0

    def close(self) -> None:
        logger.debug(f"Closed direct transport after {self._total_calls} calls")

    dispose = close

    def get_stats(self) -> Dict[str, Any]:
        """Get transport statistics."""
        return {"total_calls": self._total_calls}

    def _send(self, method: str, message: Dict[str, Any]) -> None:
        self._total_calls += 1
        self.sink(method, message)

    def __enter__(self) -> DirectTransport:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
