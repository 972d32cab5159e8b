"""Periodic flush trigger."""

from .flush_timer import FlushTimer

__all__ = ["FlushTimer"]
