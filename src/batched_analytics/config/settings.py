"""Configuration management for the batched analytics client.

This module provides configuration dataclasses for the transport and the
logging layer, with environment variable overrides applied on construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from ..core.constants import DEFAULT_FLUSH_INTERVAL_MS

PRODUCTION = "production"
TRANSPORT_BATCHING = "batching"
TRANSPORT_DIRECT = "direct"

_UNBOUNDED = {"", "none", "unbounded", "null"}
_TRUTHY = {"1", "true", "yes", "on"}

# Default for flush_at: derive the threshold from the environment
_DERIVE: Any = object()


def default_flush_at(environment: str) -> Optional[int]:
    """Flush threshold for an environment.

    Production batches events and relies on the interval; everywhere else
    flushes every event so they can be observed in real time.
    """
    return None if environment == PRODUCTION else 1


@dataclass
class LoggingConfig:
    """Configuration for loguru sinks."""

    level: str = "INFO"
    to_console: bool = True
    to_file: bool = False
    file_path: Path = field(default_factory=lambda: Path.cwd() / "analytics.log")
    rotation: str = "10 MB"
    retention: str = "7 days"


@dataclass
class AnalyticsConfig:
    """Complete analytics client configuration."""

    environment: str = "development"
    transport: str = TRANSPORT_BATCHING
    flush_at: Optional[int] = _DERIVE
    flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS
    isolate_callbacks: bool = True

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    _flush_at_explicit: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        """Apply environment variable overrides."""
        self._flush_at_explicit = self.flush_at is not _DERIVE
        self._apply_env_overrides()
        if not self._flush_at_explicit:
            self.flush_at = default_flush_at(self.environment)

    def _apply_env_overrides(self):
        """Apply configuration overrides from environment variables."""
        if environment := os.getenv("ANALYTICS_ENVIRONMENT"):
            self.environment = environment.strip().lower()

        if transport := os.getenv("ANALYTICS_TRANSPORT"):
            self.transport = transport.strip().lower()

        flush_at = os.getenv("ANALYTICS_FLUSH_AT")
        if flush_at is not None:
            if flush_at.strip().lower() in _UNBOUNDED:
                self.flush_at = None
                self._flush_at_explicit = True
            else:
                try:
                    self.flush_at = int(flush_at)
                    self._flush_at_explicit = True
                except ValueError:
                    logger.warning(f"Invalid flush threshold: {flush_at}")

        if flush_interval := os.getenv("ANALYTICS_FLUSH_INTERVAL_MS"):
            try:
                self.flush_interval_ms = int(flush_interval)
            except ValueError:
                logger.warning(f"Invalid flush interval: {flush_interval}")

        if isolate := os.getenv("ANALYTICS_ISOLATE_CALLBACKS"):
            self.isolate_callbacks = isolate.strip().lower() in _TRUTHY

        # Logging
        if log_level := os.getenv("ANALYTICS_LOG_LEVEL"):
            self.logging.level = log_level.strip().upper()

        if log_to_file := os.getenv("ANALYTICS_LOG_TO_FILE"):
            self.logging.to_file = log_to_file.strip().lower() in _TRUTHY

        if log_file := os.getenv("ANALYTICS_LOG_FILE"):
            self.logging.file_path = Path(log_file)

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION

    def get_batch_config(self) -> dict:
        """Get configuration for the batching queue."""
        return {
            "flush_at": self.flush_at,
            "flush_interval_ms": self.flush_interval_ms,
            "isolate_callbacks": self.isolate_callbacks,
        }

    def validate(self) -> tuple[bool, list[str]]:
        """Validate the configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if self.transport not in (TRANSPORT_BATCHING, TRANSPORT_DIRECT):
            errors.append(f"Unknown transport: {self.transport}")

        if self.flush_at is not None and self.flush_at < 1:
            errors.append("Flush threshold must be at least 1")

        if self.flush_interval_ms < 0:
            errors.append("Flush interval must not be negative")

        return len(errors) == 0, errors


class ConfigManager:
    """Manages analytics client configuration."""

    def __init__(self):
        """Initialize configuration manager."""
        self._config: Optional[AnalyticsConfig] = None

    def load_config(
        self,
        environment: Optional[str] = None,
        flush_at: Optional[int] = _DERIVE,
        flush_interval_ms: Optional[int] = None,
    ) -> AnalyticsConfig:
        """Load configuration with optional overrides.

        Args:
            environment: Environment name override
            flush_at: Flush threshold override, None for no limit
            flush_interval_ms: Flush interval override

        Returns:
            Configured AnalyticsConfig instance
        """
        config = AnalyticsConfig()

        if environment:
            config.environment = environment
            if not config._flush_at_explicit:
                config.flush_at = default_flush_at(environment)

        if flush_at is not _DERIVE:
            config.flush_at = flush_at
            config._flush_at_explicit = True

        if flush_interval_ms is not None:
            config.flush_interval_ms = flush_interval_ms

        self._config = config
        return config

    def get_config(self) -> Optional[AnalyticsConfig]:
        """Get current configuration."""
        return self._config

    def validate_config(self) -> tuple[bool, list[str]]:
        """Validate current configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        if not self._config:
            return False, ["No configuration loaded"]

        return self._config.validate()


# Global configuration manager instance
_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    return _config_manager


def get_current_config() -> Optional[AnalyticsConfig]:
    """Get the current configuration."""
    return _config_manager.get_config()
