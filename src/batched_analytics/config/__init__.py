"""Configuration module for the analytics client."""

from .logger_config import setup_logging
from .settings import AnalyticsConfig, ConfigManager, LoggingConfig, default_flush_at, get_config_manager, get_current_config

__all__ = ["AnalyticsConfig", "LoggingConfig", "ConfigManager", "default_flush_at", "get_config_manager", "get_current_config", "setup_logging"]
