"""Configuration management for Dimensify."""

from dimensify.core.config.loader import (
    clear_app_config_cache,
    configure_logging,
    load_app_config,
    load_config,
)
from dimensify.core.config.models import (
    AppConfig,
    LoggingConfig,
    ReplicateSettings,
    SegmindSettings,
)

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "clear_app_config_cache",
    "configure_logging",
    # Models
    "AppConfig",
    "LoggingConfig",
    "ReplicateSettings",
    "SegmindSettings",
]
