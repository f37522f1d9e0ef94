"""Configuration module."""

from src.config.configuration import (
    ApiConfig,
    AppConfig,
    ConfigurationError,
    LoggingConfig,
    StorageConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)
from src.config.logging_setup import configure_logging

__all__ = [
    "ApiConfig",
    "AppConfig",
    "ConfigurationError",
    "LoggingConfig",
    "StorageConfig",
    "configure_logging",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
