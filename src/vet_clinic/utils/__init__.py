"""
Utility functions and helper modules.

This module provides configuration management and logging setup
shared by the database and web layers.
"""

from .config import (
    DEFAULT_DATABASE_URL,
    DEFAULT_PET_TYPES,
    AppConfig,
    ConfigError,
    DatabaseURLValidator,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
)

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_PET_TYPES",
    "AppConfig",
    "ConfigError",
    "DatabaseURLValidator",
    "EnvironmentConfig",
    "LoggingConfigurator",
    "LogLevel",
]
