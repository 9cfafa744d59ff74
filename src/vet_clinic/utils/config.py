"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
database URL validation, the application settings object and logging
configuration utilities.
"""

import logging
import logging.config
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import parse_qs, urlparse

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./vet_clinic.db"

DEFAULT_PET_TYPES = ["bird", "cat", "dog", "hamster", "lizard", "snake"]


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentConfig:
    """Utility class for handling environment variables with type conversion."""

    @staticmethod
    def get_str(
        key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Get a string environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            String value or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)

        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")

        return value

    @staticmethod
    def get_int(
        key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        """
        Get an integer environment variable.

        Raises:
            ConfigError: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(f"Required environment variable '{key}' is not set")
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be an integer, got: {value}"
            )

    @staticmethod
    def get_bool(
        key: str, default: Optional[bool] = None, required: bool = False
    ) -> Optional[bool]:
        """
        Get a boolean environment variable.

        Values ``true``, ``1``, ``yes``, ``on`` and ``enabled`` (any case)
        are truthy; anything else is false.

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(f"Required environment variable '{key}' is not set")
            return default

        return value.lower() in ("true", "1", "yes", "on", "enabled")

    @staticmethod
    def get_list(
        key: str,
        separator: str = ",",
        default: Optional[List[str]] = None,
        required: bool = False,
    ) -> Optional[List[str]]:
        """
        Get a list environment variable.

        Args:
            key: Environment variable key
            separator: Separator character for list items
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            List of stripped, non-empty strings or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(f"Required environment variable '{key}' is not set")
            return default or []

        return [item.strip() for item in value.split(separator) if item.strip()]


class DatabaseURLValidator:
    """Utility class for validating database URLs."""

    SUPPORTED_DRIVERS = {
        "postgresql": ["postgresql", "postgresql+asyncpg"],
        "sqlite": ["sqlite", "sqlite+aiosqlite"],
    }

    @classmethod
    def validate_url(cls, url: str) -> Dict[str, Any]:
        """
        Validate a database URL and return parsed components.

        Args:
            url: Database URL to validate

        Returns:
            Dictionary with validation results and parsed components

        Raises:
            ConfigError: If URL is invalid
        """
        if not url:
            raise ConfigError("Database URL cannot be empty")

        parsed = urlparse(url)

        if not parsed.scheme:
            raise ConfigError(
                "Database URL must include a scheme (e.g., postgresql://)"
            )

        backend = cls.get_backend(parsed.scheme)
        if backend is None:
            supported_list = []
            for drivers in cls.SUPPORTED_DRIVERS.values():
                supported_list.extend(drivers)
            raise ConfigError(
                f"Unsupported database driver '{parsed.scheme}'. Supported: {', '.join(supported_list)}"
            )

        if backend != "sqlite":
            if not parsed.hostname:
                raise ConfigError("Database URL must include a hostname")
            if not parsed.path.lstrip("/"):
                raise ConfigError("Database URL must include a database name")

        return {
            "valid": True,
            "backend": backend,
            "scheme": parsed.scheme,
            "hostname": parsed.hostname,
            "port": parsed.port,
            "database": parsed.path.lstrip("/") if parsed.path else "",
            "query": dict(parse_qs(parsed.query)),
        }

    @classmethod
    def get_backend(cls, scheme: str) -> Optional[str]:
        """Return ``postgresql`` or ``sqlite`` for a known scheme, else None."""
        for backend, drivers in cls.SUPPORTED_DRIVERS.items():
            if scheme in drivers:
                return backend
        return None


@dataclass
class AppConfig:
    """
    Application settings for the clinic web application.

    Every field can be supplied through a ``VET_CLINIC_*`` environment
    variable; see :meth:`from_environment`.

    Attributes:
        database_url: SQLAlchemy URL; sync drivers are mapped to async ones
        db_echo: Echo SQL statements to the log
        db_pool_size: Connection pool size (ignored for SQLite)
        log_level: Root log level for the application
        log_file: Optional file to append log records to
        create_schema: Create missing tables at startup
        seed_pet_types: Insert the default pet type catalog when it is empty
        page_size: Number of owners per page on the owner list
        pet_types: Catalog used when seeding
    """

    database_url: str = DEFAULT_DATABASE_URL
    db_echo: bool = False
    db_pool_size: int = 5
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = None
    create_schema: bool = True
    seed_pet_types: bool = True
    page_size: int = 5
    pet_types: List[str] = field(default_factory=lambda: list(DEFAULT_PET_TYPES))

    def __post_init__(self) -> None:
        DatabaseURLValidator.validate_url(self.database_url)
        if self.page_size < 1:
            raise ConfigError("Page size must be at least 1")
        if isinstance(self.log_level, str):
            try:
                self.log_level = LogLevel(self.log_level.upper())
            except ValueError:
                raise ConfigError(f"Unknown log level: {self.log_level}")

    @property
    def is_sqlite(self) -> bool:
        """Check whether the configured database is SQLite."""
        return urlparse(self.database_url).scheme.startswith("sqlite")

    @classmethod
    def from_environment(cls, prefix: str = "VET_CLINIC_") -> "AppConfig":
        """
        Build the configuration from environment variables.

        Args:
            prefix: Prefix shared by all variables

        Returns:
            Populated configuration

        Raises:
            ConfigError: If a variable is malformed
        """
        env = EnvironmentConfig
        return cls(
            database_url=env.get_str(f"{prefix}DATABASE_URL", DEFAULT_DATABASE_URL),
            db_echo=env.get_bool(f"{prefix}DB_ECHO", False),
            db_pool_size=env.get_int(f"{prefix}DB_POOL_SIZE", 5),
            log_level=env.get_str(f"{prefix}LOG_LEVEL", LogLevel.INFO.value),
            log_file=env.get_str(f"{prefix}LOG_FILE"),
            create_schema=env.get_bool(f"{prefix}CREATE_SCHEMA", True),
            seed_pet_types=env.get_bool(f"{prefix}SEED_PET_TYPES", True),
            page_size=env.get_int(f"{prefix}PAGE_SIZE", 5),
            pet_types=env.get_list(f"{prefix}PET_TYPES") or list(DEFAULT_PET_TYPES),
        )


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, LogLevel):
            level = level.value

        basic_config_args: Dict[str, Any] = {
            "level": level,
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)

    @staticmethod
    def configure_structured_logging(
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        level: Union[str, LogLevel] = LogLevel.INFO,
    ) -> None:
        """
        Configure structured logging using a dictionary or file.

        Args:
            config_dict: Logging configuration dictionary
            config_file: Path to logging configuration file
            level: Level for the ``vet_clinic`` logger in the default setup
        """
        if isinstance(level, LogLevel):
            level = level.value

        if config_file and Path(config_file).exists():
            logging.config.fileConfig(config_file)
        elif config_dict:
            logging.config.dictConfig(config_dict)
        else:
            default_config = {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "standard": {"format": LoggingConfigurator.DEFAULT_FORMAT},
                    "detailed": {
                        "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s"
                    },
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "level": level,
                        "formatter": "standard",
                        "stream": "ext://sys.stdout",
                    }
                },
                "loggers": {
                    "vet_clinic": {
                        "level": level,
                        "handlers": ["console"],
                        "propagate": False,
                    }
                },
                "root": {"level": "WARNING", "handlers": ["console"]},
            }
            logging.config.dictConfig(default_config)

    @classmethod
    def configure_from_app_config(cls, config: AppConfig) -> None:
        """Apply the logging settings carried by an :class:`AppConfig`."""
        if config.log_file:
            cls.configure_basic_logging(config.log_level, log_file=config.log_file)
        else:
            cls.configure_structured_logging(level=config.log_level)
