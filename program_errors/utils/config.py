"""
Configuration management for the program error registry.

This module provides utilities for loading and accessing configuration
settings from environment variables (optionally seeded from a .env file).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from program_errors.utils.error_handling import ConfigurationError

# Configure logger
logger = logging.getLogger(__name__)

# Directory holding the compiled tables shipped with the package
DEFAULT_TABLES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "tables")

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def bool_validator(value: str) -> bool:
    """Validate and convert string to boolean.

    Args:
        value: String value to convert

    Returns:
        Boolean value
    """
    return value.lower() in ("true", "1", "yes", "y", "on")


@dataclass
class RegistrySettings:
    """Settings for compiling and loading error tables."""

    # Directory of compiled .table artifacts
    TABLES_DIR: str = DEFAULT_TABLES_DIR

    # Treat dangling message attributes as malformed enums
    STRICT_PARSING: bool = False

    def validate(self) -> None:
        """Validate registry settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        if not self.TABLES_DIR:
            raise ConfigurationError(
                "Tables directory is required",
                details={"setting": "TABLES_DIR"}
            )

        if not os.path.isdir(self.TABLES_DIR):
            raise ConfigurationError(
                f"Tables directory does not exist: {self.TABLES_DIR}",
                details={"setting": "TABLES_DIR", "value": self.TABLES_DIR}
            )


@dataclass
class LoggingSettings:
    """Logging configuration settings."""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    def validate(self) -> None:
        """Validate logging settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        if self.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.LOG_LEVEL}",
                details={
                    "setting": "LOG_LEVEL",
                    "value": self.LOG_LEVEL,
                    "valid_values": list(VALID_LOG_LEVELS)
                }
            )


@dataclass
class ServerSettings:
    """HTTP server settings."""

    HOST: str = "127.0.0.1"
    PORT: int = 8000
    DEBUG: bool = False

    def validate(self) -> None:
        """Validate server settings.

        Raises:
            ConfigurationError: If settings are invalid
        """
        if not 0 < self.PORT < 65536:
            raise ConfigurationError(
                f"Port out of range: {self.PORT}",
                details={"setting": "PORT", "value": self.PORT}
            )


@dataclass
class Settings:
    """Global application settings."""

    registry: RegistrySettings
    logging: LoggingSettings
    server: ServerSettings

    def validate(self) -> None:
        """Validate all settings.

        Raises:
            ConfigurationError: If any settings are invalid
        """
        self.registry.validate()
        self.logging.validate()
        self.server.validate()


def load_from_env() -> Settings:
    """Load settings from environment variables.

    Returns:
        Settings object with values from environment variables

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed
    """
    load_dotenv()

    registry = RegistrySettings(
        TABLES_DIR=os.environ.get("PROGRAM_ERRORS_TABLES_DIR", DEFAULT_TABLES_DIR),
        STRICT_PARSING=bool_validator(os.environ.get("PROGRAM_ERRORS_STRICT", "false")),
    )

    logging_settings = LoggingSettings(
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO").upper(),
        LOG_JSON=bool_validator(os.environ.get("LOG_JSON", "true")),
    )

    port = os.environ.get("PORT", "8000")
    try:
        port_value = int(port)
    except ValueError:
        raise ConfigurationError(
            f"'{port}' is not a valid integer",
            details={"setting": "PORT", "value": port}
        )

    server = ServerSettings(
        HOST=os.environ.get("HOST", "127.0.0.1"),
        PORT=port_value,
        DEBUG=bool_validator(os.environ.get("DEBUG", "false")),
    )

    return Settings(registry=registry, logging=logging_settings, server=server)


# Global settings instance
_settings: Optional[Settings] = None


def initialize_settings() -> Settings:
    """Initialize settings from the environment and validate them.

    Returns:
        Validated Settings object
    """
    global _settings

    if _settings is None:
        settings = load_from_env()

        try:
            settings.validate()
        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            raise

        _settings = settings

    return _settings


def get_settings() -> Settings:
    """Get the current settings, initializing them on first use.

    Returns:
        Current settings object
    """
    if _settings is None:
        return initialize_settings()

    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next access reloads the environment."""
    global _settings
    _settings = None


def get_registry_settings() -> RegistrySettings:
    """Get registry-specific settings.

    Returns:
        Registry settings
    """
    return get_settings().registry


def get_logging_settings() -> LoggingSettings:
    """Get logging-specific settings.

    Returns:
        Logging settings
    """
    return get_settings().logging


def get_server_settings() -> ServerSettings:
    """Get server-specific settings.

    Returns:
        Server settings
    """
    return get_settings().server
