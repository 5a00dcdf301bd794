"""Configuration for the build scan enhancer."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError
from .logging_config import logger
from .process import DEFAULT_TIMEOUT

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def evaluate_boolean(value: str) -> bool:
    """Interpret common truthy strings ("true", "yes", "1"), case-insensitively."""
    return value.strip().lower() in ["true", "yes", "yeah", "1"]


@dataclass
class EnricherConfig:
    """
    Settings for the enhancer.

    Attributes:
        server_url: Build scan server base URL, enables search links
        command_timeout: Seconds to wait for each git command
        git_metadata: Whether to collect git metadata in the background
        log_level: Level of the package logger
    """

    server_url: Optional[str] = None
    command_timeout: Optional[float] = DEFAULT_TIMEOUT
    git_metadata: bool = True
    log_level: str = "INFO"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ConfigurationError(f"Command timeout must be positive, got {self.command_timeout}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.log_level}'. Expected one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if self.server_url is not None:
            self._validate_server_url()

    def _validate_server_url(self) -> None:
        parsed = urlparse(self.server_url)

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("Build scan server URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("Build scan server URL must include a valid hostname")


def load_config(environ: Optional[Mapping[str, str]] = None) -> EnricherConfig:
    """
    Load and validate configuration from environment variables.

    Variables:
    - BUILD_SCAN_SERVER: server base URL
    - ENRICHER_COMMAND_TIMEOUT: seconds per git command, "none" to disable
    - DISABLE_GIT_METADATA: skip git collection when truthy
    - LOG_LEVEL: DEBUG, INFO, WARNING or ERROR

    Args:
        environ: Mapping to read from, ``os.environ`` if None

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    environ = os.environ if environ is None else environ

    timeout_value = environ.get("ENRICHER_COMMAND_TIMEOUT")
    command_timeout: Optional[float] = DEFAULT_TIMEOUT
    if timeout_value:
        if timeout_value.strip().lower() == "none":
            command_timeout = None
        else:
            try:
                command_timeout = float(timeout_value)
            except ValueError:
                raise ConfigurationError(f"Invalid ENRICHER_COMMAND_TIMEOUT: '{timeout_value}'")

    config = EnricherConfig(
        server_url=environ.get("BUILD_SCAN_SERVER") or None,
        command_timeout=command_timeout,
        git_metadata=not evaluate_boolean(environ.get("DISABLE_GIT_METADATA", "false")),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
    config.validate()

    if not config.git_metadata:
        logger.info("Git metadata collection disabled via DISABLE_GIT_METADATA")

    return config
