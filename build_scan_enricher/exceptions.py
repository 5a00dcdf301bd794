"""Custom exceptions for build-scan-enricher."""


class EnricherError(Exception):
    """Base exception for all enrichment operations."""


class ConfigurationError(EnricherError):
    """Raised when configuration validation fails."""


class CommandExecutionError(EnricherError):
    """Raised when external command execution fails."""


class PropertiesFileError(EnricherError):
    """Raised when a properties file cannot be read or parsed."""
