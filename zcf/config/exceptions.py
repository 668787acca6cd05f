from __future__ import annotations


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when a configuration document is not valid TOML."""


class ConfigEditError(ConfigError):
    """Raised when an incremental edit cannot be applied to a document."""


class ConfigValidationError(ConfigError):
    """Raised when configuration data does not match the expected shape."""


class ConfigMigrationError(ConfigError):
    """Raised when legacy configuration cannot be moved into place."""


class ConfigIOError(ConfigError):
    """Raised when configuration read/write fails."""


__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ConfigEditError",
    "ConfigValidationError",
    "ConfigMigrationError",
    "ConfigIOError",
]
