"""Custom exception hierarchy for the SVG icon bundler.

This module defines domain-specific exceptions so that fatal, run-aborting
conditions can be told apart from recoverable per-file problems.

Exception Hierarchy:
    SvgBundlerError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    ├── InputError
    │   ├── InputDirectoryNotFoundError
    │   └── NoIconsFoundError
    ├── IconProcessingError
    │   └── MalformedIconError
    ├── EncodingError
    │   └── InvalidDataURIError
    └── OutputError
"""

from typing import Any


# Base Exception
class SvgBundlerError(Exception):
    """Base exception for all SVG icon bundler errors.

    This is the root exception that all custom exceptions inherit from,
    allowing for broad exception handling at the CLI boundary.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SvgBundlerError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid configuration file",
            {"path": "svg-icon-bundler.yaml", "errors": ["optimizer.precision"]}
        )
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when an explicitly requested configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/etc/icons.yaml", "cwd": "/home/user/project"}
        )
    """
    pass


# Input Exceptions
class InputError(SvgBundlerError):
    """Base exception for fatal problems with the input directory."""
    pass


class InputDirectoryNotFoundError(InputError):
    """Raised when the input directory does not exist.

    Example:
        raise InputDirectoryNotFoundError(
            "Directory not found: ./sprite",
            {"path": "./sprite"}
        )
    """
    pass


class NoIconsFoundError(InputError):
    """Raised when the input directory contains no matching SVG files.

    Example:
        raise NoIconsFoundError(
            "No SVG files found in ./sprite",
            {"path": "./sprite", "pattern": "*.svg"}
        )
    """
    pass


# Per-file Exceptions
class IconProcessingError(SvgBundlerError):
    """Base exception for recoverable errors affecting a single icon file."""
    pass


class MalformedIconError(IconProcessingError):
    """Raised when an icon file does not contain usable SVG markup.

    Example:
        raise MalformedIconError(
            "No <svg> element found",
            {"file": "smile.svg"}
        )
    """
    pass


# Encoding Exceptions
class EncodingError(SvgBundlerError):
    """Base exception for data URI encoding errors."""
    pass


class InvalidDataURIError(EncodingError):
    """Raised when a string is not an SVG data URI produced by the encoder.

    Example:
        raise InvalidDataURIError(
            "Missing data URI prefix",
            {"expected_prefix": "data:image/svg+xml;charset=utf-8,"}
        )
    """
    pass


# Output Exceptions
class OutputError(SvgBundlerError):
    """Raised when a generated file cannot be written.

    Example:
        raise OutputError(
            "Failed to write bundle",
            {"path": "./emojiData.js", "error": "Permission denied"}
        )
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SvgBundlerError, cause: Exception) -> SvgBundlerError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            file_utils.atomic_write(path, content)
        except OSError as e:
            raise chain_exception(
                OutputError("Failed to write bundle", {"path": str(path)}),
                e
            )
    """
    new_exception.__cause__ = cause
    return new_exception
