"""Tests for custom exception hierarchy."""

import pytest

from svg_icon_bundler.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    EncodingError,
    IconProcessingError,
    InputDirectoryNotFoundError,
    InputError,
    InvalidConfigError,
    InvalidDataURIError,
    MalformedIconError,
    NoIconsFoundError,
    OutputError,
    SvgBundlerError,
    chain_exception,
)


class TestSvgBundlerError:
    """Test base exception class."""

    def test_base_exception_with_message_only(self):
        """Test creating exception with just a message."""
        exc = SvgBundlerError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.details == {}

    def test_base_exception_with_details(self):
        """Test creating exception with message and details."""
        exc = SvgBundlerError("Test error", {"file": "smile.svg", "line": 3})
        assert exc.details == {"file": "smile.svg", "line": 3}
        assert str(exc) == "Test error - Details: {'file': 'smile.svg', 'line': 3}"


@pytest.mark.parametrize(
    "exception_class, parent",
    [
        (InvalidConfigError, ConfigurationError),
        (ConfigFileNotFoundError, ConfigurationError),
        (InputDirectoryNotFoundError, InputError),
        (NoIconsFoundError, InputError),
        (MalformedIconError, IconProcessingError),
        (InvalidDataURIError, EncodingError),
        (OutputError, SvgBundlerError),
    ],
)
def test_hierarchy(exception_class: type[SvgBundlerError], parent: type[SvgBundlerError]):
    """Test that every exception sits under its category and the base class."""
    exc = exception_class("error")
    assert isinstance(exc, parent)
    assert isinstance(exc, SvgBundlerError)


def test_fatal_and_per_file_errors_are_separate():
    """Test that per-file errors cannot be caught as fatal input errors."""
    assert not issubclass(MalformedIconError, InputError)
    assert not issubclass(NoIconsFoundError, IconProcessingError)


def test_chain_exception():
    """Test chaining a domain exception to its cause."""
    cause = OSError("disk full")
    exc = chain_exception(OutputError("Failed to write bundle"), cause)

    assert isinstance(exc, OutputError)
    assert exc.__cause__ is cause

    with pytest.raises(OutputError) as exc_info:
        raise exc
    assert exc_info.value.__cause__ is cause
