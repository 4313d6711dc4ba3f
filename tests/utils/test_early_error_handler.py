"""Tests for early error handler module."""

from io import StringIO
from unittest.mock import patch

from freezegun import freeze_time

from svg_icon_bundler.exceptions import (
    InputDirectoryNotFoundError,
    OutputError,
    chain_exception,
)
from svg_icon_bundler.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
    handle_unexpected_error,
    report_error,
)


class TestEarlyErrorHandler:
    """Test early error handler functions."""

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_basic(self, mock_stderr: StringIO) -> None:
        """Test basic startup error handling."""
        handle_startup_error("INPUT_ERROR", "Directory not found: ./sprite")

        output = mock_stderr.getvalue()
        assert "INPUT_ERROR: Directory not found: ./sprite" in output
        assert "Details:" not in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_with_details(self, mock_stderr: StringIO) -> None:
        """Test startup error handling with details."""
        handle_startup_error("CONFIG_ERROR", "Invalid configuration", {"path": "a.yaml", "line": 3})

        output = mock_stderr.getvalue()
        assert "Details:\n  path: a.yaml\n  line: 3\n" in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_timestamp(self, mock_stderr: StringIO) -> None:
        """Test that the report is timestamped."""
        with freeze_time("2024-01-01 12:00:00"):
            handle_startup_error("CONFIG_ERROR", "Invalid configuration")

        assert "[2024-01-01T12:00:00] CONFIG_ERROR" in mock_stderr.getvalue()

    @patch("sys.stderr", new_callable=StringIO)
    def test_report_error_details(self, mock_stderr: StringIO) -> None:
        """Test that a bundler error is reported with its details."""
        report_error("INPUT_ERROR", InputDirectoryNotFoundError("No such dir", {"path": "./x"}))

        output = mock_stderr.getvalue()
        assert "INPUT_ERROR: No such dir" in output
        assert "  path: ./x" in output
        assert "cause:" not in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_report_error_cause(self, mock_stderr: StringIO) -> None:
        """Test that a chained cause is included in the report."""
        error = chain_exception(OutputError("Failed to write sprite"), OSError("disk full"))

        report_error("OUTPUT_ERROR", error)

        assert "  cause: OSError: disk full" in mock_stderr.getvalue()

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_keyboard_interrupt(self, mock_stderr: StringIO) -> None:
        """Test keyboard interrupt reporting."""
        handle_keyboard_interrupt()
        assert "svg-icon-bundler: Interrupted by user (Ctrl+C)" in mock_stderr.getvalue()

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_unexpected_error(self, mock_stderr: StringIO) -> None:
        """Test unexpected error reporting."""
        handle_unexpected_error(RuntimeError("boom"))

        output = mock_stderr.getvalue()
        assert "Unexpected Error: RuntimeError: boom" in output
        assert "This is likely a bug" in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_unexpected_error_command(self, mock_stderr: StringIO) -> None:
        """Test that the running command is named."""
        handle_unexpected_error(ValueError("bad"), "sprite")
        assert "Unexpected Error during 'sprite': ValueError: bad" in mock_stderr.getvalue()
