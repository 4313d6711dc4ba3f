"""Fatal error reports written straight to stderr.

The command line entry point uses these for errors that abort a run, so they
stay visible when logging goes to a file or was never configured.
"""

import sys
from datetime import datetime
from typing import Any

from svg_icon_bundler.exceptions import SvgBundlerError

PROGRAM_NAME = "svg-icon-bundler"


def _emit(lines: list[str]) -> None:
    sys.stderr.write("\n" + "\n".join(lines) + "\n")
    sys.stderr.flush()


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Report an error with a timestamp and optional details.

    Args:
        error_type: Category shown before the message (e.g. "CONFIG_ERROR")
        message: Main error message
        details: Optional extra context, one ``key: value`` line each
    """
    lines = [f"[{datetime.now().isoformat()}] {error_type}: {message}"]
    if details:
        lines.append("Details:")
        lines.extend(f"  {key}: {value}" for key, value in details.items())
    _emit(lines)


def report_error(error_type: str, error: SvgBundlerError) -> None:
    """Report a bundler error, including the cause attached by ``chain_exception``."""
    details = dict(error.details)
    cause = error.__cause__
    if cause is not None:
        details.setdefault("cause", f"{type(cause).__name__}: {cause}")
    handle_startup_error(error_type, error.message, details)


def handle_keyboard_interrupt() -> None:
    """Report a run stopped with Ctrl+C."""
    _emit([f"{PROGRAM_NAME}: Interrupted by user (Ctrl+C)"])


def handle_unexpected_error(error: Exception, command: str | None = None) -> None:
    """Report an exception no handler expected.

    Args:
        error: The unexpected exception
        command: Sub-command that was running, if known
    """
    during = f" during '{command}'" if command else ""
    _emit(
        [
            f"[{datetime.now().isoformat()}] Unexpected Error{during}: "
            f"{type(error).__name__}: {error}",
            f"This is likely a bug in {PROGRAM_NAME}. Please report it with the icon "
            "that triggered it.",
        ]
    )
