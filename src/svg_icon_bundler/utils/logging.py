"""Logging setup for the SVG icon bundler.

Builders log through plain ``logging.getLogger(__name__)`` loggers. Their
records are rendered by structlog, either as console text or as one JSON
object per line, and carry the run context bound here (such as the command
being run) so that a shared log file can be filtered per run.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from svg_icon_bundler.constants import BYTES_PER_MEGABYTE
from svg_icon_bundler.models.config import LoggingConfig
from svg_icon_bundler.utils.early_error_handler import handle_startup_error
from svg_icon_bundler.utils.path_utils import path_resolver


def _build_formatter(config: LoggingConfig) -> ProcessorFormatter:
    renderer = (
        structlog.processors.JSONRenderer()
        if config.format.lower() == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )


def _file_handler(config: LoggingConfig) -> logging.Handler:
    log_path = path_resolver.normalize_path(config.file or "")
    path_resolver.ensure_dir_exists(log_path.parent)
    return RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
        backupCount=config.backup_count,
        encoding="utf-8",
    )


def setup_logging(config: LoggingConfig, name: str, **context: Any) -> logging.Logger:
    """Install one handler on the *name* logger and bind the run context.

    Module loggers below *name* propagate to that handler. Console output
    goes to stdout; a configured file is rotated by size. If the file cannot
    be opened the failure is reported on stderr and the console is used.

    Args:
        config: Logging configuration.
        name: Logger name, normally the package name.
        **context: Key/value pairs added to every record of this run,
            e.g. ``command="bundle"``.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.handlers = []

    level = getattr(logging, config.level.upper(), logging.INFO)
    logger.setLevel(level)

    structlog.contextvars.clear_contextvars()
    if context:
        structlog.contextvars.bind_contextvars(**context)

    file_error = None
    handler: logging.Handler
    if config.file:
        try:
            handler = _file_handler(config)
        except OSError as e:
            file_error = f"Failed to set up file logging: {e}"
            handle_startup_error("LOGGING_FILE_ERROR", file_error, {"log_file": config.file})
            handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(_build_formatter(config))
    handler.setLevel(level)
    logger.addHandler(handler)

    if file_error:
        logger.error(file_error)

    return logger
