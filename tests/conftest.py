"""Common fixtures for testing the SVG icon bundler."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from svg_icon_bundler.models.config import AppConfig, BundleConfig, OptimizerConfig

SMILE_SVG = '<svg viewBox="0 0 16 16"><!-- c --><path d="M1.2345 2.3456"/></svg>'

WAVE_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <title>Wave</title>
  <circle cx="12" cy="12" r="10" fill="rgb(255,255,255)"/>
</svg>
"""


@pytest.fixture(autouse=True)
def reset_app_logger() -> Generator[None, None, None]:
    """Remove handlers and context installed by setup_logging after each test."""
    yield
    app_logger = logging.getLogger("svg_icon_bundler")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
    structlog.contextvars.clear_contextvars()


@pytest.fixture()
def icon_dir(tmp_path: Path) -> Path:
    """Create a directory holding two small icons."""
    directory = tmp_path / "sprite"
    directory.mkdir()
    (directory / "smile.svg").write_text(SMILE_SVG, encoding="utf-8")
    (directory / "wave.svg").write_text(WAVE_SVG, encoding="utf-8")
    return directory


@pytest.fixture()
def optimizer_config() -> OptimizerConfig:
    """Create the default optimizer configuration."""
    return OptimizerConfig()


@pytest.fixture()
def bundle_config() -> BundleConfig:
    """Create the default bundle configuration."""
    return BundleConfig()


@pytest.fixture()
def app_config() -> AppConfig:
    """Create the default application configuration."""
    return AppConfig()
