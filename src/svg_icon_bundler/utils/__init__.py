"""Module initialization."""

from svg_icon_bundler.utils import file_utils
from svg_icon_bundler.utils.path_utils import path_resolver, validate_config_path

__all__ = [
    # File system
    "file_utils",
    # Path resolution
    "path_resolver",
    "validate_config_path",
]
