"""Icon source discovery and loading shared by all builders."""

import re
from pathlib import Path

from svg_icon_bundler.constants import SVG_EXTENSION
from svg_icon_bundler.core.keys import derive_key
from svg_icon_bundler.exceptions import (
    InputDirectoryNotFoundError,
    MalformedIconError,
    NoIconsFoundError,
)
from svg_icon_bundler.models.icon import IconSource
from svg_icon_bundler.utils import file_utils, path_resolver

_SVG_ELEMENT = re.compile(r"<svg\b", re.IGNORECASE)


def discover_icons(input_dir: str | Path, recursive: bool = False) -> list[Path]:
    """Find the SVG files to process.

    Files are matched by a case-insensitive ``.svg`` extension and returned
    in lexicographic order.

    Args:
        input_dir: Directory containing the icons.
        recursive: Whether to descend into subdirectories.

    Returns:
        Sorted list of SVG file paths.

    Raises:
        InputDirectoryNotFoundError: If the directory does not exist.
        NoIconsFoundError: If the directory holds no SVG files.
    """
    directory = path_resolver.normalize_path(input_dir)

    if not file_utils.dir_exists(directory):
        raise InputDirectoryNotFoundError(
            f"Directory not found: {directory}", {"path": str(directory)}
        )

    files = file_utils.list_svg_files(directory, SVG_EXTENSION, recursive=recursive)

    if not files:
        raise NoIconsFoundError(
            f"No SVG files found in {directory}",
            {"path": str(directory), "pattern": f"*{SVG_EXTENSION}", "recursive": recursive},
        )

    return files


def load_icon(path: Path) -> IconSource:
    """Read one icon file.

    Args:
        path: Path of the SVG file.

    Returns:
        The icon source keyed by its base name.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
        MalformedIconError: If the content holds no ``<svg>`` element.
    """
    content = file_utils.read_text(path)

    if not _SVG_ELEMENT.search(content):
        raise MalformedIconError("No <svg> element found", {"file": path.name})

    return IconSource(key=derive_key(path.name), path=path, content=content)
