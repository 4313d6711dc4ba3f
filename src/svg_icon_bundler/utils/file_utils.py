"""File system helpers shared by the builders.

Icon sources are read as UTF-8 text and discovered in a stable sorted order.
Bundles and sprites are replaced atomically so that a failed or interrupted
run leaves the previous output in place; the directory optimizer writes each
mirrored file directly.
"""

import os
import tempfile
from pathlib import Path

from svg_icon_bundler.constants import SVG_EXTENSION
from svg_icon_bundler.utils.path_utils import path_resolver

PathLike = str | Path


def read_text(file_path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the content is not valid UTF-8
    """
    return path_resolver.normalize_path(file_path).read_text(encoding="utf-8")


def write_text(file_path: PathLike, content: str, make_dirs: bool = True) -> None:
    """Write UTF-8 text, creating parent directories unless *make_dirs* is False."""
    path = path_resolver.normalize_path(file_path)
    if make_dirs:
        path_resolver.ensure_dir_exists(path.parent)
    path.write_text(content, encoding="utf-8")


def dir_exists(dir_path: PathLike) -> bool:
    """Return True if *dir_path* is an existing directory."""
    return path_resolver.normalize_path(dir_path).is_dir()


def list_svg_files(
    dir_path: PathLike, extension: str = SVG_EXTENSION, recursive: bool = False
) -> list[Path]:
    """List files whose extension matches *extension* case-insensitively.

    Results are sorted lexicographically: by file name for a flat listing and
    by relative path for a recursive one.

    Args:
        dir_path: Directory to search
        extension: Extension to match, including the dot
        recursive: Whether to descend into subdirectories

    Returns:
        Sorted list of matching file paths (directories excluded)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    root = path_resolver.normalize_path(dir_path)

    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    candidates = root.rglob("*") if recursive else root.iterdir()
    suffix = extension.lower()
    matches = [p for p in candidates if p.is_file() and p.name.lower().endswith(suffix)]

    if recursive:
        return sorted(matches, key=lambda p: p.relative_to(root).as_posix())
    return sorted(matches, key=lambda p: p.name)


def atomic_write(file_path: PathLike, content: str) -> None:
    """Replace *file_path* with *content* in one step.

    The text goes to a hidden temporary file next to the target, which is
    then moved over it. On any failure the temporary file is removed and the
    target keeps its previous content.

    Raises:
        OSError: If the directory, the temporary file or the rename fails
    """
    path = path_resolver.normalize_path(file_path)
    path_resolver.ensure_dir_exists(path.parent)

    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
    ) as temp:
        temp_path = Path(temp.name)
        try:
            temp.write(content)
        except BaseException:
            temp.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
