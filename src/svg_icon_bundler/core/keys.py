"""Key derivation for icon files.

Maps file names to bundle keys and sprite symbol ids, and normalizes the
path-like strings callers use to look icons up.
"""

import re
from pathlib import Path

from svg_icon_bundler.constants import DEFAULT_SYMBOL_PREFIX, LOOKUP_STRIP_EXTENSIONS

_DIRECTORY_PREFIX = re.compile(r"^.*[\\/]")
_SVG_SUFFIX = re.compile(r"\.svg$", re.IGNORECASE)
_ANY_SUFFIX = re.compile(r"\.[^/.]+$")
_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def _basename(name: str | Path) -> str:
    """Strip any ``/`` or ``\\`` separated directory prefix."""
    return _DIRECTORY_PREFIX.sub("", str(name))


def derive_key(filename: str | Path) -> str:
    """Return the bundle key for an icon file.

    Args:
        filename: File name or path, e.g. ``sprite/smile.svg``.

    Returns:
        The base name without directory and ``.svg`` extension, e.g. ``smile``.
    """
    return _SVG_SUFFIX.sub("", _basename(filename))


def normalize_lookup_key(path_or_key: str) -> str:
    """Turn a bare key or a path-like reference into a bundle key.

    Args:
        path_or_key: ``smile``, ``smile.svg`` or ``sprite/smile.png`` style input.

    Returns:
        The key with directory prefix and ``.svg``/``.png`` extension removed.
    """
    key = _basename(path_or_key)
    for extension in LOOKUP_STRIP_EXTENSIONS:
        if key.lower().endswith(extension):
            return key[: -len(extension)]
    return key


def symbol_id(filename: str | Path, prefix: str = DEFAULT_SYMBOL_PREFIX) -> str:
    """Return the sprite ``<symbol>`` id for an icon file.

    Args:
        filename: File name or path.
        prefix: Prefix prepended to every id.

    Returns:
        ``prefix`` followed by the name without extension, with every character
        outside ``[a-zA-Z0-9_-]`` replaced by ``_``.
    """
    stem = _ANY_SUFFIX.sub("", _basename(filename))
    return prefix + _UNSAFE_ID_CHARS.sub("_", stem)
