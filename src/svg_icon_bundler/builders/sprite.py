"""Combine individual SVG icons into a single ``<symbol>`` sprite.

Every icon is (optionally) optimized, parsed with ElementTree, stripped of
XML namespaces, and its children are wrapped in a ``<symbol>`` whose id is
derived from the file name. The symbols are concatenated inside a hidden
``<svg>`` document::

    <svg xmlns="http://www.w3.org/2000/svg" style="display:none;">
      <symbol id="e_smile" viewBox="0 0 16 16">...</symbol>
    </svg>

so icons can be referenced as ``<use href="emoji-sprite.svg#e_smile"/>``.
"""

import logging
import time
import xml.etree.ElementTree as ET
from pathlib import Path

from svg_icon_bundler.builders.sources import discover_icons, load_icon
from svg_icon_bundler.constants import SPRITE_HIDDEN_STYLE, SVG_NAMESPACE
from svg_icon_bundler.core.keys import symbol_id
from svg_icon_bundler.core.optimizer import SvgOptimizer
from svg_icon_bundler.core.steps import remove_xml_declaration
from svg_icon_bundler.exceptions import (
    IconProcessingError,
    MalformedIconError,
    OutputError,
    chain_exception,
)
from svg_icon_bundler.models.config import OptimizerConfig, SpriteConfig
from svg_icon_bundler.models.icon import BuildStats, IconSource
from svg_icon_bundler.utils import file_utils, path_resolver

logger = logging.getLogger(__name__)


def _strip_ns(tag: str) -> str:
    """Remove a namespace prefix like '{http://www.w3.org/2000/svg}'."""
    return tag.split("}", 1)[1] if "}" in tag else tag


class Sprite:
    """Ordered collection of ``<symbol>`` elements plus run statistics."""

    def __init__(self, symbols: dict[str, ET.Element], stats: BuildStats) -> None:
        self.symbols = symbols
        self.stats = stats

    def __len__(self) -> int:
        return len(self.symbols)

    def to_svg(self) -> str:
        """Serialize the sprite document, one symbol per line."""
        lines = [
            '<?xml version="1.0" encoding="utf-8"?>',
            f'<svg xmlns="{SVG_NAMESPACE}" style="{SPRITE_HIDDEN_STYLE}">',
        ]
        lines.extend(ET.tostring(symbol, encoding="unicode") for symbol in self.symbols.values())
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


class SpriteAssembler:
    """Builds a :class:`Sprite` from a directory of SVG icons."""

    def __init__(
        self, config: SpriteConfig, optimizer_config: OptimizerConfig | None = None
    ) -> None:
        """Initialize the assembler.

        Args:
            config: Sprite configuration.
            optimizer_config: Optimizer settings; ids and the root viewBox are
                always kept so that references and scaling keep working.
        """
        self.config = config
        base = optimizer_config or OptimizerConfig()
        self.optimizer = SvgOptimizer(
            base.model_copy(update={"strip_ids": False, "preserve_viewbox": True})
        )

    def build_symbol(self, icon: IconSource) -> ET.Element:
        """Convert one icon into a ``<symbol>`` element.

        The outer ``<svg>`` element's ``viewBox`` is kept; all of its children,
        including nested ``<svg>`` elements, are copied unchanged.

        Args:
            icon: The icon to convert.

        Returns:
            The symbol element.

        Raises:
            MalformedIconError: If the markup cannot be parsed or its root is
                not ``<svg>``.
        """
        markup = self.optimizer.optimize(icon.content) if self.config.optimize else icon.content

        try:
            root = ET.fromstring(remove_xml_declaration(markup))
        except ET.ParseError as e:
            raise chain_exception(
                MalformedIconError(f"Invalid SVG markup: {e}", {"file": icon.path.name}), e
            )

        # Remove namespaces from *all* tags & attributes
        for el in root.iter():
            el.tag = _strip_ns(el.tag)
            el.attrib = {_strip_ns(k): v for k, v in el.attrib.items()}

        if root.tag != "svg":
            raise MalformedIconError(
                f"Root element is <{root.tag}>, expected <svg>", {"file": icon.path.name}
            )

        attributes = {"id": symbol_id(icon.path.name, self.config.id_prefix)}
        view_box = root.get("viewBox")
        if view_box:
            attributes["viewBox"] = view_box

        symbol = ET.Element("symbol", attributes)
        symbol.text = root.text
        symbol.extend(list(root))
        return symbol

    def assemble(self, input_dir: str | Path) -> Sprite:
        """Build one symbol per icon in *input_dir*.

        Unreadable or unparsable files are logged, counted and skipped.
        Duplicate symbol ids keep the last file, with a warning.

        Args:
            input_dir: Directory containing the icons.

        Returns:
            The sprite.

        Raises:
            InputDirectoryNotFoundError: If the directory does not exist.
            NoIconsFoundError: If the directory holds no SVG files.
        """
        files = discover_icons(input_dir)
        stats = BuildStats(total_files=len(files))
        symbols: dict[str, ET.Element] = {}
        started = time.perf_counter()

        for path in files:
            try:
                icon = load_icon(path)
                symbol = self.build_symbol(icon)
            except (OSError, UnicodeDecodeError, IconProcessingError) as e:
                stats.errors += 1
                logger.error(f"Failed to process {path.name}: {e}")
                continue

            symbol_key = symbol.get("id", "")
            if symbol_key in symbols:
                stats.collisions += 1
                logger.warning(
                    f"Duplicate symbol id '{symbol_key}' from {path.name} replaces an earlier icon"
                )
            symbols[symbol_key] = symbol

            stats.processed += 1
            stats.original_bytes += icon.size_bytes
            stats.optimized_bytes += len(ET.tostring(symbol, encoding="utf-8"))

        stats.duration_seconds = time.perf_counter() - started

        if stats.errors:
            logger.warning(f"{stats.errors} file(s) failed to process")

        return Sprite(symbols, stats)


def write_sprite(sprite: Sprite, output_file: str | Path) -> Path:
    """Write the sprite document atomically to *output_file*.

    Args:
        sprite: The sprite to write.
        output_file: Destination path.

    Returns:
        The path written.

    Raises:
        OutputError: If the file cannot be written.
    """
    path = path_resolver.normalize_path(output_file)

    try:
        file_utils.atomic_write(path, sprite.to_svg())
    except OSError as e:
        raise chain_exception(
            OutputError(f"Failed to write sprite: {path}", {"path": str(path), "error": str(e)}),
            e,
        )

    return path
