"""Recursive directory optimization.

Optimizes every SVG below an input directory and writes the results to an
output directory that mirrors the input's relative layout.
"""

import logging
import time
from pathlib import Path

from svg_icon_bundler.builders.sources import discover_icons, load_icon
from svg_icon_bundler.constants import DEFAULT_TREE_OUTPUT_DIR_NAME, PERCENT_MAX
from svg_icon_bundler.core.optimizer import SvgOptimizer
from svg_icon_bundler.exceptions import IconProcessingError, NoIconsFoundError
from svg_icon_bundler.models.config import TreeConfig
from svg_icon_bundler.models.icon import BuildStats
from svg_icon_bundler.utils import file_utils, path_resolver

logger = logging.getLogger(__name__)


class TreeOptimizer:
    """Optimizes a directory tree of SVG files into a mirrored copy."""

    def __init__(self, config: TreeConfig, optimizer: SvgOptimizer | None = None) -> None:
        self.config = config
        self.optimizer = optimizer or SvgOptimizer()

    def resolve_output_dir(
        self, input_dir: str | Path, output_dir: str | Path | None = None
    ) -> Path:
        """Pick the output directory.

        An explicit *output_dir* wins, then the configured one, then a
        ``optimized-icons`` directory next to *input_dir*.
        """
        chosen = output_dir or self.config.output_dir
        if chosen:
            return path_resolver.normalize_path(chosen)

        source_root = path_resolver.normalize_path(input_dir).resolve()
        return source_root.parent / DEFAULT_TREE_OUTPUT_DIR_NAME

    def run(self, input_dir: str | Path, output_dir: str | Path | None = None) -> BuildStats:
        """Optimize every SVG below *input_dir*.

        Files already inside the output directory are skipped so that an
        output nested in the input is never re-processed. A file that fails is
        logged and counted; the rest of the tree is still processed.

        Args:
            input_dir: Root of the tree to optimize.
            output_dir: Destination root, see :meth:`resolve_output_dir`.

        Returns:
            Statistics of the run.

        Raises:
            InputDirectoryNotFoundError: If the directory does not exist.
            NoIconsFoundError: If the tree holds no SVG files outside the
                output directory.
        """
        source_root = path_resolver.normalize_path(input_dir).resolve()
        target_root = self.resolve_output_dir(input_dir, output_dir).resolve()

        files = [
            path
            for path in discover_icons(source_root, recursive=True)
            if not path.resolve().is_relative_to(target_root)
        ]
        if not files:
            raise NoIconsFoundError(
                f"No SVG files found outside {target_root} in {source_root}",
                {"path": str(source_root), "output_dir": str(target_root)},
            )
        total = len(files)
        logger.info(f"Found {total} SVG files in {path_resolver.display_path(source_root)}")

        stats = BuildStats(total_files=total)
        started = time.perf_counter()

        for index, path in enumerate(files, start=1):
            relative = path.relative_to(source_root)
            try:
                icon = load_icon(path)
                optimized = self.optimizer.optimize(icon.content)
                file_utils.write_text(target_root / relative, optimized)
            except (OSError, UnicodeDecodeError, IconProcessingError) as e:
                stats.errors += 1
                logger.error(f"Failed to process {relative.as_posix()}: {e}")
            else:
                stats.processed += 1
                stats.original_bytes += icon.size_bytes
                stats.optimized_bytes += len(optimized.encode("utf-8"))

            if index % self.config.progress_every == 0 or index == total:
                logger.info(f"Processing: {index}/{total} ({index / total * PERCENT_MAX:.1f}%)")

        stats.duration_seconds = time.perf_counter() - started

        if stats.errors:
            logger.warning(f"{stats.errors} file(s) failed to process")

        return stats
