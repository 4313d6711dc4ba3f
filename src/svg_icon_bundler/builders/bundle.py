"""Data URI bundle assembly and serialization.

Reads every icon in a directory, optimizes and encodes it, and writes the
resulting key to data URI mapping as a JavaScript module (rendered with
Jinja2) or as JSON.
"""

import json
import logging
import time
from pathlib import Path

import jinja2

from svg_icon_bundler.builders.sources import discover_icons, load_icon
from svg_icon_bundler.constants import (
    BUNDLE_TEMPLATE_NAME,
    BYTES_PER_MEGABYTE,
    PERCENT_MAX,
)
from svg_icon_bundler.core.encoder import encode
from svg_icon_bundler.core.optimizer import SvgOptimizer
from svg_icon_bundler.exceptions import IconProcessingError, OutputError, chain_exception
from svg_icon_bundler.models.config import BundleConfig
from svg_icon_bundler.models.icon import Bundle, BuildStats
from svg_icon_bundler.utils import file_utils, path_resolver

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class BundleAssembler:
    """Builds a :class:`Bundle` from a directory of SVG icons."""

    def __init__(self, config: BundleConfig, optimizer: SvgOptimizer | None = None) -> None:
        """Initialize the assembler.

        Args:
            config: Bundle configuration.
            optimizer: Optimizer applied to every icon before encoding.
        """
        self.config = config
        self.optimizer = optimizer or SvgOptimizer()

    def assemble(self, input_dir: str | Path) -> Bundle:
        """Optimize and encode every icon in *input_dir*.

        Files are processed sequentially in sorted order, in batches of
        ``batch_size`` with one progress line per batch. A file that cannot be
        read or holds no SVG markup is logged, counted and skipped. When two
        files map to the same key the later one wins.

        Args:
            input_dir: Directory containing the icons.

        Returns:
            The assembled bundle.

        Raises:
            InputDirectoryNotFoundError: If the directory does not exist.
            NoIconsFoundError: If the directory holds no SVG files.
        """
        files = discover_icons(input_dir)
        total = len(files)
        logger.info(f"Found {total} SVG files in {path_resolver.display_path(input_dir)}")

        stats = BuildStats(total_files=total)
        entries: dict[str, str] = {}
        started = time.perf_counter()
        batch_size = self.config.batch_size

        for batch_start in range(0, total, batch_size):
            for path in files[batch_start : batch_start + batch_size]:
                try:
                    icon = load_icon(path)
                except (OSError, UnicodeDecodeError, IconProcessingError) as e:
                    stats.errors += 1
                    logger.error(f"Failed to process {path.name}: {e}")
                    continue

                optimized = self.optimizer.optimize(icon.content)
                data_uri = encode(optimized)

                if icon.key in entries:
                    stats.collisions += 1
                    logger.warning(
                        f"Duplicate key '{icon.key}' from {path.name} replaces an earlier icon"
                    )
                entries[icon.key] = data_uri

                stats.processed += 1
                stats.original_bytes += icon.size_bytes
                stats.optimized_bytes += len(optimized.encode("utf-8"))
                stats.encoded_bytes += len(data_uri.encode("utf-8"))

            done = min(batch_start + batch_size, total)
            logger.info(f"Processing: {done}/{total} ({done / total * PERCENT_MAX:.1f}%)")

        stats.duration_seconds = time.perf_counter() - started

        if stats.errors:
            logger.warning(f"{stats.errors} file(s) failed to process")

        return Bundle(entries, stats)


def _create_environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_bundle(bundle: Bundle, config: BundleConfig) -> str:
    """Serialize a bundle in the configured format.

    Args:
        bundle: The bundle to serialize.
        config: Bundle configuration (format and generated names).

    Returns:
        The JavaScript module or JSON document text.
    """
    stats = bundle.stats

    if config.format == "json":
        document = {
            "meta": stats.model_dump(mode="json"),
            "icons": dict(bundle.entries),
        }
        return json.dumps(document, indent=2) + "\n"

    template = _create_environment().get_template(BUNDLE_TEMPLATE_NAME)
    return template.render(
        entries=list(bundle.entries.items()),
        generated=stats.timestamp.isoformat(timespec="seconds"),
        icon_count=len(bundle),
        original_mb=stats.original_bytes / BYTES_PER_MEGABYTE,
        encoded_mb=stats.encoded_bytes / BYTES_PER_MEGABYTE,
        global_name=config.global_name,
        helper_name=config.helper_name,
    )


def write_bundle(bundle: Bundle, output_file: str | Path, config: BundleConfig) -> Path:
    """Render *bundle* and write it atomically to *output_file*.

    Args:
        bundle: The bundle to write.
        output_file: Destination path.
        config: Bundle configuration.

    Returns:
        The path written.

    Raises:
        OutputError: If the file cannot be written.
    """
    path = path_resolver.normalize_path(output_file)
    content = render_bundle(bundle, config)

    try:
        file_utils.atomic_write(path, content)
    except OSError as e:
        raise chain_exception(
            OutputError(f"Failed to write bundle: {path}", {"path": str(path), "error": str(e)}),
            e,
        )

    return path
