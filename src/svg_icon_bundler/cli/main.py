"""Command line entry point for the SVG icon bundler.

Provides three commands:

- ``bundle``: optimize a directory of icons and write them as data URIs to a
  JavaScript module or JSON document.
- ``sprite``: combine a directory of icons into a single ``<symbol>`` sprite.
- ``optimize``: optimize a directory tree of icons into a mirrored copy.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from svg_icon_bundler.builders.bundle import BundleAssembler, write_bundle
from svg_icon_bundler.builders.sprite import SpriteAssembler, write_sprite
from svg_icon_bundler.builders.tree import TreeOptimizer
from svg_icon_bundler.constants import (
    BYTES_PER_KILOBYTE,
    BYTES_PER_MEGABYTE,
    CONFIG_FILENAME,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
)
from svg_icon_bundler.core.optimizer import SvgOptimizer
from svg_icon_bundler.exceptions import (
    ConfigurationError,
    InputError,
    InvalidConfigError,
    OutputError,
    chain_exception,
)
from svg_icon_bundler.models.config import AppConfig
from svg_icon_bundler.models.icon import BuildStats
from svg_icon_bundler.utils import path_resolver, validate_config_path
from svg_icon_bundler.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_unexpected_error,
    report_error,
)
from svg_icon_bundler.utils.logging import setup_logging

LOGGER_NAME = "svg_icon_bundler"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one sub-parser per command."""
    parser = argparse.ArgumentParser(
        prog="svg-icon-bundler",
        description="Optimize SVG icons and package them as data URIs or a sprite",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to configuration file (default: ./{CONFIG_FILENAME} if present)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle_parser = subparsers.add_parser("bundle", help="Build a data URI bundle")
    bundle_parser.add_argument("input_dir", nargs="?", help="Directory of SVG icons")
    bundle_parser.add_argument("output_file", nargs="?", help="Bundle file to write")

    sprite_parser = subparsers.add_parser("sprite", help="Build an SVG symbol sprite")
    sprite_parser.add_argument("input_dir", nargs="?", help="Directory of SVG icons")
    sprite_parser.add_argument("output_file", nargs="?", help="Sprite file to write")

    tree_parser = subparsers.add_parser("optimize", help="Optimize a directory tree of icons")
    tree_parser.add_argument("input_dir", help="Root directory of SVG icons")
    tree_parser.add_argument(
        "output_dir", nargs="?", help="Destination directory (default: ../optimized-icons)"
    )

    return parser


def load_config(config_path: str | Path | None) -> AppConfig:
    """Load the application configuration.

    Args:
        config_path: Explicit configuration file, or None to search the
            standard locations.

    Returns:
        The configuration; built-in defaults when no file is found.

    Raises:
        ConfigFileNotFoundError: If an explicit file does not exist.
        InvalidConfigError: If the file cannot be parsed or validated.
    """
    resolved = validate_config_path(config_path)
    if resolved is None:
        return AppConfig()

    try:
        return AppConfig.from_yaml(resolved)
    except (yaml.YAMLError, ValidationError, UnicodeDecodeError) as e:
        raise chain_exception(
            InvalidConfigError(f"Invalid configuration in {resolved}", {"error": str(e)}), e
        )


def _format_size(size_bytes: int) -> str:
    if size_bytes >= BYTES_PER_MEGABYTE:
        return f"{size_bytes / BYTES_PER_MEGABYTE:.2f} MB"
    return f"{size_bytes / BYTES_PER_KILOBYTE:.1f} KB"


def _log_summary(logger: logging.Logger, stats: BuildStats, output: Path) -> None:
    logger.info(f"Output: {path_resolver.display_path(output)}")
    logger.info(f"Processed: {stats.processed}/{stats.total_files}, failed: {stats.errors}")
    logger.info(
        f"Size: {_format_size(stats.original_bytes)} -> {_format_size(stats.optimized_bytes)} "
        f"({stats.reduction_percent:.1f}% reduction)"
    )
    if stats.encoded_bytes:
        logger.info(
            f"Encoded: {_format_size(stats.encoded_bytes)} "
            f"({stats.savings_vs_base64_percent:.1f}% smaller than base64)"
        )
    if stats.collisions:
        logger.warning(f"Duplicate keys replaced: {stats.collisions}")
    logger.info(f"Time: {stats.duration_seconds:.2f}s ({stats.files_per_second:.0f} files/s)")


def run_bundle(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    """Build and write the data URI bundle."""
    input_dir = args.input_dir or config.bundle.input_dir
    output_file = args.output_file or config.bundle.output_file

    assembler = BundleAssembler(config.bundle, SvgOptimizer(config.optimizer))
    bundle = assembler.assemble(input_dir)
    path = write_bundle(bundle, output_file, config.bundle)

    _log_summary(logger, bundle.stats, path)
    return EXIT_SUCCESS


def run_sprite(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    """Build and write the symbol sprite."""
    input_dir = args.input_dir or config.sprite.input_dir
    output_file = args.output_file or config.sprite.output_file

    assembler = SpriteAssembler(config.sprite, config.optimizer)
    sprite = assembler.assemble(input_dir)
    path = write_sprite(sprite, output_file)

    logger.info(f"Symbols: {len(sprite)}")
    _log_summary(logger, sprite.stats, path)
    return EXIT_SUCCESS


def run_optimize(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    """Optimize a directory tree into its mirrored output directory."""
    tree = TreeOptimizer(config.tree, SvgOptimizer(config.optimizer))
    output_dir = tree.resolve_output_dir(args.input_dir, args.output_dir)
    stats = tree.run(args.input_dir, output_dir)

    _log_summary(logger, stats, output_dir)
    return EXIT_SUCCESS


COMMANDS = {
    "bundle": run_bundle,
    "sprite": run_sprite,
    "optimize": run_optimize,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the command line tool.

    Parses arguments, loads configuration, sets up logging and runs the
    selected command. Fatal problems (bad configuration, missing input
    directory, no icons, unwritable output) exit with status 1 and leave any
    existing output untouched. Per-file failures are only counted and logged.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` when omitted.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        report_error("CONFIG_ERROR", e)
        return EXIT_FAILURE

    logger = setup_logging(config.logging, LOGGER_NAME, command=args.command)

    try:
        return COMMANDS[args.command](args, config, logger)
    except InputError as e:
        logger.error(str(e))
        report_error("INPUT_ERROR", e)
        return EXIT_FAILURE
    except OutputError as e:
        logger.error(str(e))
        report_error("OUTPUT_ERROR", e)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception("Unexpected error")
        handle_unexpected_error(e, args.command)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
