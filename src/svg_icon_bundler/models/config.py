"""Configuration models for the SVG icon bundler.

Defines Pydantic models for the optimizer pipeline, the bundle, sprite and
directory builders, and logging.
"""

import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from svg_icon_bundler.constants import (
    BUNDLE_FORMATS,
    DEFAULT_BATCH_SIZE,
    DEFAULT_BUNDLE_INPUT_DIR,
    DEFAULT_BUNDLE_OUTPUT_FILE,
    DEFAULT_GLOBAL_NAME,
    DEFAULT_HELPER_NAME,
    DEFAULT_OPTIMIZER_STEPS,
    DEFAULT_PRECISION,
    DEFAULT_SPRITE_INPUT_DIR,
    DEFAULT_SPRITE_OUTPUT_FILE,
    DEFAULT_SYMBOL_PREFIX,
    MAX_PRECISION,
    MIN_PRECISION,
    OPTIMIZER_STEPS,
)

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class OptimizerConfig(BaseModel):
    """SVG text optimizer configuration."""

    precision: int = DEFAULT_PRECISION
    steps: list[str] = Field(default_factory=lambda: list(DEFAULT_OPTIMIZER_STEPS))
    strip_ids: bool = False  # Keep ids unless nothing references them downstream
    preserve_viewbox: bool = True
    multipass: bool = True  # Repeat the pipeline until the output stops changing

    @field_validator("precision")
    @classmethod
    def validate_precision(cls, v: int) -> int:
        """Validate the number of fractional digits kept.

        Args:
            v: The precision value.

        Returns:
            The validated precision.

        Raises:
            ValueError: If the precision is out of range.
        """
        if v < MIN_PRECISION or v > MAX_PRECISION:
            raise ValueError(f"Precision must be between {MIN_PRECISION} and {MAX_PRECISION}")
        return v

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, v: list[str]) -> list[str]:
        """Validate that every requested step exists.

        Args:
            v: The requested step names.

        Returns:
            The validated step names.

        Raises:
            ValueError: If a step name is unknown.
        """
        unknown = [name for name in v if name not in OPTIMIZER_STEPS]
        if unknown:
            raise ValueError(
                f"Unknown optimizer steps: {', '.join(unknown)}. "
                f"Valid steps: {', '.join(OPTIMIZER_STEPS)}"
            )
        return v


class BundleConfig(BaseModel):
    """Data URI bundle configuration."""

    input_dir: str = DEFAULT_BUNDLE_INPUT_DIR
    output_file: str = DEFAULT_BUNDLE_OUTPUT_FILE
    batch_size: int = DEFAULT_BATCH_SIZE
    format: str = "js"  # Options: "js", "json"
    global_name: str = DEFAULT_GLOBAL_NAME
    helper_name: str = DEFAULT_HELPER_NAME

    @field_validator("batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        """Validate the batch size is positive.

        Args:
            v: The batch size.

        Returns:
            The validated batch size.

        Raises:
            ValueError: If the batch size is less than 1.
        """
        if v < 1:
            raise ValueError("Batch size must be at least 1")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the output format is supported.

        Args:
            v: The output format.

        Returns:
            The validated, lower-cased format.

        Raises:
            ValueError: If the format is not one of the supported types.
        """
        v = v.lower()
        if v not in BUNDLE_FORMATS:
            raise ValueError(f"Bundle format must be one of: {', '.join(BUNDLE_FORMATS)}")
        return v

    @field_validator("global_name", "helper_name")
    @classmethod
    def validate_js_identifier(cls, v: str) -> str:
        """Validate generated JavaScript names are plain identifiers.

        Args:
            v: The identifier.

        Returns:
            The validated identifier.

        Raises:
            ValueError: If the value is not a usable JavaScript identifier.
        """
        if not _JS_IDENTIFIER.match(v):
            raise ValueError(f"'{v}' is not a valid JavaScript identifier")
        return v


class SpriteConfig(BaseModel):
    """SVG sprite configuration."""

    input_dir: str = DEFAULT_SPRITE_INPUT_DIR
    output_file: str = DEFAULT_SPRITE_OUTPUT_FILE
    id_prefix: str = DEFAULT_SYMBOL_PREFIX
    optimize: bool = True  # Run the optimizer (ids kept) before building symbols


class TreeConfig(BaseModel):
    """Recursive directory optimization configuration."""

    output_dir: str | None = None  # None means <input_dir>/../optimized-icons
    progress_every: int = 100  # Log progress every N files

    @field_validator("progress_every")
    @classmethod
    def validate_progress_every(cls, v: int) -> int:
        """Validate the progress interval is positive.

        Args:
            v: The progress interval.

        Returns:
            The validated interval.

        Raises:
            ValueError: If the interval is less than 1.
        """
        if v < 1:
            raise ValueError("Progress interval must be at least 1")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "text"
    max_size_mb: int = 5
    backup_count: int = 3


class AppConfig(BaseModel):
    """Main application configuration."""

    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)
    bundle: BundleConfig = Field(default_factory=BundleConfig)
    sprite: SpriteConfig = Field(default_factory=SpriteConfig)
    tree: TreeConfig = Field(default_factory=TreeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized AppConfig object with values from the YAML file. An
            empty file yields the defaults.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from svg_icon_bundler.utils.file_utils import read_text

        path = _normalize_path(config_path)

        yaml_content = read_text(path)
        config_data = yaml.safe_load(yaml_content) or {}

        return cls.model_validate(config_data)
