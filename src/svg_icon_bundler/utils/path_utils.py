"""Path utility module for the SVG icon bundler.

Provides centralized path resolution so that configuration discovery and
output location handling behave the same for every command.
"""

from pathlib import Path

from svg_icon_bundler.constants import APP_DIR_NAME, CONFIG_FILENAME
from svg_icon_bundler.exceptions import ConfigFileNotFoundError


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        user_config_dir: User-specific configuration directory
    """

    def __init__(self) -> None:
        """Initialize the path resolver."""
        self.user_config_dir = Path.home() / f".config/{APP_DIR_NAME}"

    def find_config_path(self, config_filename: str = CONFIG_FILENAME) -> Path | None:
        """Find an optional configuration file.

        Checks the following locations in priority order:
        1. Current working directory
        2. User's configuration directory

        Args:
            config_filename: Name of the configuration file

        Returns:
            Path to the first existing configuration file, or None when there is
            none and the built-in defaults should be used.
        """
        candidate_paths = [
            Path.cwd() / config_filename,
            self.user_config_dir / config_filename,
        ]

        for path in candidate_paths:
            if path.is_file():
                return path

        return None

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path

    def display_path(self, path: str | Path) -> Path:
        """Return *path* relative to the working directory when possible.

        Args:
            path: Path to shorten for log output

        Returns:
            The relative path, or the path unchanged if it lies elsewhere.
        """
        normalized = self.normalize_path(path)
        try:
            return normalized.resolve().relative_to(Path.cwd().resolve())
        except ValueError:
            return normalized


# Create a global instance for easy import
path_resolver = PathResolver()


def validate_config_path(config_path: str | Path | None = None) -> Path | None:
    """Validate and resolve the configuration file path.

    An explicitly provided path must exist. Without one, the standard
    locations are searched and None is returned when no file is found.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Resolved Path to the configuration file, or None to use defaults

    Raises:
        ConfigFileNotFoundError: If an explicitly given file does not exist
    """
    if config_path is None:
        return path_resolver.find_config_path()

    resolved_path = path_resolver.normalize_path(config_path)

    if not resolved_path.is_file():
        error_details = {
            "path": str(resolved_path),
            "cwd": str(Path.cwd()),
        }
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {resolved_path}", error_details
        )

    return resolved_path
