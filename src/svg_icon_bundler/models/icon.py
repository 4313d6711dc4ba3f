"""Icon and build result models.

Defines the Pydantic models for icon sources and run statistics, and the
read-only bundle value produced by the bundle assembler.
"""

from collections.abc import Iterator, Mapping
from datetime import datetime
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from svg_icon_bundler.constants import BASE64_OVERHEAD_FACTOR, PERCENT_MAX
from svg_icon_bundler.core.keys import normalize_lookup_key


class IconSource(BaseModel):
    """A single SVG file and its raw text."""

    model_config = ConfigDict(frozen=True)

    key: str
    path: Path
    content: str

    @property
    def size_bytes(self) -> int:
        """Size of the raw content in UTF-8 bytes."""
        return len(self.content.encode("utf-8"))


class BuildStats(BaseModel):
    """Aggregate statistics for one bundle, sprite or directory run.

    These counters are reporting-only and never influence processing.
    """

    total_files: int = 0
    processed: int = 0
    errors: int = 0
    collisions: int = 0
    original_bytes: int = 0
    optimized_bytes: int = 0
    encoded_bytes: int = 0  # Data URI bytes, bundle mode only
    duration_seconds: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.now)  # When the run started

    @property
    def reduction_percent(self) -> float:
        """Size reduction of optimized markup relative to the originals."""
        if self.original_bytes == 0:
            return 0.0
        return (1 - self.optimized_bytes / self.original_bytes) * PERCENT_MAX

    @property
    def savings_vs_base64_percent(self) -> float:
        """How much smaller the data URIs are than base64 encoding would be."""
        if self.original_bytes == 0:
            return 0.0
        base64_bytes = self.original_bytes * BASE64_OVERHEAD_FACTOR
        return (1 - self.encoded_bytes / base64_bytes) * PERCENT_MAX

    @property
    def files_per_second(self) -> float:
        """Throughput of the run."""
        if self.duration_seconds <= 0:
            return 0.0
        return self.processed / self.duration_seconds


class Bundle:
    """Read-only, ordered mapping of icon key to data URI plus run statistics.

    Built once per run by the bundle assembler and handed to the serializer;
    there is no ambient global state.
    """

    def __init__(self, entries: Mapping[str, str], stats: BuildStats) -> None:
        """Initialize the bundle.

        Args:
            entries: Key to data URI mapping, in output order.
            stats: Statistics of the run that produced the entries.
        """
        self._entries = MappingProxyType(dict(entries))
        self.stats = stats

    @property
    def entries(self) -> Mapping[str, str]:
        """The key to data URI mapping (read-only view)."""
        return self._entries

    def lookup(self, path_or_key: str) -> str | None:
        """Return the data URI for a key or a path-like reference.

        Args:
            path_or_key: ``smile`` or ``sprite/smile.svg`` style reference.

        Returns:
            The data URI, or None when the icon is not in the bundle.
        """
        return self._entries.get(normalize_lookup_key(path_or_key))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
