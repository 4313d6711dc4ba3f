"""Tests for data URI bundle assembly and serialization."""

import json
import logging
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from svg_icon_bundler.builders.bundle import BundleAssembler, render_bundle, write_bundle
from svg_icon_bundler.core.encoder import decode
from svg_icon_bundler.exceptions import NoIconsFoundError, OutputError
from svg_icon_bundler.models.config import BundleConfig
from svg_icon_bundler.models.icon import Bundle, BuildStats

PREFIX = "data:image/svg+xml;charset=utf-8,"


@pytest.fixture()
def small_bundle() -> Bundle:
    """Create a bundle with fixed statistics."""
    stats = BuildStats(
        total_files=2,
        processed=2,
        original_bytes=2048,
        optimized_bytes=1024,
        encoded_bytes=1536,
        timestamp=datetime(2024, 1, 1, 12, 0, 0),
    )
    entries = {"smile": PREFIX + "%3Csvg/%3E", "wave": PREFIX + "%3Cg/%3E"}
    return Bundle(entries, stats)


class TestBundleAssembler:
    """Test the BundleAssembler class."""

    def test_end_to_end(self, icon_dir: Path, bundle_config: BundleConfig):
        """Test bundling a directory with two icons."""
        bundle = BundleAssembler(bundle_config).assemble(icon_dir)

        assert list(bundle) == ["smile", "wave"]
        smile = bundle.entries["smile"]
        assert smile.startswith(PREFIX)
        assert "%23" not in smile

        markup = decode(smile)
        assert "<!--" not in markup
        assert markup == '<svg viewBox="0 0 16 16"><path d="M1.23 2.35"/></svg>'
        assert decode(bundle.entries["wave"]) == (
            '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
            '<circle cx="12" cy="12" r="10" fill="#fff"/></svg>'
        )

    def test_stats(self, icon_dir: Path, bundle_config: BundleConfig):
        """Test that the run statistics are collected."""
        stats = BundleAssembler(bundle_config).assemble(icon_dir).stats

        assert stats.total_files == 2
        assert stats.processed == 2
        assert stats.errors == 0
        assert stats.collisions == 0
        assert 0 < stats.optimized_bytes < stats.original_bytes
        assert stats.encoded_bytes > stats.optimized_bytes
        assert stats.duration_seconds >= 0

    def test_unreadable_file_is_skipped(self, tmp_path: Path, bundle_config: BundleConfig):
        """Test that one undecodable file out of ten is counted and skipped."""
        for i in range(9):
            (tmp_path / f"icon{i}.svg").write_text(f'<svg><path d="M{i} 0"/></svg>')
        (tmp_path / "broken.svg").write_bytes(b"<svg>\xff\xfe</svg>")

        bundle = BundleAssembler(bundle_config).assemble(tmp_path)

        assert len(bundle) == 9
        assert "broken" not in bundle
        assert bundle.stats.errors == 1
        assert bundle.stats.processed == 9

    def test_non_svg_content_is_skipped(self, icon_dir: Path, bundle_config: BundleConfig):
        """Test that a file without <svg> markup is counted as an error."""
        (icon_dir / "notes.svg").write_text("just text", encoding="utf-8")

        bundle = BundleAssembler(bundle_config).assemble(icon_dir)

        assert list(bundle) == ["smile", "wave"]
        assert bundle.stats.errors == 1

    def test_duplicate_keys_last_wins(
        self, tmp_path: Path, bundle_config: BundleConfig, caplog: pytest.LogCaptureFixture
    ):
        """Test that colliding keys keep the later file and warn."""
        (tmp_path / "smile.SVG").write_text('<svg><path d="M1 1"/></svg>')
        (tmp_path / "smile.svg").write_text('<svg><path d="M2 2"/></svg>')

        with caplog.at_level(logging.WARNING):
            bundle = BundleAssembler(bundle_config).assemble(tmp_path)

        assert len(bundle) == 1
        assert decode(bundle.entries["smile"]) == '<svg><path d="M2 2"/></svg>'
        assert bundle.stats.collisions == 1
        assert "Duplicate key 'smile'" in caplog.text

    def test_progress_per_batch(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        """Test that one progress line is logged per batch."""
        for i in range(5):
            (tmp_path / f"icon{i}.svg").write_text("<svg/>")

        with caplog.at_level(logging.INFO, logger="svg_icon_bundler"):
            BundleAssembler(BundleConfig(batch_size=2)).assemble(tmp_path)

        progress = [r.getMessage() for r in caplog.records if "Processing:" in r.getMessage()]
        assert progress == [
            "Processing: 2/5 (40.0%)",
            "Processing: 4/5 (80.0%)",
            "Processing: 5/5 (100.0%)",
        ]

    def test_empty_directory(self, tmp_path: Path, bundle_config: BundleConfig):
        """Test that no icons is a fatal error."""
        with pytest.raises(NoIconsFoundError):
            BundleAssembler(bundle_config).assemble(tmp_path)


class TestBundleLookup:
    """Test lookups on an assembled bundle."""

    def test_lookup_forms(self, icon_dir: Path, bundle_config: BundleConfig):
        """Test that keys and path-like references resolve to the same URI."""
        bundle = BundleAssembler(bundle_config).assemble(icon_dir)
        uri = bundle.entries["smile"]

        assert bundle.lookup("smile") == uri
        assert bundle.lookup("smile.svg") == uri
        assert bundle.lookup("sprite/smile.svg") == uri
        assert bundle.lookup("sprite/smile.png") == uri
        assert bundle.lookup("missing") is None

    def test_entries_read_only(self, small_bundle: Bundle):
        """Test that the mapping cannot be modified."""
        with pytest.raises(TypeError):
            small_bundle.entries["other"] = PREFIX  # type: ignore[index]


class TestRenderBundle:
    """Test bundle serialization."""

    def test_javascript(self, small_bundle: Bundle, bundle_config: BundleConfig):
        """Test the generated JavaScript module."""
        output = render_bundle(small_bundle, bundle_config)

        assert "Generated: 2024-01-01T12:00:00" in output
        assert "Total Icons: 2" in output
        assert "Original Size: 0.00 MB" in output
        assert "window.EMOJI_DATA = Object.freeze({" in output
        assert f'    "smile": "{PREFIX}%3Csvg/%3E",\n' in output
        assert f'    "wave": "{PREFIX}%3Cg/%3E"\n' in output
        assert "window.getEmojiDataUrl = function(pathOrKey) {" in output
        assert "return null;" in output
        assert output.endswith("})();\n")

    def test_javascript_custom_names(self, small_bundle: Bundle):
        """Test configured global and helper names."""
        config = BundleConfig(global_name="ICONS", helper_name="iconUrl")
        output = render_bundle(small_bundle, config)

        assert "window.ICONS = Object.freeze({" in output
        assert "window.iconUrl = function(pathOrKey) {" in output
        assert "EMOJI_DATA" not in output

    def test_json(self, small_bundle: Bundle):
        """Test the JSON document."""
        output = render_bundle(small_bundle, BundleConfig(format="json"))
        document = json.loads(output)

        assert document["icons"] == dict(small_bundle.entries)
        assert document["meta"]["processed"] == 2
        assert document["meta"]["timestamp"] == "2024-01-01T12:00:00"
        assert output.endswith("\n")


class TestWriteBundle:
    """Test writing the bundle to disk."""

    def test_write(self, tmp_path: Path, small_bundle: Bundle, bundle_config: BundleConfig):
        """Test that the rendered bundle is written, creating directories."""
        target = tmp_path / "dist" / "emojiData.js"

        path = write_bundle(small_bundle, target, bundle_config)

        assert path == target
        assert target.read_text(encoding="utf-8") == render_bundle(small_bundle, bundle_config)

    def test_write_failure(self, tmp_path: Path, small_bundle: Bundle, bundle_config: BundleConfig):
        """Test that write failures become OutputError and keep the old file."""
        target = tmp_path / "emojiData.js"
        target.write_text("previous", encoding="utf-8")

        with (
            patch("svg_icon_bundler.utils.file_utils.os.replace", side_effect=OSError("disk full")),
            pytest.raises(OutputError) as exc_info,
        ):
            write_bundle(small_bundle, target, bundle_config)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert target.read_text(encoding="utf-8") == "previous"
        assert list(tmp_path.iterdir()) == [target]
