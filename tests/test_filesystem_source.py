"""Tests for the filesystem and memory sources."""

import tempfile
from pathlib import Path

import pytest

from static_assets.platforms.filesystem import FilesystemSource, validate_path_safety, validate_url
from static_assets.platforms.memory import MemorySource
from static_assets.registry import SourceRegistry


class TestValidatePathSafety:
    """Test path traversal prevention."""

    def test_allows_paths_within_base(self) -> None:
        """Test that paths within base directory are allowed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            safe_path = base / "brands" / "logo.svg"
            # Should not raise
            validate_path_safety(safe_path, base)

    def test_rejects_path_traversal(self) -> None:
        """Test that path traversal attempts are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            dangerous_path = base / ".." / ".." / "etc" / "passwd"

            with pytest.raises(ValueError, match="escapes base directory"):
                validate_path_safety(dangerous_path, base)

    def test_allows_symlinks_within_base(self) -> None:
        """Test that symlinks within base directory are allowed."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir)
            target = base / "target.png"
            link = base / "link.png"

            target.touch()
            link.symlink_to(target)

            validate_path_safety(link, base)


class TestValidateUrl:
    """Test base URL validation."""

    def test_allows_http_https(self) -> None:
        """Test that absolute http and https URLs are allowed."""
        validate_url("http://example.com/")
        validate_url("https://cdn.jsdelivr.net/gh/org/repo@main/site/")

    def test_rejects_dangerous_schemes(self) -> None:
        """Test that other schemes are rejected."""
        with pytest.raises(ValueError, match="Invalid URL"):
            validate_url("javascript:alert('xss')")

        with pytest.raises(ValueError, match="Invalid URL"):
            validate_url("file:///etc/passwd")

    def test_rejects_relative_urls(self) -> None:
        """Test that prefixes without a host are rejected."""
        with pytest.raises(ValueError):
            validate_url("site/")
        with pytest.raises(ValueError):
            validate_url("")


class TestFilesystemSource:
    """Test listing a generated tree."""

    @pytest.fixture
    def output_dir(self, tmp_path: Path) -> Path:
        root = tmp_path / "site" / "v1"
        for brand, asset_type, name in [
            ("zeta", "logos", "logo.svg"),
            ("acme", "logos", "logo-32.png"),
            ("acme", "logos", "logo.svg"),
            ("acme", "icons", "icon.svg"),
        ]:
            path = root / "brands" / brand / asset_type / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
        (root / "brands" / ".cache").mkdir()
        (root / "brands" / "acme" / "logos" / ".DS_Store").write_bytes(b"")
        return root

    def test_lists_sorted_brands_and_types(self, output_dir: Path) -> None:
        """Test that listings are sorted and hidden entries skipped."""
        source = FilesystemSource(output_dir)

        assert source.list_brands() == ["acme", "zeta"]
        assert source.list_asset_types("acme") == ["icons", "logos"]
        assert source.list_files("acme", "logos") == ["logo-32.png", "logo.svg"]

    def test_missing_entries(self, output_dir: Path) -> None:
        """Test that unknown brands and types list nothing."""
        source = FilesystemSource(output_dir)

        assert source.list_asset_types("globex") == []
        assert source.list_files("acme", "images") == []

    def test_skips_symlinks_escaping_tree(self, output_dir: Path, tmp_path: Path) -> None:
        """Test that files linking outside the output tree are not listed."""
        outside = tmp_path / "secret.png"
        outside.write_bytes(b"")
        (output_dir / "brands" / "acme" / "logos" / "leak.png").symlink_to(outside)

        source = FilesystemSource(output_dir)

        assert "leak.png" not in source.list_files("acme", "logos")
        ((path, reason),) = source.skipped_entries("acme", "logos")
        assert path.endswith("leak.png")
        assert "escapes base directory" in reason
        assert source.skipped_entries("acme", "icons") == []

    def test_metadata(self, output_dir: Path, tmp_path: Path) -> None:
        """Test reading meta.json from the metadata directory."""
        meta_dir = tmp_path / "_source" / "brands"
        (meta_dir / "acme").mkdir(parents=True)
        (meta_dir / "acme" / "meta.json").write_text("{}", encoding="utf-8")

        source = FilesystemSource(output_dir, meta_dir)

        assert source.read_metadata("acme") == "{}"
        assert source.read_metadata("zeta") is None
        assert source.describe_metadata("acme").endswith("meta.json")
        assert FilesystemSource(output_dir).read_metadata("acme") is None

    def test_rejects_file_as_root(self, tmp_path: Path) -> None:
        """Test that the output root must be a directory."""
        path = tmp_path / "file.txt"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ValueError, match="not a directory"):
            FilesystemSource(path)


class TestRegistry:
    """Test source registration."""

    def test_platforms_registered(self) -> None:
        """Test that built-in platforms are discoverable."""
        SourceRegistry.discover_platforms()
        assert {"filesystem", "memory"} <= set(SourceRegistry.list_sources())

    def test_unknown_source(self) -> None:
        """Test that unknown source names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown source"):
            SourceRegistry.create_source("s3")

    def test_create_memory_source(self) -> None:
        """Test creating a memory source through the registry."""
        source = SourceRegistry.create_source("memory", tree={"acme": {"logos": ["logo.svg"]}})

        assert isinstance(source, MemorySource)
        assert source.list_files("acme", "logos") == ["logo.svg"]
        assert source.read_metadata("acme") is None
