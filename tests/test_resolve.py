"""Tests for variant resolution and CDN URLs."""

import pytest

from static_assets.catalog import CatalogIndex, asset_url, best_format, preview_file, resolve_variant


@pytest.fixture
def index(catalog_manifest) -> CatalogIndex:
    return CatalogIndex.from_manifest(catalog_manifest)


@pytest.fixture
def acme_logo(index: CatalogIndex):
    # formats png, svg, webp; sizes 32, 64
    return index.get("acme", "logos", "logo").asset


class TestBestFormat:
    """Test format preference."""

    def test_prefers_modern_formats(self, acme_logo) -> None:
        """Test that webp wins over svg and png when avif is absent."""
        assert best_format(acme_logo) == "webp"

    def test_single_format(self, index: CatalogIndex) -> None:
        """Test an asset with only jpg."""
        assert best_format(index.get("globex", "images", "hero").asset) == "jpg"


class TestResolveVariant:
    """Test picking a file for a requested format and size."""

    def test_exact_match(self, acme_logo) -> None:
        """Test that an exact format and size match is returned."""
        assert resolve_variant(acme_logo, "png", 32)["file"] == "logo-32.png"

    def test_requested_format_only(self, acme_logo) -> None:
        """Test that a webp request returns the 64px webp file."""
        resolved = resolve_variant(acme_logo, format="webp")
        assert resolved["file"] == "logo-64.webp"
        assert resolved["size"] == 64

    def test_missing_size_falls_back_to_smallest(self, acme_logo) -> None:
        """Test that an unavailable size picks the smallest of the format."""
        assert resolve_variant(acme_logo, "png", 100)["file"] == "logo-32.png"

    def test_missing_size_prefers_original(self, acme_logo) -> None:
        """Test that the unsized original wins over sized files."""
        assert resolve_variant(acme_logo, "svg", 64)["file"] == "logo.svg"

    def test_default_format(self, acme_logo) -> None:
        """Test that no format request uses the preferred format."""
        assert resolve_variant(acme_logo)["format"] == "webp"

    def test_missing_format(self, acme_logo) -> None:
        """Test that a format the asset lacks resolves to nothing."""
        assert resolve_variant(acme_logo, "avif") is None

    def test_result_belongs_to_asset(self, index: CatalogIndex) -> None:
        """Test that resolution only ever returns one of the asset's files."""
        for record in index.records:
            for fmt in (None, "svg", "png", "webp", "jpg", "avif"):
                for size in (None, 16, 32, 64, 1200):
                    resolved = resolve_variant(record.asset, fmt, size)
                    if resolved is not None:
                        assert resolved in record.asset["files"]
                        if fmt is not None:
                            assert resolved["format"] == fmt


class TestUrls:
    """Test CDN URLs and preview selection."""

    def test_asset_url(self, catalog_manifest, acme_logo) -> None:
        """Test that URLs join the CDN prefix and the file path."""
        file = resolve_variant(acme_logo, "png", 32)

        assert asset_url(catalog_manifest, file) == (
            catalog_manifest["baseUrls"]["jsdelivr"] + "v1/brands/acme/logos/logo-32.png"
        )
        assert asset_url(catalog_manifest, file, "github").startswith(catalog_manifest["baseUrls"]["github"])

    def test_unknown_cdn(self, catalog_manifest, acme_logo) -> None:
        """Test that an unknown CDN raises KeyError."""
        with pytest.raises(KeyError):
            asset_url(catalog_manifest, acme_logo["files"][0], "unknown")

    def test_preview_file(self, index: CatalogIndex) -> None:
        """Test svg, then png, then any file for previews."""
        assert preview_file(index.get("acme", "logos", "logo").asset)["file"] == "logo.svg"
        assert preview_file(index.get("globex", "logos", "logo").asset)["file"] == "logo-128.png"
        assert preview_file(index.get("globex", "images", "hero").asset)["file"] == "hero-1200.jpg"
