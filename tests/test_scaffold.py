"""Tests for brand scaffolding."""

import json

import pytest

from static_assets.config import load_config
from static_assets.core.metadata import parse_metadata_document
from static_assets.core.report import ConfigError
from static_assets.scaffold import ScaffoldError, create_brand, to_kebab_case


class TestToKebabCase:
    """Test brand id derivation."""

    def test_conversion(self) -> None:
        """Test spaces, case and punctuation."""
        assert to_kebab_case("Acme Corp") == "acme-corp"
        assert to_kebab_case("  Rey IT  Solutions! ") == "rey-it-solutions"
        assert to_kebab_case("acme-corp") == "acme-corp"
        assert to_kebab_case("!!!") == ""


class TestCreateBrand:
    """Test creating a new brand."""

    def test_creates_structure(self, project) -> None:
        """Test directories, README, meta.json and config entry."""
        config_path = project.write_config({"acme": {"logos": {}}})

        result = create_brand(config_path, "Globex Corp")

        brand_dir = project.source_dir / "brands" / "globex-corp"
        assert result.brand_id == "globex-corp"
        assert result.title == "Globex Corp"
        assert result.config_updated
        for name in ("logos", "icons", "images"):
            assert (brand_dir / name).is_dir()
        assert "static-assets build --brand globex-corp" in (brand_dir / "README.md").read_text(encoding="utf-8")

        document = parse_metadata_document(json.loads((brand_dir / "meta.json").read_text(encoding="utf-8")))
        assert document.brand.displayName == "Globex Corp"
        assert document.asset("logos", "logo").sortKey == 10

        config = load_config(config_path)
        assert list(config.brands) == ["acme", "globex-corp"]
        assert [s.width for s in config.sizes_for("globex-corp", "icons")] == [16, 24, 32, 48, 64]
        assert config.formats_for("globex-corp", "logos") == ["original", "webp", "avif", "png"]

    def test_existing_directory(self, project) -> None:
        """Test that an existing brand directory is refused."""
        config_path = project.write_config({})
        (project.source_dir / "brands" / "acme").mkdir(parents=True)

        with pytest.raises(ScaffoldError, match="already exists"):
            create_brand(config_path, "Acme")

    def test_existing_config_entry_is_kept(self, project) -> None:
        """Test that a brand already in the config is not overwritten."""
        config_path = project.write_config({"acme": {"logos": {"formats": ["png"]}}})

        result = create_brand(config_path, "acme")

        assert not result.config_updated
        assert load_config(config_path).formats_for("acme", "logos") == ["png"]

    def test_empty_name(self, project) -> None:
        """Test that names without letters or digits are refused."""
        with pytest.raises(ScaffoldError, match="required"):
            create_brand(project.write_config({}), "---")

    def test_missing_config(self, tmp_path) -> None:
        """Test that a missing configuration raises ConfigError."""
        with pytest.raises(ConfigError):
            create_brand(tmp_path / "assets.config.json", "Acme")
