"""Tests for source asset validation."""

from static_assets.config import load_config
from static_assets.validation import validate_sources


def messages(issues) -> list[str]:
    return [issue.message for issue in issues]


class TestValidateSources:
    """Test checks run before building."""

    def test_valid_brand(self, project) -> None:
        """Test that a well-formed brand passes without warnings."""
        project.add_svg("acme", "logos", "logo.svg")
        project.add_image("acme", "icons", "icon.png", (256, 256))
        config = load_config(project.write_config({"acme": {"logos": {}, "icons": {}}}))

        report = validate_sources(config)

        assert report.ok
        assert report.warnings == []

    def test_naming_errors(self, project) -> None:
        """Test that non kebab-case filenames are errors."""
        project.add_svg("acme", "logos", "logo.svg")
        project.add_svg("acme", "logos", "Logo_Dark.svg")
        config = load_config(project.write_config({"acme": {"logos": {}}}))

        report = validate_sources(config)

        assert not report.ok
        assert messages(report.errors) == ["Invalid filename (use kebab-case): Logo_Dark.svg"]

    def test_low_resolution_warning(self, project) -> None:
        """Test minimum resolution per asset type."""
        project.add_image("acme", "logos", "logo.png", (256, 256))
        project.add_image("acme", "icons", "icon.png", (128, 128))
        config = load_config(project.write_config({"acme": {"logos": {}, "icons": {}}}))

        report = validate_sources(config)

        assert report.ok
        assert len(report.warnings) == 1
        assert "Low resolution (256x256)" in report.warnings[0].message
        assert report.warnings[0].path.name == "logo.png"

    def test_unreadable_image(self, project) -> None:
        """Test that corrupt raster files are errors."""
        project.source_path("acme", "logos", "logo.png").write_bytes(b"not a png")
        config = load_config(project.write_config({"acme": {"logos": {}}}))

        report = validate_sources(config)

        assert messages(report.errors) == ["Could not read image metadata"]

    def test_missing_recommended_files(self, project) -> None:
        """Test that logos without logo.svg/png are flagged."""
        project.add_svg("acme", "logos", "wordmark.svg")
        config = load_config(project.write_config({"acme": {"logos": {}}}))

        report = validate_sources(config)

        assert report.ok
        assert any("Missing recommended file" in m for m in messages(report.warnings))

    def test_missing_and_empty_directories(self, project) -> None:
        """Test missing brand, missing type and empty type directories."""
        (project.source_dir / "brands" / "acme" / "logos").mkdir(parents=True)
        config = load_config(project.write_config({"acme": {"logos": {}, "icons": {}}, "globex": {"logos": {}}}))

        report = validate_sources(config)

        assert messages(report.errors) == ["Brand directory not found: globex"]
        assert messages(report.warnings) == ["Empty directory", "Directory not found: icons"]

    def test_orphaned_brand_directory(self, project) -> None:
        """Test that source brands missing from the config are reported."""
        project.add_svg("acme", "logos", "logo.svg")
        project.add_svg("initech", "logos", "logo.svg")
        config = load_config(project.write_config({"acme": {"logos": {}}}))

        report = validate_sources(config)

        assert messages(report.warnings) == ["Orphaned brand directory (not in config)"]
        assert report.warnings[0].path.name == "initech"

    def test_unsupported_extension(self, project) -> None:
        """Test that unknown file types are warnings."""
        project.add_svg("acme", "logos", "logo.svg")
        project.source_path("acme", "logos", "notes.txt").write_text("x", encoding="utf-8")
        config = load_config(project.write_config({"acme": {"logos": {}}}))

        report = validate_sources(config)

        assert messages(report.warnings) == ["Unsupported file extension: .txt"]
