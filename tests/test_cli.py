"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from static_assets.cli import main
from static_assets.pipeline import write_manifest


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.fixture
def built_project(project):
    project.add_image("acme", "logos", "logo.png", (128, 128))
    project.add_metadata("acme", {"assets": {"logos": {"logo": {"displayName": "Primary Logo"}}}})
    config_path = project.write_config(
        {"acme": {"logos": {"sizes": [{"width": 32}, {"width": 64}], "formats": ["original"]}}}
    )
    return project, config_path


@pytest.fixture
def manifest_file(catalog_manifest, tmp_path: Path) -> Path:
    return write_manifest(catalog_manifest, tmp_path / "assets-manifest.json")


class TestBuildCommand:
    """Test build and manifest subcommands."""

    def test_build_writes_variants_and_manifest(self, built_project, capsys) -> None:
        """Test a full build from source images."""
        project, config_path = built_project

        assert run(["build", "--config", str(config_path)]) == 0

        manifest_path = project.root / "site" / "assets-manifest.json"
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        (asset,) = manifest["brands"][0]["assetTypes"][0]["assets"]
        assert asset["displayName"] == "Primary Logo"
        assert asset["sizes"] == [32, 64]
        assert asset["formats"] == ["png"]
        assert asset["files"][0]["path"] == "v1/brands/acme/logos/logo-32.png"

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Generated 2 files" in captured.err
        assert "Manifest written" in captured.err

    def test_manifest_to_custom_output(self, built_project) -> None:
        """Test rebuilding only the manifest after a build."""
        project, config_path = built_project
        assert run(["build", "--config", str(config_path)]) == 0

        output = project.root / "custom.json"
        assert run(["manifest", "--config", str(config_path), "--output", str(output)]) == 0
        assert json.loads(output.read_text(encoding="utf-8"))["version"] == "v1"

    def test_manifest_without_output_fails(self, built_project, capsys) -> None:
        """Test that a missing output directory is a fatal error."""
        _, config_path = built_project

        assert run(["build", "--skip-generate", "--config", str(config_path)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_warnings_are_listed(self, built_project, capsys) -> None:
        """Test that non-fatal warnings are printed at the end of the run."""
        project, config_path = built_project
        project.add_metadata("acme", {"assets": {"logos": {"old-logo": {}}}})

        assert run(["build", "--config", str(config_path)]) == 0
        err = capsys.readouterr().err
        assert "warning(s):" in err
        assert "old-logo" in err

    def test_invalid_config(self, tmp_path: Path, capsys) -> None:
        """Test that configuration errors exit with status 1."""
        config_path = tmp_path / "assets.config.json"
        config_path.write_text('{"sourceDir": "_source"}', encoding="utf-8")

        assert run(["build", "--config", str(config_path)]) == 1
        assert "Error:" in capsys.readouterr().err


class TestValidateCommand:
    """Test the validate subcommand."""

    def test_passes(self, built_project, capsys) -> None:
        """Test a valid source tree (with a low resolution warning)."""
        _, config_path = built_project

        assert run(["validate", "--config", str(config_path)]) == 0
        assert "Low resolution" in capsys.readouterr().err

    def test_fails_on_errors(self, built_project) -> None:
        """Test that naming errors fail validation."""
        project, config_path = built_project
        project.add_svg("acme", "logos", "Bad_Name.svg")

        assert run(["validate", "--config", str(config_path)]) == 1


class TestNewBrandCommand:
    """Test the new-brand subcommand."""

    def test_creates_brand(self, project, capsys) -> None:
        """Test scaffolding through the CLI."""
        config_path = project.write_config({})

        assert run(["new-brand", "Initech", "--config", str(config_path)]) == 0
        assert (project.source_dir / "brands" / "initech" / "meta.json").is_file()
        assert "Created brand 'Initech'" in capsys.readouterr().err

    def test_duplicate_brand(self, project) -> None:
        """Test that an existing brand directory fails."""
        config_path = project.write_config({})
        (project.source_dir / "brands" / "initech").mkdir(parents=True)

        assert run(["new-brand", "initech", "--config", str(config_path)]) == 1


class TestSearchCommand:
    """Test the search subcommand."""

    def test_json_output(self, manifest_file: Path, capsys) -> None:
        """Test fuzzy search results as JSON."""
        assert run(["search", str(manifest_file), "Aome", "--type", "logos", "--json"]) == 0

        results = json.loads(capsys.readouterr().out)
        assert [r["id"] for r in results] == ["logo-dark", "logo", "badge"]
        logo = results[1]
        assert logo["displayName"] == "Primary Logo"
        assert logo["url"].endswith("v1/brands/acme/logos/logo-64.webp")

    def test_text_output(self, manifest_file: Path, capsys) -> None:
        """Test tab-separated output with filters."""
        assert run(["search", str(manifest_file), "--format", "jpg", "--cdn", "github"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        key, name, url = lines[0].split("\t")
        assert key == "globex/images/hero"
        assert name == "Hero"
        assert url.startswith("https://")

    def test_size_filters(self, manifest_file: Path, capsys) -> None:
        """Test min and max size options."""
        assert run(["search", str(manifest_file), "--min-size", "100", "--max-size", "200", "--json"]) == 0
        results = json.loads(capsys.readouterr().out)
        assert [(r["brand"], r["id"]) for r in results] == [("globex", "logo")]

    def test_unknown_cdn(self, manifest_file: Path) -> None:
        """Test that a CDN missing from the manifest fails."""
        assert run(["search", str(manifest_file), "--cdn", "unpkg"]) == 1

    def test_unreadable_manifest(self, tmp_path: Path, capsys) -> None:
        """Test missing and invalid manifest files."""
        assert run(["search", str(tmp_path / "missing.json")]) == 1

        invalid = tmp_path / "invalid.json"
        invalid.write_text('{"brands": []}', encoding="utf-8")
        assert run(["search", str(invalid)]) == 1
        assert "validation failed" in capsys.readouterr().err
