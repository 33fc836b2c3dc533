"""Shared fixtures: a sample multi-brand manifest and a project tree builder."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from PIL import Image

from static_assets.registry import SourceRegistry

CATALOG_TREE = {
    "acme": {
        "logos": ["logo.svg", "logo-32.png", "logo-64.png", "logo-64.webp", "logo-dark.svg", "badge.svg"],
        "icons": ["icon.svg", "icon-16.png", "icon-32.png"],
    },
    "globex": {
        "logos": ["logo-128.png"],
        "images": ["hero-1200.jpg"],
    },
    "emile": {
        "logos": ["logo.svg"],
    },
}

CATALOG_METADATA = {
    "acme": {
        "brand": {"tags": ["tech"]},
        "assets": {
            "logos": {
                "logo": {"displayName": "Primary Logo", "tags": ["primary"], "sortKey": 10},
                "logo-dark": {"aliases": ["night"], "sortKey": 5},
            }
        },
    },
    "globex": {"brand": {"displayName": "Globex Corporation"}},
    "emile": {"brand": {"displayName": "Émile Studio"}},
}


@pytest.fixture
def catalog_manifest():
    """Manifest with three brands, built through the memory source."""
    pipeline = SourceRegistry.create_pipeline(
        'memory',
        tree=CATALOG_TREE,
        metadata={brand: json.dumps(doc) for brand, doc in CATALOG_METADATA.items()},
        clock=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    return pipeline.build_manifest()


class ProjectBuilder:
    """Writes an assets.config.json project with source images under a root."""

    def __init__(self, root: Path):
        self.root = root
        self.source_dir = root / "_source"
        self.output_dir = root / "site" / "v1"

    def write_config(self, brands: dict, **extra) -> Path:
        data = {"sourceDir": "_source", "outputDir": "site/v1", "brands": brands}
        data.update(extra)
        path = self.root / "assets.config.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    def source_path(self, brand: str, asset_type: str, name: str) -> Path:
        path = self.source_dir / "brands" / brand / asset_type / name
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    def add_image(self, brand: str, asset_type: str, name: str, size: tuple[int, int] = (256, 256)) -> Path:
        path = self.source_path(brand, asset_type, name)
        mode = "RGB" if path.suffix.lower() in (".jpg", ".jpeg") else "RGBA"
        Image.new(mode, size, (200, 30, 30)).save(path)
        return path

    def add_svg(self, brand: str, asset_type: str, name: str, body: str | None = None) -> Path:
        path = self.source_path(brand, asset_type, name)
        path.write_text(
            body
            or (
                '<?xml version="1.0"?>\n'
                '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">\n'
                "  <!-- logo -->\n"
                "  <title>Logo</title>\n"
                '  <circle cx="50.123456" cy="50" r="40"/>\n'
                "</svg>\n"
            ),
            encoding="utf-8",
        )
        return path

    def add_metadata(self, brand: str, document: dict) -> Path:
        path = self.source_dir / "brands" / brand / "meta.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    """Provide a project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)
