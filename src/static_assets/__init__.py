"""Static Assets - brand asset pipeline.

This package turns brand source images into resized, re-encoded variants,
groups the generated files into logical assets, merges per-brand metadata
and writes a versioned JSON manifest. The catalog package searches,
filters and resolves assets from a manifest.
"""

# Core library interface
from .pipeline import ManifestPipeline, write_manifest
from .registry import SourceRegistry
from .sources.base import Source

# Core utilities
from .core import Asset, AssetFile, Brand, Manifest, RunReport, parse_filename, group_variants
from .core import validate_manifest, validate_manifest_with_error_details
from .config import GenerationConfig, load_config

# Catalog
from .catalog import CatalogIndex, CatalogQuery, find_assets, resolve_variant

__version__ = "0.1.0"

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "ManifestPipeline",
    "SourceRegistry",
    "Source",
    "write_manifest",
    # Core utilities
    "Asset",
    "AssetFile",
    "Brand",
    "Manifest",
    "RunReport",
    "parse_filename",
    "group_variants",
    "validate_manifest",
    "validate_manifest_with_error_details",
    "GenerationConfig",
    "load_config",
    # Catalog
    "CatalogIndex",
    "CatalogQuery",
    "find_assets",
    "resolve_variant",
]
