"""Core utilities for manifest generation.

This package contains the filename grammar, variant grouping, metadata
merging, schema validation and type definitions that are used across
all source implementations.
"""

from .filenames import (
    FilenameError,
    ParsedFilename,
    SizeSuffixPolicy,
    UnsupportedFormatError,
    parse_filename,
)
from .grouping import VariantGroup, group_variants
from .metadata import (
    AssetOverride,
    BrandOverride,
    MetadataDocument,
    load_metadata_document,
    merge_asset,
    merge_brand,
    parse_metadata_document,
    title_case,
)
from .report import ConfigError, OutputError, PipelineError, PipelineWarning, RunReport, WarningCategory
from .types import ASSET_FORMATS, ASSET_TYPES, Asset, AssetFile, AssetTypeGroup, Brand, Manifest
from .validator import validate_manifest, validate_manifest_with_error_details

__all__ = [
    "ASSET_FORMATS",
    "ASSET_TYPES",
    "Asset",
    "AssetFile",
    "AssetOverride",
    "AssetTypeGroup",
    "Brand",
    "BrandOverride",
    "ConfigError",
    "FilenameError",
    "Manifest",
    "MetadataDocument",
    "OutputError",
    "ParsedFilename",
    "PipelineError",
    "PipelineWarning",
    "RunReport",
    "SizeSuffixPolicy",
    "UnsupportedFormatError",
    "VariantGroup",
    "WarningCategory",
    "group_variants",
    "load_metadata_document",
    "merge_asset",
    "merge_brand",
    "parse_filename",
    "parse_metadata_document",
    "title_case",
    "validate_manifest",
    "validate_manifest_with_error_details",
]
