"""Type definitions for static asset manifests.

This module defines TypedDict classes that mirror the JSON schema structure
defined in core/schemas/manifest.schema.json.
"""

from typing import Literal, NotRequired, TypedDict

AssetType = Literal["logos", "icons", "images"]
AssetFormat = Literal["svg", "png", "webp", "avif", "jpg"]

# Canonical emission order for asset type groups within a brand
ASSET_TYPES: tuple[str, ...] = ("logos", "icons", "images")

# Formats that may appear in a manifest
ASSET_FORMATS: tuple[str, ...] = ("svg", "png", "webp", "avif", "jpg")


class AssetFile(TypedDict):
    """One concrete generated file for a logical asset."""

    file: str  # Bare filename (e.g., "logo-128.png")
    format: str  # One of ASSET_FORMATS
    size: int | None  # Pixel width, None for original/vector
    path: str  # Root-relative path, "{version}/brands/{brandId}/{assetType}/{file}"


class Asset(TypedDict):
    """Logical asset: one graphic with all of its size/format variants."""

    id: str  # Filename-derived id, unique within (brand, type)
    name: str  # Title case of id
    displayName: str  # Metadata override, falls back to name
    description: NotRequired[str]
    usage: NotRequired[str]
    tags: NotRequired[list[str]]
    aliases: NotRequired[list[str]]
    sortKey: NotRequired[float]  # Lower sorts first, unset sorts last
    type: str  # One of ASSET_TYPES
    basePath: str  # Shared path prefix without size/format suffix
    sizes: list[int]  # Ascending, unique; empty for vector-only assets
    formats: list[str]  # Alphabetical, unique
    files: list[AssetFile]


class AssetTypeGroup(TypedDict):
    """Non-empty group of assets of one type within a brand."""

    type: str
    assets: list[Asset]


class Brand(TypedDict):
    """Top-level namespace grouping related assets."""

    id: str  # Kebab-case brand id
    name: str  # Title case of id
    displayName: str  # Metadata override, falls back to name
    description: NotRequired[str]
    tags: NotRequired[list[str]]
    aliases: NotRequired[list[str]]
    assetTypes: list[AssetTypeGroup]


class Manifest(TypedDict):
    """Complete catalog of generated assets."""

    generated: str  # ISO 8601 timestamp
    version: str  # Asset API version tag (e.g., "v1")
    baseUrls: dict[str, str]  # CDN provider -> URL prefix ending in "/"
    brands: list[Brand]  # Discovery order, not necessarily sorted
