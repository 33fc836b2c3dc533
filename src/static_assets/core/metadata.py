"""Metadata overrides for brands and assets.

Each brand may ship a ``meta.json`` next to its source files:

    {
      "brand": {"displayName": "...", "description": "...", "tags": [], "aliases": []},
      "assets": {
        "logos": {"logo": {"displayName": "Primary Logo", "sortKey": 10}}
      }
    }

Overrides are partial: a field that is missing or empty means "no data" and
the filename-derived default (or absence) is kept.
"""

import json
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonschema import ValidationError

from .report import RunReport, WarningCategory
from .types import ASSET_TYPES, Asset, Brand
from .validator import validate_metadata


def title_case(identifier: str) -> str:
    """Turn a kebab-case id into a display name.

    Example:
        "logo-on-brand" -> "Logo On Brand"
    """
    return " ".join(word[:1].upper() + word[1:] for word in identifier.split("-"))


@dataclass(frozen=True)
class BrandOverride:
    """Optional brand-level fields from a metadata document."""

    displayName: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None
    aliases: tuple[str, ...] | None = None


@dataclass(frozen=True)
class AssetOverride:
    """Optional asset-level fields from a metadata document."""

    displayName: str | None = None
    description: str | None = None
    usage: str | None = None
    tags: tuple[str, ...] | None = None
    aliases: tuple[str, ...] | None = None
    sortKey: float | None = None


@dataclass(frozen=True)
class MetadataDocument:
    """Parsed metadata for one brand."""

    brand: BrandOverride = field(default_factory=BrandOverride)
    assets: Mapping[str, Mapping[str, AssetOverride]] = field(default_factory=dict)

    def asset(self, asset_type: str, asset_id: str) -> AssetOverride | None:
        return self.assets.get(asset_type, {}).get(asset_id)


EMPTY_METADATA = MetadataDocument()


def _text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _strings(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    seen: dict[str, None] = {}
    for item in value:
        text = _text(item)
        if text is not None:
            seen.setdefault(text, None)
    return tuple(seen) or None


def _number(value: Any) -> float | None:
    # bool is an int subclass but never a valid sort key
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def parse_brand_override(data: Mapping[str, Any]) -> BrandOverride:
    return BrandOverride(
        displayName=_text(data.get("displayName")),
        description=_text(data.get("description")),
        tags=_strings(data.get("tags")),
        aliases=_strings(data.get("aliases")),
    )


def parse_asset_override(data: Mapping[str, Any]) -> AssetOverride:
    return AssetOverride(
        displayName=_text(data.get("displayName")),
        description=_text(data.get("description")),
        usage=_text(data.get("usage")),
        tags=_strings(data.get("tags")),
        aliases=_strings(data.get("aliases")),
        sortKey=_number(data.get("sortKey")),
    )


def parse_metadata_document(data: Any) -> MetadataDocument:
    """Build a MetadataDocument from decoded JSON.

    Raises:
        ValidationError: If the data does not match the metadata schema
    """
    validate_metadata(data)
    assets = {
        asset_type: {asset_id: parse_asset_override(entry) for asset_id, entry in entries.items()}
        for asset_type, entries in data.get("assets", {}).items()
    }
    return MetadataDocument(brand=parse_brand_override(data.get("brand", {})), assets=assets)


def load_metadata_document(
    text: str | None,
    brand_id: str,
    report: RunReport | None = None,
    origin: str | None = None,
) -> MetadataDocument:
    """Parse a brand's raw metadata, falling back to an empty document.

    Malformed JSON or a document that fails schema validation is reported as
    a configuration warning; the brand then uses filename-derived defaults.

    Args:
        text: Raw metadata document, or None when the brand has none
        brand_id: Brand the document belongs to (for messages)
        report: Optional report receiving warnings
        origin: Optional path of the document (for messages)

    Returns:
        Parsed metadata, or EMPTY_METADATA
    """
    if text is None:
        return EMPTY_METADATA

    report = report if report is not None else RunReport()
    try:
        return parse_metadata_document(json.loads(text))
    except json.JSONDecodeError as e:
        report.warn(WarningCategory.CONFIG, f"Invalid metadata JSON for brand '{brand_id}': {e}", origin)
    except ValidationError as e:
        location = " -> ".join(str(p) for p in e.path) if e.path else "root"
        report.warn(
            WarningCategory.CONFIG,
            f"Invalid metadata for brand '{brand_id}' at {location}: {e.message}",
            origin,
        )
    return EMPTY_METADATA


def unmatched_asset_keys(
    document: MetadataDocument,
    discovered: Mapping[str, Iterable[str]],
) -> Iterator[tuple[str, str]]:
    """Yield (asset type, asset id) metadata keys that match no discovered asset."""
    for asset_type, entries in document.assets.items():
        known = set(discovered.get(asset_type, ()))
        for asset_id in entries:
            if asset_id not in known:
                yield asset_type, asset_id


def merge_asset(base: Asset, override: AssetOverride | None) -> Asset:
    """Overlay metadata onto a grouped asset.

    ``name`` always stays filename-derived; ``displayName`` falls back to it.
    Other optional fields are only present when the override provides them.
    """
    override = override or AssetOverride()
    merged: dict[str, Any] = {
        "id": base["id"],
        "name": base["name"],
        "displayName": override.displayName or base["name"],
    }
    if override.description is not None:
        merged["description"] = override.description
    if override.usage is not None:
        merged["usage"] = override.usage
    if override.tags is not None:
        merged["tags"] = list(override.tags)
    if override.aliases is not None:
        merged["aliases"] = list(override.aliases)
    if override.sortKey is not None:
        merged["sortKey"] = override.sortKey
    merged.update(
        type=base["type"],
        basePath=base["basePath"],
        sizes=list(base["sizes"]),
        formats=list(base["formats"]),
        files=[dict(f) for f in base["files"]],
    )
    return merged  # type: ignore[return-value]


def merge_brand(base: Brand, override: BrandOverride | None) -> Brand:
    """Overlay brand-level metadata, same rules as merge_asset."""
    override = override or BrandOverride()
    merged: dict[str, Any] = {
        "id": base["id"],
        "name": base["name"],
        "displayName": override.displayName or base["name"],
    }
    if override.description is not None:
        merged["description"] = override.description
    if override.tags is not None:
        merged["tags"] = list(override.tags)
    if override.aliases is not None:
        merged["aliases"] = list(override.aliases)
    merged["assetTypes"] = list(base["assetTypes"])
    return merged  # type: ignore[return-value]


def unknown_asset_types(document: MetadataDocument) -> list[str]:
    """Asset type keys in the document that are not known asset types."""
    return [t for t in document.assets if t not in ASSET_TYPES]
