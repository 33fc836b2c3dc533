"""Flattened, read-only view of a manifest for searching and filtering.

Every asset of every brand/type becomes one SearchRecord carrying the
brand context it was found under. The index is built once per manifest
load and never mutated afterwards.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.types import Asset, AssetFile, Manifest
from ..core.validator import validate_manifest
from .search import FuzzyIndex, SearchHit


@dataclass(frozen=True)
class SearchRecord:
    """One asset with denormalised brand context."""

    asset: Asset = field(compare=False)
    brand_id: str
    brand_name: str
    asset_type: str
    asset_id: str
    brand_tags: tuple[str, ...] = ()
    brand_aliases: tuple[str, ...] = ()

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.brand_id, self.asset_type, self.asset_id)

    @property
    def name(self) -> str:
        return self.asset["name"]

    @property
    def display_name(self) -> str:
        return self.asset.get("displayName") or self.asset["name"] or self.asset["id"]

    @property
    def description(self) -> str | None:
        return self.asset.get("description")

    @property
    def usage(self) -> str | None:
        return self.asset.get("usage")

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self.asset.get("tags", ()))

    @property
    def aliases(self) -> tuple[str, ...]:
        return tuple(self.asset.get("aliases", ()))

    @property
    def sort_key(self) -> float | None:
        return self.asset.get("sortKey")

    @property
    def formats(self) -> list[str]:
        return self.asset["formats"]

    @property
    def sizes(self) -> list[int]:
        return self.asset["sizes"]

    @property
    def files(self) -> list[AssetFile]:
        return self.asset["files"]


def flatten_manifest(manifest: Manifest) -> list[SearchRecord]:
    """Flatten brands -> asset types -> assets into search records."""
    records = []
    for brand in manifest["brands"]:
        brand_name = brand.get("displayName") or brand["name"]
        for group in brand["assetTypes"]:
            for asset in group["assets"]:
                records.append(
                    SearchRecord(
                        asset=asset,
                        brand_id=brand["id"],
                        brand_name=brand_name,
                        asset_type=group["type"],
                        asset_id=asset["id"],
                        brand_tags=tuple(brand.get("tags", ())),
                        brand_aliases=tuple(brand.get("aliases", ())),
                    )
                )
    return records


@dataclass(frozen=True)
class CatalogIndex:
    """Searchable index over one manifest."""

    manifest: Manifest = field(repr=False)
    records: tuple[SearchRecord, ...]
    fuzzy: FuzzyIndex = field(repr=False, compare=False)

    @classmethod
    def from_manifest(cls, manifest: Manifest) -> "CatalogIndex":
        records = tuple(flatten_manifest(manifest))
        return cls(manifest=manifest, records=records, fuzzy=FuzzyIndex(records))

    def search(self, text: str) -> list[SearchHit]:
        """Fuzzy text search; see FuzzyIndex.search."""
        return self.fuzzy.search(text)

    def brand_ids(self) -> list[str]:
        """Brand ids in manifest order."""
        return [b["id"] for b in self.manifest["brands"]]

    def asset_types(self) -> list[str]:
        """Asset types present, sorted."""
        return sorted({r.asset_type for r in self.records})

    def get(self, brand_id: str, asset_type: str, asset_id: str) -> SearchRecord | None:
        for record in self.records:
            if record.key == (brand_id, asset_type, asset_id):
                return record
        return None

    def __len__(self) -> int:
        return len(self.records)


def load_manifest(path: Path, validate: bool = True) -> Manifest:
    """Read a manifest from disk.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
        ValidationError: If validate is set and the manifest fails the schema
    """
    with path.open("r", encoding="utf-8") as f:
        manifest: Any = json.load(f)
    if validate:
        validate_manifest(manifest)
    return manifest  # type: ignore[no-any-return]
