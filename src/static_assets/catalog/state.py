"""Immutable browsing state for catalog front ends.

A CatalogState couples an index with the current query. Every user action
returns a new state; nothing is shared or mutated in place.
"""

from dataclasses import dataclass, field, replace
from functools import cached_property

from .index import CatalogIndex, SearchRecord
from .query import CatalogQuery, run_query


def _toggle(values: frozenset[str], value: str) -> frozenset[str]:
    return values - {value} if value in values else values | {value}


@dataclass(frozen=True)
class CatalogState:
    index: CatalogIndex
    query: CatalogQuery = field(default_factory=CatalogQuery)

    @cached_property
    def results(self) -> list[SearchRecord]:
        return run_query(self.index, self.query)

    @property
    def has_filters(self) -> bool:
        return self.query.has_filters

    def with_text(self, text: str) -> "CatalogState":
        return replace(self, query=replace(self.query, text=text.strip()))

    def toggle_brand(self, brand_id: str) -> "CatalogState":
        return replace(self, query=replace(self.query, brand_ids=_toggle(self.query.brand_ids, brand_id)))

    def toggle_type(self, asset_type: str) -> "CatalogState":
        return replace(self, query=replace(self.query, types=_toggle(self.query.types, asset_type)))

    def with_formats(self, *formats: str) -> "CatalogState":
        return replace(self, query=replace(self.query, formats=frozenset(formats)))

    def with_size_range(self, min_size: int | None = None, max_size: int | None = None) -> "CatalogState":
        return replace(self, query=replace(self.query, min_size=min_size, max_size=max_size))

    def cleared(self) -> "CatalogState":
        return replace(self, query=CatalogQuery())

    def available_brands(self) -> list[tuple[str, str]]:
        """(brand id, display name) pairs in manifest order."""
        return [(b["id"], b.get("displayName") or b["name"]) for b in self.index.manifest["brands"]]

    def available_types(self) -> list[str]:
        return self.index.asset_types()
