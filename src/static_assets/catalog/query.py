"""Compound catalog queries: text search, filters and a total sort order."""

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, field

from .index import CatalogIndex, SearchRecord


@dataclass(frozen=True)
class CatalogQuery:
    """Query parameters. Empty filter sets mean "no restriction"."""

    text: str = ""
    brand_ids: frozenset[str] = field(default_factory=frozenset)
    types: frozenset[str] = field(default_factory=frozenset)
    formats: frozenset[str] = field(default_factory=frozenset)
    min_size: int | None = None
    max_size: int | None = None

    @classmethod
    def build(
        cls,
        text: str = "",
        brand_ids: Iterable[str] = (),
        types: Iterable[str] = (),
        formats: Iterable[str] = (),
        min_size: int | None = None,
        max_size: int | None = None,
    ) -> "CatalogQuery":
        return cls(
            text=text.strip(),
            brand_ids=frozenset(brand_ids),
            types=frozenset(types),
            formats=frozenset(formats),
            min_size=min_size,
            max_size=max_size,
        )

    @property
    def has_size_filter(self) -> bool:
        return self.min_size is not None or self.max_size is not None

    @property
    def has_filters(self) -> bool:
        return bool(self.text or self.brand_ids or self.types or self.formats or self.has_size_filter)


def size_in_range(size: int, min_size: int | None, max_size: int | None) -> bool:
    if min_size is not None and size < min_size:
        return False
    if max_size is not None and size > max_size:
        return False
    return True


def matches_filters(record: SearchRecord, query: CatalogQuery) -> bool:
    """Conjunctive brand/type/format/size filters.

    Format and size filters pass when any of the asset's formats or sizes
    qualifies. Assets without sizes never pass an active size filter.
    """
    if query.brand_ids and record.brand_id not in query.brand_ids:
        return False
    if query.types and record.asset_type not in query.types:
        return False
    if query.formats and not query.formats.intersection(record.formats):
        return False
    if query.has_size_filter and not any(
        size_in_range(size, query.min_size, query.max_size) for size in record.sizes
    ):
        return False
    return True


def collation_key(text: str) -> tuple[str, str]:
    """Case and accent insensitive ordering, ties broken by the raw text."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (stripped.casefold(), text)


def record_sort_key(record: SearchRecord) -> tuple:
    """Brand name, asset type, sortKey (missing last), display name.

    Brand id and asset id close the key so that distinct records never
    compare equal.
    """
    sort_key = record.sort_key
    return (
        collation_key(record.brand_name),
        record.asset_type,
        (0, sort_key) if sort_key is not None else (1, 0),
        collation_key(record.display_name),
        record.brand_id,
        record.asset_id,
    )


def sort_records(records: Iterable[SearchRecord]) -> list[SearchRecord]:
    return sorted(records, key=record_sort_key)


def run_query(index: CatalogIndex, query: CatalogQuery) -> list[SearchRecord]:
    """Execute a query against an index.

    Text search runs first (or every record is taken when there is no text),
    then the filters, then the sort.
    """
    if query.text:
        candidates: Iterable[SearchRecord] = (hit.record for hit in index.search(query.text))
    else:
        candidates = index.records

    return sort_records(record for record in candidates if matches_filters(record, query))


def find_assets(index: CatalogIndex, **criteria) -> list[SearchRecord]:
    """Shorthand for ``run_query(index, CatalogQuery.build(**criteria))``."""
    return run_query(index, CatalogQuery.build(**criteria))
