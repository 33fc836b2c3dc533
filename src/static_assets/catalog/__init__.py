"""Client-side catalog: search, filter, sort and resolve manifest assets."""

from .index import CatalogIndex, SearchRecord, flatten_manifest, load_manifest
from .query import CatalogQuery, find_assets, record_sort_key, run_query, sort_records
from .resolve import FORMAT_PRIORITY, asset_url, best_format, preview_file, resolve_variant
from .search import MIN_QUERY_LENGTH, SEARCH_FIELDS, FuzzyIndex, SearchHit
from .state import CatalogState

__all__ = [
    "FORMAT_PRIORITY",
    "MIN_QUERY_LENGTH",
    "SEARCH_FIELDS",
    "CatalogIndex",
    "CatalogQuery",
    "CatalogState",
    "FuzzyIndex",
    "SearchHit",
    "SearchRecord",
    "asset_url",
    "best_format",
    "find_assets",
    "flatten_manifest",
    "load_manifest",
    "preview_file",
    "record_sort_key",
    "resolve_variant",
    "run_query",
    "sort_records",
]
