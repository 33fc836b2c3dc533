"""Weighted fuzzy text search over catalog records.

Each record exposes a fixed set of text fields with strictly decreasing
weights (display name first, brand id last). A query is split into
whitespace-separated terms; a term matches a field when the field contains
it, or when some window of the field is similar enough to it
(``difflib.SequenceMatcher`` ratio of at least ``1 - threshold``). A record
matches when every term matches at least one field.

Terms shorter than MIN_QUERY_LENGTH characters are ignored. A query with no
term of at least that length is treated as no text query at all, and every
record is returned.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .index import SearchRecord

MIN_QUERY_LENGTH = 2

DEFAULT_THRESHOLD = 0.4


def _text(value: str | None) -> tuple[str, ...]:
    return (value,) if value else ()


@dataclass(frozen=True)
class SearchField:
    """A searchable field and its relevance weight."""

    name: str
    weight: float
    extract: Callable[["SearchRecord"], Iterable[str]]


SEARCH_FIELDS: tuple[SearchField, ...] = (
    SearchField("displayName", 1.0, lambda r: _text(r.display_name)),
    SearchField("name", 0.9, lambda r: _text(r.name)),
    SearchField("tags", 0.8, lambda r: r.tags),
    SearchField("aliases", 0.7, lambda r: r.aliases),
    SearchField("description", 0.6, lambda r: _text(r.description)),
    SearchField("usage", 0.5, lambda r: _text(r.usage)),
    SearchField("brandName", 0.4, lambda r: _text(r.brand_name)),
    SearchField("brandTags", 0.35, lambda r: r.brand_tags),
    SearchField("brandAliases", 0.3, lambda r: r.brand_aliases),
    SearchField("assetType", 0.2, lambda r: _text(r.asset_type)),
    SearchField("id", 0.15, lambda r: _text(r.asset_id)),
    SearchField("brandId", 0.1, lambda r: _text(r.brand_id)),
)


@dataclass(frozen=True)
class SearchHit:
    """A matching record and its relevance score (higher is better)."""

    record: "SearchRecord"
    score: float


def query_terms(text: str, min_length: int = MIN_QUERY_LENGTH) -> list[str]:
    """Split a query into case-folded terms long enough to search for."""
    return [term for term in text.casefold().split() if len(term) >= min_length]


def similarity(term: str, value: str) -> float:
    """Best similarity in [0, 1] between a term and any window of value.

    Both arguments are expected to be case-folded. Windows are one character
    shorter, equal to, and one character longer than the term, so a single
    substitution, insertion or deletion still scores well. Windows are never
    shorter than MIN_QUERY_LENGTH, so one shared character cannot carry a
    two-character term past the cutoff.
    """
    if not value:
        return 0.0
    if term in value:
        return 1.0

    matcher = SequenceMatcher(autojunk=False)
    matcher.set_seq2(term)
    best = 0.0
    length = len(term)
    for size in sorted({max(MIN_QUERY_LENGTH, length - 1), length, length + 1}):
        if size >= len(value):
            windows: Iterable[str] = (value,)
        else:
            windows = (value[i:i + size] for i in range(len(value) - size + 1))
        for window in windows:
            matcher.set_seq1(window)
            if matcher.real_quick_ratio() <= best or matcher.quick_ratio() <= best:
                continue
            best = max(best, matcher.ratio())
    return best


class FuzzyIndex:
    """Pre-extracted, case-folded field values for a fixed record set."""

    def __init__(
        self,
        records: Sequence["SearchRecord"],
        fields: Sequence[SearchField] = SEARCH_FIELDS,
        threshold: float = DEFAULT_THRESHOLD,
        min_length: int = MIN_QUERY_LENGTH,
    ):
        self.records = tuple(records)
        self.fields = tuple(fields)
        self.threshold = threshold
        self.min_length = min_length
        self._values = [
            [tuple(v.casefold() for v in field.extract(record) if v) for field in self.fields]
            for record in self.records
        ]

    def _term_score(self, term: str, values: list[tuple[str, ...]]) -> float | None:
        """Best weighted similarity of one term, or None when no field matches."""
        cutoff = 1.0 - self.threshold
        best: float | None = None
        for field, field_values in zip(self.fields, values):
            for value in field_values:
                sim = similarity(term, value)
                if sim >= cutoff:
                    weighted = sim * field.weight
                    if best is None or weighted > best:
                        best = weighted
        return best

    def search(self, text: str) -> list[SearchHit]:
        """Return matching records, best score first.

        Ties keep index order. When the query has no usable term, every
        record is returned with a score of 0.
        """
        terms = query_terms(text, self.min_length)
        if not terms:
            return [SearchHit(record, 0.0) for record in self.records]

        hits = []
        for record, values in zip(self.records, self._values):
            total = 0.0
            for term in terms:
                score = self._term_score(term, values)
                if score is None:
                    break
                total += score
            else:
                hits.append(SearchHit(record, total))

        hits.sort(key=lambda hit: -hit.score)
        return hits
