"""Filter and search log records, and count them."""

from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Union

from .classifier import categorize
from .core import Category, LogRecord, Stats
from .errors import UnknownCategoryError

ALL = "all"

CategoryFilter = Union[Category, str]  # a Category or the "all" sentinel


def parse_category_filter(value: CategoryFilter) -> CategoryFilter:
    """Validate a filter name coming from a UI shell."""
    if value == ALL:
        return ALL
    try:
        return Category(value)
    except ValueError:
        raise UnknownCategoryError(f"Unknown category: {value!r}") from None


@dataclass(frozen=True)
class QueryState:
    """The active filter and search term. Replaced, never mutated."""

    category_filter: CategoryFilter = ALL
    search_term: str = ""

    def with_filter(self, category_filter: CategoryFilter) -> "QueryState":
        return replace(self, category_filter=parse_category_filter(category_filter))

    def with_search(self, search_term: str) -> "QueryState":
        return replace(self, search_term=search_term or "")


def matches_search(record: LogRecord, search_term: str) -> bool:
    """Case-insensitive substring match over the record's full JSON form."""
    if not search_term:
        return True
    return search_term.lower() in record.search_text


def apply_query(
    records: Sequence[LogRecord],
    category_filter: CategoryFilter = ALL,
    search_term: str = "",
) -> list[LogRecord]:
    """Return records passing both the category filter and the search, in order."""
    category_filter = parse_category_filter(category_filter)
    return [
        record
        for record in records
        if (category_filter == ALL or categorize(record) == category_filter)
        and matches_search(record, search_term)
    ]


def apply_state(records: Sequence[LogRecord], state: QueryState) -> list[LogRecord]:
    return apply_query(records, state.category_filter, state.search_term)


def compute_stats(records: Sequence[LogRecord]) -> Stats:
    """Count records by their declared kind.

    Tool results arrive as ``user`` records and are counted as ``user``
    here even though ``categorize`` puts them under tool/failed-tool.
    Use ``compute_category_counts`` for counts by derived category.
    """
    kinds = Counter(record.kind for record in records)
    return Stats(
        total=len(records),
        assistant=kinds["assistant"],
        system=kinds["system"],
        tool=kinds["tool"],
        user=kinds["user"],
    )


def compute_category_counts(records: Iterable[LogRecord]) -> dict[Category, int]:
    """Count records by derived category. Every category is present."""
    counts = Counter(categorize(record) for record in records)
    return {category: counts[category] for category in Category}
