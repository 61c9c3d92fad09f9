"""The query interface a UI shell drives.

A LogSession holds one loaded log plus the current QueryState. Loads replace
the whole record set; a failed load leaves the previous one in place.
"""

import logging
from typing import Any, Iterable, Optional

from .classifier import categorize
from .core import Category, LogRecord, Stats
from .correlator import ToolUseIndex
from .extractor import RenderableContent, describe_record, extract_content
from .loader import load_records, parse_records
from .query import QueryState, apply_state, compute_category_counts, compute_stats
from .source import RecordSource
from .sources import load_first_available

logger = logging.getLogger(__name__)


class LogSession:
    """One viewing session over an in-memory log."""

    def __init__(self, records: Optional[Iterable[LogRecord]] = None):
        self._records: tuple[LogRecord, ...] = ()
        self._index = ToolUseIndex()
        self._stats = Stats()
        self.state = QueryState()
        if records is not None:
            self._replace(tuple(records))

    # ── Loading ──────────────────────────────────────────────────

    def load(self, data: Any) -> int:
        """Load an already-decoded array. Returns the number of records."""
        return self._replace(tuple(load_records(data)))

    def load_text(self, text: str) -> int:
        """Load pasted JSON text. Returns the number of records."""
        return self._replace(tuple(parse_records(text)))

    def load_from_sources(self, sources: Iterable[RecordSource]) -> int:
        """Load from the first available bulk source."""
        return self.load(load_first_available(sources))

    def _replace(self, records: tuple[LogRecord, ...]) -> int:
        self._records = records
        self._index = ToolUseIndex.from_records(records)
        self._stats = compute_stats(records)
        logger.info("Session now holds %d records (%d tool calls indexed)", len(records), len(self._index))
        return len(records)

    # ── Query state ──────────────────────────────────────────────

    def set_category_filter(self, category: str) -> None:
        self.state = self.state.with_filter(category)

    def set_search_term(self, text: str) -> None:
        self.state = self.state.with_search(text)

    # ── Derived views ────────────────────────────────────────────

    @property
    def records(self) -> tuple[LogRecord, ...]:
        return self._records

    @property
    def tool_uses(self) -> ToolUseIndex:
        return self._index

    def get_filtered_records(self) -> list[LogRecord]:
        return apply_state(self._records, self.state)

    def get_stats(self) -> Stats:
        return self._stats

    def get_category_counts(self) -> dict[Category, int]:
        return compute_category_counts(self._records)

    def category_of(self, record: LogRecord) -> Category:
        return categorize(record)

    def extract(self, record: LogRecord) -> RenderableContent:
        return extract_content(record, self._index)

    def describe(self, record: LogRecord) -> str:
        return describe_record(record)
