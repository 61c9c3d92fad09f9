"""Tests for filtering, search and stats."""

import pytest

from claude_log_viewer.classifier import categorize
from claude_log_viewer.core import Category, Stats
from claude_log_viewer.errors import UnknownCategoryError
from claude_log_viewer.loader import load_records
from claude_log_viewer.query import (
    ALL,
    QueryState,
    apply_query,
    apply_state,
    compute_category_counts,
    compute_stats,
    parse_category_filter,
)


class TestApplyQuery:
    def test_all_and_empty_search_returns_everything(self, records):
        result = apply_query(records, ALL, "")
        assert result == list(records)
        assert len(result) == len(records)

    def test_filter_by_category(self, records):
        result = apply_query(records, "failed-tool", "")
        assert len(result) == 2
        assert all(categorize(r) == Category.FAILED_TOOL for r in result)

    def test_filter_accepts_category_member(self, records):
        assert apply_query(records, Category.ASSISTANT) == apply_query(records, "assistant")

    def test_search_is_case_insensitive(self, records):
        assert apply_query(records, ALL, "READ_FILE") == apply_query(records, ALL, "read_file")
        assert len(apply_query(records, ALL, "read_file")) == 1

    def test_search_matches_nested_tool_input(self, records):
        result = apply_query(records, ALL, "grep authenticate")
        assert [r.kind for r in result] == ["assistant"]
        assert result[0] is records[4]

    def test_search_matches_field_names(self, records):
        result = apply_query(records, ALL, "permissionmode")
        assert result == [records[0]]

    def test_filter_and_search_combined(self, records):
        result = apply_query(records, "assistant", "toolu_00")
        assert result == [records[2], records[4], records[6]]
        assert apply_query(records, "user", "toolu_00") == []

    def test_preserves_order(self, records):
        result = apply_query(records, "system", "")
        positions = [records.index(r) for r in result]
        assert positions == sorted(positions)

    def test_idempotent(self, records):
        once = apply_query(records, "tool", "line")
        twice = apply_query(once, "tool", "line")
        assert once == twice

    def test_whole_float_searches_like_the_browser(self):
        records = load_records([{"type": "result", "duration_ms": 12345.0}])
        assert apply_query(records, ALL, "12345.0") == []
        assert apply_query(records, ALL, '"duration_ms":12345') == records

    def test_no_match(self, records):
        assert apply_query(records, ALL, "definitely-not-present") == []

    def test_unknown_filter(self, records):
        with pytest.raises(UnknownCategoryError):
            apply_query(records, "banana", "")


class TestQueryState:
    def test_defaults(self):
        state = QueryState()
        assert state.category_filter == ALL
        assert state.search_term == ""

    def test_with_methods_return_new_values(self):
        state = QueryState()
        filtered = state.with_filter("tool")
        searched = filtered.with_search("auth")
        assert state == QueryState()
        assert filtered.category_filter == Category.TOOL
        assert searched == QueryState(category_filter=Category.TOOL, search_term="auth")

    def test_with_search_none(self):
        assert QueryState().with_search(None).search_term == ""

    def test_apply_state(self, records):
        state = QueryState().with_filter("failed-tool").with_search("not found")
        assert apply_state(records, state) == [records[7]]

    def test_parse_category_filter(self):
        assert parse_category_filter("all") == ALL
        assert parse_category_filter("failed-tool") is Category.FAILED_TOOL
        with pytest.raises(ValueError):
            parse_category_filter("failed")


class TestStats:
    def test_counts_by_declared_kind(self, records):
        assert compute_stats(records) == Stats(total=11, assistant=3, system=1, tool=0, user=4)

    def test_total_is_unfiltered_count(self, records):
        stats = compute_stats(records)
        assert stats.total == len(records)
        assert stats.assistant + stats.system + stats.tool + stats.user <= stats.total

    def test_empty(self):
        assert compute_stats([]) == Stats()

    def test_category_counts(self, records):
        counts = compute_category_counts(records)
        assert counts == {
            Category.SYSTEM: 4,
            Category.ASSISTANT: 3,
            Category.TOOL: 1,
            Category.FAILED_TOOL: 2,
            Category.USER: 1,
        }
        assert sum(counts.values()) == len(records)
