"""Unit tests for list query helpers (search / filters / sort / page)."""

from datetime import datetime, timezone

import pytest

from crosscut_admin.application.listing import ListQuery, apply_list_query

pytestmark = pytest.mark.unit


def _records():
    return [
        {"id": "wf-1", "status": "completed", "product_name": "ROUTER-100", "duration_ms": 4000.0,
         "created_at": datetime(2025, 9, 25, 10, 0, tzinfo=timezone.utc)},
        {"id": "wf-2", "status": "failed", "product_name": "SWITCH-200", "duration_ms": 3000.0,
         "created_at": datetime(2025, 9, 25, 9, 0, tzinfo=timezone.utc)},
        {"id": "wf-3", "status": "running", "product_name": "ROUTER-100", "duration_ms": None,
         "created_at": datetime(2025, 9, 25, 11, 0, tzinfo=timezone.utc)},
    ]


class TestFilters:
    def test_no_controls_returns_everything(self):
        page = apply_list_query(_records(), ListQuery())

        assert [r["id"] for r in page.items] == ["wf-1", "wf-2", "wf-3"]
        assert page.page_info.total == 3

    def test_field_filter_is_exact(self):
        page = apply_list_query(_records(), ListQuery(filters={"status": "failed"}))

        assert [r["id"] for r in page.items] == ["wf-2"]

    def test_filter_on_missing_field_matches_nothing(self):
        page = apply_list_query(_records(), ListQuery(filters={"action": "x"}))

        assert page.items == []
        assert page.page_info.total == 0

    def test_search_is_case_insensitive_over_text_fields(self):
        page = apply_list_query(_records(), ListQuery(q="router"))

        assert [r["id"] for r in page.items] == ["wf-1", "wf-3"]


class TestSort:
    def test_sort_by_datetime_desc(self):
        page = apply_list_query(_records(), ListQuery(sort="created_at", order="DESC"))

        assert [r["id"] for r in page.items] == ["wf-3", "wf-1", "wf-2"]

    def test_missing_values_sort_last_in_both_orders(self):
        asc = apply_list_query(_records(), ListQuery(sort="duration_ms", order="ASC"))
        desc = apply_list_query(_records(), ListQuery(sort="duration_ms", order="DESC"))

        assert [r["id"] for r in asc.items] == ["wf-2", "wf-1", "wf-3"]
        assert [r["id"] for r in desc.items] == ["wf-1", "wf-2", "wf-3"]


class TestPaging:
    def test_total_counts_filtered_items_not_page(self):
        page = apply_list_query(
            _records(), ListQuery(q="router", offset=1, limit=1)
        )

        assert [r["id"] for r in page.items] == ["wf-3"]
        assert page.page_info.total == 2
        assert page.page_info.has_prev is True
        assert page.page_info.has_next is False

    def test_first_page_with_more(self):
        page = apply_list_query(_records(), ListQuery(limit=2))

        assert len(page.items) == 2
        assert page.page_info.has_next is True
        assert page.page_info.next_offset == 2
        assert page.page_info.prev_offset is None
