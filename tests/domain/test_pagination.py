"""Tests for the listing pagination helpers (nomina_kernel/utils/pagination.py)."""

import pytest

from nomina_kernel.utils.pagination import (
    ELLIPSIS,
    calculate_offset,
    calculate_pagination,
    normalize_pagination_params,
    paginate,
    pagination_range,
)


class TestCalculatePagination:

    def test_partial_last_page(self):
        info = calculate_pagination(total=23, page=1, page_size=10)
        assert info.total_pages == 3
        assert info.has_next_page
        assert not info.has_prev_page

    def test_last_page(self):
        info = calculate_pagination(total=23, page=3, page_size=10)
        assert not info.has_next_page
        assert info.has_prev_page

    def test_empty(self):
        info = calculate_pagination(total=0, page=1, page_size=10)
        assert info.total_pages == 0
        assert not info.has_next_page

    def test_zero_page_size_rejected(self):
        with pytest.raises(ValueError):
            calculate_pagination(total=5, page=1, page_size=0)


class TestPaginationRange:

    def test_few_pages_listed_in_full(self):
        assert pagination_range(2, 5) == [1, 2, 3, 4, 5]

    def test_near_start(self):
        assert pagination_range(2, 10) == [1, 2, 3, 4, 5, ELLIPSIS, 10]

    def test_near_end(self):
        assert pagination_range(9, 10) == [1, ELLIPSIS, 6, 7, 8, 9, 10]

    def test_middle(self):
        assert pagination_range(5, 10) == [1, ELLIPSIS, 3, 4, 5, ELLIPSIS, 10]


class TestNormalizeParams:

    def test_defaults(self):
        params = normalize_pagination_params()
        assert (params.page, params.page_size) == (1, 10)
        assert params.sort_by == "created_at"
        assert params.sort_order == "desc"

    def test_clamped(self):
        params = normalize_pagination_params(page=-3, page_size=500, sort_order="asc")
        assert params.page == 1
        assert params.page_size == 100
        assert params.sort_order == "asc"

    def test_garbage_falls_back(self):
        params = normalize_pagination_params(page="x", page_size="y", sort_order="sideways")
        assert (params.page, params.page_size, params.sort_order) == (1, 10, "desc")

    def test_custom_limits(self):
        params = normalize_pagination_params(page_size=None, max_page_size=20, default_page_size=5)
        assert params.page_size == 5


class TestPaginate:

    def test_slices_and_reports(self):
        result = paginate(list(range(1, 24)), page=3, page_size=10)
        assert result.items == (21, 22, 23)
        assert result.info.total == 23

    def test_page_past_end_is_empty(self):
        assert paginate([1, 2], page=5, page_size=10).items == ()

    def test_offset(self):
        assert calculate_offset(3, 25) == 50
