import pytest

from core.errors import InvalidPagination
from core.options import PaginationConfig
from core.paginator import clamp_pagination, page_numbers, paginate


class TestPaginate:
    def test_last_partial_page(self):
        items = list(range(10))
        page = paginate(items, PaginationConfig(page=4, page_size=3))

        assert page.data == [9]
        assert page.total == 10
        assert page.total_pages == 4
        assert (page.start_index, page.end_index) == (9, 10)
        assert not page.has_next
        assert page.has_previous

    def test_first_page(self):
        page = paginate(list(range(10)), PaginationConfig(page=1, page_size=3))
        assert page.data == [0, 1, 2]
        assert page.has_next
        assert not page.has_previous

    def test_pages_cover_everything_once(self):
        items = list(range(23))
        pages = [paginate(items, PaginationConfig(page=p, page_size=5)) for p in range(1, 6)]
        assert [x for page in pages for x in page.data] == items

    def test_page_past_end_is_empty(self):
        page = paginate(list(range(10)), PaginationConfig(page=7, page_size=3))
        assert page.data == []
        assert page.total == 10
        assert page.total_pages == 4

    def test_empty_input(self):
        page = paginate([], PaginationConfig())
        assert page.data == []
        assert page.total_pages == 0
        assert not page.has_next

    @pytest.mark.parametrize("page, page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
    def test_invalid_config_raises(self, page, page_size):
        with pytest.raises(InvalidPagination):
            paginate([1, 2, 3], PaginationConfig(page=page, page_size=page_size))

    def test_invalid_pagination_is_value_error(self):
        with pytest.raises(ValueError):
            paginate([], PaginationConfig(page=0))


class TestClampPagination:
    def test_raises_to_minimum(self):
        assert clamp_pagination(0, 0) == PaginationConfig(page=1, page_size=1)

    def test_caps_page_size(self):
        assert clamp_pagination(3, 500, max_page_size=100) == PaginationConfig(page=3, page_size=100)


class TestPageNumbers:
    def test_few_pages(self):
        assert page_numbers(1, 3) == [1, 2, 3]
        assert page_numbers(1, 0) == []

    def test_near_start(self):
        assert page_numbers(1, 10) == [1, 2, 3, 4, None, 10]

    def test_middle(self):
        assert page_numbers(5, 10) == [1, None, 3, 4, 5, 6, 7, None, 10]

    def test_near_end(self):
        assert page_numbers(10, 10) == [1, None, 7, 8, 9, 10]
