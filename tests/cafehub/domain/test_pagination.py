"""Tests for Page and page_window."""

from cafehub.shared.pagination import MAX_PAGE_SIZE, Page, page_window


class TestPage:
    def test_total_pages_rounds_up(self):
        assert Page(total=25, page=1, page_size=10).total_pages == 3

    def test_last_page_has_no_next(self):
        page = Page(total=25, page=3, page_size=10)
        assert page.has_next is False
        assert page.has_prev is True

    def test_first_page(self):
        page = Page(total=25, page=1, page_size=10)
        assert page.has_next is True
        assert page.has_prev is False

    def test_empty(self):
        page = Page(total=0, page=1, page_size=10)
        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_prev is False


class TestPageWindow:
    def test_offset(self):
        assert page_window(3, 10) == (3, 10, 20)

    def test_clamps_page(self):
        assert page_window(0, 10) == (1, 10, 0)

    def test_clamps_page_size(self):
        assert page_window(1, 0)[1] == 1
        assert page_window(1, 1000)[1] == MAX_PAGE_SIZE
