import pytest

from vendor_search.engine.pagination import page_window, paginate

ITEMS = list(range(1, 24))  # 23 items


def test_total_pages_rounds_up():
    assert paginate(ITEMS, 10, 1).total_pages == 3


def test_first_page():
    page = paginate(ITEMS, 10, 1)
    assert page.items == list(range(1, 11))
    assert page.total_items == 23


def test_last_partial_page():
    assert paginate(ITEMS, 10, 3).items == [21, 22, 23]


def test_page_past_the_end_is_empty():
    page = paginate(ITEMS, 10, 4)
    assert page.items == []
    assert page.total_pages == 3


def test_page_below_one_is_empty():
    assert paginate(ITEMS, 10, 0).items == []


def test_empty_sequence():
    page = paginate([], 10, 1)
    assert page.items == []
    assert page.total_pages == 0


def test_invalid_page_size():
    with pytest.raises(ValueError):
        paginate(ITEMS, 0, 1)


class TestPageWindow:
    def test_few_pages_listed_in_full(self):
        assert page_window(1, 3) == [1, 2, 3]

    def test_near_start(self):
        assert page_window(2, 10) == [1, 2, 3, 4, "...", 10]

    def test_near_end(self):
        assert page_window(9, 10) == [1, "...", 7, 8, 9, 10]

    def test_middle(self):
        assert page_window(5, 10) == [1, "...", 4, 5, 6, "...", 10]

    def test_no_pages(self):
        assert page_window(1, 0) == []

    def test_wider_window_near_start(self):
        assert page_window(2, 20, max_visible=7) == [1, 2, 3, 4, 5, 6, "...", 20]

    def test_wider_window_near_end(self):
        assert page_window(17, 20, max_visible=7) == [1, "...", 15, 16, 17, 18, 19, 20]

    def test_wider_window_middle(self):
        assert page_window(10, 20, max_visible=7) == [1, "...", 8, 9, 10, 11, 12, "...", 20]

    def test_wider_window_lists_small_totals_in_full(self):
        assert page_window(4, 7, max_visible=7) == [1, 2, 3, 4, 5, 6, 7]

    def test_window_too_narrow(self):
        with pytest.raises(ValueError):
            page_window(1, 10, max_visible=3)
