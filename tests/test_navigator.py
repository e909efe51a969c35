"""
Unit tests for page navigation and the page indicator.
"""

import pytest

from typewriter.model import Document
from typewriter.navigator import PageNavigator

from tests.fixtures import fill_page, make_image


@pytest.fixture
def doc():
    document = Document()
    document.append_page()
    document.append_page()
    return document


@pytest.fixture
def nav(doc):
    return PageNavigator(doc)


class TestNavigator:

    def test_initial_state(self, nav):
        assert nav.current_index == 0
        assert nav.indicator == "Page 1 / 3"
        assert not nav.can_prev
        assert nav.can_next

    def test_next_and_prev(self, doc, nav):
        assert nav.next()
        assert nav.indicator == "Page 2 / 3"
        assert nav.can_prev and nav.can_next
        assert nav.next()
        assert not nav.can_next
        assert nav.prev()
        assert nav.current_index == 1

    def test_exactly_one_active_page(self, doc, nav):
        nav.go_to(2)
        assert [p.active for p in doc.pages] == [False, False, True]

    @pytest.mark.parametrize("index", [-1, 3, 42])
    def test_out_of_range_is_a_noop(self, doc, nav, index):
        assert not nav.go_to(index)
        assert nav.current_index == 0
        assert doc.pages[0].active

    def test_going_to_current_page_is_a_noop(self, doc, nav):
        line = doc.pages[0].blocks[0]
        line.insert(0, "abc")
        doc.place_cursor(line, 2)
        assert not nav.go_to(0)
        assert doc.cursor.offset == 2

    def test_prev_on_first_page(self, nav):
        assert not nav.prev()

    def test_focus_moves_cursor_to_first_line(self, doc, nav):
        fill_page(doc.pages[1], ["first", "second"])
        nav.go_to(1)
        assert doc.cursor.line is doc.pages[1].blocks[0]
        assert doc.cursor.offset == 0

    def test_image_only_page_is_not_modified(self, doc, nav):
        page = doc.pages[2]
        for block in list(page.blocks):
            page.remove(block)
        image = make_image()
        page.append(image)
        line = doc.cursor.line
        assert nav.go_to(2)
        assert page.blocks == [image]
        assert doc.cursor.line is line

    def test_go_to_without_focus_keeps_cursor(self, doc, nav):
        line = doc.cursor.line
        nav.go_to(1, focus=False)
        assert doc.cursor.line is line

    def test_refresh_picks_up_new_pages(self, doc, nav):
        doc.append_page()
        nav.refresh()
        assert nav.indicator == "Page 1 / 4"

    def test_reset_after_clear(self, doc, nav):
        nav.go_to(2)
        doc.clear()
        nav.reset()
        assert nav.indicator == "Page 1 / 1"
        assert doc.pages[0].active
