"""
Unit tests for live pagination.

Block heights come from a stub measure so the arithmetic is exact: every
text line is one 32px row and images report whatever height they were
given.
"""

import pytest

from typewriter.model import Document, ImageBlock
from typewriter.navigator import PageNavigator
from typewriter.overflow import OverflowController

from tests.fixtures import fill_page, make_image, make_line

LINE_H = 32


def measure(block):
    if isinstance(block, ImageBlock):
        return block.natural_height
    return LINE_H


@pytest.fixture
def doc():
    return Document()


@pytest.fixture
def nav(doc):
    return PageNavigator(doc)


@pytest.fixture
def controller(doc, nav, style):
    settles = []
    ctl = OverflowController(doc, nav, measure, settle=lambda: settles.append(1), style=style)
    ctl.settles = settles
    return ctl


def line_texts(page):
    return [b.text for b in page.blocks]


class TestOverflow:

    def test_page_height_includes_padding(self, doc, controller):
        fill_page(doc.pages[0], ["a", "b", "c"])
        assert controller.page_height(doc.pages[0]) == 40 + 3 * LINE_H + 40

    def test_fitting_page_is_untouched(self, doc, controller):
        fill_page(doc.pages[0], [f"line {i}" for i in range(35)])
        assert controller.check() == 0
        assert len(doc.pages) == 1

    def test_forty_lines_split_35_and_5(self, doc, controller, nav):
        texts = [f"line {i}" for i in range(40)]
        fill_page(doc.pages[0], texts)
        doc.place_cursor(doc.pages[0].blocks[0])

        moved = controller.check()

        assert moved == 5
        assert len(doc.pages) == 2
        assert line_texts(doc.pages[0]) == texts[:35]
        # the blank placeholder line of the new page is gone
        assert line_texts(doc.pages[1]) == texts[35:]
        assert controller.settles == [1] * 5
        assert nav.indicator == "Page 1 / 2"

    def test_no_block_lost_or_duplicated(self, doc, controller):
        fill_page(doc.pages[0], [f"line {i}" for i in range(30)])
        doc.pages[0].insert(10, make_image(height=300))
        doc.pages[0].insert(20, make_image(height=300))
        before = [b for b in doc.pages[0].blocks]
        doc.place_cursor(doc.pages[0].blocks[0])

        controller.check()

        after = [b for page in doc.pages for b in page.blocks]
        assert len(after) == len(before)
        assert all(a is b for a, b in zip(after, before))
        for page in doc.pages:
            assert all(block.page is page for block in page.blocks)

    def test_cursor_follows_migrated_line(self, doc, controller, nav):
        fill_page(doc.pages[0], [f"line {i}" for i in range(36)])
        last = doc.pages[0].blocks[-1]
        doc.place_cursor(last, 2)

        controller.check()

        assert last.page is doc.pages[1]
        assert doc.cursor.line is last
        assert doc.cursor.offset == len(last)
        assert nav.current_index == 1
        assert doc.pages[1].active
        assert not doc.pages[0].active

    def test_blank_line_of_existing_page_is_kept(self, doc, controller, nav):
        fill_page(doc.pages[0], [f"line {i}" for i in range(36)])
        doc.place_cursor(doc.pages[0].blocks[0])
        blank = doc.append_page().blocks[0]
        nav.refresh()

        controller.check(0)

        assert doc.pages[1].blocks[-1] is blank
        assert line_texts(doc.pages[1]) == ["line 35", ""]

    def test_blank_line_inside_migrated_tail_survives(self, doc, controller):
        texts = [f"l{i}" for i in range(36)] + ["", "z"]
        fill_page(doc.pages[0], texts)
        doc.place_cursor(doc.pages[0].blocks[0])

        moved = controller.check()

        assert moved == 3
        assert doc.block_count() == 38
        assert line_texts(doc.pages[0]) == texts[:35]
        assert line_texts(doc.pages[1]) == ["l35", "", "z"]

    def test_separator_lines_survive_page_breaks(self, doc, controller):
        texts = []
        for i in range(30):
            texts += [f"paragraph {i}", ""]
        fill_page(doc.pages[0], texts)
        doc.place_cursor(doc.pages[0].blocks[0])

        controller.check()

        assert [t for page in doc.pages for t in line_texts(page)] == texts

    def test_single_oversized_block_stays(self, doc, controller):
        page = doc.pages[0]
        for block in list(page.blocks):
            page.remove(block)
        page.append(make_image(height=2000))

        assert controller.check() == 0
        assert len(doc.pages) == 1

    def test_cascades_through_following_pages(self, doc, controller, nav):
        fill_page(doc.pages[0], [f"a{i}" for i in range(36)])
        second = doc.append_page()
        fill_page(second, [f"b{i}" for i in range(35)])
        nav.refresh()
        doc.place_cursor(doc.pages[0].blocks[0])

        moved = controller.check()

        assert moved == 2
        assert len(doc.pages) == 3
        assert line_texts(doc.pages[1])[0] == "a35"
        assert line_texts(doc.pages[2]) == ["b34"]
        for page in doc.pages:
            assert not controller.overflows(page)

    def test_max_passes_bounds_the_loop(self, doc, nav, style):
        fill_page(doc.pages[0], [f"line {i}" for i in range(40)])
        doc.place_cursor(doc.pages[0].blocks[0])
        ctl = OverflowController(doc, nav, measure, style=style, max_passes=2)
        assert ctl.check() == 2
        assert len(doc.pages[0].blocks) == 38

    def test_image_and_text_budget(self, doc, controller):
        page = doc.pages[0]
        fill_page(page, [f"line {i}" for i in range(25)])
        page.append(make_image(height=324))
        page.append(make_line("after"))
        doc.place_cursor(page.blocks[0])

        controller.check()

        # 80 + 25*32 + 324 = 1204 still overflows, so the image moves too
        assert [type(b).__name__ for b in doc.pages[1].blocks] == ["ImageBlock", "TextLine"]
