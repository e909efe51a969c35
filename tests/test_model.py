"""
Unit tests for the document tree: spans, lines, pages and the document.
"""

import pytest

from typewriter.model import Document, Page, Span, TextLine

from tests.fixtures import make_image, make_line, make_page


class TestTextLine:
    """Span-level editing of a single line."""

    def test_insert_into_empty_line(self):
        line = TextLine("adler")
        line.insert(0, "abc")
        assert line.text == "abc"
        assert line.spans == [Span("abc")]

    def test_insert_in_the_middle(self):
        line = make_line("Helo")
        line.insert(3, "l")
        assert line.text == "Hello"

    def test_delete_across_spans(self):
        line = TextLine("special-elite", [Span("abc"), Span("def", "adler"), Span("ghi")])
        line.delete(2, 7)
        assert line.text == "abhi"
        assert line.spans == [Span("abhi")]

    def test_blank_detection(self):
        assert TextLine().is_blank()
        assert make_line("   ").is_blank()
        assert not make_line(" x ").is_blank()

    def test_split_moves_tail(self):
        line = make_line("Hello World")
        tail = line.split(5, "adler")
        assert line.text == "Hello"
        assert tail.text == " World"
        assert tail.font_id == "adler"

    def test_split_keeps_span_fonts(self):
        line = TextLine("special-elite", [Span("ab"), Span("cd", "zent")])
        tail = line.split(3)
        assert line.spans == [Span("ab"), Span("c", "zent")]
        assert tail.spans == [Span("d", "zent")]

    def test_absorb_appends_and_empties_other(self):
        first = make_line("Hello")
        second = make_line(" World", "adler")
        first.absorb(second)
        assert first.text == "Hello World"
        assert second.text == ""
        # unstyled merged text takes the line font of the surviving line
        assert list(first.segments(0, len(first))) == [("Hello World", "special-elite")]

    def test_apply_font_to_range(self):
        line = make_line("abcdef")
        line.apply_font(2, 4, "remington")
        assert list(line.segments(0, 6)) == [
            ("ab", "special-elite"),
            ("cd", "remington"),
            ("ef", "special-elite"),
        ]

    def test_font_at_follows_span(self):
        line = TextLine("special-elite", [Span("ab"), Span("cd", "zent")])
        assert line.font_at(0) == "special-elite"
        assert line.font_at(3) == "zent"

    def test_unknown_font_resolves_to_default(self):
        line = TextLine("no-such-font")
        assert line.resolved_font() == "special-elite"

    def test_set_font_changes_line_default(self):
        line = make_line("abc")
        line.set_font("facets")
        assert list(line.segments(0, 3)) == [("abc", "facets")]


class TestPage:
    """Block ownership and back-references."""

    def test_blocks_know_their_page(self):
        page = make_page(["a", "b"])
        assert all(block.page is page for block in page.blocks)

    def test_removed_block_is_detached(self):
        page = make_page(["a", "b"])
        block = page.pop_last()
        assert block.page is None
        assert [b.text for b in page.blocks] == ["a"]

    def test_prepend_reattaches(self):
        source = make_page(["a", "b"], 1)
        target = make_page(["c"], 2)
        block = source.pop_last()
        target.prepend(block)
        assert block.page is target
        assert target.index_of(block) == 0

    def test_index_of_uses_identity(self):
        page = make_page(["same", "same"])
        assert page.index_of(page.blocks[1]) == 1
        with pytest.raises(ValueError):
            page.index_of(make_line("same"))

    def test_has_content(self):
        assert not make_page(["", "  "]).has_content()
        assert make_page(["", "x"]).has_content()
        page = make_page([""])
        page.append(make_image())
        assert page.has_content()


class TestDocument:
    """Document lifecycle and counting."""

    def test_starts_with_one_active_page(self):
        doc = Document()
        assert len(doc.pages) == 1
        assert doc.pages[0].active
        assert doc.cursor.line is doc.pages[0].blocks[0]

    def test_append_page_holds_empty_line(self):
        doc = Document()
        page = doc.append_page("adler")
        assert page.number == 2
        assert len(page.blocks) == 1
        assert page.blocks[0].font_id == "adler"
        assert page.blocks[0].is_blank()

    def test_clear_keeps_a_single_empty_page(self):
        doc = Document()
        doc.pages[0].blocks[0].insert(0, "text")
        doc.append_page()
        doc.clear()
        assert len(doc.pages) == 1
        assert doc.all_text() == ""
        assert doc.cursor.line.page is doc.pages[0]

    def test_place_cursor_clamps_offset(self):
        doc = Document()
        line = doc.pages[0].blocks[0]
        line.insert(0, "abc")
        doc.place_cursor(line, 99)
        assert doc.cursor.offset == 3

    def test_counts(self):
        doc = Document()
        doc.pages[0].blocks[0].insert(0, "Hello World")
        page = doc.append_page()
        page.blocks[0].insert(0, "again")
        assert doc.counts() == (len("Hello World\nagain"), 3)

    def test_counts_empty(self):
        assert Document().counts() == (0, 0)

    def test_content_pages_skip_blank_pages(self):
        doc = Document()
        page = doc.append_page()
        page.blocks[0].insert(0, "x")
        doc.append_page()
        assert doc.content_pages() == [page]

    def test_block_count(self):
        doc = Document()
        doc.pages[0].append(make_image())
        doc.append_page()
        assert doc.block_count() == 3
