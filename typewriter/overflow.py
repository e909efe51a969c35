"""Live pagination: moves trailing blocks forward until every page fits."""
from __future__ import annotations

from typewriter.config import PageStyle
from typewriter.log import get_logger

LOGGER = get_logger(__name__)

DEFAULT_MAX_PASSES = 500


class OverflowController:
    """Keeps each page within the height budget.

    measure_block(block) returns the rendered height of a block on its
    current page; settle() is called after every migration so the
    rendering surface can lay the affected pages out again before the next
    measurement. Content only ever moves forward; underfull pages are never
    refilled from later pages.
    """

    def __init__(self, document, navigator, measure_block, settle=None,
                 style=None, max_passes=DEFAULT_MAX_PASSES):
        self.document = document
        self.navigator = navigator
        self.measure_block = measure_block
        self.settle = settle
        self.style = style or PageStyle()
        self.max_passes = max_passes

    def page_height(self, page):
        content = sum(self.measure_block(block) for block in page.blocks)
        return self.style.page_padding_top + content + self.style.page_padding_bottom

    def overflows(self, page):
        return self.page_height(page) > self.style.max_page_height

    def check(self, page_index=None):
        """Rebalance from page_index (default: the active page) onwards.

        Returns the number of blocks migrated.
        """
        index = self.navigator.current_index if page_index is None else page_index
        moved = 0
        while index < len(self.document.pages):
            page = self.document.pages[index]
            if not self.overflows(page):
                index += 1
                continue
            if len(page.blocks) <= 1:
                # an oversized single block stays where it is
                LOGGER.debug("Page %d holds one oversized block, leaving it", page.number)
                index += 1
                continue
            if moved >= self.max_passes:
                LOGGER.debug("Overflow check stopped after %d migrations", moved)
                break
            self._migrate_last(index)
            moved += 1
            if self.settle is not None:
                self.settle()
        if moved:
            LOGGER.debug("Moved %d blocks, %d blocks on %d pages",
                         moved, self.document.block_count(), len(self.document.pages))
        return moved

    def _migrate_last(self, index):
        document = self.document
        placeholder = None
        if index == len(document.pages) - 1:
            fresh = document.append_page(self._placeholder_font(document.pages[index]))
            placeholder = fresh.blocks[0]
            self.navigator.refresh()

        source = document.pages[index]
        target = document.pages[index + 1]
        block = source.pop_last()

        # only the empty line of a page created just now is discarded
        if placeholder is not None:
            target.remove(placeholder)
        target.prepend(block)
        LOGGER.debug("Moved a %s from page %d to page %d", type(block).__name__, source.number, target.number)

        cursor = document.cursor
        if cursor.line is block:
            self.navigator.go_to(index + 1, focus=False)
            document.place_cursor(block, len(block))

    def _placeholder_font(self, page):
        lines = page.text_lines()
        return lines[-1].font_id if lines else self.document.default_font
