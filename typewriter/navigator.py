"""Active page tracking and the page indicator."""
from __future__ import annotations


class PageNavigator:

    def __init__(self, document):
        self.document = document
        self.current_index = 0
        self.indicator = ""
        self.can_prev = False
        self.can_next = False
        self.reset()

    def reset(self):
        """Back to the first page, e.g. after the document was cleared."""
        for page in self.document.pages:
            page.active = False
        self.current_index = 0
        self.document.pages[0].active = True
        self.refresh()

    def refresh(self):
        total = len(self.document.pages)
        if self.current_index >= total:
            self.current_index = total - 1
        self.indicator = f"Page {self.current_index + 1} / {total}"
        self.can_prev = self.current_index > 0
        self.can_next = self.current_index < total - 1

    def go_to(self, index, focus=True):
        """Activate page index; out-of-range or current index is a no-op."""
        pages = self.document.pages
        if index < 0 or index >= len(pages) or index == self.current_index:
            return False
        pages[self.current_index].active = False
        self.current_index = index
        pages[index].active = True
        self.refresh()
        if focus:
            self._focus(pages[index])
        return True

    def prev(self):
        return self.go_to(self.current_index - 1)

    def next(self):
        return self.go_to(self.current_index + 1)

    def _focus(self, page):
        # an image-only page is left alone; the editor adds its insertion point
        lines = page.text_lines()
        if lines:
            self.document.place_cursor(lines[0], 0)
