"""In-memory document tree: pages hold blocks, text lines hold spans."""
from __future__ import annotations

import re
import weakref
from dataclasses import dataclass, field
from typing import List, Optional

from typewriter.fonts import DEFAULT_FONT, resolve


@dataclass
class Span:
    """A run of text sharing one font; font_id None inherits the line font."""

    text: str
    font_id: Optional[str] = None


class Block:
    """Unit of content migrated between pages."""

    _page_ref = None

    @property
    def page(self):
        """The owning page (weak reference), or None when detached."""
        return self._page_ref() if self._page_ref is not None else None

    def _attach(self, page):
        self._page_ref = weakref.ref(page) if page is not None else None


@dataclass(eq=False)
class TextLine(Block):
    font_id: str = DEFAULT_FONT
    spans: List[Span] = field(default_factory=list)

    @property
    def text(self):
        return "".join(s.text for s in self.spans)

    def __len__(self):
        return sum(len(s.text) for s in self.spans)

    def is_blank(self):
        return not self.text.strip()

    def resolved_font(self, span=None):
        font_id = span.font_id if span is not None and span.font_id else self.font_id
        return resolve(font_id)[0]

    def font_at(self, offset):
        """Font that text typed at offset would inherit."""
        pos = 0
        for span in self.spans:
            end = pos + len(span.text)
            if pos <= offset <= end:
                return self.resolved_font(span)
            pos = end
        return self.resolved_font()

    def insert(self, offset, text):
        if not text:
            return
        if not self.spans:
            self.spans.append(Span(text))
            return
        pos = 0
        for span in self.spans:
            end = pos + len(span.text)
            if pos <= offset <= end:
                cut = offset - pos
                span.text = span.text[:cut] + text + span.text[cut:]
                return
            pos = end
        self.spans[-1].text += text

    def delete(self, start, end):
        if end <= start:
            return
        pos = 0
        for span in self.spans:
            span_end = pos + len(span.text)
            lo, hi = max(start, pos), min(end, span_end)
            if lo < hi:
                span.text = span.text[:lo - pos] + span.text[hi - pos:]
            pos = span_end
        self._normalize()

    def split(self, offset, font_id=None):
        """Cut the line at offset; return a new line holding the tail."""
        index = self._boundary(offset)
        tail = TextLine(font_id or self.font_id, self.spans[index:])
        self.spans = self.spans[:index]
        self._normalize()
        tail._normalize()
        return tail

    def absorb(self, other):
        """Append the spans of other; unstyled text adopts this line's font."""
        self.spans.extend(other.spans)
        other.spans = []
        self._normalize()

    def apply_font(self, start, end, font_id):
        if end <= start:
            return
        first = self._boundary(start)
        last = self._boundary(end)
        for span in self.spans[first:last]:
            span.font_id = font_id
        self._normalize()

    def set_font(self, font_id):
        self.font_id = font_id

    def segments(self, start, end):
        """Yield (text, font_id) pieces of the text between start and end."""
        pos = 0
        for span in self.spans:
            span_end = pos + len(span.text)
            lo, hi = max(start, pos), min(end, span_end)
            if lo < hi:
                yield span.text[lo - pos:hi - pos], self.resolved_font(span)
            pos = span_end

    def _boundary(self, offset):
        # make sure a span starts exactly at offset and return its index
        pos = 0
        for i, span in enumerate(self.spans):
            end = pos + len(span.text)
            if offset <= pos:
                return i
            if offset < end:
                cut = offset - pos
                self.spans[i:i + 1] = [Span(span.text[:cut], span.font_id), Span(span.text[cut:], span.font_id)]
                return i + 1
            pos = end
        return len(self.spans)

    def _normalize(self):
        merged = []
        for span in self.spans:
            if not span.text:
                continue
            if merged and merged[-1].font_id == span.font_id:
                merged[-1] = Span(merged[-1].text + span.text, span.font_id)
            else:
                merged.append(Span(span.text, span.font_id))
        self.spans = merged


@dataclass(eq=False)
class ImageBlock(Block):
    """A decoded image; image is a pygame.Surface."""

    image: object
    natural_width: int
    natural_height: int
    filter_enabled: bool = False
    name: Optional[str] = None

    def toggle_filter(self):
        self.filter_enabled = not self.filter_enabled
        return self.filter_enabled


class Page:

    def __init__(self, number, blocks=()):
        self.number = number
        self.active = False
        self.blocks = []
        for block in blocks:
            self.append(block)

    def __repr__(self):
        return f"<Page {self.number} blocks={len(self.blocks)} active={self.active}>"

    def append(self, block):
        block._attach(self)
        self.blocks.append(block)

    def insert(self, index, block):
        block._attach(self)
        self.blocks.insert(index, block)

    def prepend(self, block):
        self.insert(0, block)

    def remove(self, block):
        self.blocks.remove(block)
        block._attach(None)

    def pop_last(self):
        block = self.blocks.pop()
        block._attach(None)
        return block

    def index_of(self, block):
        for i, b in enumerate(self.blocks):
            if b is block:
                return i
        raise ValueError("block is not on this page")

    def text_lines(self):
        return [b for b in self.blocks if isinstance(b, TextLine)]

    def images(self):
        return [b for b in self.blocks if isinstance(b, ImageBlock)]

    def has_content(self):
        if self.images():
            return True
        return any(not line.is_blank() for line in self.text_lines())


@dataclass(eq=False)
class Cursor:
    """Caret inside a text line; anchor marks the other end of a selection."""

    line: TextLine
    offset: int = 0
    anchor: Optional[int] = None

    def selection(self):
        if self.anchor is None or self.anchor == self.offset:
            return None
        return min(self.anchor, self.offset), max(self.anchor, self.offset)


class Document:
    """Ordered pages; there is always at least one."""

    def __init__(self, default_font=DEFAULT_FONT):
        self.default_font = default_font
        self.pages = []
        first = self.append_page()
        first.active = True
        self.cursor = Cursor(first.blocks[0])

    def append_page(self, font_id=None):
        page = Page(len(self.pages) + 1, [TextLine(font_id or self.default_font)])
        self.pages.append(page)
        return page

    def clear(self, font_id=None):
        """Drop every page but the first and empty it."""
        del self.pages[1:]
        first = self.pages[0]
        for block in list(first.blocks):
            first.remove(block)
        line = TextLine(font_id or self.default_font)
        first.append(line)
        first.active = True
        self.cursor = Cursor(line)
        return first

    @property
    def active_index(self):
        for i, page in enumerate(self.pages):
            if page.active:
                return i
        return 0

    @property
    def active_page(self):
        return self.pages[self.active_index]

    def place_cursor(self, line, offset=0):
        self.cursor = Cursor(line, max(0, min(offset, len(line))))

    def block_count(self):
        return sum(len(page.blocks) for page in self.pages)

    def content_pages(self):
        return [page for page in self.pages if page.has_content()]

    def all_text(self):
        return "\n".join(line.text for page in self.pages for line in page.text_lines())

    def counts(self):
        """(characters, words) over all text lines, as the status line shows."""
        text = self.all_text().strip()
        words = len(re.split(r"\s+", text)) if text else 0
        return len(text), words
