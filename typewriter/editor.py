"""Edit operations on the document: typing, line breaks, merges, images, fonts."""
from __future__ import annotations

from typewriter.fonts import resolve
from typewriter.log import get_logger
from typewriter.model import ImageBlock, TextLine

LOGGER = get_logger(__name__)


class Editor:
    """Applies user edits at the document cursor.

    sound is the audio collaborator; anything with play(is_return) works.
    """

    def __init__(self, document, sound=None, font_id=None):
        self.document = document
        self.sound = sound
        self.font_id = resolve(font_id or document.default_font)[0]

    @property
    def cursor(self):
        return self.document.cursor

    def _play(self, is_return=False):
        if self.sound is not None:
            self.sound.play(is_return)

    def _delete_selection(self):
        cursor = self.cursor
        sel = cursor.selection()
        cursor.anchor = None
        if sel is None:
            return False
        start, end = sel
        cursor.line.delete(start, end)
        cursor.offset = start
        return True

    # ---------- typing ----------
    def type_text(self, text):
        if not text:
            return
        if "\n" in text or "\r" in text:
            self.paste(text)
            return
        self._delete_selection()
        cursor = self.cursor
        cursor.line.insert(cursor.offset, text)
        cursor.offset += len(text)
        self._play(False)

    def new_line(self):
        """Break the cursor line; the tail moves to a new line in the current font."""
        self._delete_selection()
        tail = self._break_line()
        self._play(True)
        return tail

    def paste(self, text):
        """Insert clipboard text; every line terminator starts a new line."""
        if not text:
            return
        self._delete_selection()
        parts = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        for i, part in enumerate(parts):
            if i:
                self._break_line()
            part = "".join(ch for ch in part.replace("\t", "    ") if ch.isprintable())
            cursor = self.cursor
            cursor.line.insert(cursor.offset, part)
            cursor.offset += len(part)
        self._play(len(parts) > 1)

    def _break_line(self):
        cursor = self.cursor
        line = cursor.line
        page = line.page
        tail = line.split(cursor.offset, self.font_id)
        page.insert(page.index_of(line) + 1, tail)
        self.document.place_cursor(tail, 0)
        return tail

    def backspace(self):
        if self._delete_selection():
            self._play(False)
            return
        cursor = self.cursor
        line = cursor.line
        if cursor.offset > 0:
            line.delete(cursor.offset - 1, cursor.offset)
            cursor.offset -= 1
            self._play(False)
            return

        page = line.page
        index = page.index_of(line)
        if index > 0:
            prev = page.blocks[index - 1]
            if isinstance(prev, TextLine):
                merge_at = len(prev)
                prev.absorb(line)
                page.remove(line)
                self.document.place_cursor(prev, merge_at)
            elif isinstance(prev, ImageBlock):
                page.remove(prev)
        self._play(False)

    # ---------- caret movement ----------
    def _neighbour_line(self, direction):
        line = self.cursor.line
        page = line.page
        blocks = page.blocks
        i = page.index_of(line) + direction
        while 0 <= i < len(blocks):
            if isinstance(blocks[i], TextLine):
                return blocks[i]
            i += direction
        return None

    def move_left(self, extend=False):
        cursor = self.cursor
        if extend and cursor.anchor is None:
            cursor.anchor = cursor.offset
        elif not extend:
            cursor.anchor = None
        if cursor.offset > 0:
            cursor.offset -= 1
        elif not extend:
            prev = self._neighbour_line(-1)
            if prev is not None:
                self.document.place_cursor(prev, len(prev))

    def move_right(self, extend=False):
        cursor = self.cursor
        if extend and cursor.anchor is None:
            cursor.anchor = cursor.offset
        elif not extend:
            cursor.anchor = None
        if cursor.offset < len(cursor.line):
            cursor.offset += 1
        elif not extend:
            nxt = self._neighbour_line(1)
            if nxt is not None:
                self.document.place_cursor(nxt, 0)

    def focus_page(self, page):
        """Put the caret at the start of page; an image-only page gets an empty line."""
        lines = page.text_lines()
        if lines:
            line = lines[0]
        else:
            line = TextLine(self.font_id)
            page.append(line)
        self.document.place_cursor(line, 0)
        return line

    # ---------- images ----------
    def insert_image(self, image):
        """Insert image after the cursor line, followed by a fresh empty line."""
        line = self.cursor.line
        page = line.page
        if page is None:
            page = self.document.active_page
            index = len(page.blocks)
        else:
            index = page.index_of(line) + 1
        page.insert(index, image)
        fresh = TextLine(self.font_id)
        page.insert(index + 1, fresh)
        self.document.place_cursor(fresh, 0)
        self._play(True)
        LOGGER.debug("Inserted image %s on page %d", image.name, page.number)
        return fresh

    def toggle_image_filter(self):
        """Toggle the newspaper filter of the image nearest above the cursor."""
        line = self.cursor.line
        page = line.page
        images = page.images()
        if not images:
            return None
        target = images[0]
        for block in page.blocks[:page.index_of(line)]:
            if isinstance(block, ImageBlock):
                target = block
        target.toggle_filter()
        return target

    # ---------- fonts ----------
    def apply_font(self, font_id):
        """Apply font to the selection, or make it the cursor line's default."""
        font_id = resolve(font_id)[0]
        self.font_id = font_id
        cursor = self.cursor
        sel = cursor.selection()
        if sel is not None:
            cursor.line.apply_font(sel[0], sel[1], font_id)
            cursor.offset = sel[1]
            cursor.anchor = None
        else:
            cursor.line.set_font(font_id)

    # ---------- document ----------
    def clear_document(self):
        self.document.clear(self.font_id)
        self._play(True)
