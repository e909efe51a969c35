"""Live page view: lays out the active page and measures block geometry."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import pygame

from typewriter.config import PageStyle
from typewriter.layout import fit_image, locate_lines, wrap
from typewriter.model import ImageBlock
from typewriter.render import as_rgba, newspaper_filter

RULE_COLOR = (230, 230, 220)
CARET_COLOR = (90, 20, 20)
SELECTION_COLOR = (200, 180, 140)


@dataclass
class Row:
    start: int
    end: int
    rect: pygame.Rect


@dataclass
class BlockBox:
    block: object
    rect: pygame.Rect
    rows: List[Row] = field(default_factory=list)
    image_size: Tuple[int, int] = (0, 0)


class PageView:
    """Off-screen sheet for the active page.

    Block heights come from the laid-out row rectangles, which is what the
    overflow controller measures. Call settle() after the document changed
    so the next measurement sees fresh geometry.
    """

    def __init__(self, document, fonts, style=None):
        self.document = document
        self.fonts = fonts
        self.style = style or PageStyle()
        self._boxes = {}
        self._page_boxes = {}

    # ---------- layout ----------
    def settle(self):
        self._boxes.clear()
        self._page_boxes.clear()

    def _line_rows(self, line, top):
        style = self.style
        text = line.text
        rows = []
        if text.strip():
            font = self.fonts.get(line.resolved_font())
            lines = wrap(text, lambda s: font.size(s)[0], style.text_width)
            for start, end in locate_lines(text, lines):
                rows.append(Row(start, end, pygame.Rect(style.margin_x, top, style.text_width, style.line_height)))
                top += style.line_height
        if not rows:
            rows.append(Row(0, len(text), pygame.Rect(style.margin_x, top, style.text_width, style.line_height)))
        return rows

    def _layout_block(self, block, top):
        style = self.style
        if isinstance(block, ImageBlock):
            w, h = fit_image(block.natural_width, block.natural_height,
                             style.image_max_width, style.image_max_height,
                             style.image_fallback_size)
            rect = pygame.Rect(style.margin_x, top, style.text_width, round(h) + style.image_margin)
            return BlockBox(block, rect, image_size=(round(w), round(h)))
        rows = self._line_rows(block, top)
        rect = rows[0].rect.unionall([r.rect for r in rows[1:]])
        return BlockBox(block, rect, rows)

    def layout(self, page):
        boxes = self._page_boxes.get(id(page))
        if boxes is not None:
            return boxes
        boxes = []
        top = self.style.page_padding_top
        for block in page.blocks:
            box = self._layout_block(block, top)
            self._boxes[id(block)] = box
            boxes.append(box)
            top = box.rect.bottom
        self._page_boxes[id(page)] = boxes
        return boxes

    def box_for(self, block):
        box = self._boxes.get(id(block))
        if box is None or box.block is not block:
            page = block.page
            if page is None:
                return self._layout_block(block, 0)
            self._page_boxes.pop(id(page), None)
            self.layout(page)
            box = self._boxes[id(block)]
        return box

    def measure_block(self, block):
        return self.box_for(block).rect.height

    def content_height(self, page):
        boxes = self.layout(page)
        return boxes[-1].rect.bottom - self.style.page_padding_top if boxes else 0

    def sheet_height(self, page):
        style = self.style
        return max(style.max_page_height,
                   style.page_padding_top + self.content_height(page) + style.page_padding_bottom)

    # ---------- drawing ----------
    def _x_at(self, line, row, offset):
        x = row.rect.x
        for text, font_id in line.segments(row.start, min(offset, row.end)):
            x += self.fonts.get(font_id).size(text)[0]
        return x

    def _row_at(self, box, offset):
        for row in box.rows:
            if offset <= row.end:
                return row
        return box.rows[-1]

    def caret_rect(self, page):
        cursor = self.document.cursor
        if cursor.line.page is not page:
            return None
        box = self.box_for(cursor.line)
        row = self._row_at(box, cursor.offset)
        x = self._x_at(cursor.line, row, cursor.offset)
        tick_h = int(self.style.line_height * 0.6)
        return pygame.Rect(x, row.rect.y + (self.style.line_height - tick_h) // 2, 3, tick_h)

    def draw(self, page):
        """Paint the page onto a fresh sheet surface in logical units."""
        style = self.style
        sheet = pygame.Surface((style.page_width, self.sheet_height(page)), 0, 32)
        sheet.fill(style.paper_color)

        y = style.page_padding_top
        while y < sheet.get_height() - style.page_padding_bottom:
            pygame.draw.line(sheet, RULE_COLOR, (10, y), (style.page_width - 10, y), 1)
            y += style.line_height

        cursor = self.document.cursor
        for box in self.layout(page):
            block = box.block
            if isinstance(block, ImageBlock):
                self._draw_image(sheet, box)
                continue
            sel = cursor.selection() if cursor.line is block else None
            for row in box.rows:
                if sel is not None and sel[0] < row.end and sel[1] > row.start:
                    x0 = self._x_at(block, row, max(sel[0], row.start))
                    x1 = self._x_at(block, row, min(sel[1], row.end))
                    pygame.draw.rect(sheet, SELECTION_COLOR, (x0, row.rect.y, x1 - x0, row.rect.height))
                x = row.rect.x
                for text, font_id in block.segments(row.start, row.end):
                    font = self.fonts.get(font_id)
                    glyphs = font.render(text, True, style.ink_color)
                    sheet.blit(glyphs, (x, row.rect.y + (style.line_height - font.get_height()) // 2))
                    x += glyphs.get_width()

        caret = self.caret_rect(page)
        if caret is not None:
            pygame.draw.rect(sheet, CARET_COLOR, caret)
        return sheet

    def _draw_image(self, sheet, box):
        style = self.style
        w, h = box.image_size
        scaled = pygame.transform.smoothscale(as_rgba(box.block.image), (max(1, w), max(1, h)))
        if box.block.filter_enabled:
            scaled = newspaper_filter(scaled)
        x = style.margin_x + (style.text_width - w) // 2
        sheet.blit(scaled, (x, box.rect.y + style.image_margin // 2))
