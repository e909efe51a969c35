"""
Builders and fakes shared by the unit tests.
"""

import pygame

from typewriter.model import ImageBlock, Page, TextLine


class FakeSound:
    """Records play() calls instead of making noise."""

    def __init__(self):
        self.calls = []
        self.enabled = True

    def play(self, is_return=False):
        self.calls.append(is_return)

    def toggle(self):
        self.enabled = not self.enabled
        return self.enabled


def make_line(text, font_id="special-elite"):
    line = TextLine(font_id)
    line.insert(0, text)
    return line


def make_image(width=400, height=200, color=(120, 60, 30)):
    surface = pygame.Surface((width, height))
    surface.fill(color)
    return ImageBlock(surface, width, height, name="test.png")


def make_page(texts, number=1):
    return Page(number, [make_line(t) for t in texts])


def fill_page(page, texts):
    """Replace the blocks of page with one text line per entry."""
    for block in list(page.blocks):
        page.remove(block)
    for t in texts:
        page.append(make_line(t))
    return page
