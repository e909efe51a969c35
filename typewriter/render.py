"""Export renderer: re-lays out a page and paints it as an aged paper sheet.

Layout happens in logical page units with pygame text metrics, independently
of the live view; drawing happens on a surface oversampled by style.scale.
Frame choice, grain and vignette are random, but never affect the layout.
"""
from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pygame

from typewriter.config import PageStyle
from typewriter.fonts import FontCache
from typewriter.frames import Pen, draw_frame, random_frame
from typewriter.layout import fit_image, locate_lines, visual_line_count, wrap
from typewriter.log import get_logger
from typewriter.model import ImageBlock

LOGGER = get_logger(__name__)

# image baseline offset relative to the running text baseline
IMAGE_TOP_NUDGE = 12


@dataclass
class RenderItem:
    kind: str  # "text", "blank" or "image"
    height: float
    line: object = None
    start: int = 0
    end: int = 0
    text: str = ""
    image: Optional[ImageBlock] = None
    width: float = 0.0


@dataclass
class PageLayout:
    width: int
    height: float
    content_height: float
    items: List[RenderItem] = field(default_factory=list)

    def wrapped_lines(self):
        return [item.text for item in self.items if item.kind == "text"]


# ---------- pixel effects ----------
def add_paper_texture(surface, amplitude, rng):
    """Perturb every pixel by the same random offset on all channels."""
    pixels = pygame.surfarray.pixels3d(surface)
    noise = (rng.random(pixels.shape[:2]) - 0.5) * amplitude
    grained = pixels.astype(np.float32) + noise[..., None]
    pixels[...] = np.clip(grained, 0, 255).astype(np.uint8)
    del pixels


def add_aging_effect(surface, color, alpha):
    """Radial vignette, transparent in the middle and darkest at the corners."""
    w, h = surface.get_size()
    inner = min(w, h) * 0.3
    outer = max(w, h) * 0.8
    xs = np.arange(w, dtype=np.float32)[:, None] - w / 2
    ys = np.arange(h, dtype=np.float32)[None, :] - h / 2
    dist = np.sqrt(xs * xs + ys * ys)
    t = np.clip((dist - inner) / (outer - inner), 0.0, 1.0)
    a = (t * alpha)[..., None]
    pixels = pygame.surfarray.pixels3d(surface)
    blended = pixels.astype(np.float32) * (1 - a) + np.asarray(color, dtype=np.float32) * a
    pixels[...] = np.clip(blended, 0, 255).astype(np.uint8)
    del pixels


def newspaper_filter(image):
    """Grayscale, contrast 1.3, brightness 1.1, drawn at 85% opacity."""
    out = image.copy()
    pixels = pygame.surfarray.pixels3d(out)
    rgb = pixels.astype(np.float32)
    gray = rgb[..., 0] * 0.2126 + rgb[..., 1] * 0.7152 + rgb[..., 2] * 0.0722
    gray = ((gray - 128.0) * 1.3 + 128.0) * 1.1
    gray = np.clip(gray, 0, 255).astype(np.uint8)
    pixels[...] = gray[..., None]
    del pixels
    out.set_alpha(int(255 * 0.85))
    return out


def as_rgba(image):
    if image.get_bitsize() in (24, 32):
        return image
    out = pygame.Surface(image.get_size(), pygame.SRCALPHA)
    out.blit(image, (0, 0))
    return out


class CanvasRenderer:
    """Renders pages to raster surfaces and PNG bytes."""

    def __init__(self, style=None, fonts=None, frame_chooser=None, rng=None):
        self.style = style or PageStyle()
        self.fonts = fonts or FontCache()
        self.frame_chooser = frame_chooser or random_frame
        self.rng = rng if rng is not None else np.random.default_rng()

    # ---------- pass 1 ----------
    def measure(self, page):
        style = self.style
        items = []
        total = 0.0
        for block in page.blocks:
            if isinstance(block, ImageBlock):
                w, h = fit_image(block.natural_width, block.natural_height,
                                 style.image_max_width, style.image_max_height,
                                 style.image_fallback_size)
                items.append(RenderItem("image", h + style.image_margin, image=block, width=w))
                total += h + style.image_margin
                continue

            text = block.text
            if not text.strip():
                items.append(RenderItem("blank", style.line_height, line=block))
                total += style.line_height
                continue

            measure = self.fonts.measure_width(block.resolved_font())
            lines = wrap(text, measure, style.text_width)
            for wrapped, (start, end) in zip(lines, locate_lines(text, lines)):
                items.append(RenderItem("text", style.line_height, line=block,
                                        start=start, end=end, text=wrapped))
            total += style.line_height * visual_line_count(lines)

        height = style.margin_top + total + style.margin_bottom
        return PageLayout(style.page_width, height, total, items)

    # ---------- pass 2 ----------
    def render(self, page, frame=None):
        style = self.style
        layout = self.measure(page)
        scale = style.scale
        surface = pygame.Surface((layout.width * scale, int(math.ceil(layout.height * scale))), 0, 32)
        surface.fill(style.paper_color)

        add_paper_texture(surface, style.grain_amplitude, self.rng)

        frame = frame or self.frame_chooser()
        draw_frame(frame, Pen(surface, scale), layout.width, layout.height,
                   style.border_width, style.border_padding)

        y = style.margin_top
        for item in layout.items:
            if item.kind == "text":
                self._draw_text(surface, item, y)
                y += style.line_height
            elif item.kind == "image":
                self._draw_image(surface, item, y)
                y += item.height
            else:
                y += style.line_height

        add_aging_effect(surface, style.vignette_color, style.vignette_alpha)
        LOGGER.debug("Rendered page %s: %d items, %s frame, height %.0f",
                     page.number, len(layout.items), frame.value, layout.height)
        return surface

    def _draw_text(self, surface, item, baseline):
        scale = self.style.scale
        x = self.style.margin_x * scale
        for text, font_id in item.line.segments(item.start, item.end):
            font = self.fonts.get(font_id, scale)
            glyphs = font.render(text, True, self.style.ink_color)
            surface.blit(glyphs, (x, baseline * scale - font.get_ascent()))
            x += glyphs.get_width()

    def _draw_image(self, surface, item, y):
        style = self.style
        scale = style.scale
        block = item.image
        h = item.height - style.image_margin
        x = style.margin_x + (style.text_width - item.width) / 2
        top = y - style.line_height + IMAGE_TOP_NUDGE
        size = (max(1, round(item.width * scale)), max(1, round(h * scale)))
        image = pygame.transform.smoothscale(as_rgba(block.image), size)
        if block.filter_enabled:
            image = newspaper_filter(image)
        surface.blit(image, (round(x * scale), round(top * scale)))

    def render_png(self, page, frame=None):
        surface = self.render(page, frame)
        buf = io.BytesIO()
        pygame.image.save(surface, buf, "PNG")
        return buf.getvalue()
