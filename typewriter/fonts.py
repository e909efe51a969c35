"""Fixed registry of the ten typewriter fonts and a pygame font cache.

Both the live page view and the canvas renderer resolve fonts through this
module, so a given font id always yields the same family and point size and
the two layout paths wrap text identically.
"""
from __future__ import annotations

from dataclasses import dataclass

import pygame

from typewriter.log import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FontSpec:
    display_family: str
    canvas_size: int


FONT_REGISTRY = {
    "special-elite": FontSpec("Special Elite", 18),
    "american-typewriter": FontSpec("American Typewriter", 17),
    "adler": FontSpec("Adler", 22),
    "remington": FontSpec("Remington", 20),
    "1942": FontSpec("1942", 20),
    "berlin-email": FontSpec("Berlin Email", 18),
    "cutmeout": FontSpec("CutMeOut", 20),
    "facets": FontSpec("Facets", 20),
    "hofstaetten": FontSpec("Hofstaetten", 18),
    "zent": FontSpec("Zent", 20),
}

DEFAULT_FONT = "special-elite"

# used when none of the registry families is installed
FALLBACK_FAMILY = "Courier New"

FONT_FILE_SUFFIXES = (".ttf", ".otf")


def resolve(font_id):
    """Return (font_id, FontSpec), falling back to the default font."""
    if font_id in FONT_REGISTRY:
        return font_id, FONT_REGISTRY[font_id]
    return DEFAULT_FONT, FONT_REGISTRY[DEFAULT_FONT]


def next_font(font_id):
    ids = list(FONT_REGISTRY)
    font_id, _ = resolve(font_id)
    return ids[(ids.index(font_id) + 1) % len(ids)]


class FontCache:
    """Loads pygame fonts by (font_id, scale)."""

    def __init__(self, font_dir=None):
        self.font_dir = font_dir
        self._fonts = {}

    def get(self, font_id, scale=1):
        font_id, spec = resolve(font_id)
        key = (font_id, scale)
        font = self._fonts.get(key)
        if font is None:
            font = self._load(font_id, spec, spec.canvas_size * scale)
            self._fonts[key] = font
        return font

    def _load(self, font_id, spec, size):
        if not pygame.font.get_init():
            pygame.font.init()
        if self.font_dir is not None:
            for suffix in FONT_FILE_SUFFIXES:
                path = self.font_dir / (font_id + suffix)
                if path.is_file():
                    try:
                        return pygame.font.Font(str(path), size)
                    except (pygame.error, OSError) as e:
                        LOGGER.warning("Could not load font file %s: %s", path, e)
        if pygame.font.match_font(spec.display_family):
            return pygame.font.SysFont(spec.display_family, size)
        # SysFont falls back to pygame's bundled font if this is missing too
        return pygame.font.SysFont(FALLBACK_FAMILY, size)

    def measure_width(self, font_id, scale=1):
        """Return a text-metrics width function for wrap()."""
        font = self.get(font_id, scale)

        def measure(s):
            return font.size(s)[0]

        return measure
