"""Layout constants and runtime settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from typewriter.log import get_logger

LOGGER = get_logger(__name__)

# ---------- window constants (live view) ----------
WINDOW_W, WINDOW_H = 1000, 780
COMMAND_BAR_H = 96
BACKGROUND_COLOR = (30, 30, 30)

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class PageStyle:
    """Fixed page geometry shared by the live view and the exporter."""

    page_width: int = 800
    margin_x: int = 60
    margin_top: int = 80
    margin_bottom: int = 80
    line_height: int = 32
    border_width: int = 10
    border_padding: int = 25
    scale: int = 2

    image_max_height: int = 300
    image_inset: int = 40
    image_margin: int = 24
    image_fallback_size: Tuple[int, int] = (200, 150)

    # overflow budget for the live page
    max_page_height: int = 1200
    page_padding_top: int = 40
    page_padding_bottom: int = 40

    paper_color: Color = (245, 240, 230)
    ink_color: Color = (44, 24, 16)
    grain_amplitude: float = 8.0
    vignette_color: Color = (139, 115, 85)
    vignette_alpha: float = 0.15

    @property
    def text_width(self):
        return self.page_width - self.margin_x * 2

    @property
    def image_max_width(self):
        return self.text_width - self.image_inset


def _env_float(name, default, lo=None, hi=None):
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        LOGGER.warning("Ignoring %s=%r: out of range", name, raw)
        return default
    return value


def _env_bool(name, default):
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    LOGGER.warning("Ignoring %s=%r: not a boolean", name, raw)
    return default


@dataclass
class Settings:
    """Runtime settings, read from TYPEWRITER_* environment variables."""

    log_level: str = "INFO"
    font_id: str = "special-elite"
    font_dir: Optional[Path] = None
    download_dir: Path = field(default_factory=lambda: Path.home() / "Downloads")
    volume: float = 0.5
    sound_enabled: bool = True
    download_delay: float = 0.5

    @classmethod
    def from_env(cls):
        # imported here: fonts pulls in pygame
        from typewriter.fonts import FONT_REGISTRY, DEFAULT_FONT

        settings = cls()
        settings.log_level = os.environ.get("TYPEWRITER_LOG_LEVEL", settings.log_level)

        font_id = os.environ.get("TYPEWRITER_FONT")
        if font_id:
            if font_id in FONT_REGISTRY:
                settings.font_id = font_id
            else:
                LOGGER.warning("Unknown font %r, using %s", font_id, DEFAULT_FONT)

        font_dir = os.environ.get("TYPEWRITER_FONT_DIR")
        if font_dir:
            path = Path(font_dir).expanduser()
            if path.is_dir():
                settings.font_dir = path
            else:
                LOGGER.warning("Font directory %s does not exist", path)

        download_dir = os.environ.get("TYPEWRITER_DOWNLOAD_DIR")
        if download_dir:
            settings.download_dir = Path(download_dir).expanduser()

        settings.volume = _env_float("TYPEWRITER_VOLUME", settings.volume, 0.0, 1.0)
        settings.sound_enabled = _env_bool("TYPEWRITER_SOUND", settings.sound_enabled)
        settings.download_delay = _env_float("TYPEWRITER_DOWNLOAD_DELAY", settings.download_delay, 0.0)
        return settings
