"""Image ingestion: raw bytes in, decoded ImageBlock out."""
from __future__ import annotations

import io
from pathlib import Path

import pygame

from typewriter.errors import ImageDecodeError
from typewriter.log import get_logger
from typewriter.model import ImageBlock

LOGGER = get_logger(__name__)

MIME_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
}

# pygame's loader picks the decoder from a file-name hint
_HINTS = {mime: ext for ext, mime in MIME_TYPES.items() if ext != "jpeg"}


def guess_mime(name):
    ext = Path(name).suffix.lower().lstrip(".")
    return MIME_TYPES.get(ext, "image/png")


def is_image_path(name):
    return Path(name).suffix.lower().lstrip(".") in MIME_TYPES


def load_image(data, mime_type=None, name=None):
    """Decode image bytes into an ImageBlock; raise ImageDecodeError on failure."""
    if mime_type is None:
        mime_type = guess_mime(name) if name else "image/png"
    hint = _HINTS.get(mime_type, "png")
    if not data:
        raise ImageDecodeError(f"{name or 'image'}: no data")
    try:
        surface = pygame.image.load(io.BytesIO(data), f"image.{hint}")
    except (pygame.error, ValueError) as e:
        raise ImageDecodeError(f"{name or 'image'}: {e}") from e
    width, height = surface.get_size()
    if width == 0 or height == 0:
        raise ImageDecodeError(f"{name or 'image'}: empty image")
    return ImageBlock(surface, width, height, name=name)


def load_image_file(path):
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageDecodeError(f"{path}: {e}") from e
    return load_image(data, guess_mime(path.name), path.name)
