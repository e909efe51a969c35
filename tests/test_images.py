"""
Unit tests for image ingestion.
"""

import io

import pygame
import pytest

from typewriter.errors import ImageDecodeError
from typewriter.images import guess_mime, is_image_path, load_image, load_image_file


def png_bytes(width=30, height=20):
    surface = pygame.Surface((width, height))
    surface.fill((10, 200, 30))
    buf = io.BytesIO()
    pygame.image.save(surface, buf, "PNG")
    return buf.getvalue()


class TestImages:

    def test_decodes_png(self):
        block = load_image(png_bytes(), "image/png", "dot.png")
        assert (block.natural_width, block.natural_height) == (30, 20)
        assert block.name == "dot.png"
        assert not block.filter_enabled

    def test_garbage_raises(self):
        with pytest.raises(ImageDecodeError):
            load_image(b"definitely not an image", "image/png", "broken.png")

    def test_empty_data_raises(self):
        with pytest.raises(ImageDecodeError):
            load_image(b"", name="empty.png")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(png_bytes(12, 8))
        block = load_image_file(path)
        assert block.image.get_size() == (12, 8)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            load_image_file(tmp_path / "nope.png")

    @pytest.mark.parametrize("name,mime", [
        ("a.PNG", "image/png"),
        ("b.jpeg", "image/jpeg"),
        ("c.webp", "image/webp"),
        ("d.unknown", "image/png"),
    ])
    def test_guess_mime(self, name, mime):
        assert guess_mime(name) == mime

    def test_is_image_path(self):
        assert is_image_path("holiday.jpg")
        assert not is_image_path("notes.txt")
