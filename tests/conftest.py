"""
Pytest configuration for the typewriter tests.

pygame runs headless: dummy video and audio drivers, fonts initialised once.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from typewriter.config import PageStyle
from typewriter.fonts import FontCache

from tests.fixtures import FakeSound


@pytest.fixture(scope="session", autouse=True)
def pygame_fonts():
    pygame.font.init()
    yield
    pygame.font.quit()


@pytest.fixture
def style():
    return PageStyle()


@pytest.fixture(scope="session")
def fonts(pygame_fonts):
    return FontCache()


@pytest.fixture
def sound():
    return FakeSound()
