"""Synthesized typewriter sounds (key strikes and carriage return).

Everything here is fire-and-forget: without an audio device the sound
object stays silent and play() is a no-op.
"""
from __future__ import annotations

import random
import time

import numpy as np
import pygame

from typewriter.log import get_logger

LOGGER = get_logger(__name__)

SAMPLE_RATE = 22050
KEY_VARIANTS = 8
MIN_INTERVAL_MS = 50


# ---------- synth ----------
def _to_sound(data):
    stereo = np.column_stack([data, data])
    try:
        return pygame.sndarray.make_sound(np.ascontiguousarray(stereo))
    except (pygame.error, ValueError) as e:
        LOGGER.debug("Could not build sound: %s", e)
        return None


def make_click(pitch=1.0, rng=None):
    """Short filtered noise burst; pitch stretches or squeezes it."""
    rng = rng or np.random.default_rng()
    length = int(0.02 * SAMPLE_RATE / pitch)
    noise = rng.uniform(-1, 1, length)
    env = np.linspace(1.0, 0.0, length)
    t = np.arange(length) / SAMPLE_RATE
    body = 0.25 * np.sin(2 * np.pi * 900 * pitch * t) * np.exp(-120 * t)
    data = ((noise * env * 0.3 + body) * (2**15 - 1)).astype(np.int16)
    return _to_sound(data)


def make_return():
    """Carriage thunk followed by the margin bell."""
    t = np.linspace(0, 0.07, int(0.07 * SAMPLE_RATE))
    thunk = 0.9 * np.sin(2 * np.pi * 110.0 * t) * np.exp(-18 * t)
    thunk += 0.08 * np.sin(2 * np.pi * 2200 * t) * np.exp(-250 * t)
    tb = np.linspace(0, 0.14, int(0.14 * SAMPLE_RATE))
    bell = 0.6 * np.sin(2 * np.pi * 1500.0 * tb) * np.exp(-8 * tb)
    data = (np.concatenate([thunk, bell * 0.7]) * (2**15 - 1)).astype(np.int16)
    return _to_sound(data)


class TypewriterSound:
    """The audio collaborator: play(is_return) with a rate limit."""

    def __init__(self, volume=0.5, enabled=True, clock=None):
        self.volume = volume
        self.enabled = enabled
        self.min_interval = MIN_INTERVAL_MS / 1000.0
        self._clock = clock or time.monotonic
        self._last_play = None
        self._last_key = -1
        self.key_sounds = []
        self.return_sound = None

    def init(self):
        """Initialise the mixer and synthesize the sound bank."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, channels=2)
        except pygame.error as e:
            LOGGER.warning("Could not initialize audio: %s", e)
            return False
        rng = np.random.default_rng()
        # pitch variation 0.92 - 1.08 per variant
        self.key_sounds = [s for s in (make_click(0.92 + 0.16 * i / (KEY_VARIANTS - 1), rng)
                                       for i in range(KEY_VARIANTS)) if s is not None]
        self.return_sound = make_return()
        LOGGER.debug("Loaded %d key sounds", len(self.key_sounds))
        return True

    def play(self, is_return=False):
        if not self.enabled:
            return None
        now = self._clock()
        if self._last_play is not None and now - self._last_play < self.min_interval:
            return None
        self._last_play = now

        if is_return:
            snd = self.return_sound
        else:
            snd = self._pick_key()
        if snd is None:
            return None
        snd.set_volume(self.volume)
        snd.play()
        return snd

    def _pick_key(self):
        if not self.key_sounds:
            return None
        index = random.randrange(len(self.key_sounds))
        # never the same key twice in a row
        while index == self._last_key and len(self.key_sounds) > 1:
            index = random.randrange(len(self.key_sounds))
        self._last_key = index
        return self.key_sounds[index]

    def set_volume(self, value):
        self.volume = max(0.0, min(1.0, value))

    def toggle(self):
        self.enabled = not self.enabled
        if not self.enabled and pygame.mixer.get_init():
            pygame.mixer.stop()
        return self.enabled
