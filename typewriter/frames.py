"""Decorative vintage page frames for exported pages.

Each style draws nested border rectangles and four corner ornaments around
the page, offset from the edge by border_width + padding. Coordinates are in
logical page units; the Pen applies the export oversampling factor.
"""
from __future__ import annotations

import enum
import math
import random

import pygame

BROWN = (139, 115, 85)
GOLD = (160, 128, 96)
UMBER = (122, 101, 80)
SAND = (168, 152, 128)
DARK = (107, 83, 68)
ACCENT = (154, 133, 112)


class FrameStyle(enum.Enum):
    ART_DECO = "art-deco"
    ELEGANT = "elegant"
    STREAMLINE = "streamline"
    CLASSIC = "classic"
    ART_NOUVEAU = "art-nouveau"


# ---------- geometry helpers ----------
def quad_curve(p0, c, p1, steps=12):
    pts = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        pts.append((u * u * p0[0] + 2 * u * t * c[0] + t * t * p1[0],
                    u * u * p0[1] + 2 * u * t * c[1] + t * t * p1[1]))
    return pts


def cubic_curve(p0, c1, c2, p1, steps=16):
    pts = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        pts.append((u ** 3 * p0[0] + 3 * u * u * t * c1[0] + 3 * u * t * t * c2[0] + t ** 3 * p1[0],
                    u ** 3 * p0[1] + 3 * u * u * t * c1[1] + 3 * u * t * t * c2[1] + t ** 3 * p1[1]))
    return pts


def ellipse_points(cx, cy, rx, ry, rotation, steps=24):
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    pts = []
    for i in range(steps):
        a = 2 * math.pi * i / steps
        x, y = rx * math.cos(a), ry * math.sin(a)
        pts.append((cx + x * cos_r - y * sin_r, cy + x * sin_r + y * cos_r))
    return pts


def place(points, origin, degrees):
    """Rotate local points by degrees and move them to origin."""
    a = math.radians(degrees)
    cos_a, sin_a = math.cos(a), math.sin(a)
    ox, oy = origin
    return [(ox + x * cos_a - y * sin_a, oy + x * sin_a + y * cos_a) for x, y in points]


class Pen:
    """Draws on an oversampled surface using logical coordinates."""

    def __init__(self, surface, scale=1):
        self.surface = surface
        self.scale = scale

    def _w(self, width):
        return max(1, int(round(width * self.scale)))

    def _pt(self, p):
        return (p[0] * self.scale, p[1] * self.scale)

    def stroke_rect(self, x, y, w, h, color, width):
        # centred on the path like a canvas stroke, pygame strokes inwards
        half = width / 2
        rect = pygame.Rect(
            round((x - half) * self.scale), round((y - half) * self.scale),
            round((w + width) * self.scale), round((h + width) * self.scale))
        pygame.draw.rect(self.surface, color, rect, self._w(width))

    def inset_rect(self, inset, page_w, page_h, color, width):
        self.stroke_rect(inset, inset, page_w - inset * 2, page_h - inset * 2, color, width)

    def polyline(self, points, color, width):
        pygame.draw.lines(self.surface, color, False, [self._pt(p) for p in points], self._w(width))

    def line(self, a, b, color, width):
        pygame.draw.line(self.surface, color, self._pt(a), self._pt(b), self._w(width))

    def fill_polygon(self, points, color):
        pygame.draw.polygon(self.surface, color, [self._pt(p) for p in points])

    def fill_circle(self, center, radius, color):
        pygame.draw.circle(self.surface, color, self._pt(center), radius * self.scale)


def _corners(width, height, offset):
    return [(offset, offset), (width - offset, offset),
            (width - offset, height - offset), (offset, height - offset)]


# ---------- the five styles ----------
def draw_art_deco(pen, width, height, offset):
    pen.inset_rect(offset - 8, width, height, BROWN, 3)
    pen.inset_rect(offset - 3, width, height, BROWN, 1)

    fan = 35
    for i, corner in enumerate(_corners(width, height, offset)):
        angle = i * 90
        for k in range(5):
            a = math.radians(k * 22.5)
            pen.polyline(place([(0, 0), (math.cos(a) * fan, math.sin(a) * fan)], corner, angle), BROWN, 1.5)
        pen.fill_polygon(place([(12, 0), (18, 6), (12, 12), (6, 6)], corner, angle), GOLD)


def draw_elegant(pen, width, height, offset):
    pen.inset_rect(offset - 10, width, height, UMBER, 4)
    pen.inset_rect(offset - 5, width, height, SAND, 1)
    pen.inset_rect(offset, width, height, UMBER, 2)

    scroll = 25
    for i, corner in enumerate(_corners(width, height, offset)):
        angle = i * 90
        pen.polyline(place(quad_curve((5, 0), (scroll, 0), (scroll, scroll)), corner, angle), UMBER, 2)
        pen.polyline(place(quad_curve((0, 5), (0, scroll), (scroll, scroll)), corner, angle), UMBER, 2)
        pen.fill_circle(place([(scroll - 5, scroll - 5)], corner, angle)[0], 3, UMBER)


def draw_streamline(pen, width, height, offset):
    pen.inset_rect(offset - 8, width, height, BROWN, 6)
    pen.inset_rect(offset + 5, width, height, BROWN, 2)

    length, spacing = 40, 4
    left, right = offset + 15, width - offset - 15
    for i in range(4):
        run = length - i * 8
        top = offset + 15 + i * spacing
        bottom = height - offset - 15 - i * spacing
        pen.line((left, top), (left + run, top), BROWN, 1.5)
        pen.line((right, top), (right - run, top), BROWN, 1.5)
        pen.line((left, bottom), (left + run, bottom), BROWN, 1.5)
        pen.line((right, bottom), (right - run, bottom), BROWN, 1.5)


def draw_classic(pen, width, height, offset):
    pen.inset_rect(offset - 12, width, height, DARK, 8)
    pen.inset_rect(offset - 4, width, height, SAND, 1)
    pen.inset_rect(offset + 2, width, height, BROWN, 2)

    bracket = 20
    for i, corner in enumerate(_corners(width, height, offset + 8)):
        pen.polyline(place([(0, bracket), (0, 0), (bracket, 0)], corner, i * 90), DARK, 3)


def draw_art_nouveau(pen, width, height, offset):
    pen.inset_rect(offset - 6, width, height, UMBER, 3)

    for edge, sign in ((offset, 1), (height - offset, -1)):
        x = offset + 30
        wave = [(x, edge + 2 * sign)]
        while x < width - offset - 30:
            wave.extend(quad_curve((x, edge + 2 * sign), (x + 5, edge - 3 * sign), (x + 10, edge + 2 * sign), 6)[1:])
            wave.extend(quad_curve((x + 10, edge + 2 * sign), (x + 15, edge + 7 * sign), (x + 20, edge + 2 * sign), 6)[1:])
            x += 20
        if len(wave) > 1:
            pen.polyline(wave, ACCENT, 1.5)

    for i, corner in enumerate(_corners(width, height, offset)):
        angle = i * 90
        spiral = cubic_curve((5, 5), (25, 5), (25, 25), (15, 25))
        spiral += cubic_curve((15, 25), (10, 25), (8, 20), (10, 15))[1:]
        pen.polyline(place(spiral, corner, angle), UMBER, 2)
        pen.fill_polygon(place(ellipse_points(20, 10, 6, 3, math.pi / 4), corner, angle), ACCENT)


_DRAWERS = {
    FrameStyle.ART_DECO: draw_art_deco,
    FrameStyle.ELEGANT: draw_elegant,
    FrameStyle.STREAMLINE: draw_streamline,
    FrameStyle.CLASSIC: draw_classic,
    FrameStyle.ART_NOUVEAU: draw_art_nouveau,
}


def draw_frame(style, pen, width, height, border_width, padding):
    offset = border_width + padding - 5
    _DRAWERS[style](pen, width, height, offset)


def random_frame(rng=random):
    return rng.choice(list(FrameStyle))
