"""Greedy word wrapping shared by the live view and the exporter."""
from __future__ import annotations


def wrap(text, measure_width, max_width):
    """Split text into lines no wider than max_width.

    Words are separated by single spaces. A word that is wider than
    max_width on its own is broken character by character. An empty text
    yields no lines at all; callers reserve one blank line for it.
    """
    if not text:
        return []

    lines = []
    current = ""
    for word in text.split(" "):
        if measure_width(word) > max_width:
            if current:
                lines.append(current)
                current = ""
            chunk = ""
            for ch in word:
                candidate = chunk + ch
                if measure_width(candidate) > max_width and chunk:
                    lines.append(chunk)
                    chunk = ch
                else:
                    chunk = candidate
            current = chunk
            continue

        candidate = current + " " + word if current else word
        if measure_width(candidate) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)
    return lines


def locate_lines(text, lines):
    """Map wrapped lines back to (start, end) offsets into text.

    Separating spaces swallowed at a line break belong to no line.
    """
    spans = []
    pos = 0
    for line in lines:
        while not text.startswith(line, pos) and pos < len(text) and text[pos] == " ":
            pos += 1
        start = pos
        pos = start + len(line)
        spans.append((start, pos))
        if pos < len(text) and text[pos] == " ":
            pos += 1
    return spans


def visual_line_count(lines):
    # a blank line still occupies one row
    return max(1, len(lines))


def fit_image(natural_width, natural_height, max_width, max_height, fallback=(200, 150)):
    """Scale an image into the box, keeping its aspect ratio, never upscaling."""
    width = natural_width or fallback[0]
    height = natural_height or fallback[1]
    scale = min(max_width / width, max_height / height, 1.0)
    return width * scale, height * scale
