"""Plain-text and PNG export with a download-folder fallback."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pygame

from typewriter.dialogs import PNG_FILTERS, TEXT_FILTERS
from typewriter.errors import CollaboratorError, DialogCancelled
from typewriter.log import get_logger

LOGGER = get_logger(__name__)

TEXT_NAME = "document.txt"
PNG_NAME = "document.png"
PAGE_SEPARATOR = "\n--- Page {n} ---\n\n"


def page_png_name(i):
    return f"document_page_{i}.png"


def document_text(document):
    """Every text line of every page, pages separated by a page marker."""
    text = ""
    pages = document.pages
    for i, page in enumerate(pages):
        for line in page.text_lines():
            text += line.text + "\n"
        if i < len(pages) - 1:
            text += PAGE_SEPARATOR.format(n=i + 2)
    return text.rstrip()


class DownloadFolder:
    """Same-process stand-in for a browser download: files land in a folder."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _target(self, name):
        path = self.directory / name
        stem, suffix = path.stem, path.suffix
        n = 1
        while path.exists():
            path = self.directory / f"{stem} ({n}){suffix}"
            n += 1
        return path

    def download(self, name, data):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._target(name)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(data)
        LOGGER.info("Downloaded %s", path)
        return path


@dataclass
class ExportResult:
    written: List[Path] = field(default_factory=list)
    downloaded: List[Path] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)

    @property
    def count(self):
        return len(self.written) + len(self.downloaded)


class ExportPipeline:
    """Sequences page renders and file writes, one page at a time."""

    def __init__(self, renderer, filesystem, fallback, delay=0.5, sleep=time.sleep):
        self.renderer = renderer
        self.filesystem = filesystem
        self.fallback = fallback
        self.delay = delay
        self.sleep = sleep

    def _download(self, name, data, result):
        try:
            result.downloaded.append(self.fallback.download(name, data))
        except OSError as e:
            LOGGER.error("Fallback download of %s failed: %s", name, e)

    # ---------- text ----------
    def export_text(self, document):
        result = ExportResult()
        text = document_text(document)
        if not text.strip():
            return result
        try:
            path = self.filesystem.prompt_save_file(TEXT_NAME, TEXT_FILTERS)
            if path is None:
                raise DialogCancelled("save dialog cancelled")
            self.filesystem.write_text_file(path, text)
            result.written.append(Path(path))
            LOGGER.info("Saved %s", path)
        except CollaboratorError as e:
            LOGGER.warning("Saving text failed (%s), downloading instead", e)
            self._download(TEXT_NAME, text, result)
        return result

    # ---------- png ----------
    def export_png(self, document):
        result = ExportResult()
        pages = document.content_pages()
        if not pages:
            return result

        rendered = {}

        def png(i):
            if i not in rendered:
                try:
                    rendered[i] = self.renderer.render_png(pages[i])
                except (pygame.error, MemoryError) as e:
                    LOGGER.error("Rendering page %d failed, skipping it: %s", pages[i].number, e)
                    result.skipped.append(pages[i].number)
                    rendered[i] = None
            return rendered[i]

        try:
            if len(pages) == 1:
                data = png(0)
                if data is None:
                    return result
                path = self.filesystem.prompt_save_file(PNG_NAME, PNG_FILTERS)
                if path is None:
                    raise DialogCancelled("save dialog cancelled")
                self.filesystem.write_binary_file(path, data)
                result.written.append(Path(path))
                LOGGER.info("PNG saved: %s", path)
                return result

            folder = self.filesystem.prompt_choose_directory()
            if folder is None:
                raise DialogCancelled("directory dialog cancelled")
        except CollaboratorError as e:
            LOGGER.warning("PNG export failed (%s), downloading instead", e)
            self._download_all(pages, png, result)
            return result

        for i in range(len(pages)):
            name = page_png_name(i + 1)
            path = Path(folder) / name
            data = png(i)
            if data is None:
                continue
            try:
                self.filesystem.write_binary_file(path, data)
                result.written.append(path)
                LOGGER.info("PNG saved: %s", path)
            except CollaboratorError as e:
                LOGGER.error("Writing %s failed (%s), downloading it instead", path, e)
                self._download(name, data, result)
        LOGGER.info("%d pages exported", len(pages) - len(result.skipped))
        return result

    def _download_all(self, pages, png, result):
        single = len(pages) == 1
        for i in range(len(pages)):
            name = PNG_NAME if single else page_png_name(i + 1)
            data = png(i)
            if data is None:
                continue
            self._download(name, data, result)
            # one download per delay interval
            if i < len(pages) - 1:
                self.sleep(self.delay)
