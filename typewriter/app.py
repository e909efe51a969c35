"""Typewriter window: paper, command bar, page navigation.

- Clickable buttons: CLEAR, SAVE TXT, EXPORT PNG, IMAGE, FONT, FILTER, SOUND, page arrows, QUIT
- Up/Down arrows scroll the view only (do not move the cursor)
- PageUp/PageDown switch pages, Shift+Left/Right selects within a line, Ctrl+V pastes
- Image files dropped on the window are inserted below the cursor line
"""
from __future__ import annotations

import argparse
import sys

import pygame

from typewriter.config import BACKGROUND_COLOR, COMMAND_BAR_H, WINDOW_H, WINDOW_W, PageStyle, Settings
from typewriter.dialogs import TkFileSystem
from typewriter.editor import Editor
from typewriter.errors import CollaboratorError, ImageDecodeError
from typewriter.export import DownloadFolder, ExportPipeline
from typewriter.fonts import FONT_REGISTRY, FontCache, next_font
from typewriter.images import is_image_path, load_image_file
from typewriter.log import configure_logging, get_logger
from typewriter.model import Document
from typewriter.navigator import PageNavigator
from typewriter.overflow import OverflowController
from typewriter.render import CanvasRenderer
from typewriter.sound import TypewriterSound
from typewriter.view import PageView

LOGGER = get_logger(__name__)

# paper area
PAPER_X, PAPER_Y = 60, 40
PAPER_W, PAPER_H = WINDOW_W - 2 * PAPER_X, WINDOW_H - 140
COMMAND_BAR_Y = WINDOW_H - COMMAND_BAR_H

# modifier keys that never type anything
MODIFIER_KEYS = {
    pygame.K_LSHIFT, pygame.K_RSHIFT,
    pygame.K_LCTRL, pygame.K_RCTRL,
    pygame.K_LALT, pygame.K_RALT,
    getattr(pygame, 'K_LMETA', None), getattr(pygame, 'K_RMETA', None),
    getattr(pygame, 'K_CAPSLOCK', None), getattr(pygame, 'K_NUMLOCK', None)
}
MODIFIER_KEYS = {k for k in MODIFIER_KEYS if k is not None}

# order matters for display
BUTTONS = [
    {"label": "CLEAR", "id": "clear"},
    {"label": "SAVE TXT", "id": "save_text"},
    {"label": "EXPORT PNG", "id": "export_png"},
    {"label": "IMAGE", "id": "insert_image"},
    {"label": "FONT", "id": "font"},
    {"label": "FILTER", "id": "filter"},
    {"label": "SOUND", "id": "sound"},
    {"label": "<", "id": "prev_page"},
    {"label": ">", "id": "next_page"},
    {"label": "QUIT", "id": "quit"},
]


class AppContext:
    """Everything the typewriter owns, wired together once."""

    def __init__(self, settings, style, fonts, document, editor, navigator,
                 view, overflow, renderer, exporter, sound, filesystem):
        self.settings = settings
        self.style = style
        self.fonts = fonts
        self.document = document
        self.editor = editor
        self.navigator = navigator
        self.view = view
        self.overflow = overflow
        self.renderer = renderer
        self.exporter = exporter
        self.sound = sound
        self.filesystem = filesystem

    @classmethod
    def create(cls, settings=None, filesystem=None, sound=None, style=None):
        settings = settings or Settings()
        style = style or PageStyle()
        fonts = FontCache(settings.font_dir)
        document = Document(settings.font_id)
        if sound is None:
            sound = TypewriterSound(settings.volume, settings.sound_enabled)
        editor = Editor(document, sound, settings.font_id)
        navigator = PageNavigator(document)
        view = PageView(document, fonts, style)
        overflow = OverflowController(document, navigator, view.measure_block, view.settle, style)
        renderer = CanvasRenderer(style, fonts)
        filesystem = filesystem or TkFileSystem()
        exporter = ExportPipeline(renderer, filesystem, DownloadFolder(settings.download_dir),
                                  delay=settings.download_delay)
        return cls(settings, style, fonts, document, editor, navigator,
                   view, overflow, renderer, exporter, sound, filesystem)

    def after_edit(self):
        self.view.settle()
        moved = self.overflow.check()
        if moved:
            self.view.settle()
        self.navigator.refresh()
        return moved

    # ---------- actions ----------
    def clear(self):
        self.editor.clear_document()
        self.navigator.reset()
        self.view.settle()

    def insert_image_file(self, path):
        try:
            block = load_image_file(path)
        except ImageDecodeError as e:
            LOGGER.error("Failed to load image: %s", e)
            return None
        self.editor.insert_image(block)
        self.after_edit()
        return block

    def prompt_image(self):
        try:
            path = self.filesystem.prompt_open_image()
        except CollaboratorError as e:
            LOGGER.warning("Image dialog failed: %s", e)
            return None
        if path is None:
            return None
        return self.insert_image_file(path)

    def cycle_font(self):
        font_id = next_font(self.editor.font_id)
        self.editor.apply_font(font_id)
        self.after_edit()
        return font_id

    def toggle_filter(self):
        image = self.editor.toggle_image_filter()
        self.view.settle()
        return image

    def go_to(self, index):
        if not self.navigator.go_to(index):
            return False
        page = self.document.active_page
        if self.document.cursor.line.page is not page:
            self.editor.focus_page(page)
            self.after_edit()
        else:
            self.view.settle()
        return True

    def paste(self, text):
        if not text:
            return 0
        self.editor.paste(text)
        return self.after_edit()

    def close(self):
        if pygame.mixer.get_init():
            pygame.mixer.quit()


class TypewriterApp:
    """The window and its event loop."""

    def __init__(self, ctx):
        self.ctx = ctx
        self.screen = pygame.display.set_mode((WINDOW_W, WINDOW_H))
        pygame.display.set_caption("Typewriter")
        self.clock = pygame.time.Clock()
        self.ui_font = pygame.font.SysFont("Courier New", 16)
        self.button_rects = []
        self.scroll_px = 0
        self.running = True
        self.action_map = {
            "clear": self.action_clear,
            "save_text": self.action_save_text,
            "export_png": self.action_export_png,
            "insert_image": self.action_insert_image,
            "font": self.action_font,
            "filter": self.action_filter,
            "sound": self.action_sound,
            "prev_page": lambda: self.change_page(-1),
            "next_page": lambda: self.change_page(1),
            "quit": self.action_quit,
        }

    @property
    def zoom(self):
        return PAPER_W / self.ctx.style.page_width

    # ---------- actions invoked by buttons ----------
    def action_clear(self):
        self.ctx.clear()
        self.scroll_px = 0

    def action_save_text(self):
        result = self.ctx.exporter.export_text(self.ctx.document)
        if result.count:
            LOGGER.info("Text saved to %s", ", ".join(str(p) for p in result.written + result.downloaded))

    def action_export_png(self):
        self.ctx.exporter.export_png(self.ctx.document)

    def action_insert_image(self):
        if self.ctx.prompt_image() is not None:
            self.ensure_caret_visible()

    def action_font(self):
        self.ctx.cycle_font()

    def action_filter(self):
        self.ctx.toggle_filter()

    def action_sound(self):
        self.ctx.sound.toggle()

    def action_paste(self):
        try:
            text = pygame.scrap.get_text()
        except pygame.error as e:
            LOGGER.warning("Clipboard unavailable: %s", e)
            return
        self.ctx.paste(text)

    def action_quit(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))

    def change_page(self, step):
        self.ctx.go_to(self.ctx.navigator.current_index + step)
        self.scroll_px = 0

    # ---------- scrolling ----------
    def max_scroll(self):
        page = self.ctx.document.active_page
        sheet_h = self.ctx.view.sheet_height(page) * self.zoom
        return max(0, int(sheet_h - PAPER_H))

    def scroll_by(self, dy):
        self.scroll_px = max(0, min(self.max_scroll(), self.scroll_px + dy))

    def ensure_caret_visible(self):
        page = self.ctx.document.active_page
        caret = self.ctx.view.caret_rect(page)
        if caret is None:
            return
        top = caret.y * self.zoom
        bottom = (caret.bottom + self.ctx.style.line_height) * self.zoom
        if top < self.scroll_px:
            self.scroll_px = int(top)
        elif bottom > self.scroll_px + PAPER_H:
            self.scroll_px = int(bottom - PAPER_H)
        self.scroll_by(0)

    # ---------- drawing ----------
    def draw(self):
        ctx = self.ctx
        screen = self.screen
        screen.fill(BACKGROUND_COLOR)

        page = ctx.document.active_page
        sheet = ctx.view.draw(page)
        scaled = pygame.transform.smoothscale(
            sheet, (PAPER_W, int(sheet.get_height() * self.zoom)))
        screen.set_clip(pygame.Rect(PAPER_X, PAPER_Y, PAPER_W, PAPER_H))
        screen.blit(scaled, (PAPER_X, PAPER_Y - self.scroll_px))
        screen.set_clip(None)

        # command bar background
        pygame.draw.rect(screen, (45, 45, 45), (0, COMMAND_BAR_Y, WINDOW_W, COMMAND_BAR_H))
        gap = 8
        x = 12
        y = COMMAND_BAR_Y + 10
        button_h = 36
        self.button_rects.clear()
        for b in BUTTONS:
            disabled = (b["id"] == "prev_page" and not ctx.navigator.can_prev) or \
                       (b["id"] == "next_page" and not ctx.navigator.can_next)
            text_surf = self.ui_font.render(b["label"], True, (120, 120, 120) if disabled else (240, 240, 240))
            w = max(40, text_surf.get_width() + 24)
            rect = pygame.Rect(x, y, w, button_h)
            pygame.draw.rect(screen, (70, 70, 70), rect, border_radius=8)
            pygame.draw.rect(screen, (90, 90, 90), rect, 2, border_radius=8)
            screen.blit(text_surf, (x + (w - text_surf.get_width()) // 2, y + (button_h - text_surf.get_height()) // 2))
            if not disabled:
                self.button_rects.append((rect, b["id"]))
            x += w + gap

        # small status text
        s_surf = self.ui_font.render(self.status_text(), True, (200, 200, 200))
        screen.blit(s_surf, (12, COMMAND_BAR_Y + 58))

    def status_text(self):
        ctx = self.ctx
        chars, words = ctx.document.counts()
        cursor = ctx.document.cursor
        family = FONT_REGISTRY[cursor.line.font_at(cursor.offset)].display_family
        return (f"{ctx.navigator.indicator}   {chars} chars   {words} {'word' if words == 1 else 'words'}"
                f"   Font: {family}   Sound: {'on' if ctx.sound.enabled else 'off'}")

    # ---------- input ----------
    def handle_key(self, ev):
        ctx = self.ctx
        editor = ctx.editor
        shift = bool(ev.mod & pygame.KMOD_SHIFT)

        if ev.key == pygame.K_ESCAPE:
            self.running = False
            return
        # Up/Down arrows: move view only
        if ev.key == pygame.K_UP:
            self.scroll_by(-int(ctx.style.line_height * self.zoom))
            return
        if ev.key == pygame.K_DOWN:
            self.scroll_by(int(ctx.style.line_height * self.zoom))
            return
        if ev.key == pygame.K_PAGEUP:
            self.change_page(-1)
            return
        if ev.key == pygame.K_PAGEDOWN:
            self.change_page(1)
            return
        if ev.key in MODIFIER_KEYS:
            return
        if ev.key == pygame.K_LEFT:
            editor.move_left(extend=shift)
        elif ev.key == pygame.K_RIGHT:
            editor.move_right(extend=shift)
        elif ev.key == pygame.K_v and ev.mod & (pygame.KMOD_CTRL | pygame.KMOD_META):
            self.action_paste()
        elif ev.key == pygame.K_RETURN:
            editor.new_line()
            ctx.after_edit()
        elif ev.key == pygame.K_BACKSPACE:
            editor.backspace()
            ctx.after_edit()
        elif ev.unicode and ev.unicode.isprintable() and not ev.mod & (pygame.KMOD_CTRL | pygame.KMOD_META):
            editor.type_text(ev.unicode)
            ctx.after_edit()
        else:
            return
        self.ensure_caret_visible()

    def handle_event(self, ev):
        if ev.type == pygame.QUIT:
            self.running = False
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            mx, my = ev.pos
            if my >= COMMAND_BAR_Y:
                for rect, bid in self.button_rects:
                    if rect.collidepoint(mx, my):
                        fn = self.action_map.get(bid)
                        if fn:
                            fn()
                        break
        elif ev.type == pygame.MOUSEWHEEL:
            self.scroll_by(-ev.y * int(self.ctx.style.line_height * self.zoom))
        elif ev.type == pygame.DROPFILE:
            if is_image_path(ev.file):
                if self.ctx.insert_image_file(ev.file) is not None:
                    self.ensure_caret_visible()
            else:
                LOGGER.info("Ignoring dropped file %s", ev.file)
        elif ev.type == pygame.KEYDOWN:
            self.handle_key(ev)

    # ---------- main loop ----------
    def run(self):
        while self.running:
            for ev in pygame.event.get():
                self.handle_event(ev)
            self.draw()
            pygame.display.flip()
            self.clock.tick(60)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Distraction-free typewriter with paginated PNG export")
    parser.add_argument("--font", choices=sorted(FONT_REGISTRY), help="Font for new text")
    parser.add_argument("--no-sound", action="store_true", help="Start with sound switched off")
    parser.add_argument("--log-level", help="Logging level (default from TYPEWRITER_LOG_LEVEL or INFO)")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.font:
        settings.font_id = args.font
    if args.no_sound:
        settings.sound_enabled = False
    configure_logging(args.log_level or settings.log_level)

    pygame.init()
    pygame.key.set_repeat(0)
    ctx = AppContext.create(settings)
    ctx.sound.init()
    try:
        TypewriterApp(ctx).run()
    finally:
        ctx.close()
        pygame.quit()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
