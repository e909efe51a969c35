"""Native file dialogs and file writes (the file-system collaborator)."""
from __future__ import annotations

from pathlib import Path

# tkinter for file dialogs (the root window is created lazily per prompt)
import tkinter as tk
from tkinter import filedialog

from typewriter.errors import CollaboratorError, DialogCancelled
from typewriter.images import MIME_TYPES

TEXT_FILTERS = [("Text files", "*.txt"), ("All files", "*.*")]
PNG_FILTERS = [("PNG image", "*.png"), ("All files", "*.*")]
IMAGE_FILTERS = [("Images", " ".join("*." + ext for ext in MIME_TYPES)), ("All files", "*.*")]


def _ask(fn, **kwargs):
    try:
        root = tk.Tk()
    except tk.TclError as e:
        raise CollaboratorError(f"no dialog available: {e}") from e
    root.withdraw()
    try:
        return fn(parent=root, **kwargs)
    except tk.TclError as e:
        raise CollaboratorError(str(e)) from e
    finally:
        root.destroy()


class TkFileSystem:

    def prompt_save_file(self, default_name, filters):
        fname = _ask(filedialog.asksaveasfilename, initialfile=default_name,
                     defaultextension=Path(default_name).suffix, filetypes=filters)
        if not fname:
            raise DialogCancelled("save dialog cancelled")
        return Path(fname)

    def prompt_choose_directory(self):
        dirname = _ask(filedialog.askdirectory, title="Choose a folder for the PNG export", mustexist=True)
        if not dirname:
            raise DialogCancelled("directory dialog cancelled")
        return Path(dirname)

    def prompt_open_image(self):
        fname = _ask(filedialog.askopenfilename, filetypes=IMAGE_FILTERS)
        if not fname:
            return None
        return Path(fname)

    def write_text_file(self, path, text):
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise CollaboratorError(f"could not write {path}: {e}") from e

    def write_binary_file(self, path, data):
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise CollaboratorError(f"could not write {path}: {e}") from e
