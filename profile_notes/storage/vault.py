"""Markdown vault storage: create notes and insert text into existing ones."""

import logging
import re
from pathlib import Path
from typing import Optional

from profile_notes.profile.models import NoteDocument

logger = logging.getLogger("profile_notes.storage")

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def sanitize_title(title: str) -> str:
    """Make a note title safe to use as a file name."""
    name = _UNSAFE_CHARS.sub(" ", title)
    name = re.sub(r"\s+", " ", name).strip().lstrip(".").strip()
    if not name:
        raise ValueError(f"Cannot build a file name from title: {title!r}")
    return name


class NoteVault:
    """A directory of markdown notes."""

    def __init__(self, root: str = "vault"):
        self.root = Path(root)

    def note_path(self, title: str, folder: str = "") -> Path:
        return self.root / folder / f"{sanitize_title(title)}.md"

    def create_note(self, document: NoteDocument, folder: str = "", overwrite: bool = False) -> Path:
        """Write ``document`` as a new note and return its path."""
        path = self.note_path(document.title, folder)
        if path.exists() and not overwrite:
            raise FileExistsError(f"Note already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document.body, encoding="utf-8")
        logger.info("Created note %s", path)
        return path

    def insert_text(self, path, text: str, line: Optional[int] = None, column: int = 0) -> Path:
        """Insert ``text`` into an existing note at a 0-based (line, column) cursor.

        ``line=None`` appends to the end of the note. Positions past the end of
        a line or of the note are clamped.
        """
        path = Path(path)
        if not path.is_absolute() and not path.exists():
            path = self.root / path
        if not path.exists():
            raise FileNotFoundError(f"Note not found: {path}")

        content = path.read_text(encoding="utf-8")
        offset = len(content) if line is None else _cursor_offset(content, line, column)
        path.write_text(content[:offset] + text + content[offset:], encoding="utf-8")
        logger.info("Inserted %d characters into %s", len(text), path)
        return path


def _cursor_offset(content: str, line: int, column: int) -> int:
    lines = content.splitlines(keepends=True)
    line = max(line, 0)
    if line >= len(lines):
        return len(content)

    offset = sum(len(ln) for ln in lines[:line])
    text = lines[line].rstrip("\r\n")
    return offset + min(max(column, 0), len(text))
