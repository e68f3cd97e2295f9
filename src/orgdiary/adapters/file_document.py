"""File-based document adapter."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileDocument:
    """
    A journal file held in memory.

    Implements Document protocol. The file is read once on construction
    and written back by ``save()`` only if something changed. Text is held
    with LF line endings; a file that uses CRLF is written back with CRLF,
    so saving leaves untouched lines byte-for-byte the same.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self.newline = "\n"
        self._text = ""
        if self.path.exists():
            with self.path.open(encoding="utf-8", newline="") as f:
                raw = f.read()
            if "\r\n" in raw:
                self.newline = "\r\n"
                raw = raw.replace("\r\n", "\n")
            self._text = raw
        self._dirty = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def dirty(self) -> bool:
        """Whether there are unsaved changes."""
        return self._dirty

    def insert(self, offset: int, content: str) -> None:
        """Insert content at a character offset."""
        if not 0 <= offset <= len(self._text):
            raise IndexError(f"Offset {offset} outside document of length {len(self._text)}")
        if not content:
            return
        self._text = self._text[:offset] + content + self._text[offset:]
        self._dirty = True

    def append(self, content: str) -> None:
        """Append content at the end."""
        self.insert(len(self._text), content)

    def save(self) -> None:
        """Write the text back to the file if it changed."""
        if not self._dirty:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self._text, encoding="utf-8", newline=self.newline)
        self._dirty = False
        logger.debug(f"Saved {self.path}")
