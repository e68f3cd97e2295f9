"""Document handle interface."""

from pathlib import Path
from typing import Protocol


class Document(Protocol):
    """The open text of one monthly journal file.

    Mutations happen in memory; nothing reaches disk until ``save()``.
    """

    path: Path

    @property
    def text(self) -> str:
        """Current contents."""
        ...

    def insert(self, offset: int, content: str) -> None:
        """Insert content at a character offset."""
        ...

    def append(self, content: str) -> None:
        """Append content at the end."""
        ...

    def save(self) -> None:
        """Write pending changes back to storage."""
        ...
