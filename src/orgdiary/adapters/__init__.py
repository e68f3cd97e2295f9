"""Adapters - I/O implementations of ports."""

from .file_document import FileDocument
from .editor import ExternalEditor

__all__ = [
    "FileDocument",
    "ExternalEditor",
]
