"""Ports - interfaces/protocols for external dependencies."""

from .document import Document
from .editor import Editor

__all__ = [
    "Document",
    "Editor",
]
