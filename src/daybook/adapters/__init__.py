"""Adapters - I/O implementations of ports."""

from .file_store import FileDocumentStore
from .terminal import ClickInterface

__all__ = [
    "FileDocumentStore",
    "ClickInterface",
]
