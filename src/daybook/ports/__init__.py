"""Ports - interfaces/protocols for external dependencies."""

from .document_store import Document, DocumentStore
from .user_interface import EditorHandle, PickItem, UserInterface

__all__ = [
    "Document",
    "DocumentStore",
    "EditorHandle",
    "PickItem",
    "UserInterface",
]
