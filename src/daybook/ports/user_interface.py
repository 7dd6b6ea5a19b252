"""User interaction interface."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .document_store import Document


@dataclass(frozen=True)
class PickItem:
    """An entry in a pick list."""

    label: str
    description: str = ""
    path: Path | None = None


@dataclass(frozen=True)
class EditorHandle:
    """What showing a document resulted in."""

    path: Path
    opened_with: str


class UserInterface(Protocol):
    """Interface for prompting the user and showing documents."""

    def prompt_text(self, label: str) -> str:
        """Ask for free text. Raises CancelSignal if the user aborts."""
        ...

    def pick(self, label: str, items: list[PickItem]) -> PickItem:
        """Let the user choose one item. Raises CancelSignal if the user aborts."""
        ...

    def show(self, document: Document) -> EditorHandle:
        """Present a document for editing."""
        ...

    def open_folder(self, path: Path) -> None:
        """Open a folder in the host environment."""
        ...

    def show_error(self, message: str) -> None:
        ...

    def show_warning(self, message: str) -> None:
        ...
