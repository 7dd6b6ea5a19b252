"""Document storage interface."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass
class Document:
    """An open text document. Edits happen on `text`, then get saved."""

    path: Path
    text: str

    @property
    def line_count(self) -> int:
        return len(self.text.split("\n"))


class DocumentStore(Protocol):
    """Interface for loading, creating and saving journal documents."""

    async def load(self, path: Path) -> Document:
        """Load a document. Raises NotFoundError if it doesn't exist."""
        ...

    async def create_and_load(self, path: Path, content: str) -> Document:
        """Create a document with initial content and load it."""
        ...

    async def save(self, document: Document) -> None:
        """Persist the document's current text."""
        ...

    async def list_files(self, folder: Path) -> list[str]:
        """Names of regular files directly inside a folder (empty if missing)."""
        ...

    async def list_pages(self, base: Path, ext: str) -> list[Path]:
        """All page files below the journal base."""
        ...
