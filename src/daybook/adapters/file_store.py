"""File-based document storage adapter."""

import asyncio
import logging
from pathlib import Path

from daybook.errors import JournalIOError, NotFoundError, WriteError
from daybook.ports.document_store import Document

logger = logging.getLogger(__name__)


class FileDocumentStore:
    """
    File-based document storage.

    Implements DocumentStore protocol. Blocking file access runs in a worker
    thread so callers can await it.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def load(self, path: Path) -> Document:
        """Load a document. Raises NotFoundError if it doesn't exist."""
        path = Path(path)
        try:
            text = await asyncio.to_thread(path.read_text, encoding=self.encoding)
        except FileNotFoundError:
            raise NotFoundError(path)
        except OSError as e:
            raise JournalIOError(f"Failed to read {path}: {e}")
        logger.debug(f"Loaded file: {path}")
        return Document(path=path, text=text)

    async def create_and_load(self, path: Path, content: str) -> Document:
        """
        Create a document with initial content and load it.

        Uses exclusive create: if another writer got there first, the
        existing file is loaded instead of being overwritten.
        """
        path = Path(path)

        def _create() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("x", encoding=self.encoding) as f:
                f.write(content)

        try:
            await asyncio.to_thread(_create)
        except FileExistsError:
            logger.debug(f"File appeared before creation, loading it instead: {path}")
            return await self.load(path)
        except OSError as e:
            raise JournalIOError(f"Failed to create {path}: {e}")

        logger.debug(f"Created file: {path}")
        return await self.load(path)

    async def save(self, document: Document) -> None:
        """Persist the document's current text."""
        try:
            await asyncio.to_thread(document.path.write_text, document.text, encoding=self.encoding)
        except OSError as e:
            raise WriteError(f"Failed to save {document.path}: {e}")

    async def list_files(self, folder: Path) -> list[str]:
        """Names of regular, non-hidden files directly inside a folder."""
        folder = Path(folder)

        def _list() -> list[str]:
            if not folder.is_dir():
                return []
            return sorted(
                entry.name
                for entry in folder.iterdir()
                if entry.is_file() and not entry.name.startswith(".")
            )

        try:
            return await asyncio.to_thread(_list)
        except OSError as e:
            raise JournalIOError(f"Failed to list {folder}: {e}")

    async def list_pages(self, base: Path, ext: str) -> list[Path]:
        """All page files (YYYY/MM/DD.<ext>) below the journal base."""
        base = Path(base)

        def _glob() -> list[Path]:
            if not base.is_dir():
                return []
            return sorted(base.glob(f"[0-9][0-9][0-9][0-9]/[0-9][0-9]/[0-9][0-9].{ext}"))

        try:
            return await asyncio.to_thread(_glob)
        except OSError as e:
            raise JournalIOError(f"Failed to list pages in {base}: {e}")
