"""Keeps a day's page in sync with the files in its notes folder."""

import asyncio
import logging
from typing import TYPE_CHECKING

from .core.paths import PathResolver, denormalize_filename
from .core.templates import TemplateCatalog, insert_lines
from .ports.document_store import Document, DocumentStore

if TYPE_CHECKING:
    from .pages import JournalPage

logger = logging.getLogger(__name__)


class ReferenceSynchronizer:
    """
    Appends a link for every note file the page doesn't reference yet.

    Only ever adds links, so running it twice without changes to the notes
    folder does nothing the second time.
    """

    def __init__(
        self,
        store: DocumentStore,
        catalog: TemplateCatalog,
        resolver: PathResolver,
        scope: str | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.resolver = resolver
        self.scope = scope

    async def referenced_files(self, page: "JournalPage") -> set[str]:
        """Files in the page's notes folder that the page body already links to."""
        pattern = self.catalog.file_link(self.scope).pattern()
        prefix = self.resolver.relative_link(page.date, "")

        referenced = set()
        for line in page.document.text.split("\n"):
            match = pattern.match(line.strip())
            if not match or "link" not in match.groupdict():
                continue
            link = match.group("link").strip()
            if link.startswith(prefix):
                referenced.add(link[len(prefix):])
        return referenced

    async def synchronize(self, page: "JournalPage") -> int:
        """Link missing note files into the page. Returns the number of links added."""
        referenced, found = await asyncio.gather(
            self.referenced_files(page),
            self.store.list_files(page.notes_folder),
        )

        missing = [name for name in found if name not in referenced]
        if not missing:
            return 0

        template = self.catalog.file_link(self.scope)
        lines = []
        for name in missing:
            logger.debug(f"Not referenced yet: {name}")
            lines.append(
                template.render(
                    label=denormalize_filename(name),
                    link=self.resolver.relative_link(page.date, name),
                )
            )

        document: Document = page.document
        document.text = insert_lines(document.text, lines, after=template.after)
        await self.store.save(document)
        logger.debug(f"Linked {len(lines)} note(s) into {document.path}")
        return len(lines)
