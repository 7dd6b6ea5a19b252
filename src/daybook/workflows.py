"""Shared workflow layer between the CLI and the journal services.

Each workflow goes from user input to a shown document. A CancelSignal stops
the workflow silently and makes it return None; every other JournalError
propagates to the caller, which decides how to report it.
"""

import asyncio
import logging
from datetime import date
from pathlib import Path
from typing import Callable

from .adapters.file_store import FileDocumentStore
from .config import Config
from .core.paths import format_date, normalize_filename
from .core.tokenizer import InputTokenizer
from .errors import CancelSignal, JournalError, NotFoundError
from .pages import JournalPage, PageService
from .ports.document_store import DocumentStore
from .ports.user_interface import EditorHandle, PickItem, UserInterface
from .template_dir import TemplateDirectory

logger = logging.getLogger(__name__)

INPUT_LABEL = "Enter day or memo (with flags)"
NOTE_LABEL = "Enter name for your notes"


class Journal:
    """Everything needed to work with the journal, wired together."""

    def __init__(
        self,
        config: Config,
        store: DocumentStore,
        ui: UserInterface,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config
        self.store = store
        self.ui = ui
        self.clock = clock
        self.templates = TemplateDirectory(config)
        self.tokenizer = InputTokenizer(clock=clock)
        self.pages = PageService(
            config,
            store,
            self.templates,
            clock=clock,
            on_warning=ui.show_warning,
        )

    async def _show(self, page_or_document) -> EditorHandle:
        document = page_or_document.document if isinstance(page_or_document, JournalPage) else page_or_document
        return await asyncio.to_thread(self.ui.show, document)

    async def open_day_by_input(self, text: str | None = None) -> EditorHandle | None:
        """
        Open the page for a day given as text, adding a memo if one was typed.

        Supported values are offsets (+1, -2, 0), keywords (today, yesterday),
        weekdays (next wednesday, friday last week) and ISO dates.
        """
        try:
            if text is None:
                text = await asyncio.to_thread(self.ui.prompt_text, INPUT_LABEL)
            user_input = self.tokenizer.tokenize(text)
            page = await self.pages.get_for_input(user_input)
            page = await self.pages.add_memo(user_input, page)
            return await self._show(page)
        except CancelSignal:
            logger.debug("Input cancelled by user")
            return None

    async def open_day(self, offset: int) -> EditorHandle:
        """Open the page for today + offset, creating it if needed."""
        page = await self.pages.get_or_create(offset)
        return await self._show(page)

    async def create_note(self, name: str | None = None) -> EditorHandle | None:
        """
        Create (or open) a note in today's notes folder and show it.

        Today's page gets a link to the note with the name as typed as its
        label, since the file name only keeps the normalized form.
        """
        try:
            if name is None:
                name = await asyncio.to_thread(self.ui.prompt_text, NOTE_LABEL)
            if not name.strip():
                raise CancelSignal()
        except CancelSignal:
            logger.debug("Note creation cancelled by user")
            return None

        label = name.strip()
        filename = normalize_filename(label)
        if not filename:
            raise JournalError(f"Not a valid note name: '{name}'")

        template = await self.templates.note_template()
        path = self.pages.resolver.note_path(self.clock(), filename)
        try:
            document = await self.store.load(path)
        except NotFoundError:
            document = await self.store.create_and_load(path, template.replace("{content}", label))

        page = await self.pages.get_or_create(0)
        await self.pages.add_note_link(page, path.name, label)
        return await self._show(document)

    async def recent_items(self, limit: int = 10) -> list[PickItem]:
        items = []
        for path in await self.pages.recent_pages(limit):
            day = self.pages.resolver.date_for_page(path)
            items.append(
                PickItem(
                    label=format_date(day, self.config.effective_locale),
                    description=str(path.relative_to(self.config.base_path)),
                    path=path,
                )
            )
        return items

    async def open_recent(self, limit: int = 10) -> EditorHandle | None:
        """Pick one of the most recent pages and open it."""
        try:
            items = await self.recent_items(limit)
            item = await asyncio.to_thread(self.ui.pick, "Select a page", items)
        except CancelSignal:
            return None

        day = self.pages.resolver.date_for_page(item.path)
        return await self.open_day((day - self.clock()).days)

    def open_journal(self) -> Path:
        """Open the journal base folder."""
        base = self.config.base_path
        self.ui.open_folder(base)
        return base

    async def initialize(self) -> Path:
        """Create the templates directory with the bundled templates."""
        return await self.templates.ensure()

    async def close(self) -> None:
        """Wait for background work (page synchronization) to finish."""
        await self.pages.wait_for_background()


def get_journal(config: Config, ui: UserInterface, store: DocumentStore | None = None) -> Journal:
    """Wire up a Journal with the file store unless another store is given."""
    return Journal(config, store or FileDocumentStore(), ui)
