"""Page service - get-or-create of daily pages and memo insertion."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Callable

from .config import Config
from .core.paths import PathResolver, format_date
from .core.templates import InlineTemplate, TemplateCatalog, insert_lines
from .core.tokenizer import Input
from .errors import JournalError, JournalIOError, NotFoundError, ParseError, WriteError
from .ports.document_store import Document, DocumentStore
from .references import ReferenceSynchronizer
from .template_dir import TemplateDirectory

logger = logging.getLogger(__name__)

TASK_FLAG = "task"


@dataclass
class JournalPage:
    """A day's page, loaded or freshly created."""

    date: date
    path: Path
    notes_folder: Path
    document: Document
    created: bool = False

    @property
    def exists(self) -> bool:
        return True

    @property
    def text(self) -> str:
        return self.document.text


class PageService:
    """
    Opens or creates the page for a day.

    Every returned page triggers a background synchronization of its notes
    folder; callers don't wait for it.
    """

    def __init__(
        self,
        config: Config,
        store: DocumentStore,
        templates: TemplateDirectory,
        catalog: TemplateCatalog | None = None,
        resolver: PathResolver | None = None,
        synchronizer: ReferenceSynchronizer | None = None,
        clock: Callable[[], date] = date.today,
        on_warning: Callable[[str], None] | None = None,
        scope: str | None = None,
    ):
        self.config = config
        self.store = store
        self.templates = templates
        self.catalog = catalog or TemplateCatalog(config.inline_templates)
        self.resolver = resolver or PathResolver(config.base_path, config.file_extension)
        self.synchronizer = synchronizer or ReferenceSynchronizer(store, self.catalog, self.resolver, scope)
        self.clock = clock
        self.on_warning = on_warning
        self.scope = scope
        self._background: set[asyncio.Task] = set()
        self._locks: dict[Path, asyncio.Lock] = {}

    def lock_for(self, page: JournalPage) -> asyncio.Lock:
        """Lock held while a page's text is edited and saved."""
        return self._locks.setdefault(page.path, asyncio.Lock())

    def date_for_offset(self, offset: int) -> date:
        return self.clock() + timedelta(days=offset)

    async def get_or_create(self, offset: int) -> JournalPage:
        """
        Return the page for today + offset, creating it from the page template if needed.

        Args:
            offset: 0 is today, -1 is yesterday

        Raises:
            ParseError: offset isn't an integer
            JournalIOError: the page exists but can't be read, or creation failed
        """
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ParseError(str(offset))

        day = self.date_for_offset(offset)
        paths = self.resolver.resolve(day)
        created = False

        try:
            document = await self.store.load(paths.page_path)
        except NotFoundError:
            content = await self.render_page(day)
            document = await self.store.create_and_load(paths.page_path, content)
            created = True
        except JournalError:
            raise
        except OSError as e:
            raise JournalIOError(f"Failed to open {paths.page_path}: {e}")

        if self.config.dev:
            logger.debug(f"{'Created' if created else 'Loaded'} file: {document.path}")

        page = JournalPage(
            date=day,
            path=paths.page_path,
            notes_folder=paths.notes_folder,
            document=document,
            created=created,
        )
        self.schedule_synchronize(page)
        return page

    async def get_for_input(self, user_input: Input) -> JournalPage:
        return await self.get_or_create(user_input.days_from(self.clock()))

    async def render_page(self, day: date) -> str:
        template = await self.templates.page_template()
        header = self.catalog.header(self.scope).render(date=format_date(day, self.config.effective_locale))
        return template.replace("{header}", header)

    def schedule_synchronize(self, page: JournalPage) -> asyncio.Task:
        task = asyncio.create_task(self._synchronize_quietly(page))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def _synchronize_quietly(self, page: JournalPage) -> None:
        try:
            async with self.lock_for(page):
                await self.synchronizer.synchronize(page)
        except Exception as e:
            msg = f"Failed to synchronize page with notes folder. Reason: {e}"
            logger.warning(msg)
            if self.on_warning:
                self.on_warning(msg)

    async def wait_for_background(self) -> None:
        """Wait until all scheduled synchronizations are done."""
        while self._background:
            await asyncio.gather(*list(self._background))

    def template_for(self, user_input: Input) -> tuple[InlineTemplate, list[str]]:
        """
        Pick the inline template for an input.

        The first flag naming a template purpose ("task", ...) selects that
        template; remaining flags are kept as tags.
        """
        for flag in user_input.flags:
            purpose = flag.lower()
            if purpose in ("header", "file"):
                continue
            template = self.catalog.find(purpose, scope=self.scope)
            if template is not None:
                tags = [f for f in user_input.flags if f != flag]
                return template, tags
        return self.catalog.memo(self.scope), list(user_input.flags)

    async def add_memo(self, user_input: Input, page: JournalPage) -> JournalPage:
        """
        Insert the input's memo into the page and save it.

        Inputs with neither memo nor flags leave the page untouched.
        """
        if not user_input.has_memo() and not user_input.has_flags():
            return page

        template, tags = self.template_for(user_input)
        content = " ".join([user_input.memo or ""] + [f"#{tag}" for tag in tags]).strip()
        line = template.render(content=content)

        async with self.lock_for(page):
            page.document.text = insert_lines(page.document.text, [line], after=template.after)
            await self._save(page, "Failed to add memo")
        return page

    async def add_note_link(self, page: JournalPage, filename: str, label: str) -> bool:
        """
        Link a file of the page's notes folder, keeping `label` as link text.

        Returns False when the page already links the file.
        """
        async with self.lock_for(page):
            if filename in await self.synchronizer.referenced_files(page):
                return False
            template = self.catalog.file_link(self.scope)
            line = template.render(label=label, link=self.resolver.relative_link(page.date, filename))
            page.document.text = insert_lines(page.document.text, [line], after=template.after)
            await self._save(page, "Failed to link note")
        return True

    async def _save(self, page: JournalPage, reason: str) -> None:
        try:
            await self.store.save(page.document)
        except WriteError:
            raise
        except (JournalIOError, OSError) as e:
            raise WriteError(f"{reason}: {e}")

    async def recent_pages(self, limit: int = 10) -> list[Path]:
        """Existing page paths, newest first, not later than today."""
        today = self.clock()
        pages = await self.store.list_pages(self.config.base_path, self.config.file_extension)
        dated = []
        for path in pages:
            day = self.resolver.date_for_page(path)
            if day is not None and day <= today:
                dated.append((day, path))
        dated.sort(reverse=True)
        return [path for _, path in dated[:limit]]
