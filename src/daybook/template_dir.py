"""Template directory - bootstraps and reads the page and note templates."""

import asyncio
import logging
import re
import shutil
from pathlib import Path

from .config import Config
from .errors import ConfigError, JournalIOError

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent / "resources"
PAGE_TEMPLATE = "journal.page-template.md"
NOTE_TEMPLATE = "journal.note-template.md"

TEMPLATE_FILES = {
    "tpl.entry": {"detail": "Template for journal entries", "filename": PAGE_TEMPLATE},
    "tpl.note": {"detail": "Template for notes", "filename": NOTE_TEMPLATE},
}

_VARIABLE = re.compile(r"\$\{[^}]*\}")


class TemplateDirectory:
    """
    Templates directory inside (or outside) the journal.

    Created on first use and seeded with the bundled templates, so the user
    can edit them and have them synced along with the journal.
    """

    def __init__(self, config: Config, resources: Path = RESOURCES_DIR):
        self.config = config
        self.resources = resources
        self._ready = False

    @property
    def path(self) -> Path:
        configured = self.config.templates_directory
        if configured:
            return Path(self.resolve_variables(configured)).expanduser()
        return self.config.base_path / ".daybook"

    def resolve_variables(self, value: str) -> str:
        """Replace ${journalFolder} with the journal base path."""
        result = value
        for token in _VARIABLE.findall(value):
            if token == "${journalFolder}":
                result = result.replace(token, str(self.config.base_path))
            else:
                raise ConfigError(f"Failed to substitute variable: {token}")
        return result

    async def ensure(self) -> Path:
        """Create the directory and copy missing templates into it."""
        target = self.path
        if self._ready:
            return target

        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise JournalIOError(f"Failed to initialize the configuration: {e}")

        if not await asyncio.to_thread((target / PAGE_TEMPLATE).exists):
            logger.info(f"Initializing templates in {target}")
            await asyncio.gather(
                *(self._copy(entry["filename"], target) for entry in TEMPLATE_FILES.values())
            )

        self._ready = True
        return target

    async def _copy(self, filename: str, target: Path) -> None:
        destination = target / filename
        if await asyncio.to_thread(destination.exists):
            return
        try:
            await asyncio.to_thread(shutil.copyfile, self.resources / filename, destination)
        except OSError as e:
            raise JournalIOError(f"Error copying {filename}: {e}")
        logger.debug(f"Copied {filename} to {target}")

    async def _read(self, key: str) -> str:
        directory = await self.ensure()
        filename = TEMPLATE_FILES[key]["filename"]
        try:
            return await asyncio.to_thread((directory / filename).read_text, encoding="utf-8")
        except OSError as e:
            raise JournalIOError(f"Failed to get {TEMPLATE_FILES[key]['detail'].lower()}: {e}")

    async def page_template(self) -> str:
        return await self._read("tpl.entry")

    async def note_template(self) -> str:
        return await self._read("tpl.note")
