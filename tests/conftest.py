"""Shared fixtures for daybook tests."""

from datetime import date
from pathlib import Path

import pytest

from daybook.config import Config
from daybook.errors import CancelSignal
from daybook.ports.document_store import Document
from daybook.ports.user_interface import EditorHandle, PickItem

PAGE_TEMPLATE = "{header}\n\n## Tasks\n\n## Notes\n\n"
NOTE_TEMPLATE = "# {content}\n\n"


class FakeInterface:
    """Records what would have been shown; answers prompts from a queue."""

    def __init__(self, answers: list[str] | None = None, pick_index: int = 0):
        self.answers = list(answers or [])
        self.pick_index = pick_index
        self.shown: list[Path] = []
        self.folders: list[Path] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.picks: list[list[PickItem]] = []

    def prompt_text(self, label: str) -> str:
        if not self.answers:
            raise CancelSignal()
        return self.answers.pop(0)

    def pick(self, label: str, items: list[PickItem]) -> PickItem:
        self.picks.append(items)
        if not items:
            raise CancelSignal()
        return items[self.pick_index]

    def show(self, document: Document) -> EditorHandle:
        self.shown.append(document.path)
        return EditorHandle(path=document.path, opened_with="fake")

    def open_folder(self, path: Path) -> None:
        self.folders.append(path)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)


class StaticTemplates:
    """Stands in for TemplateDirectory and counts template renders."""

    def __init__(self, page: str = PAGE_TEMPLATE, note: str = NOTE_TEMPLATE):
        self.page = page
        self.note = note
        self.page_calls = 0

    async def page_template(self) -> str:
        self.page_calls += 1
        return self.page

    async def note_template(self) -> str:
        return self.note


@pytest.fixture
def today():
    # A Wednesday
    return date(2025, 1, 15)


@pytest.fixture
def clock(today):
    return lambda: today


@pytest.fixture
def base(tmp_path):
    return tmp_path / "journal"


@pytest.fixture
def config(base, tmp_path):
    return Config(base=str(base), templates_directory=str(tmp_path / "templates"))


@pytest.fixture
def ui():
    return FakeInterface()
