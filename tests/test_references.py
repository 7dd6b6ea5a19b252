"""Tests for linking notes folder files into pages."""

import pytest

from daybook.adapters.file_store import FileDocumentStore
from daybook.core.paths import PathResolver
from daybook.core.templates import DEFAULT_TEMPLATES, InlineTemplate, TemplateCatalog
from daybook.errors import JournalIOError
from daybook.pages import PageService
from daybook.references import ReferenceSynchronizer

from conftest import StaticTemplates


class NoSyncService(PageService):
    """Page service whose background synchronization is switched off."""

    def schedule_synchronize(self, page):
        return None


@pytest.fixture
def store():
    return FileDocumentStore()


@pytest.fixture
def catalog():
    return TemplateCatalog(DEFAULT_TEMPLATES)


@pytest.fixture
def synchronizer(store, catalog, config):
    return ReferenceSynchronizer(store, catalog, PathResolver(config.base_path))


@pytest.fixture
def pages(config, store, clock):
    return NoSyncService(config, store, StaticTemplates(), clock=clock)


def add_notes(page, *names):
    page.notes_folder.mkdir(parents=True, exist_ok=True)
    for name in names:
        (page.notes_folder / name).write_text(f"# {name}\n")


class TestSynchronize:
    @pytest.mark.asyncio
    async def test_links_missing_files(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        add_notes(page, "Meeting_notes.md", "idea.txt", ".hidden")

        added = await synchronizer.synchronize(page)

        assert added == 2
        assert page.path.read_text().endswith(
            "## Notes\n"
            "- [Meeting notes](./15/Meeting_notes.md)\n"
            "- [idea](./15/idea.txt)\n"
            "\n"
        )

    @pytest.mark.asyncio
    async def test_second_run_is_idempotent(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        add_notes(page, "a.md", "b.md")

        await synchronizer.synchronize(page)
        after_first = page.path.read_bytes()
        added = await synchronizer.synchronize(page)

        assert added == 0
        assert page.path.read_bytes() == after_first

    @pytest.mark.asyncio
    async def test_existing_links_are_kept(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        page.document.text += "- [Renamed by hand](./15/a.md)\n"
        add_notes(page, "a.md", "b.md")

        added = await synchronizer.synchronize(page)

        text = page.path.read_text()
        assert added == 1
        assert text.count("./15/a.md") == 1
        assert "- [b](./15/b.md)" in text

    @pytest.mark.asyncio
    async def test_links_to_other_days_do_not_count(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        page.document.text += "- [a](./14/a.md)\n"
        add_notes(page, "a.md")

        assert await synchronizer.synchronize(page) == 1

    @pytest.mark.asyncio
    async def test_new_file_after_first_run(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        add_notes(page, "a.md")
        await synchronizer.synchronize(page)

        add_notes(page, "c.md")
        assert await synchronizer.synchronize(page) == 1
        text = page.path.read_text()
        assert text.count("](./15/") == 2

    @pytest.mark.asyncio
    async def test_missing_notes_folder(self, pages, synchronizer):
        page = await pages.get_or_create(0)
        before = page.path.read_bytes()

        assert await synchronizer.synchronize(page) == 0
        assert page.path.read_bytes() == before

    @pytest.mark.asyncio
    async def test_scope_template_with_default_fallback(self, pages, store, config):
        catalog = TemplateCatalog(
            DEFAULT_TEMPLATES + (InlineTemplate("work", "entry.file", "* {label}: {link}", "## Notes"),)
        )
        page = await pages.get_or_create(0)
        add_notes(page, "x.md")

        work = ReferenceSynchronizer(store, catalog, PathResolver(config.base_path), scope="work")
        assert await work.synchronize(page) == 1
        assert "* x: ./15/x.md" in page.path.read_text()
        assert await work.synchronize(page) == 0

        other = ReferenceSynchronizer(store, catalog, PathResolver(config.base_path), scope="home")
        assert await other.synchronize(page) == 1
        assert "- [x](./15/x.md)" in page.path.read_text()

    @pytest.mark.asyncio
    async def test_listing_failure_propagates(self, pages, catalog, config):
        class BrokenStore(FileDocumentStore):
            async def list_files(self, folder):
                raise JournalIOError("no access")

        page = await pages.get_or_create(0)
        synchronizer = ReferenceSynchronizer(BrokenStore(), catalog, PathResolver(config.base_path))
        with pytest.raises(JournalIOError):
            await synchronizer.synchronize(page)


class TestBackgroundSynchronization:
    @pytest.mark.asyncio
    async def test_page_links_notes_when_opened(self, config, clock):
        service = PageService(config, FileDocumentStore(), StaticTemplates(), clock=clock)
        folder = config.base_path / "2025" / "01" / "15"
        folder.mkdir(parents=True)
        (folder / "Standup.md").write_text("")

        page = await service.get_or_create(0)
        await service.wait_for_background()

        assert "- [Standup](./15/Standup.md)" in page.path.read_text()
