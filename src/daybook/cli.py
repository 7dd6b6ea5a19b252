"""daybook CLI - Personal journal."""

import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .adapters.terminal import ClickInterface
from .config import Config, load_config
from .core.paths import PathResolver
from .core.tokenizer import InputTokenizer
from .errors import CancelSignal, ConfigError, JournalError
from .workflows import Journal, get_journal

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _run(ctx: click.Context, action):
    """Run an async workflow against a freshly wired journal."""
    config: Config = ctx.obj["config"]
    ui = ClickInterface(open_in_new_window=config.open_in_new_editor_group)
    journal = get_journal(config, ui)

    async def _go():
        try:
            return await action(journal)
        finally:
            await journal.close()

    try:
        return asyncio.run(_go())
    except CancelSignal:
        return None
    except JournalError as e:
        ui.show_error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(package_name="daybook")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to daybook.conf",
)
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: Path | None):
    """daybook - date-addressed markdown journal."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if debug or config.dev else logging.WARNING,
    )
    ctx.obj = {"config": config}


@main.command("open")
@click.argument("text", nargs=-1)
@click.pass_context
def open_cmd(ctx: click.Context, text: tuple[str, ...]):
    """Open a day, optionally adding a memo: `daybook open +2 buy milk #task`."""
    raw = " ".join(text) if text else None

    async def action(journal: Journal):
        return await journal.open_day_by_input(raw)

    _run(ctx, action)


def _open_offset(ctx: click.Context, offset: int) -> None:
    async def action(journal: Journal):
        return await journal.open_day(offset)

    _run(ctx, action)


@main.command()
@click.pass_context
def today(ctx: click.Context):
    """Open today's page."""
    _open_offset(ctx, 0)


@main.command()
@click.pass_context
def yesterday(ctx: click.Context):
    """Open yesterday's page."""
    _open_offset(ctx, -1)


@main.command()
@click.pass_context
def tomorrow(ctx: click.Context):
    """Open tomorrow's page."""
    _open_offset(ctx, 1)


@main.command()
@click.argument("name", nargs=-1)
@click.pass_context
def note(ctx: click.Context, name: tuple[str, ...]):
    """Create a note in today's notes folder."""
    label = " ".join(name) if name else None

    async def action(journal: Journal):
        return await journal.create_note(label)

    _run(ctx, action)


@main.command()
@click.option("--limit", "-n", default=10, show_default=True, help="Number of pages to list")
@click.option("--pick", is_flag=True, help="Choose a page and open it")
@click.pass_context
def recent(ctx: click.Context, limit: int, pick: bool):
    """List recent journal pages."""

    async def action(journal: Journal):
        if pick:
            return await journal.open_recent(limit)
        items = await journal.recent_items(limit)
        if not items:
            click.echo("No journal pages yet.")
        for item in items:
            click.echo(f"{item.label:32} {item.description}")

    _run(ctx, action)


@main.command()
@click.pass_context
def folder(ctx: click.Context):
    """Open the journal folder."""

    async def action(journal: Journal):
        return journal.open_journal()

    _run(ctx, action)


@main.command()
@click.pass_context
def init(ctx: click.Context):
    """Create the templates directory with the default templates."""

    async def action(journal: Journal):
        path = await journal.initialize()
        click.echo(f"Templates in {path}")

    _run(ctx, action)


@main.command()
@click.argument("text", nargs=-1)
@click.pass_context
def path(ctx: click.Context, text: tuple[str, ...]):
    """Show where the page for a day lives, without creating it."""
    config: Config = ctx.obj["config"]
    try:
        user_input = InputTokenizer().tokenize(" ".join(text))
    except JournalError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    day = user_input.target_date(date.today())
    paths = PathResolver(config.base_path, config.file_extension).resolve(day)
    click.echo(f"page:  {paths.page_path}")
    click.echo(f"notes: {paths.notes_folder}")


if __name__ == "__main__":
    main()
