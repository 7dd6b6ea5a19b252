"""Terminal adapter - click prompts and editors stand in for the host editor."""

import logging
from pathlib import Path

import click

from daybook.errors import CancelSignal
from daybook.ports.document_store import Document
from daybook.ports.user_interface import EditorHandle, PickItem

logger = logging.getLogger(__name__)


class ClickInterface:
    """
    Click based user interface.

    Implements UserInterface protocol. Ctrl+C / Ctrl+D in a prompt becomes a
    CancelSignal.
    """

    def __init__(self, open_in_new_window: bool = False, editor: str | None = None):
        self.open_in_new_window = open_in_new_window
        self.editor = editor

    def prompt_text(self, label: str) -> str:
        try:
            return click.prompt(label, default="", show_default=False)
        except click.Abort:
            raise CancelSignal()

    def pick(self, label: str, items: list[PickItem]) -> PickItem:
        if not items:
            raise CancelSignal("nothing to pick")

        for i, item in enumerate(items, start=1):
            description = f"  ({item.description})" if item.description else ""
            click.echo(f"{i:3}. {item.label}{description}")

        try:
            choice = click.prompt(label, type=click.IntRange(1, len(items)))
        except click.Abort:
            raise CancelSignal()
        return items[choice - 1]

    def show(self, document: Document) -> EditorHandle:
        """Open the document in a separate application window or the terminal editor."""
        if self.open_in_new_window:
            click.launch(str(document.path))
            return EditorHandle(path=document.path, opened_with="launch")

        click.edit(filename=str(document.path), editor=self.editor)
        return EditorHandle(path=document.path, opened_with="editor")

    def open_folder(self, path: Path) -> None:
        click.echo(str(path))
        click.launch(str(path))

    def show_error(self, message: str) -> None:
        click.echo(f"Error: {message}", err=True)

    def show_warning(self, message: str) -> None:
        click.echo(f"Warning: {message}", err=True)
