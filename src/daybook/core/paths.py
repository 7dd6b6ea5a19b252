"""Pure path logic - maps calendar dates to page files and notes folders."""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path

_SEPARATOR = "_"
_NON_ALNUM = re.compile(r"[\W_]+")
_DENORMALIZE = re.compile(r"[_-]+")


@dataclass(frozen=True)
class PagePaths:
    """Where a day's page and its notes folder live."""

    page_path: Path
    notes_folder: Path


class PathResolver:
    """
    Resolves pages to base/YYYY/MM/DD.<ext> and notes to base/YYYY/MM/DD/.

    Pure - no filesystem access.
    """

    def __init__(self, base: Path | str, ext: str = "md"):
        self.base = Path(base)
        self.ext = ext.lstrip(".") or "md"

    def month_folder(self, day: date) -> Path:
        return self.base / f"{day.year:04d}" / f"{day.month:02d}"

    def page_base_name(self, day: date) -> str:
        return f"{day.day:02d}"

    def resolve(self, day: date) -> PagePaths:
        folder = self.month_folder(day)
        name = self.page_base_name(day)
        return PagePaths(
            page_path=folder / f"{name}.{self.ext}",
            notes_folder=folder / name,
        )

    def note_path(self, day: date, filename: str) -> Path:
        """Path of a note file (without extension in filename) in the day's notes folder."""
        return self.resolve(day).notes_folder / f"{filename}.{self.ext}"

    def relative_link(self, day: date, filename: str) -> str:
        """Link from a page to a file in its notes folder."""
        return f"./{self.page_base_name(day)}/{filename}"

    def date_for_page(self, path: Path | str) -> date | None:
        """Date encoded in a page path, or None if the path isn't a page."""
        path = Path(path)
        if path.suffix != f".{self.ext}":
            return None
        try:
            return date(int(path.parent.parent.name), int(path.parent.name), int(path.stem))
        except ValueError:
            return None


def normalize_filename(name: str) -> str:
    """Turn a user supplied note name into a filesystem-safe base name."""
    return _NON_ALNUM.sub(_SEPARATOR, name.strip()).strip(_SEPARATOR)


def denormalize_filename(filename: str) -> str:
    """Readable label for a note file: extension dropped, separators become spaces."""
    return _DENORMALIZE.sub(" ", Path(filename).stem).strip()


def format_date(day: date, locale: str = "en-US") -> str:
    """Long, human readable date used in page headers. Non-English locales get the ISO date."""
    weekday = day.strftime("%A")
    month = day.strftime("%B")
    locale = (locale or "en-US").replace("_", "-").lower()
    if locale == "en-us" or locale == "en":
        return f"{weekday}, {month} {day.day}, {day.year}"
    if locale.startswith("en-"):
        return f"{weekday}, {day.day} {month} {day.year}"
    return day.isoformat()
