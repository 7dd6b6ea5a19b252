"""Pure date parsing logic - turns day phrases into offsets or dates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from daybook.errors import ParseError

WEEKDAYS = {
    "monday": 0,
    "mon": 0,
    "tuesday": 1,
    "tue": 1,
    "tues": 1,
    "wednesday": 2,
    "wed": 2,
    "thursday": 3,
    "thu": 3,
    "thur": 3,
    "thurs": 3,
    "friday": 4,
    "fri": 4,
    "saturday": 5,
    "sat": 5,
    "sunday": 6,
    "sun": 6,
}

KEYWORDS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
}

MODIFIERS = ("next", "last")

_OFFSET_PATTERN = re.compile(r"^[+-]?\d+$")
_ISO_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True)
class ParsedDate:
    """Result of parsing a day phrase: either a relative offset or an absolute date."""

    offset: int | None = None
    date: date | None = None

    def to_offset(self, today: date) -> int:
        """Days between today and the parsed day."""
        if self.date is not None:
            return (self.date - today).days
        return self.offset

    def to_date(self, today: date) -> date:
        if self.date is not None:
            return self.date
        return today + timedelta(days=self.offset)


def is_weekday(word: str) -> bool:
    return word.lower() in WEEKDAYS


def weekday_offset(weekday: int, today: date, modifier: str | None = None) -> int:
    """
    Offset to the nearest given weekday, strictly before or after today.

    Bare weekdays and "next" look forward, "last" looks backward. The same
    weekday as today is never today: it resolves to +7 (or -7 for "last").
    """
    if modifier == "last":
        diff = (today.weekday() - weekday) % 7
        return -(diff or 7)
    diff = (weekday - today.weekday()) % 7
    return diff or 7


def weekday_in_week(weekday: int, today: date, weeks: int) -> int:
    """Offset to a weekday in a calendar week relative to this one (weeks start Monday)."""
    monday = today - timedelta(days=today.weekday())
    target = monday + timedelta(weeks=weeks, days=weekday)
    return (target - today).days


class DateParser:
    """Converts day phrases like "+3", "next wed" or "2023-01-15" into a ParsedDate."""

    def phrase_length(self, words: list[str]) -> int:
        """Number of leading words that make up the day phrase."""
        if not words:
            return 0
        first = words[0].lower()
        if first in MODIFIERS and len(words) > 1 and is_weekday(words[1]):
            return 2
        if (
            is_weekday(first)
            and len(words) > 2
            and words[1].lower() in MODIFIERS
            and words[2].lower() == "week"
        ):
            return 3
        return 1

    def parse(self, token: str, today: date) -> ParsedDate:
        """Parse a day phrase relative to today. Raises ParseError when unrecognized."""
        phrase = " ".join(token.split()).lower()
        if not phrase:
            raise ParseError(token)

        # 1. signed integer offsets
        if _OFFSET_PATTERN.match(phrase):
            return ParsedDate(offset=int(phrase))

        # 2. relative keywords
        if phrase in KEYWORDS:
            return ParsedDate(offset=KEYWORDS[phrase])

        # 3. weekdays, optionally with "next"/"last" or "... last week"
        words = phrase.split(" ")
        if len(words) == 1 and is_weekday(words[0]):
            return ParsedDate(offset=weekday_offset(WEEKDAYS[words[0]], today))
        if len(words) == 2 and words[0] in MODIFIERS and is_weekday(words[1]):
            return ParsedDate(offset=weekday_offset(WEEKDAYS[words[1]], today, words[0]))
        if len(words) == 3 and is_weekday(words[0]) and words[1] in MODIFIERS and words[2] == "week":
            weeks = -1 if words[1] == "last" else 1
            return ParsedDate(offset=weekday_in_week(WEEKDAYS[words[0]], today, weeks))

        # 4. ISO dates
        match = _ISO_PATTERN.match(phrase)
        if match:
            try:
                return ParsedDate(date=date(*(int(part) for part in match.groups())))
            except ValueError:
                raise ParseError(token)

        raise ParseError(token)
