"""Splits raw user input into a day, a memo and flags."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

from .dates import DateParser


@dataclass(frozen=True)
class Input:
    """
    Tokenized user input.

    Exactly one of offset and explicit_date is set. Flags are stored without
    their sigil, in the order they were typed.
    """

    raw_text: str
    offset: int | None = 0
    explicit_date: date | None = None
    memo: str | None = None
    flags: tuple[str, ...] = ()

    def has_memo(self) -> bool:
        return bool(self.memo)

    def has_flags(self) -> bool:
        return len(self.flags) > 0

    def has_offset(self) -> bool:
        return self.offset is not None

    def days_from(self, today: date) -> int:
        """Offset of the addressed day relative to today."""
        if self.explicit_date is not None:
            return (self.explicit_date - today).days
        return self.offset

    def target_date(self, today: date) -> date:
        return today + timedelta(days=self.days_from(today))


class InputTokenizer:
    """Turns text like "+2 buy milk #task" into an Input."""

    def __init__(
        self,
        parser: DateParser | None = None,
        flag_sigil: str = "#",
        clock: Callable[[], date] = date.today,
    ):
        self.parser = parser or DateParser()
        self.flag_sigil = flag_sigil
        self.clock = clock

    def tokenize(self, raw: str, today: date | None = None) -> Input:
        """
        Tokenize raw input.

        Empty input addresses today. The leading day phrase is handed to the
        DateParser, whose ParseError propagates unchanged.
        """
        words = (raw or "").split()
        if not words:
            return Input(raw_text=raw or "", offset=0)

        today = today or self.clock()
        span = self.parser.phrase_length(words)
        parsed = self.parser.parse(" ".join(words[:span]), today)

        memo_words = []
        flags: list[str] = []
        for word in words[span:]:
            if word.startswith(self.flag_sigil):
                flag = word[len(self.flag_sigil):]
                if flag and flag not in flags:
                    flags.append(flag)
            else:
                memo_words.append(word)

        memo = " ".join(memo_words) or None

        if parsed.date is not None:
            return Input(
                raw_text=raw,
                offset=None,
                explicit_date=parsed.date,
                memo=memo,
                flags=tuple(flags),
            )
        return Input(raw_text=raw, offset=parsed.offset, memo=memo, flags=tuple(flags))
