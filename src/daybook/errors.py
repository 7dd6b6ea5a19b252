"""Error kinds raised across the journal."""

from pathlib import Path


class JournalError(Exception):
    """Base class for every journal failure."""


class ParseError(JournalError):
    """Raised when a date or offset token cannot be understood."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Not a valid day or offset: '{token}'")


class CancelSignal(JournalError):
    """The user aborted an interactive prompt. Not an error."""

    def __init__(self, message: str = "cancel"):
        super().__init__(message)


class NotFoundError(JournalError):
    """A document does not exist (yet)."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"No such document: {self.path}")


class JournalIOError(JournalError):
    """Reading, creating or copying a file failed for a reason other than absence."""


class WriteError(JournalIOError):
    """Persisting changes to an existing document failed."""


class ConfigError(JournalError):
    """Configuration or template lookup failed."""
