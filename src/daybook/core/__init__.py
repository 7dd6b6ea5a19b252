"""Functional core - pure journal logic with no I/O."""

from .dates import DateParser, ParsedDate, weekday_offset
from .tokenizer import Input, InputTokenizer
from .paths import PagePaths, PathResolver, denormalize_filename, format_date, normalize_filename
from .templates import (
    DEFAULT_TEMPLATES,
    SCOPE_DEFAULT,
    InlineTemplate,
    TemplateCatalog,
    insert_lines,
)

__all__ = [
    # Dates
    "DateParser",
    "ParsedDate",
    "weekday_offset",
    # Input
    "Input",
    "InputTokenizer",
    # Paths
    "PagePaths",
    "PathResolver",
    "denormalize_filename",
    "format_date",
    "normalize_filename",
    # Templates
    "DEFAULT_TEMPLATES",
    "SCOPE_DEFAULT",
    "InlineTemplate",
    "TemplateCatalog",
    "insert_lines",
]
