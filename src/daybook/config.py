"""Configuration management for daybook."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.templates import DEFAULT_TEMPLATES, InlineTemplate
from .errors import ConfigError

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / ".daybook"))
CONFIG_FILE = DAYBOOK_HOME / "daybook.conf"

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


@dataclass(frozen=True)
class Config:
    """daybook configuration. Passed explicitly to every component."""

    base: str = ""
    ext: str = "md"
    locale: str = ""
    open_in_new_editor_group: bool = False
    dev: bool = False
    templates_directory: str = ""
    inline_templates: tuple[InlineTemplate, ...] = field(default_factory=lambda: DEFAULT_TEMPLATES)

    @property
    def base_path(self) -> Path:
        """Journal root, defaulting to ~/Journal."""
        if self.base:
            return Path(self.base).expanduser().resolve()
        return Path.home() / "Journal"

    @property
    def file_extension(self) -> str:
        ext = self.ext.lstrip(".")
        return ext if ext else "md"

    @property
    def effective_locale(self) -> str:
        return self.locale if self.locale else "en-US"


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{key.upper()} must be a boolean, got '{value}'")


def _parse_inline_templates(value: str) -> tuple[InlineTemplate, ...]:
    """
    Parse INLINE_TEMPLATES JSON.

    Configured templates override the defaults with the same key; defaults
    not mentioned are kept so the "default" scope stays complete.
    """
    data = json.loads(value)
    if not isinstance(data, list):
        raise ConfigError("INLINE_TEMPLATES must be a JSON array")
    configured = [InlineTemplate.from_dict(item) for item in data]
    keys = {t.key for t in configured}
    return tuple(configured) + tuple(t for t in DEFAULT_TEMPLATES if t.key not in keys)


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"'):
        end_quote = value.find('"', 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if value.startswith("'"):
        end_quote = value.find("'", 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments, but JSON arrays may contain '#'
    if "#" in value and not value.startswith("["):
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from daybook.conf. Missing file means defaults."""
    config_file = Path(path) if path else CONFIG_FILE
    values: dict = {}

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return Config()

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "base":
                values["base"] = value
            case "ext":
                values["ext"] = value
            case "locale":
                values["locale"] = value
            case "open_in_new_editor_group":
                values["open_in_new_editor_group"] = _parse_bool(key, value)
            case "dev":
                values["dev"] = _parse_bool(key, value)
            case "templates_directory":
                values["templates_directory"] = value
            case "inline_templates":
                try:
                    values["inline_templates"] = _parse_inline_templates(value)
                except (json.JSONDecodeError, ConfigError) as e:
                    logger.warning(f"Failed to parse INLINE_TEMPLATES: {e}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return Config(**values)
