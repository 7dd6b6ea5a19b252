"""Inline templates and line-targeted content insertion - no I/O."""

import re
from dataclasses import dataclass
from typing import Iterable

from daybook.errors import ConfigError

SCOPE_DEFAULT = "default"
ANCHOR_LINE = 2

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class InlineTemplate:
    """A short snippet (memo, task, file link, header) rendered into a page."""

    scope: str
    id: str
    template: str
    after: str = ""

    @property
    def key(self) -> str:
        return f"{self.scope}.{self.id}"

    def render(self, **values: str) -> str:
        """Substitute {name} placeholders. Unknown placeholders are left untouched."""
        result = self.template
        for name, value in values.items():
            result = result.replace("{" + name + "}", value)
        return result

    def pattern(self) -> re.Pattern:
        """
        Regex matching lines produced by this template.

        Each placeholder becomes a named group; repeated placeholders must
        match the same text.
        """
        seen: set[str] = set()
        parts = []
        position = 0
        template = self.template.strip()
        for match in _PLACEHOLDER.finditer(template):
            parts.append(re.escape(template[position:match.start()]))
            name = match.group(1)
            if name in seen:
                parts.append(f"(?P={name})")
            else:
                parts.append(f"(?P<{name}>.+?)")
                seen.add(name)
            position = match.end()
        parts.append(re.escape(template[position:]))
        return re.compile("^" + "".join(parts) + "$")

    @classmethod
    def from_dict(cls, data: dict) -> "InlineTemplate":
        """
        Build from a config record.

        Accepts either {"scope": "default", "id": "entry.memo", ...} or the
        combined form {"scope": "default.entry.memo", ...}.
        """
        scope = data.get("scope", "")
        template_id = data.get("id", "")
        if not template_id:
            scope, _, template_id = scope.partition(".")
        if not scope or not template_id or "template" not in data:
            raise ConfigError(f"Invalid inline template: {data}")
        return cls(
            scope=scope,
            id=template_id,
            template=data["template"],
            after=data.get("after", "") or "",
        )


DEFAULT_TEMPLATES = (
    InlineTemplate(SCOPE_DEFAULT, "entry.header", "# {date}"),
    InlineTemplate(SCOPE_DEFAULT, "entry.memo", "- {content}"),
    InlineTemplate(SCOPE_DEFAULT, "entry.task", "- [ ] {content}", "## Tasks"),
    InlineTemplate(SCOPE_DEFAULT, "entry.file", "- [{label}]({link})", "## Notes"),
)


class TemplateCatalog:
    """Lookup table of inline templates keyed by <scope>.<page-kind>.<purpose>."""

    def __init__(self, templates: Iterable[InlineTemplate]):
        self._templates = {t.key: t for t in templates}

    def find(self, purpose: str, kind: str = "entry", scope: str | None = None) -> InlineTemplate | None:
        """Exact scope first, then the default scope. None if neither has it."""
        scope = scope or SCOPE_DEFAULT
        template = self._templates.get(f"{scope}.{kind}.{purpose}")
        if template is None and scope != SCOPE_DEFAULT:
            template = self._templates.get(f"{SCOPE_DEFAULT}.{kind}.{purpose}")
        return template

    def get(self, purpose: str, kind: str = "entry", scope: str | None = None) -> InlineTemplate:
        template = self.find(purpose, kind, scope)
        if template is None:
            raise ConfigError(f"No template '{kind}.{purpose}' in scope '{scope or SCOPE_DEFAULT}' or '{SCOPE_DEFAULT}'")
        return template

    def header(self, scope: str | None = None) -> InlineTemplate:
        return self.get("header", scope=scope)

    def memo(self, scope: str | None = None) -> InlineTemplate:
        return self.get("memo", scope=scope)

    def task(self, scope: str | None = None) -> InlineTemplate:
        return self.get("task", scope=scope)

    def file_link(self, scope: str | None = None) -> InlineTemplate:
        return self.get("file", scope=scope)


def insert_lines(text: str, lines: list[str], after: str = "", anchor: int = ANCHOR_LINE) -> str:
    """
    Insert lines right below the first line equal to the `after` marker.

    Falls back to the anchor line when no marker is configured or the page
    doesn't contain it.
    """
    if not lines:
        return text

    existing = text.split("\n")
    index = None
    if after.strip():
        for i, line in enumerate(existing):
            if line.strip() == after.strip():
                index = i + 1
                break
    if index is None:
        index = min(anchor, len(existing))

    existing[index:index] = lines
    return "\n".join(existing)
