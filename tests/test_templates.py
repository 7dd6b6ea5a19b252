"""Tests for inline templates and content insertion."""

import pytest

from daybook.core.templates import (
    DEFAULT_TEMPLATES,
    InlineTemplate,
    TemplateCatalog,
    insert_lines,
)
from daybook.errors import ConfigError


@pytest.fixture
def catalog():
    return TemplateCatalog(
        DEFAULT_TEMPLATES
        + (InlineTemplate("work", "entry.task", "- TODO {content}", "## Work"),)
    )


class TestCatalog:
    def test_default_scope(self, catalog):
        assert catalog.memo().template == "- {content}"
        assert catalog.task().after == "## Tasks"

    def test_exact_scope_wins(self, catalog):
        assert catalog.task("work").template == "- TODO {content}"

    def test_falls_back_to_default_scope(self, catalog):
        assert catalog.memo("work").template == "- {content}"
        assert catalog.file_link("unknown").template == "- [{label}]({link})"

    def test_missing_everywhere_raises(self):
        catalog = TemplateCatalog([InlineTemplate("work", "entry.memo", "* {content}")])
        with pytest.raises(ConfigError):
            catalog.memo()
        with pytest.raises(ConfigError):
            catalog.task("work")

    def test_find_returns_none(self, catalog):
        assert catalog.find("nope") is None


class TestInlineTemplate:
    def test_render(self):
        template = InlineTemplate("default", "entry.file", "- [{label}]({link})")
        assert template.render(label="Idea", link="./15/idea.md") == "- [Idea](./15/idea.md)"

    def test_render_leaves_unknown_placeholders(self):
        template = InlineTemplate("default", "entry.memo", "- {content} {time}")
        assert template.render(content="x") == "- x {time}"

    def test_pattern_matches_rendered_line(self):
        template = InlineTemplate("default", "entry.file", "- [{label}]({link})")
        match = template.pattern().match("- [My idea](./15/My_idea.md)")
        assert match.group("label") == "My idea"
        assert match.group("link") == "./15/My_idea.md"

    def test_pattern_escapes_literals(self):
        template = InlineTemplate("default", "entry.file", "* ({label}) -> {link}")
        assert template.pattern().match("* (a) -> ./01/a.md")
        assert not template.pattern().match("* [a] -> ./01/a.md")

    def test_pattern_repeated_placeholder(self):
        template = InlineTemplate("default", "entry.file", "[[{link}|{link}]]")
        assert template.pattern().match("[[a|a]]")
        assert not template.pattern().match("[[a|b]]")

    def test_from_dict_split_form(self):
        template = InlineTemplate.from_dict({"scope": "default", "id": "entry.memo", "template": "* {content}"})
        assert template.key == "default.entry.memo"
        assert template.after == ""

    def test_from_dict_combined_form(self):
        template = InlineTemplate.from_dict(
            {"scope": "work.entry.task", "template": "- [ ] {content}", "after": "## Work"}
        )
        assert template.scope == "work"
        assert template.id == "entry.task"
        assert template.after == "## Work"

    def test_from_dict_invalid(self):
        with pytest.raises(ConfigError):
            InlineTemplate.from_dict({"scope": "default"})


class TestInsertLines:
    PAGE = "# Header\n\n## Tasks\n\n## Notes\n"

    def test_after_marker(self):
        result = insert_lines(self.PAGE, ["- [ ] a"], after="## Tasks")
        assert result == "# Header\n\n## Tasks\n- [ ] a\n\n## Notes\n"

    def test_after_last_marker_line(self):
        result = insert_lines(self.PAGE, ["- [x](./15/x.md)"], after="## Notes")
        assert result == "# Header\n\n## Tasks\n\n## Notes\n- [x](./15/x.md)\n"

    def test_no_marker_uses_anchor_line(self):
        result = insert_lines(self.PAGE, ["- memo"])
        assert result.split("\n")[2] == "- memo"

    def test_missing_marker_uses_anchor_line(self):
        result = insert_lines(self.PAGE, ["- memo"], after="## Elsewhere")
        assert result.split("\n")[2] == "- memo"

    def test_short_page(self):
        assert insert_lines("# Header", ["- memo"]) == "# Header\n- memo"

    def test_multiple_lines_keep_order(self):
        result = insert_lines(self.PAGE, ["- a", "- b"], after="## Notes")
        assert result.endswith("## Notes\n- a\n- b\n")

    def test_nothing_to_insert(self):
        assert insert_lines(self.PAGE, []) == self.PAGE
