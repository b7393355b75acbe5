"""Tests for snippet and placeholder resolution."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from prompt_studio.core.errors import SnippetNotFoundError, UnauthorizedError
from prompt_studio.core.resolver import (
    find_snippet_references,
    render_snippet_block,
    substitute_placeholders,
)


class TestFindReferences:
    def test_distinct_in_order(self):
        text = "Use @tone and @company-info, then @tone again."
        assert find_snippet_references(text) == ["@tone", "@company-info"]

    def test_trailing_punctuation_not_part_of_name(self):
        assert find_snippet_references("About @company-info.") == ["@company-info"]
        assert find_snippet_references("(@topic)") == ["@topic"]

    def test_email_is_not_a_reference(self):
        assert find_snippet_references("Mail sales@example.com today") == []

    def test_none(self):
        assert find_snippet_references("No references here") == []

    def test_inside_placeholder_is_not_a_reference(self):
        assert find_snippet_references("{{@topic}} and {{ owner@x }} then @tone") == ["@tone"]


class TestSubstitutePlaceholders:
    def test_substitutes(self):
        text, unresolved = substitute_placeholders("Hi {{name}}, {{ name }}!", {"name": "Ann"})
        assert text == "Hi Ann, Ann!"
        assert unresolved == []

    def test_unmatched_left_verbatim(self):
        text, unresolved = substitute_placeholders("Dear {{name}} from {{city}}", {"name": "Ann"})
        assert text == "Dear Ann from {{city}}"
        assert unresolved == ["{{city}}"]

    def test_values_are_not_rescanned(self):
        text, _ = substitute_placeholders("{{a}}", {"a": "{{b}}", "b": "nope"})
        assert text == "{{b}}"


class TestPromptResolver:
    def test_end_to_end_topic_for_audience(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@topic", "cats")
        resolved = resolver.resolve(
            "user-1", "Write about @topic for {{audience}}", {"audience": "children"}
        )
        assert render_snippet_block("@topic", "cats") in resolved.text
        assert resolved.text.endswith("for children")
        assert "{{audience}}" not in resolved.text
        assert resolved.snippets_resolved == ["@topic"]
        assert resolved.unresolved_placeholders == []

    def test_block_format(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@topic", "cats")
        resolved = resolver.resolve("user-1", "@topic")
        assert resolved.text == "--- Context: @topic ---\ncats\n--- End Context: @topic ---"

    def test_each_distinct_name_fetched_once(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@a", "A")
        snippet_store.create_snippet("user-1", "@b", "B")
        with patch.object(
            snippet_store, "find_snippet_by_name", wraps=snippet_store.find_snippet_by_name
        ) as spy:
            resolved = resolver.resolve("user-1", "@a @b @a @b @a")
        assert spy.call_count == 2
        assert resolved.text.count("--- Context: @a ---") == 3

    def test_missing_snippets_listed(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@known", "x")
        with pytest.raises(SnippetNotFoundError) as exc:
            resolver.resolve("user-1", "@known @ghost @phantom")
        assert exc.value.names == ["@ghost", "@phantom"]
        assert "@ghost" in exc.value.message
        assert exc.value.details == {"names": ["@ghost", "@phantom"]}

    def test_other_users_snippets_not_visible(self, resolver, snippet_store):
        snippet_store.create_snippet("alice", "@topic", "cats")
        with pytest.raises(SnippetNotFoundError):
            resolver.resolve("bob", "@topic")

    def test_snippet_content_placeholders_filled(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@greeting", "Hello {{name}}")
        resolved = resolver.resolve("user-1", "@greeting", {"name": "Ann"})
        assert "Hello Ann" in resolved.text

    def test_snippet_content_references_not_expanded(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@outer", "see @inner")
        resolved = resolver.resolve("user-1", "@outer")
        assert "see @inner" in resolved.text
        assert resolved.snippets_resolved == ["@outer"]

    def test_unresolved_placeholders_reported(self, resolver):
        resolved = resolver.resolve("user-1", "For {{audience}} in {{city}}", {"city": "Oslo"})
        assert resolved.text == "For {{audience}} in Oslo"
        assert resolved.unresolved_placeholders == ["{{audience}}"]

    def test_placeholder_braces_left_alone(self, resolver, snippet_store):
        snippet_store.create_snippet("user-1", "@topic", "cats")
        resolved = resolver.resolve("user-1", "About @topic, not {{@topic}}")
        assert resolved.text == (
            "About --- Context: @topic ---\ncats\n--- End Context: @topic ---, not {{@topic}}"
        )
        assert resolved.unresolved_placeholders == ["{{@topic}}"]

    def test_requires_user(self, resolver):
        with pytest.raises(UnauthorizedError):
            resolver.resolve(None, "text")
