"""Expands ``@snippet`` references and ``{{placeholder}}`` variables."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping

import structlog

from prompt_studio.core.errors import SnippetNotFoundError
from prompt_studio.core.ownership import require_user
from prompt_studio.core.snippets import SnippetStore, get_snippet_store

logger = structlog.get_logger()

# "@name" where name may contain inner hyphens; an "@" glued to a preceding
# word character (e-mail addresses) is not a reference.
SNIPPET_REFERENCE = re.compile(r"(?<!\w)@(\w(?:[\w-]*\w)?)")
PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")
# placeholders are matched first so an "@" inside "{{...}}" is never a reference
_PLACEHOLDER_OR_REFERENCE = re.compile(r"\{\{[^}]+\}\}|" + SNIPPET_REFERENCE.pattern)

SNIPPET_HEADER = "--- Context: {name} ---"
SNIPPET_FOOTER = "--- End Context: {name} ---"


@dataclass
class ResolvedPrompt:
    """Fully substituted prompt text plus what was (and wasn't) filled in."""

    text: str
    snippets_resolved: list[str] = field(default_factory=list)
    unresolved_placeholders: list[str] = field(default_factory=list)


def find_snippet_references(text: str) -> list[str]:
    """Distinct ``@name`` references in order of first appearance."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER_OR_REFERENCE.finditer(text):
        if match.group(1):
            seen.setdefault(f"@{match.group(1)}", None)
    return list(seen)


def render_snippet_block(name: str, content: str) -> str:
    """Delimited block injected in place of an ``@name`` reference."""
    return "\n".join(
        [SNIPPET_HEADER.format(name=name), content, SNIPPET_FOOTER.format(name=name)]
    )


def substitute_placeholders(text: str, inputs: Mapping[str, Any]) -> tuple[str, list[str]]:
    """Replace ``{{ name }}`` with ``inputs[name]``; unmatched placeholders stay verbatim.

    Returns the new text and the list of placeholder occurrences left in it.
    """
    unresolved: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1).strip()
        if key in inputs and inputs[key] is not None:
            return str(inputs[key])
        unresolved.append(match.group(0))
        return match.group(0)

    return PLACEHOLDER.sub(_replace, text), unresolved


class PromptResolver:
    """Turns a template's text plus an inputs map into the literal LLM prompt."""

    def __init__(self, snippets: SnippetStore) -> None:
        self.snippets = snippets

    def resolve(
        self,
        user_id: str | None,
        text: str,
        inputs: Mapping[str, Any] | None = None,
    ) -> ResolvedPrompt:
        """Expand snippets first, then placeholders.

        Snippet content may itself contain placeholders, which are filled from
        the same ``inputs``. Raises SnippetNotFoundError listing every missing
        reference before anything is substituted.
        """
        user_id = require_user(user_id)
        inputs = inputs or {}

        names = find_snippet_references(text)
        contents: dict[str, str] = {}
        missing: list[str] = []
        for name in names:
            snippet = self.snippets.find_snippet_by_name(user_id, name)
            if snippet is None:
                missing.append(name)
            else:
                contents[name] = snippet.content

        if missing:
            logger.info("resolver.snippets_missing", user_id=user_id, names=missing)
            raise SnippetNotFoundError(missing)

        if contents:

            def _expand(match: re.Match[str]) -> str:
                if not match.group(1):
                    return match.group(0)
                name = f"@{match.group(1)}"
                return render_snippet_block(name, contents[name])

            text = _PLACEHOLDER_OR_REFERENCE.sub(_expand, text)

        text, unresolved = substitute_placeholders(text, inputs)
        if unresolved:
            logger.warning("resolver.unresolved_placeholders", placeholders=unresolved)

        logger.info(
            "resolver.resolved",
            snippets=names,
            unresolved=len(unresolved),
            length=len(text),
        )
        return ResolvedPrompt(
            text=text,
            snippets_resolved=names,
            unresolved_placeholders=unresolved,
        )


@lru_cache
def get_resolver() -> PromptResolver:
    """Get cached resolver instance."""
    return PromptResolver(get_snippet_store())
