"""Context snippet operations; each returns an ActionResult."""

from __future__ import annotations

from prompt_studio.core.results import action
from prompt_studio.core.snippets import SnippetStore
from prompt_studio.core.suggestions import SnippetSuggestions
from prompt_studio.db.models import ContextSnippet


@action("Context snippet created successfully.", "Failed to create context snippet.")
def create_context_snippet(
    store: SnippetStore, user_id: str | None, name: str, content: str
) -> ContextSnippet:
    return store.create_snippet(user_id, name=name, content=content)


@action("Context snippets retrieved successfully.", "Failed to retrieve context snippets.")
def get_context_snippets(
    store: SnippetStore, user_id: str | None, search: str | None = None
) -> list[ContextSnippet]:
    return store.list_snippets(user_id, search=search)


@action("Context snippet retrieved successfully.", "Failed to retrieve context snippet.")
def get_context_snippet(store: SnippetStore, user_id: str | None, snippet_id: str) -> ContextSnippet:
    return store.get_snippet(user_id, snippet_id)


@action(
    "Context snippet retrieved successfully by name.",
    "Failed to retrieve context snippet by name.",
)
def get_context_snippet_by_name(store: SnippetStore, user_id: str | None, name: str) -> ContextSnippet:
    return store.get_snippet_by_name(user_id, name)


@action("Context snippet updated successfully.", "Failed to update context snippet.")
def update_context_snippet(
    store: SnippetStore,
    user_id: str | None,
    snippet_id: str,
    name: str | None = None,
    content: str | None = None,
) -> ContextSnippet:
    return store.update_snippet(user_id, snippet_id, name=name, content=content)


@action("Context snippet deleted successfully.", "Failed to delete context snippet.")
def delete_context_snippet(store: SnippetStore, user_id: str | None, snippet_id: str) -> None:
    store.delete_snippet(user_id, snippet_id)


@action("Snippet suggestions retrieved successfully.", "Failed to suggest context snippets.")
async def suggest_context_snippets(
    suggestions: SnippetSuggestions, user_id: str | None, query: str
) -> list[ContextSnippet]:
    return await suggestions.suggest(user_id, query)
