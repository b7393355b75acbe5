"""Snippet suggestions for ``@`` autocomplete in the editor."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Awaitable, Callable

import structlog

from prompt_studio.core.ownership import require_user
from prompt_studio.core.snippets import SnippetStore, get_snippet_store
from prompt_studio.db.models import ContextSnippet

logger = structlog.get_logger()

DEBOUNCE_SECONDS = 0.3

SnippetSearch = Callable[[str], Awaitable[list[ContextSnippet]]]


class SnippetSuggester:
    """Debounced, coalesced snippet lookup with last-request-wins semantics.

    Each ``suggest`` call cancels the one still pending; a superseded call
    resolves to an empty list instead of a stale answer. Lookup failures are
    logged and also yield an empty list, since suggestions are best-effort.
    """

    def __init__(self, search: SnippetSearch, delay: float = DEBOUNCE_SECONDS) -> None:
        self._search = search
        self.delay = delay
        self._pending: asyncio.Task[list[ContextSnippet]] | None = None

    async def suggest(self, query: str) -> list[ContextSnippet]:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

        task = asyncio.ensure_future(self._debounced(query.lstrip("@")))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._pending is not task:
                return []
            raise

    async def _debounced(self, query: str) -> list[ContextSnippet]:
        await asyncio.sleep(self.delay)
        try:
            return await self._search(query)
        except Exception as e:
            logger.warning("suggestions.lookup_failed", query=query, error=str(e))
            return []


def store_search(store: SnippetStore, user_id: str) -> SnippetSearch:
    """Async search over one user's snippets via the store's search listing."""

    async def search(query: str) -> list[ContextSnippet]:
        return store.list_snippets(user_id, search=query)

    return search


class SnippetSuggestions:
    """Keeps one suggester per user, so each user's newest query wins."""

    def __init__(self, store: SnippetStore, delay: float = DEBOUNCE_SECONDS) -> None:
        self.store = store
        self.delay = delay
        self._suggesters: dict[str, SnippetSuggester] = {}

    def for_user(self, user_id: str | None) -> SnippetSuggester:
        user_id = require_user(user_id)
        if user_id not in self._suggesters:
            self._suggesters[user_id] = SnippetSuggester(
                store_search(self.store, user_id), delay=self.delay
            )
        return self._suggesters[user_id]

    async def suggest(self, user_id: str | None, query: str) -> list[ContextSnippet]:
        results = await self.for_user(user_id).suggest(query)
        logger.debug("suggestions.served", user_id=user_id, query=query, count=len(results))
        return results


@lru_cache
def get_snippet_suggestions() -> SnippetSuggestions:
    """Get cached suggestions service."""
    return SnippetSuggestions(get_snippet_store())
