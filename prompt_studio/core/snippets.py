"""User-scoped CRUD for reusable context snippets."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import structlog

from prompt_studio.core.errors import ConflictError, NotFoundError, ValidationError
from prompt_studio.core.ownership import next_updated_at, parse_id, require_user
from prompt_studio.db.client import SupabaseClient, UniqueViolationError, get_supabase_client
from prompt_studio.db.models import SNIPPETS_TABLE, ContextSnippet
from prompt_studio.utils.security import validate_snippet_name

logger = structlog.get_logger()

INVALID_NAME_MESSAGE = (
    "Invalid snippet name format. Must start with '@' and contain only letters, "
    "numbers, underscores or hyphens. A hyphen cannot be the first or last character."
)


class SnippetStore:
    """Manages context snippets, addressed by id or by ``@name``.

    Names are unique per user; the database's unique index is the source of
    truth, and a collision is reported as ``ConflictError``.
    """

    def __init__(self, db: SupabaseClient) -> None:
        self.db = db

    def create_snippet(self, user_id: str | None, name: str, content: str) -> ContextSnippet:
        """Create a snippet owned by ``user_id``."""
        user_id = require_user(user_id)
        if not validate_snippet_name(name):
            raise ValidationError(INVALID_NAME_MESSAGE)

        try:
            row = self.db.insert(
                SNIPPETS_TABLE, {"user_id": user_id, "name": name, "content": content}
            )
        except UniqueViolationError:
            raise ConflictError(f'A snippet with the name "{name}" already exists.') from None

        logger.info("snippet.created", id=row["id"], name=name, user_id=user_id)
        return ContextSnippet(**row)

    def list_snippets(self, user_id: str | None, search: str | None = None) -> list[ContextSnippet]:
        """List the caller's snippets, optionally filtered by a name/content search."""
        user_id = require_user(user_id)
        rows = self.db.select(SNIPPETS_TABLE, filters={"user_id": user_id}, order_by="updated_at")

        if search:
            needle = search.lower().lstrip("@")
            rows = [
                r
                for r in rows
                if needle in r.get("name", "").lower() or needle in r.get("content", "").lower()
            ]

        return [ContextSnippet(**r) for r in rows]

    def get_snippet(self, user_id: str | None, snippet_id: str) -> ContextSnippet:
        """Get one of the caller's snippets by id."""
        user_id = require_user(user_id)
        return ContextSnippet(**self._get_row(user_id, parse_id(snippet_id, "Context snippet")))

    def get_snippet_by_name(self, user_id: str | None, name: str) -> ContextSnippet:
        """Get one of the caller's snippets by its ``@name``."""
        user_id = require_user(user_id)
        if not name:
            raise ValidationError("Snippet name is required.")
        rows = self.db.select(SNIPPETS_TABLE, filters={"user_id": user_id, "name": name})
        if not rows:
            raise NotFoundError(f'Context snippet with name "{name}" not found.')
        return ContextSnippet(**rows[0])

    def find_snippet_by_name(self, user_id: str, name: str) -> ContextSnippet | None:
        """Like get_snippet_by_name, but returns None when absent."""
        try:
            return self.get_snippet_by_name(user_id, name)
        except NotFoundError:
            return None

    def update_snippet(
        self,
        user_id: str | None,
        snippet_id: str,
        name: str | None = None,
        content: str | None = None,
    ) -> ContextSnippet:
        """Update a snippet's name and/or content."""
        user_id = require_user(user_id)
        snippet_id = parse_id(snippet_id, "Context snippet")
        changes: dict[str, Any] = {}
        if name is not None:
            if not validate_snippet_name(name):
                raise ValidationError(INVALID_NAME_MESSAGE)
            changes["name"] = name
        if content is not None:
            changes["content"] = content
        if not changes:
            raise ValidationError("Nothing to update.")

        current = self._get_row(user_id, snippet_id)
        changes["updated_at"] = next_updated_at(current.get("updated_at"))
        try:
            row = self.db.update(SNIPPETS_TABLE, snippet_id, changes, filters={"user_id": user_id})
        except UniqueViolationError:
            raise ConflictError(f'A snippet with the name "{name}" already exists.') from None
        if not row:
            raise NotFoundError("Context snippet not found or unauthorized.")

        logger.info("snippet.updated", id=snippet_id, fields=sorted(k for k in changes if k != "updated_at"))
        return ContextSnippet(**row)

    def delete_snippet(self, user_id: str | None, snippet_id: str) -> None:
        """Hard-delete one of the caller's snippets."""
        user_id = require_user(user_id)
        snippet_id = parse_id(snippet_id, "Context snippet")
        if not self.db.delete(SNIPPETS_TABLE, snippet_id, filters={"user_id": user_id}):
            raise NotFoundError("Context snippet not found or unauthorized.")
        logger.info("snippet.deleted", id=snippet_id, user_id=user_id)

    def _get_row(self, user_id: str, snippet_id: str) -> dict[str, Any]:
        rows = self.db.select(SNIPPETS_TABLE, filters={"id": snippet_id, "user_id": user_id})
        if not rows:
            raise NotFoundError("Context snippet not found or unauthorized.")
        return rows[0]


@lru_cache
def get_snippet_store() -> SnippetStore:
    """Get cached snippet store instance."""
    return SnippetStore(get_supabase_client())
