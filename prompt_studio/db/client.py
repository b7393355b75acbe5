"""Supabase access for the user-scoped tables."""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Iterator

import structlog
from postgrest.exceptions import APIError
from supabase import Client, create_client

from prompt_studio.config import get_settings

logger = structlog.get_logger()

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class UniqueViolationError(Exception):
    """A write collided with a unique index."""


class SupabaseClient:
    """Thin row-level wrapper over the Supabase client.

    ``filters`` are equality matches; stores pass ``user_id`` on every call so
    the ownership check happens in the same query as the read or write.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        with _translate_errors(table):
            result = self._client.table(table).insert(data).execute()
        return result.data[0]

    def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Rows matching ``filters``, optionally ordered and limited."""
        query = _where(self._client.table(table).select("*"), filters)
        if order_by:
            query = query.order(order_by, desc=not ascending)
        if limit:
            query = query.limit(limit)
        return query.execute().data

    def update(
        self,
        table: str,
        id: str,
        data: dict[str, Any],
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Update the row with ``id`` (and matching ``filters``).

        Returns the updated row, or None when nothing matched.
        """
        query = _where(self._client.table(table).update(data), {"id": id, **(filters or {})})
        with _translate_errors(table):
            result = query.execute()
        return result.data[0] if result.data else None

    def delete(self, table: str, id: str, filters: dict[str, Any] | None = None) -> bool:
        """Delete the row with ``id`` (and matching ``filters``). True if a row was removed."""
        query = _where(self._client.table(table).delete(), {"id": id, **(filters or {})})
        return bool(query.execute().data)


def _where(query: Any, filters: dict[str, Any] | None) -> Any:
    for key, value in (filters or {}).items():
        query = query.eq(key, value)
    return query


@contextmanager
def _translate_errors(table: str) -> Iterator[None]:
    """Map PostgREST unique violations to UniqueViolationError."""
    try:
        yield
    except APIError as e:
        if e.code != UNIQUE_VIOLATION:
            raise
        logger.info("supabase.unique_violation", table=table, detail=e.details)
        raise UniqueViolationError(e.message or "duplicate key value") from e


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """Get cached Supabase client instance."""
    settings = get_settings()
    client = create_client(settings.supabase_url, settings.supabase_key)
    logger.info("supabase.connected", url=settings.supabase_url)
    return SupabaseClient(client)
