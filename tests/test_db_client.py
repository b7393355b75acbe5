"""Tests for the Supabase client wrapper."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from prompt_studio.db.client import SupabaseClient, UniqueViolationError


def _client_raising(error: Exception) -> SupabaseClient:
    raw = MagicMock()
    raw.table.return_value.insert.return_value.execute.side_effect = error
    raw.table.return_value.update.return_value.eq.return_value.eq.return_value.execute.side_effect = error
    return SupabaseClient(raw)


class TestErrorTranslation:
    def test_unique_violation_on_insert(self):
        db = _client_raising(
            APIError({"code": "23505", "message": "duplicate key value", "details": "Key exists", "hint": None})
        )
        with pytest.raises(UniqueViolationError, match="duplicate key value"):
            db.insert("context_snippets", {"name": "@topic"})

    def test_unique_violation_on_update(self):
        db = _client_raising(
            APIError({"code": "23505", "message": "duplicate key value", "details": None, "hint": None})
        )
        with pytest.raises(UniqueViolationError):
            db.update("context_snippets", "abc", {"name": "@topic"}, filters={"user_id": "u"})

    def test_other_errors_propagate(self):
        db = _client_raising(
            APIError({"code": "42501", "message": "permission denied", "details": None, "hint": None})
        )
        with pytest.raises(APIError):
            db.insert("context_snippets", {"name": "@topic"})


class TestQueries:
    def test_update_returns_none_when_nothing_matched(self):
        raw = MagicMock()
        raw.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []
        assert SupabaseClient(raw).update("prompt_templates", "abc", {"title": "x"}) is None

    def test_delete_reports_removal(self):
        raw = MagicMock()
        query = raw.table.return_value.delete.return_value.eq.return_value.eq.return_value
        query.execute.return_value.data = [{"id": "abc"}]
        assert SupabaseClient(raw).delete("prompt_templates", "abc", filters={"user_id": "u"})
        query.execute.return_value.data = []
        assert not SupabaseClient(raw).delete("prompt_templates", "abc", filters={"user_id": "u"})

    def test_select_applies_filters_and_order(self):
        raw = MagicMock()
        query = raw.table.return_value.select.return_value
        query.eq.return_value = query
        query.order.return_value = query
        query.execute.return_value.data = [{"id": "abc"}]

        rows = SupabaseClient(raw).select(
            "prompt_templates", filters={"user_id": "u"}, order_by="updated_at"
        )
        assert rows == [{"id": "abc"}]
        query.eq.assert_called_once_with("user_id", "u")
        query.order.assert_called_once_with("updated_at", desc=False)
