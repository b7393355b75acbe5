"""Test fixtures: mock Supabase client, fake LLM providers and the test app."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from prompt_studio.config import Settings
from prompt_studio.db.client import SupabaseClient, UniqueViolationError
from prompt_studio.db.models import SNIPPETS_TABLE, TEMPLATES_TABLE
from prompt_studio.llm.base import ChatOptions, ChatProvider
from prompt_studio.utils.security import create_access_token

TEST_SECRET = "test-secret"


class MockSupabaseClient(SupabaseClient):
    """In-memory mock of the Supabase client for testing.

    Enforces the unique (user_id, name) index on context_snippets the same way
    the real client reports it.
    """

    def __init__(self):
        self._tables: dict[str, list[dict[str, Any]]] = {
            TEMPLATES_TABLE: [],
            SNIPPETS_TABLE: [],
        }

    def _check_unique(self, table: str, candidate: dict[str, Any], exclude_id: str | None = None):
        if table != SNIPPETS_TABLE:
            return
        for row in self._tables[table]:
            if row["id"] == exclude_id:
                continue
            if row["user_id"] == candidate.get("user_id") and row["name"] == candidate.get("name"):
                raise UniqueViolationError("duplicate key value violates unique constraint")

    def _matching(self, table: str, filters: dict[str, Any] | None) -> list[dict[str, Any]]:
        rows = self._tables.get(table, [])
        for key, value in (filters or {}).items():
            rows = [r for r in rows if r.get(key) == value]
        return rows

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        record = {"id": str(uuid4()), "created_at": now, "updated_at": now, **data}
        self._check_unique(table, record)
        self._tables.setdefault(table, []).append(record)
        return dict(record)

    def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        rows = self._matching(table, filters)
        if order_by:
            rows = sorted(rows, key=lambda r: r.get(order_by, ""), reverse=not ascending)
        if limit:
            rows = rows[:limit]
        return [dict(r) for r in rows]

    def update(
        self,
        table: str,
        id: str,
        data: dict[str, Any],
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        rows = self._matching(table, {"id": id, **(filters or {})})
        if not rows:
            return None
        row = rows[0]
        self._check_unique(table, {**row, **data}, exclude_id=id)
        row.update(data)
        return dict(row)

    def delete(self, table: str, id: str, filters: dict[str, Any] | None = None) -> bool:
        doomed = self._matching(table, {"id": id, **(filters or {})})
        if not doomed:
            return False
        self._tables[table] = [r for r in self._tables[table] if r["id"] != id]
        return True


class FakeProvider(ChatProvider):
    """Chat provider that records prompts instead of calling a vendor.

    ``reply`` may be a string, an exception to raise, or a callable taking
    ``(prompt, options)``.
    """

    def __init__(self, name: str = "openai", reply: Any = "Generated text", default_model: str = "gpt-4o"):
        super().__init__(api_key="test-key", base_url="http://llm.test", default_model=default_model)
        self.name = name
        self.reply = reply
        self.calls: list[tuple[str, ChatOptions]] = []

    async def complete(self, prompt: str, options: ChatOptions) -> str | None:
        self.calls.append((prompt, options))
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(prompt, options)
        return self.reply


@pytest.fixture
def mock_db() -> MockSupabaseClient:
    """Fresh mock database for each test."""
    return MockSupabaseClient()


@pytest.fixture
def template_store(mock_db):
    from prompt_studio.core.templates import TemplateStore

    return TemplateStore(mock_db)


@pytest.fixture
def snippet_store(mock_db):
    from prompt_studio.core.snippets import SnippetStore

    return SnippetStore(mock_db)


@pytest.fixture
def resolver(snippet_store):
    from prompt_studio.core.resolver import PromptResolver

    return PromptResolver(snippet_store)


@pytest.fixture
def providers() -> dict[str, FakeProvider]:
    """Fake OpenAI and Anthropic providers; Grok is left unconfigured."""
    return {
        "openai": FakeProvider("openai", default_model="gpt-4o"),
        "anthropic": FakeProvider("anthropic", default_model="claude-sonnet-4-20250514"),
    }


@pytest.fixture
def adapter(providers):
    from prompt_studio.llm.adapter import LLMAdapter

    return LLMAdapter(providers)


@pytest.fixture
def optimizer(adapter):
    from prompt_studio.core.optimizer import PromptOptimizer

    return PromptOptimizer(adapter)


@pytest.fixture
def generator(template_store, resolver, adapter):
    from prompt_studio.core.generation import DocumentGenerator

    return DocumentGenerator(template_store, resolver, adapter)


@pytest.fixture
def suggestions(snippet_store):
    from prompt_studio.core.suggestions import SnippetSuggestions

    return SnippetSuggestions(snippet_store, delay=0)


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, _env_file=None)


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a given user id."""

    def _headers(user_id: str = "user-1") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id, TEST_SECRET)}"}

    return _headers


@pytest.fixture
def app(template_store, snippet_store, suggestions, resolver, optimizer, generator, settings):
    """FastAPI test app with mocked dependencies."""
    from prompt_studio.config import get_settings
    from prompt_studio.core.generation import get_generator
    from prompt_studio.core.optimizer import get_optimizer
    from prompt_studio.core.resolver import get_resolver
    from prompt_studio.core.snippets import get_snippet_store
    from prompt_studio.core.suggestions import get_snippet_suggestions
    from prompt_studio.core.templates import get_template_store
    from prompt_studio.main import app as _app

    _app.dependency_overrides[get_template_store] = lambda: template_store
    _app.dependency_overrides[get_snippet_store] = lambda: snippet_store
    _app.dependency_overrides[get_snippet_suggestions] = lambda: suggestions
    _app.dependency_overrides[get_resolver] = lambda: resolver
    _app.dependency_overrides[get_optimizer] = lambda: optimizer
    _app.dependency_overrides[get_generator] = lambda: generator
    _app.dependency_overrides[get_settings] = lambda: settings

    yield _app

    _app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """HTTP test client."""
    return TestClient(app)
