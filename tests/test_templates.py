"""Tests for the template store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from prompt_studio.core.errors import NotFoundError, UnauthorizedError, ValidationError
from prompt_studio.core.ownership import next_updated_at, parse_id


def _create(store, user_id="user-1", title="Blog post", **kwargs):
    return store.create_template(
        user_id,
        title=title,
        optimized_prompt=kwargs.pop("optimized_prompt", "Write a blog post about {{topic}}"),
        model_id=kwargs.pop("model_id", "gpt-4o"),
        **kwargs,
    )


class TestCreateTemplate:
    def test_create(self, template_store):
        template = _create(template_store, raw_prompt="blog post pls")
        assert template.user_id == "user-1"
        assert template.title == "Blog post"
        assert template.raw_prompt == "blog post pls"
        assert template.model_id == "gpt-4o"
        assert template.created_at == template.updated_at

    def test_raw_prompt_optional(self, template_store):
        assert _create(template_store).raw_prompt is None

    def test_requires_user(self, template_store):
        with pytest.raises(UnauthorizedError):
            _create(template_store, user_id=None)
        with pytest.raises(UnauthorizedError):
            _create(template_store, user_id="  ")

    @pytest.mark.parametrize("field", ["title", "optimized_prompt", "model_id"])
    def test_required_fields(self, template_store, field):
        with pytest.raises(ValidationError):
            _create(template_store, **{field: "   "})


class TestReadTemplates:
    def test_get(self, template_store):
        created = _create(template_store)
        fetched = template_store.get_template("user-1", str(created.id))
        assert fetched == created

    def test_get_other_users_template(self, template_store):
        created = _create(template_store, user_id="alice")
        with pytest.raises(NotFoundError, match="not found or unauthorized"):
            template_store.get_template("bob", str(created.id))

    def test_get_malformed_id(self, template_store):
        with pytest.raises(NotFoundError):
            template_store.get_template("user-1", "not-a-uuid")

    def test_get_missing_id(self, template_store):
        with pytest.raises(ValidationError):
            template_store.get_template("user-1", "")

    def test_list_only_own(self, template_store):
        _create(template_store, user_id="alice", title="A")
        _create(template_store, user_id="bob", title="B")
        titles = [t.title for t in template_store.list_templates("alice")]
        assert titles == ["A"]

    def test_list_ordered_by_updated_at(self, template_store):
        first = _create(template_store, title="First")
        _create(template_store, title="Second")
        template_store.update_template("user-1", str(first.id), title="First, edited")
        titles = [t.title for t in template_store.list_templates("user-1")]
        assert titles == ["Second", "First, edited"]


class TestUpdateTemplate:
    def test_update_fields(self, template_store):
        created = _create(template_store)
        updated = template_store.update_template(
            "user-1", str(created.id), title="New title", model_id="claude-sonnet-4-20250514"
        )
        assert updated.title == "New title"
        assert updated.model_id == "claude-sonnet-4-20250514"
        assert updated.optimized_prompt == created.optimized_prompt

    def test_update_advances_updated_at(self, template_store):
        created = _create(template_store)
        updated = template_store.update_template("user-1", str(created.id), title="Again")
        assert updated.updated_at > created.updated_at
        assert updated.created_at == created.created_at

    def test_raw_prompt_is_immutable(self, template_store):
        created = _create(template_store, raw_prompt="original")
        with pytest.raises(ValidationError, match="raw_prompt"):
            template_store.update_template("user-1", str(created.id), raw_prompt="changed")

    def test_update_empty_value(self, template_store):
        created = _create(template_store)
        with pytest.raises(ValidationError):
            template_store.update_template("user-1", str(created.id), title="")

    def test_update_other_users_template(self, template_store):
        created = _create(template_store, user_id="alice")
        with pytest.raises(NotFoundError):
            template_store.update_template("bob", str(created.id), title="Hijacked")
        assert template_store.get_template("alice", str(created.id)).title == "Blog post"


class TestDeleteTemplate:
    def test_delete(self, template_store):
        created = _create(template_store)
        template_store.delete_template("user-1", str(created.id))
        with pytest.raises(NotFoundError):
            template_store.get_template("user-1", str(created.id))

    def test_delete_other_users_template(self, template_store):
        created = _create(template_store, user_id="alice")
        with pytest.raises(NotFoundError):
            template_store.delete_template("bob", str(created.id))
        assert template_store.get_template("alice", str(created.id))

    def test_delete_unknown(self, template_store):
        with pytest.raises(NotFoundError):
            template_store.delete_template("user-1", str(uuid4()))


class TestOwnershipHelpers:
    def test_next_updated_at_is_strictly_later(self):
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        assert datetime.fromisoformat(next_updated_at(future.isoformat())) > future

    def test_next_updated_at_naive_and_zulu(self):
        assert next_updated_at("2024-01-01T00:00:00Z") > "2024-01-01"
        assert next_updated_at(datetime(2024, 1, 1)) > "2024-01-01"

    def test_parse_id_normalises(self):
        value = uuid4()
        assert parse_id(str(value).upper(), "Thing") == str(value)
