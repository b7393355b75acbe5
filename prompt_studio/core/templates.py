"""User-scoped CRUD for prompt templates."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import structlog

from prompt_studio.core.errors import NotFoundError, ValidationError
from prompt_studio.core.ownership import next_updated_at, parse_id, require_user
from prompt_studio.db.client import SupabaseClient, get_supabase_client
from prompt_studio.db.models import TEMPLATES_TABLE, PromptTemplate
from prompt_studio.utils.security import scan_for_secrets

logger = structlog.get_logger()

# raw_prompt is fixed at creation time
UPDATABLE_FIELDS = frozenset({"title", "optimized_prompt", "model_id"})


class TemplateStore:
    """Manages prompt templates.

    Every query is filtered by ``(id, user_id)`` so one user can never see or
    touch another user's templates.
    """

    def __init__(self, db: SupabaseClient) -> None:
        self.db = db

    def create_template(
        self,
        user_id: str | None,
        title: str,
        optimized_prompt: str,
        model_id: str,
        raw_prompt: str | None = None,
    ) -> PromptTemplate:
        """Create a new template owned by ``user_id``."""
        user_id = require_user(user_id)
        if not title.strip():
            raise ValidationError("Template title cannot be empty.")
        if not optimized_prompt.strip():
            raise ValidationError("Optimized prompt cannot be empty.")
        if not model_id.strip():
            raise ValidationError("Model id cannot be empty.")

        secrets = scan_for_secrets(optimized_prompt)
        if secrets:
            logger.warning("template.possible_secrets", user_id=user_id, patterns=secrets)

        row = self.db.insert(
            TEMPLATES_TABLE,
            {
                "user_id": user_id,
                "title": title.strip(),
                "raw_prompt": raw_prompt,
                "optimized_prompt": optimized_prompt,
                "model_id": model_id,
            },
        )
        logger.info("template.created", id=row["id"], user_id=user_id)
        return PromptTemplate(**row)

    def list_templates(self, user_id: str | None) -> list[PromptTemplate]:
        """List the caller's templates, least recently updated first."""
        user_id = require_user(user_id)
        rows = self.db.select(TEMPLATES_TABLE, filters={"user_id": user_id}, order_by="updated_at")
        return [PromptTemplate(**r) for r in rows]

    def get_template(self, user_id: str | None, template_id: str) -> PromptTemplate:
        """Get one of the caller's templates by id."""
        user_id = require_user(user_id)
        row = self._get_row(user_id, parse_id(template_id, "Prompt template"))
        return PromptTemplate(**row)

    def update_template(
        self, user_id: str | None, template_id: str, **changes: Any
    ) -> PromptTemplate:
        """Partially update title, optimized_prompt and/or model_id."""
        user_id = require_user(user_id)
        template_id = parse_id(template_id, "Prompt template")
        if not changes:
            raise ValidationError("Nothing to update.")
        illegal = set(changes) - UPDATABLE_FIELDS
        if illegal:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(illegal))}")
        for field, value in changes.items():
            if value is None or not str(value).strip():
                raise ValidationError(f"{field} cannot be empty.")

        current = self._get_row(user_id, template_id)
        data = {**changes, "updated_at": next_updated_at(current.get("updated_at"))}
        row = self.db.update(TEMPLATES_TABLE, template_id, data, filters={"user_id": user_id})
        if not row:
            raise NotFoundError("Prompt template not found or unauthorized.")
        logger.info("template.updated", id=template_id, fields=sorted(changes))
        return PromptTemplate(**row)

    def delete_template(self, user_id: str | None, template_id: str) -> None:
        """Hard-delete one of the caller's templates."""
        user_id = require_user(user_id)
        template_id = parse_id(template_id, "Prompt template")
        if not self.db.delete(TEMPLATES_TABLE, template_id, filters={"user_id": user_id}):
            raise NotFoundError("Prompt template not found or unauthorized.")
        logger.info("template.deleted", id=template_id, user_id=user_id)

    def _get_row(self, user_id: str, template_id: str) -> dict[str, Any]:
        rows = self.db.select(TEMPLATES_TABLE, filters={"id": template_id, "user_id": user_id})
        if not rows:
            raise NotFoundError("Prompt template not found or unauthorized.")
        return rows[0]


@lru_cache
def get_template_store() -> TemplateStore:
    """Get cached template store instance."""
    return TemplateStore(get_supabase_client())
