"""Prompt template operations; each returns an ActionResult."""

from __future__ import annotations

from typing import Any

from prompt_studio.core.results import action
from prompt_studio.core.templates import TemplateStore
from prompt_studio.db.models import PromptTemplate


@action("Prompt template created successfully.", "Failed to create prompt template.")
def create_prompt_template(
    store: TemplateStore,
    user_id: str | None,
    title: str,
    optimized_prompt: str,
    model_id: str,
    raw_prompt: str | None = None,
) -> PromptTemplate:
    return store.create_template(
        user_id,
        title=title,
        optimized_prompt=optimized_prompt,
        model_id=model_id,
        raw_prompt=raw_prompt,
    )


@action("Prompt templates retrieved successfully.", "Failed to retrieve prompt templates.")
def get_prompt_templates(store: TemplateStore, user_id: str | None) -> list[PromptTemplate]:
    return store.list_templates(user_id)


@action("Prompt template retrieved successfully.", "Failed to retrieve prompt template.")
def get_prompt_template(store: TemplateStore, user_id: str | None, template_id: str) -> PromptTemplate:
    return store.get_template(user_id, template_id)


@action("Prompt template updated successfully.", "Failed to update prompt template.")
def update_prompt_template(
    store: TemplateStore, user_id: str | None, template_id: str, changes: dict[str, Any]
) -> PromptTemplate:
    return store.update_template(user_id, template_id, **changes)


@action("Prompt template deleted successfully.", "Failed to delete prompt template.")
def delete_prompt_template(store: TemplateStore, user_id: str | None, template_id: str) -> None:
    store.delete_template(user_id, template_id)
