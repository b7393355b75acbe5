"""Database models / type definitions.

These mirror the Supabase tables (see ``sql/schema.sql``) for type safety in
Python code.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

TEMPLATES_TABLE = "prompt_templates"
SNIPPETS_TABLE = "context_snippets"


class PromptTemplate(BaseModel):
    """Row from the prompt_templates table."""

    id: UUID
    user_id: str
    title: str
    raw_prompt: str | None = None
    optimized_prompt: str
    model_id: str
    created_at: datetime
    updated_at: datetime


class ContextSnippet(BaseModel):
    """Row from the context_snippets table."""

    id: UUID
    user_id: str
    name: str
    content: str
    created_at: datetime
    updated_at: datetime
