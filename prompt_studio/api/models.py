"""Pydantic request/response models for the API."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# --- Templates ---


class TemplateCreate(BaseModel):
    """Save a template after an optimize step."""

    title: str = Field(..., min_length=1, max_length=200)
    optimized_prompt: str = Field(..., min_length=1)
    model_id: str = Field(..., min_length=1, max_length=100)
    raw_prompt: str | None = None


class TemplateUpdate(BaseModel):
    """Partial update; raw_prompt cannot be changed after creation."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    optimized_prompt: str | None = Field(default=None, min_length=1)
    model_id: str | None = Field(default=None, min_length=1, max_length=100)


class TemplateResponse(BaseModel):
    """Prompt template response."""

    id: UUID
    title: str
    raw_prompt: str | None
    optimized_prompt: str
    model_id: str
    created_at: datetime
    updated_at: datetime


# --- Snippets ---


class SnippetCreate(BaseModel):
    """Create a context snippet."""

    name: str = Field(..., min_length=2, max_length=100)
    content: str


class SnippetUpdate(BaseModel):
    """Update a snippet's name and/or content."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    content: str | None = None


class SnippetResponse(BaseModel):
    """Context snippet response."""

    id: UUID
    name: str
    content: str
    created_at: datetime
    updated_at: datetime


# --- LLM authoring ---


class RawPromptRequest(BaseModel):
    """A raw prompt to optimize or title."""

    raw_prompt: str


class OptimizeResponse(BaseModel):
    optimized_prompt: str


class TitleResponse(BaseModel):
    title: str


class PrepareResponse(BaseModel):
    optimized_prompt: str
    title: str


# --- Resolution ---


class ResolveRequest(BaseModel):
    """Preview snippet and placeholder expansion without calling an LLM."""

    text: str
    inputs: dict[str, str] = Field(default_factory=dict)


class ResolveResponse(BaseModel):
    text: str
    snippets_resolved: list[str]
    unresolved_placeholders: list[str]


# --- Generation ---


class GenerateResponse(BaseModel):
    content: str
    metadata: dict[str, Any]
