"""Prompt template CRUD endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prompt_studio.actions import templates as actions
from prompt_studio.api.deps import get_current_user_id, unwrap
from prompt_studio.api.models import TemplateCreate, TemplateResponse, TemplateUpdate
from prompt_studio.core.templates import TemplateStore, get_template_store

router = APIRouter()


@router.post("", response_model=TemplateResponse, status_code=201)
async def create_template(
    data: TemplateCreate,
    user_id: str | None = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> TemplateResponse:
    """Save a new prompt template."""
    result = await actions.create_prompt_template(
        store,
        user_id,
        title=data.title,
        optimized_prompt=data.optimized_prompt,
        model_id=data.model_id,
        raw_prompt=data.raw_prompt,
    )
    return TemplateResponse(**unwrap(result).model_dump())


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    user_id: str | None = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> list[TemplateResponse]:
    """List the caller's prompt templates."""
    result = await actions.get_prompt_templates(store, user_id)
    return [TemplateResponse(**t.model_dump()) for t in unwrap(result)]


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: str,
    user_id: str | None = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> TemplateResponse:
    """Get a prompt template by id."""
    result = await actions.get_prompt_template(store, user_id, template_id)
    return TemplateResponse(**unwrap(result).model_dump())


@router.patch("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: str,
    data: TemplateUpdate,
    user_id: str | None = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> TemplateResponse:
    """Update a template's title, optimized prompt or model."""
    result = await actions.update_prompt_template(
        store, user_id, template_id, data.model_dump(exclude_none=True)
    )
    return TemplateResponse(**unwrap(result).model_dump())


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    user_id: str | None = Depends(get_current_user_id),
    store: TemplateStore = Depends(get_template_store),
) -> None:
    """Delete a prompt template."""
    unwrap(await actions.delete_prompt_template(store, user_id, template_id))
