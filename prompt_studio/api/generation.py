"""Prompt resolution and document generation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prompt_studio.actions import generation as actions
from prompt_studio.api.deps import get_current_user_id, unwrap
from prompt_studio.api.models import GenerateResponse, ResolveRequest, ResolveResponse
from prompt_studio.core.generation import DocumentGenerator, GenerationRequest, get_generator
from prompt_studio.core.resolver import PromptResolver, get_resolver

router = APIRouter()


@router.post("/resolve", response_model=ResolveResponse)
async def resolve(
    data: ResolveRequest,
    user_id: str | None = Depends(get_current_user_id),
    resolver: PromptResolver = Depends(get_resolver),
) -> ResolveResponse:
    """Expand snippets and placeholders without calling an LLM."""
    resolved = unwrap(await actions.resolve_prompt(resolver, user_id, data.text, data.inputs))
    return ResolveResponse(
        text=resolved.text,
        snippets_resolved=resolved.snippets_resolved,
        unresolved_placeholders=resolved.unresolved_placeholders,
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    data: GenerationRequest,
    user_id: str | None = Depends(get_current_user_id),
    generator: DocumentGenerator = Depends(get_generator),
) -> GenerateResponse:
    """Generate a document from a template or raw prompt."""
    result = unwrap(await actions.generate_document(generator, user_id, data))
    return GenerateResponse(content=result.content, metadata=result.metadata)
