"""Prompt optimization and title generation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prompt_studio.actions import llm as actions
from prompt_studio.api.deps import get_current_user_id, unwrap
from prompt_studio.api.models import (
    OptimizeResponse,
    PrepareResponse,
    RawPromptRequest,
    TitleResponse,
)
from prompt_studio.core.optimizer import PromptOptimizer, get_optimizer

router = APIRouter(prefix="/llm")


@router.post("/optimize", response_model=OptimizeResponse)
async def optimize(
    data: RawPromptRequest,
    user_id: str | None = Depends(get_current_user_id),
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> OptimizeResponse:
    """Optimize a raw prompt into a reusable template."""
    result = await actions.optimize_prompt(optimizer, user_id, data.raw_prompt)
    return OptimizeResponse(optimized_prompt=unwrap(result))


@router.post("/title", response_model=TitleResponse)
async def title(
    data: RawPromptRequest,
    user_id: str | None = Depends(get_current_user_id),
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> TitleResponse:
    """Generate a title for a raw prompt."""
    result = await actions.generate_title(optimizer, user_id, data.raw_prompt)
    return TitleResponse(title=unwrap(result))


@router.post("/prepare", response_model=PrepareResponse)
async def prepare(
    data: RawPromptRequest,
    user_id: str | None = Depends(get_current_user_id),
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> PrepareResponse:
    """Optimize and title a raw prompt in one round trip."""
    prepared = unwrap(await actions.prepare_prompt(optimizer, user_id, data.raw_prompt))
    return PrepareResponse(optimized_prompt=prepared.optimized_prompt, title=prepared.title)
