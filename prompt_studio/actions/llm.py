"""Prompt authoring operations backed by the LLM; each returns an ActionResult."""

from __future__ import annotations

from prompt_studio.core.optimizer import PreparedPrompt, PromptOptimizer
from prompt_studio.core.ownership import require_user
from prompt_studio.core.results import action


@action("Prompt optimized successfully.", "Failed to optimize prompt.")
async def optimize_prompt(optimizer: PromptOptimizer, user_id: str | None, raw_prompt: str) -> str:
    require_user(user_id)
    return await optimizer.optimize(raw_prompt)


@action("Title generated successfully.", "Failed to generate title.")
async def generate_title(optimizer: PromptOptimizer, user_id: str | None, raw_prompt: str) -> str:
    require_user(user_id)
    return await optimizer.generate_title(raw_prompt)


@action("Prompt prepared successfully.", "Failed to prepare prompt.")
async def prepare_prompt(
    optimizer: PromptOptimizer, user_id: str | None, raw_prompt: str
) -> PreparedPrompt:
    require_user(user_id)
    return await optimizer.prepare(raw_prompt)
