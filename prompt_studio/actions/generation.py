"""Document generation operations; each returns an ActionResult."""

from __future__ import annotations

from typing import Any

from prompt_studio.core.generation import DocumentGenerator, GenerationRequest, GenerationResult
from prompt_studio.core.resolver import PromptResolver, ResolvedPrompt
from prompt_studio.core.results import action


@action("Document generated successfully.", "Failed to generate document.")
async def generate_document(
    generator: DocumentGenerator, caller_id: str | None, request: GenerationRequest
) -> GenerationResult:
    return await generator.generate(caller_id, request)


@action("Prompt resolved successfully.", "Failed to resolve prompt.")
def resolve_prompt(
    resolver: PromptResolver,
    user_id: str | None,
    text: str,
    inputs: dict[str, Any] | None = None,
) -> ResolvedPrompt:
    return resolver.resolve(user_id, text, inputs)
