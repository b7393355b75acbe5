"""Document generation: template, snippets, placeholders, LLM call."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

import structlog
from pydantic import BaseModel, Field

from prompt_studio.config import get_settings
from prompt_studio.core.errors import UnauthorizedError, ValidationError
from prompt_studio.core.ownership import require_user
from prompt_studio.core.resolver import PromptResolver, get_resolver
from prompt_studio.core.templates import TemplateStore, get_template_store
from prompt_studio.llm.adapter import LLMAdapter, get_llm_adapter
from prompt_studio.llm.base import ChatOptions, LLMProvider, infer_provider

logger = structlog.get_logger()


class GenerationRequest(BaseModel):
    """One document generation. Exactly one of template id / raw prompt."""

    user_id: str | None = None
    prompt_template_id: str | None = None
    raw_prompt: str | None = None
    inputs: dict[str, str] = Field(default_factory=dict)
    llm_provider: LLMProvider | None = None
    model_id: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    system_prompt: str | None = None
    workflow_instance_id: str | None = None
    workflow_step_id: str | None = None


class GenerationResult(BaseModel):
    """Generated content plus how it was produced."""

    content: str
    metadata: dict[str, Any]


class DocumentGenerator:
    """Runs the generation pipeline; every step is a hard gate before the LLM call."""

    def __init__(
        self,
        templates: TemplateStore,
        resolver: PromptResolver,
        adapter: LLMAdapter,
        default_provider: str = LLMProvider.OPENAI.value,
    ) -> None:
        self.templates = templates
        self.resolver = resolver
        self.adapter = adapter
        self.default_provider = default_provider

    async def generate(self, caller_id: str | None, request: GenerationRequest) -> GenerationResult:
        # 1. Authorize: the caller must be the declared owner
        caller_id = require_user(caller_id)
        if request.user_id != caller_id:
            logger.warning(
                "generation.owner_mismatch", caller_id=caller_id, declared=request.user_id
            )
            raise UnauthorizedError("Request owner does not match the authenticated user.")

        # 2. Base prompt text
        base_text, template_model = self._base_text(caller_id, request)

        # 3. Snippets and placeholders
        resolved = self.resolver.resolve(caller_id, base_text, request.inputs)

        # 4. LLM call
        provider, requested_model = self._select_model(request, template_model)
        options = ChatOptions(
            model=requested_model,
            temperature=request.temperature,
            system_prompt=request.system_prompt,
        )
        chat = self.adapter.get_provider(provider)
        model = chat.resolve_model(options)
        content = await self.adapter.call(resolved.text, provider, options)

        # 5. Result
        metadata: dict[str, Any] = {
            "inputs": dict(request.inputs),
            "provider": provider,
            "model": model,
            "prompt_template_id": request.prompt_template_id,
            "resolved_prompt_length": len(resolved.text),
            "snippets_resolved": resolved.snippets_resolved,
            "unresolved_placeholders": resolved.unresolved_placeholders,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        if request.workflow_instance_id:
            metadata["workflow_instance_id"] = request.workflow_instance_id
        if request.workflow_step_id:
            metadata["workflow_step_id"] = request.workflow_step_id

        logger.info(
            "generation.completed",
            user_id=caller_id,
            provider=provider,
            model=model,
            content_length=len(content),
        )
        return GenerationResult(content=content, metadata=metadata)

    def _base_text(self, user_id: str, request: GenerationRequest) -> tuple[str, str | None]:
        has_template = bool(request.prompt_template_id)
        has_raw = request.raw_prompt is not None
        if has_template == has_raw:
            raise ValidationError("Provide exactly one of prompt_template_id or raw_prompt.")
        if has_raw and not request.raw_prompt.strip():
            raise ValidationError("Prompt content cannot be empty.")
        if has_template:
            template = self.templates.get_template(user_id, request.prompt_template_id)
            return template.optimized_prompt, template.model_id
        return request.raw_prompt, None

    def _select_model(
        self, request: GenerationRequest, template_model: str | None
    ) -> tuple[str, str | None]:
        """Pick (provider, model); a template's model is only used with its own vendor."""
        provider = request.llm_provider or infer_provider(request.model_id or template_model)
        provider_name = provider.value if provider else self.default_provider
        if request.model_id:
            return provider_name, request.model_id
        if template_model and infer_provider(template_model) in (None, provider):
            return provider_name, template_model
        return provider_name, None


@lru_cache
def get_generator() -> DocumentGenerator:
    """Get cached document generator instance."""
    return DocumentGenerator(
        get_template_store(),
        get_resolver(),
        get_llm_adapter(),
        default_provider=get_settings().default_provider,
    )
