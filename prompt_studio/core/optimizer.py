"""Turns a raw prompt into an optimized template and a title."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import lru_cache

import structlog

from prompt_studio.config import get_settings
from prompt_studio.core.errors import EmptyResponseError, ProviderError, ValidationError
from prompt_studio.llm.adapter import LLMAdapter, get_llm_adapter, get_prompt_generator
from prompt_studio.llm.anthropic import PromptGenerator
from prompt_studio.llm.base import ChatOptions
from prompt_studio.llm.prompts import MAX_TITLE_LENGTH, OPTIMIZE_SYSTEM_PROMPT, TITLE_SYSTEM_PROMPT

logger = structlog.get_logger()

TITLE_TEMPERATURE = 0.3


@dataclass
class PreparedPrompt:
    """Result of running optimization and title generation together."""

    optimized_prompt: str
    title: str


def clean_title(text: str) -> str:
    """Strip quotes/whitespace from a generated title and clip its length."""
    title = text.strip().splitlines()[0].strip() if text.strip() else ""
    title = title.strip("\"'`").strip().rstrip(".")
    return title[:MAX_TITLE_LENGTH].rstrip()


class PromptOptimizer:
    """Single-step LLM operations used while authoring a template."""

    def __init__(
        self,
        adapter: LLMAdapter,
        generator: PromptGenerator | None = None,
        provider: str = "openai",
    ) -> None:
        self.adapter = adapter
        self.generator = generator
        self.provider = provider

    async def optimize(self, raw_prompt: str) -> str:
        """Optimize ``raw_prompt``.

        The experimental prompt-generation API is tried first; on any failure
        the standard chat path is used. When both fail the raised ProviderError
        carries both reasons.
        """
        raw_prompt = _require_text(raw_prompt)

        if self.generator is not None:
            try:
                return await self.generator.generate_prompt(raw_prompt)
            except Exception as e:
                experimental_error = str(e)
                logger.warning("optimizer.experimental_failed", error=experimental_error)
        else:
            experimental_error = "prompt generation API is not configured"

        try:
            optimized = await self.adapter.call(
                raw_prompt,
                self.provider,
                ChatOptions(system_prompt=OPTIMIZE_SYSTEM_PROMPT),
            )
        except Exception as e:
            logger.error("optimizer.fallback_failed", error=str(e), experimental_error=experimental_error)
            if self.generator is None:
                raise
            status = e.status_code if isinstance(e, ProviderError) else None
            raise ProviderError(
                self.provider,
                f"Prompt generation failed ({experimental_error}); "
                f"chat optimization failed ({e})",
                status_code=status,
            ) from e

        logger.info("optimizer.optimized_via_chat", provider=self.provider)
        return optimized.strip()

    async def generate_title(self, raw_prompt: str) -> str:
        """Generate a short title for ``raw_prompt``."""
        raw_prompt = _require_text(raw_prompt)
        text = await self.adapter.call(
            raw_prompt,
            self.provider,
            ChatOptions(system_prompt=TITLE_SYSTEM_PROMPT, temperature=TITLE_TEMPERATURE),
        )
        title = clean_title(text)
        if not title:
            raise EmptyResponseError(self.provider)
        return title

    async def prepare(self, raw_prompt: str) -> PreparedPrompt:
        """Optimize and title ``raw_prompt`` concurrently.

        Both calls are allowed to settle before the outcome is decided; the
        first failure (optimization before title) is then raised.
        """
        raw_prompt = _require_text(raw_prompt)
        optimized, title = await asyncio.gather(
            self.optimize(raw_prompt),
            self.generate_title(raw_prompt),
            return_exceptions=True,
        )
        failures = [r for r in (optimized, title) if isinstance(r, BaseException)]
        if failures:
            logger.warning("optimizer.prepare_failed", errors=[str(f) for f in failures])
            raise failures[0]
        return PreparedPrompt(optimized_prompt=optimized, title=title)


def _require_text(raw_prompt: str) -> str:
    if not raw_prompt or not raw_prompt.strip():
        raise ValidationError("Prompt content cannot be empty.")
    return raw_prompt


@lru_cache
def get_optimizer() -> PromptOptimizer:
    """Get cached optimizer instance."""
    return PromptOptimizer(
        get_llm_adapter(), get_prompt_generator(), provider=get_settings().default_provider
    )
