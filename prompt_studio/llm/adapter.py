"""One interface over the configured vendor chat providers."""

from __future__ import annotations

from functools import lru_cache

import httpx
import structlog

from prompt_studio.config import Settings, get_settings
from prompt_studio.core.errors import EmptyResponseError, ProviderUnavailableError
from prompt_studio.llm.anthropic import AnthropicChatProvider, PromptGenerator
from prompt_studio.llm.base import ChatOptions, ChatProvider, LLMProvider
from prompt_studio.llm.openai import GrokChatProvider, OpenAIChatProvider

logger = structlog.get_logger()


class LLMAdapter:
    """Routes prompts to vendor chat providers.

    Only providers with a credential are registered; asking for any other
    provider fails before any network I/O. Failures are never retried here.
    """

    def __init__(self, providers: dict[str, ChatProvider]) -> None:
        self.providers = dict(providers)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> LLMAdapter:
        """Build an adapter with every provider whose API key is set."""
        common = {
            "default_temperature": settings.default_temperature,
            "timeout": settings.llm_timeout_seconds,
            "transport": transport,
        }
        providers: dict[str, ChatProvider] = {}
        if settings.openai_api_key:
            providers[LLMProvider.OPENAI.value] = OpenAIChatProvider(
                settings.openai_api_key, settings.openai_base_url, settings.openai_model, **common
            )
        if settings.anthropic_api_key:
            providers[LLMProvider.ANTHROPIC.value] = AnthropicChatProvider(
                settings.anthropic_api_key,
                settings.anthropic_base_url,
                settings.anthropic_model,
                **common,
            )
        if settings.grok_api_key:
            providers[LLMProvider.GROK.value] = GrokChatProvider(
                settings.grok_api_key, settings.grok_base_url, settings.grok_model, **common
            )
        logger.info("llm.providers_configured", providers=sorted(providers))
        return cls(providers)

    def available_providers(self) -> list[str]:
        return sorted(self.providers)

    def get_provider(self, provider: str | LLMProvider) -> ChatProvider:
        name = provider.value if isinstance(provider, LLMProvider) else str(provider)
        if name not in self.providers:
            raise ProviderUnavailableError(name)
        return self.providers[name]

    async def call(
        self,
        prompt: str,
        provider: str | LLMProvider,
        options: ChatOptions | None = None,
    ) -> str:
        """Send ``prompt`` to ``provider`` and return the generated text.

        Raises ProviderUnavailableError, EmptyResponseError or ProviderError.
        """
        chat = self.get_provider(provider)
        options = options or ChatOptions()
        model = chat.resolve_model(options)

        logger.info("llm.call", provider=chat.name, model=model, prompt_length=len(prompt))
        try:
            text = await chat.complete(prompt, options)
        except Exception as e:
            logger.warning("llm.call_failed", provider=chat.name, model=model, error=str(e))
            raise

        if not isinstance(text, str) or not text.strip():
            logger.warning("llm.empty_response", provider=chat.name, model=model)
            raise EmptyResponseError(chat.name)

        logger.info("llm.call_succeeded", provider=chat.name, model=model, length=len(text))
        return text


@lru_cache
def get_llm_adapter() -> LLMAdapter:
    """Get cached adapter built from application settings."""
    return LLMAdapter.from_settings(get_settings())


@lru_cache
def get_prompt_generator() -> PromptGenerator | None:
    """Experimental prompt generator, or None without an Anthropic key."""
    settings = get_settings()
    if not settings.anthropic_api_key:
        return None
    return PromptGenerator(
        settings.anthropic_api_key,
        base_url=settings.anthropic_base_url,
        beta=settings.prompt_tools_beta,
        timeout=settings.llm_timeout_seconds,
    )
