"""Anthropic Messages API and the experimental prompt-generation endpoint."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from prompt_studio.core.errors import EmptyResponseError
from prompt_studio.llm.base import DEFAULT_TIMEOUT, ChatOptions, ChatProvider, text_content

logger = structlog.get_logger()

ANTHROPIC_VERSION = "2023-06-01"
PROMPT_TOOLS_BETA = "prompt-tools-2025-04-02"
DEFAULT_MAX_TOKENS = 4096


class AnthropicChatProvider(ChatProvider):
    """POST {base_url}/v1/messages."""

    name = "anthropic"

    def headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_VERSION}

    async def complete(self, prompt: str, options: ChatOptions) -> str | None:
        payload: dict[str, Any] = {
            "model": self.resolve_model(options),
            "max_tokens": options.max_tokens or DEFAULT_MAX_TOKENS,
            "temperature": self.resolve_temperature(options),
            "messages": [{"role": "user", "content": prompt}],
        }
        if options.system_prompt:
            payload["system"] = options.system_prompt

        data = await self.post_json("/v1/messages", payload, headers=self.headers())
        return text_content(data.get("content"))


class PromptGenerator:
    """Anthropic's experimental "generate a prompt for this task" API.

    The response is a whole conversation template; the suggested prompt is the
    text of the first ``user`` message in it.
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.anthropic.com",
        beta: str = PROMPT_TOOLS_BETA,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._provider = AnthropicChatProvider(
            api_key=api_key,
            base_url=base_url,
            default_model="",
            timeout=timeout,
            transport=transport,
        )
        self.beta = beta

    async def generate_prompt(self, task: str, target_model: str | None = None) -> str:
        """Return a suggested prompt for ``task``."""
        payload: dict[str, Any] = {"task": task}
        if target_model:
            payload["target_model"] = target_model

        headers = {**self._provider.headers(), "anthropic-beta": self.beta}
        data = await self._provider.post_json(
            "/v1/experimental/generate_prompt", payload, headers=headers
        )

        for message in data.get("messages") or []:
            if isinstance(message, dict) and message.get("role") == "user":
                text = text_content(message.get("content")).strip()
                if text:
                    logger.info("llm.prompt_generated", length=len(text))
                    return text
                break

        raise EmptyResponseError(self.name)
