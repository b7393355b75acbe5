"""OpenAI-compatible chat completions (OpenAI and xAI Grok)."""

from __future__ import annotations

from typing import Any

from prompt_studio.llm.base import ChatOptions, ChatProvider, text_content


class OpenAIChatProvider(ChatProvider):
    """POST {base_url}/chat/completions with bearer authentication."""

    name = "openai"

    async def complete(self, prompt: str, options: ChatOptions) -> str | None:
        messages: list[dict[str, str]] = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})

        payload: dict[str, Any] = {
            "model": self.resolve_model(options),
            "messages": messages,
            "temperature": self.resolve_temperature(options),
        }
        if options.max_tokens:
            payload["max_tokens"] = options.max_tokens

        data = await self.post_json(
            "/chat/completions",
            payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        choices = data.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return None
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return None
        # some compatible servers answer with content blocks instead of a string
        return text_content(message.get("content"))


class GrokChatProvider(OpenAIChatProvider):
    """xAI's Grok API speaks the OpenAI chat completions dialect."""

    name = "grok"
