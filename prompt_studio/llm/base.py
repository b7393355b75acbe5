"""Common pieces of the vendor chat providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

from prompt_studio.core.errors import ProviderError

logger = structlog.get_logger()

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0


class LLMProvider(str, Enum):
    """Supported chat-completion vendors."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GROK = "grok"


@dataclass
class ChatOptions:
    """Per-call overrides; None means "use the provider default"."""

    model: str | None = None
    temperature: float | None = None
    system_prompt: str | None = None
    max_tokens: int | None = None


class ChatProvider(ABC):
    """A single vendor chat endpoint reached over HTTP."""

    name: str

    def __init__(
        self,
        api_key: str,
        base_url: str,
        default_model: str,
        default_temperature: float = DEFAULT_TEMPERATURE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model
        self.default_temperature = default_temperature
        self.timeout = timeout
        self._transport = transport

    @abstractmethod
    async def complete(self, prompt: str, options: ChatOptions) -> str | None:
        """Send ``prompt`` and return the generated text (None or "" if empty)."""

    def resolve_model(self, options: ChatOptions) -> str:
        return options.model or self.default_model

    def resolve_temperature(self, options: ChatOptions) -> float:
        return self.default_temperature if options.temperature is None else options.temperature

    async def post_json(
        self, path: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> dict[str, Any]:
        """POST ``payload`` and return the decoded body, classifying failures."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(path, json=payload, headers=headers)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            message, vendor_code = parse_vendor_error(e.response)
            raise ProviderError(
                self.name, message, status_code=e.response.status_code, vendor_code=vendor_code
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise ProviderError(self.name, f"Malformed response body: {e}") from e
        if not isinstance(data, dict):
            raise ProviderError(
                self.name, f"Malformed response body: expected an object, got {type(data).__name__}"
            )
        return data


def parse_vendor_error(response: httpx.Response) -> tuple[str, str | None]:
    """Extract (message, vendor error code) from an error response.

    OpenAI/xAI answer ``{"error": {"message", "type", "code"}}``; Anthropic
    answers ``{"type": "error", "error": {"type", "message"}}``.
    """
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase, None

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        code = error.get("code") or error.get("type")
        return error.get("message") or response.reason_phrase, str(code) if code else None
    if isinstance(error, str):
        return error, None
    return response.text or response.reason_phrase, None


MODEL_PREFIXES = {
    "gpt-": LLMProvider.OPENAI,
    "o1": LLMProvider.OPENAI,
    "o3": LLMProvider.OPENAI,
    "o4": LLMProvider.OPENAI,
    "claude-": LLMProvider.ANTHROPIC,
    "grok-": LLMProvider.GROK,
}


def infer_provider(model_id: str | None) -> LLMProvider | None:
    """Guess the vendor from a model identifier such as ``gpt-4o`` or ``claude-…``."""
    if not model_id:
        return None
    lowered = model_id.lower()
    for prefix, provider in MODEL_PREFIXES.items():
        if lowered.startswith(prefix):
            return provider
    return None


def text_content(content: Any) -> str:
    """Concatenate the text of a message's content (a string or a list of blocks)."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            block.get("text", "")
            for block in content
            if isinstance(block, dict) and block.get("type") == "text"
        )
    return ""
