"""Error taxonomy shared by stores, the resolver, the LLM layer and the actions.

Internal components raise these; the action boundary converts them into
``ActionResult`` failures so callers never need to inspect exception types.
"""

from __future__ import annotations

from typing import Any


class StudioError(Exception):
    """Base class for all classified errors."""

    code = "unexpected_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def details(self) -> dict[str, Any]:
        """Structured context returned alongside the message."""
        return {}


class UnauthorizedError(StudioError):
    """No authenticated identity, or the identity does not match the owner."""

    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(StudioError):
    """Missing or conflicting required fields, malformed names."""

    code = "validation_error"


class NotFoundError(StudioError):
    """Resource absent or not owned by the caller."""

    code = "not_found"


class ConflictError(StudioError):
    """Unique-name violation."""

    code = "conflict"


class SnippetNotFoundError(StudioError):
    """One or more referenced snippets do not exist for the caller."""

    code = "snippet_not_found"

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"Context snippets not found: {', '.join(self.names)}")

    @property
    def details(self) -> dict[str, Any]:
        return {"names": self.names}


class ProviderUnavailableError(StudioError):
    """The requested LLM provider has no configured credential."""

    code = "provider_unavailable"

    def __init__(self, provider: str, message: str | None = None) -> None:
        self.provider = provider
        super().__init__(message or f"LLM provider '{provider}' is not configured")

    @property
    def details(self) -> dict[str, Any]:
        return {"provider": self.provider}


class EmptyResponseError(StudioError):
    """The vendor answered successfully but without usable text."""

    code = "empty_response"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"LLM provider '{provider}' returned an empty response")

    @property
    def details(self) -> dict[str, Any]:
        return {"provider": self.provider}


class ProviderError(StudioError):
    """Vendor-reported API failure (HTTP status, SDK or transport level)."""

    code = "provider_error"

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        vendor_code: str | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.vendor_code = vendor_code
        prefix = f"{provider} API error"
        if status_code is not None:
            prefix += f" ({status_code})"
        super().__init__(f"{prefix}: {message}")

    @property
    def details(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "status_code": self.status_code,
            "vendor_code": self.vendor_code,
        }


class UnexpectedError(StudioError):
    """Catch-all for unclassified failures."""

    code = "unexpected_error"
