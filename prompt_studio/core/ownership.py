"""Helpers shared by the user-scoped stores."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID

from prompt_studio.core.errors import NotFoundError, UnauthorizedError, ValidationError


def require_user(user_id: str | None) -> str:
    """Return the caller's identity, or raise if there is none."""
    if not user_id or not str(user_id).strip():
        raise UnauthorizedError()
    return str(user_id)


def next_updated_at(previous: datetime | str | None) -> str:
    """Timestamp for a mutation, strictly later than ``previous``."""
    now = datetime.now(timezone.utc)
    if previous is not None:
        if isinstance(previous, str):
            previous = datetime.fromisoformat(previous.replace("Z", "+00:00"))
        if previous.tzinfo is None:
            previous = previous.replace(tzinfo=timezone.utc)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
    return now.isoformat()


def parse_id(value: str | UUID | None, label: str) -> str:
    """Normalise a row id; malformed ids can never match a row."""
    if not value:
        raise ValidationError(f"{label} id is required.")
    try:
        return str(UUID(str(value)))
    except ValueError:
        raise NotFoundError(f"{label} not found or unauthorized.") from None
