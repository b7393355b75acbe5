"""Identity tokens, snippet name validation and secret scanning."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import jwt

# Patterns that might indicate leaked secrets
SECRET_PATTERNS = [
    (re.compile(r"sk-ant-[a-zA-Z0-9-]{20,}"), "Anthropic API key"),
    (re.compile(r"sk-[a-zA-Z0-9]{20,}"), "OpenAI API key"),
    (re.compile(r"xai-[a-zA-Z0-9]{20,}"), "xAI API key"),
    (re.compile(r"ghp_[a-zA-Z0-9]{36}"), "GitHub PAT"),
    (re.compile(r"eyJ[a-zA-Z0-9_-]{50,}"), "JWT token"),
    (re.compile(r"AKIA[0-9A-Z]{16}"), "AWS access key"),
]

SNIPPET_NAME_PATTERN = re.compile(r"^@\w(?:[\w-]*\w)?$")
MAX_SNIPPET_NAME_LENGTH = 100


def scan_for_secrets(text: str) -> list[str]:
    """Scan text for potential secrets. Returns list of detected pattern names."""
    return [name for pattern, name in SECRET_PATTERNS if pattern.search(text)]


def validate_snippet_name(name: str) -> bool:
    """Validate snippet name format: '@' then word characters, inner hyphens allowed."""
    return bool(SNIPPET_NAME_PATTERN.fullmatch(name)) and len(name) <= MAX_SNIPPET_NAME_LENGTH


def create_access_token(
    user_id: str,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    """Issue a signed bearer token whose subject is ``user_id``."""
    now = datetime.now(timezone.utc)
    payload = {"sub": user_id, "iat": now, "exp": now + timedelta(minutes=expires_minutes)}
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Verify a bearer token and return its subject.

    Raises jwt.PyJWTError when the token is malformed, expired or unsigned.
    """
    payload = jwt.decode(token, secret, algorithms=[algorithm], options={"require": ["sub", "exp"]})
    return str(payload["sub"])
