"""Request-scoped dependencies: caller identity and result-to-HTTP mapping."""

from __future__ import annotations

from typing import Any

import jwt
import structlog
from fastapi import Depends, Header, HTTPException

from prompt_studio.config import Settings, get_settings
from prompt_studio.core.results import ActionResult
from prompt_studio.utils.security import decode_access_token

logger = structlog.get_logger()

STATUS_BY_ERROR_CODE = {
    "unauthorized": 401,
    "validation_error": 400,
    "not_found": 404,
    "conflict": 409,
    "snippet_not_found": 422,
    "provider_unavailable": 503,
    "empty_response": 502,
    "provider_error": 502,
    "unexpected_error": 500,
}


def get_current_user_id(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str | None:
    """Verified user id from the bearer token, or None.

    A missing or invalid token is not rejected here; the operation itself
    reports ``unauthorized`` so every failure flows through the same result.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    if not settings.jwt_secret:
        logger.error("auth.jwt_secret_missing")
        return None
    try:
        return decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    except jwt.PyJWTError as e:
        logger.info("auth.invalid_token", error=str(e))
        return None


def unwrap(result: ActionResult) -> Any:
    """Return the result's data or raise the matching HTTPException."""
    if result.is_success:
        return result.data
    status = STATUS_BY_ERROR_CODE.get(result.error_code or "", 500)
    detail: dict[str, Any] = {"code": result.error_code, "message": result.message}
    if result.details:
        detail["details"] = result.details
    raise HTTPException(status_code=status, detail=detail)
