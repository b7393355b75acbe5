"""Uniform success/failure results for public operations."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

import structlog
from pydantic import BaseModel, Field

from prompt_studio.core.errors import StudioError, UnexpectedError

logger = structlog.get_logger()

T = TypeVar("T")


class ActionResult(BaseModel, Generic[T]):
    """Outcome of a public operation: either data or a user-safe message."""

    is_success: bool
    message: str
    data: T | None = None
    error_code: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any, message: str) -> ActionResult:
        return cls(is_success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: StudioError) -> ActionResult:
        return cls(
            is_success=False,
            message=error.message,
            error_code=error.code,
            details=error.details,
        )


def action(
    success_message: str,
    failure_message: str = "An unexpected error occurred.",
) -> Callable[[Callable[..., Any]], Callable[..., Awaitable[ActionResult]]]:
    """Wrap an operation so it always returns an ``ActionResult``.

    Classified errors keep their message and code; anything else is logged
    with its traceback and reported as ``unexpected_error`` with
    ``failure_message``. Sync and async operations are both supported.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Awaitable[ActionResult]]:
        event = f"action.{func.__name__}"

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
            try:
                data = func(*args, **kwargs)
                if inspect.isawaitable(data):
                    data = await data
            except StudioError as e:
                logger.warning(f"{event}.failed", code=e.code, error=e.message, **e.details)
                return ActionResult.fail(e)
            except Exception as e:
                logger.exception(f"{event}.unexpected", error=str(e))
                return ActionResult.fail(UnexpectedError(failure_message))
            return ActionResult.ok(data, success_message)

        return wrapper

    return decorator
