"""Rate limiting dependency for FastAPI routes.

Wires the throttle adapter into the HTTP layer:
- Routes depend on ``enforce_rate_limit`` only.
- The storage backend sits behind ``AbstractRateLimiter``.
- Fixed window per client address, 60 requests per hour by default.
"""

from __future__ import annotations

import logging
import time

from fastapi import HTTPException, Request, Response, status

from tutor_proxy.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from tutor_proxy.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from tutor_proxy.core.client_identity import resolve_client_id
from tutor_proxy.core.config import settings
from tutor_proxy.core.logging import hash_identifier

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, try later."

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemoryFixedWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    reset_in = max(0, result.reset_at - int(time.time()))
    headers = {
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(reset_in),
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


async def enforce_rate_limit(request: Request, response: Response) -> None:
    """FastAPI dependency throttling requests per client address.

    Consumes one unit from the caller's window. Over the limit, raises 429
    with the fixed "Too many requests" message.

    Raises:
        HTTPException: 429 Too Many Requests when the window is exhausted.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    client_id = resolve_client_id(request)
    key_hash = hash_identifier(client_id)

    result = limiter.consume(f"ip:{client_id}")
    headers = _rate_limit_headers(result) if settings.app.rate_limit_include_headers else {}

    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        response.headers.update(headers)
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": result.retry_after_seconds,
        },
    )
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=RATE_LIMIT_MESSAGE,
        headers=headers or None,
    )
