"""
Per-client rate limits for the Library API.

Reads and writes are limited separately: GET routes use
``rate_limit_default`` and POST/PUT/DELETE routes use the stricter
``rate_limit_write``. Counters live wherever ``rate_limit_storage_uri``
points (``memory://`` for a single process, ``redis://...`` when several
workers must share them). Setting ``RATE_LIMIT_ENABLED=false`` turns every
limit into a no-op.

A rejected request gets the usual error envelope with status 429.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from library_api.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

RETRY_AFTER_SECONDS = 60


def get_client_ip(request: Request) -> str:
    """
    Key requests by the originating client.

    Behind a proxy the peer address is the proxy's, so the first
    X-Forwarded-For hop, then X-Real-IP, take precedence over it.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """Build the application's Limiter from settings."""
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri=settings.rate_limit_storage_uri,
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiting {'on' if settings.rate_limit_enabled else 'off'} "
        f"(reads {settings.rate_limit_default}, writes {settings.rate_limit_write}, "
        f"storage {settings.rate_limit_storage_uri})"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with the error envelope, naming the limit that was hit."""
    limit = str(exc.detail)
    logger.warning(f"{get_client_ip(request)} hit {limit} on {request.url.path}")

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Too many requests. Please slow down.",
            "error": limit,
        },
        headers={
            "Retry-After": str(RETRY_AFTER_SECONDS),
            "X-RateLimit-Limit": limit,
        },
    )
