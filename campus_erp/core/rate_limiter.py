"""
Rate Limiting for Campus ERP services
=====================================
One fixed window per client IP, applied to every route through
SlowAPIMiddleware: RATE_LIMIT_MAX_REQUESTS per RATE_LIMIT_WINDOW_MS.

Counters live in Redis when REDIS_URL is set so that several workers share
them, otherwise in process memory.
"""

from typing import Optional

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from campus_erp.core.config import settings
from campus_erp.core.exceptions import RateLimitError, error_response
from campus_erp.core.logging_config import logger


def get_client_identifier(request: Request) -> str:
    """Rate limit key: the client address"""
    return f"ip:{get_remote_address(request)}"


def get_storage_uri() -> str:
    """Redis when configured, in-memory otherwise"""
    return settings.REDIS_URL or "memory://"


def build_limiter(
    service_name: str,
    limit: Optional[str] = None,
    enabled: Optional[bool] = None,
) -> Limiter:
    """
    Create the limiter for one service.

    Each service keeps its own counters (key prefix), so the admin and
    academic backends never share a window even on a shared Redis.
    """
    return Limiter(
        key_func=get_client_identifier,
        default_limits=[limit or settings.RATE_LIMIT],
        storage_uri=get_storage_uri(),
        strategy="fixed-window",
        key_prefix=service_name,
        enabled=settings.RATE_LIMIT_ENABLED if enabled is None else enabled,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Render 429 in the standard error envelope.

    Sync on purpose: SlowAPIMiddleware invokes the registered handler
    without awaiting it.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limit_exceeded", "http_path": request.url.path}
    )

    error = RateLimitError(limit=str(exc.detail) if exc.detail else None)
    return JSONResponse(
        status_code=error.status_code,
        content=error_response(error, path=request.url.path, debug=not settings.is_production()),
    )
