"""
App-wide rate limiting using slowapi.

A coarse per-address guard in front of every route. The contact pipeline's
own minute/hour windows are separate (services/contact/rate_limiter.py).
"""
import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from studio_site.core.config import settings
from studio_site.core.exceptions import RATE_LIMITED

logger = structlog.get_logger()

APP_RATE_LIMIT = f"{settings.rate_limit_requests}/minute"

limiter = Limiter(key_func=get_remote_address, default_limits=[APP_RATE_LIMIT])


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi rejections in the same shape as contact errors"""
    logger.warning(
        "app_rate_limited",
        client=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"ok": False, "error": RATE_LIMITED},
    )
