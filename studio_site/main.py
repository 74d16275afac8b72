from contextlib import asynccontextmanager
from typing import Callable

import httpx
import sentry_sdk
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse

from studio_site.core.config import Settings, settings
from studio_site.core.exceptions import ContactError
from studio_site.core.logging_config import configure_logging

configure_logging(settings.environment, settings.log_level)

from studio_site.api import contact, projects  # noqa: E402
from studio_site.infrastructure.email_service import EmailDispatcher  # noqa: E402
from studio_site.middleware.rate_limiter import (  # noqa: E402
    limiter,
    rate_limit_exceeded_handler,
)
from studio_site.middleware.trace_middleware import TraceMiddleware  # noqa: E402
from studio_site.services.contact.handler import (  # noqa: E402
    ContactHandler,
    RateWindow,
)
from studio_site.services.contact.rate_limiter import RateLimiter  # noqa: E402

logger = structlog.get_logger()

# Sentry is a no-op when SENTRY_DSN is empty
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
    )


def build_contact_handler(config: Settings, client: httpx.AsyncClient) -> ContactHandler:
    """Wire the contact pipeline from configuration. Called once per process."""
    dispatcher = EmailDispatcher(
        api_key=config.email_api_key,
        api_url=config.email_api_url,
        fallback_from=config.contact_fallback_from_email,
        is_production=config.is_production,
        client=client,
    )
    return ContactHandler(
        rate_limiter=RateLimiter(sweep_threshold=config.rate_limit_sweep_threshold),
        dispatcher=dispatcher,
        to_email=config.contact_to_email,
        from_email=config.contact_from_email,
        is_production=config.is_production,
        studio_name=config.studio_name,
        min_fill_ms=config.contact_min_fill_ms,
        short_window=RateWindow(
            "minute", config.contact_short_window_ms, config.contact_short_window_max
        ),
        long_window=RateWindow(
            "hour", config.contact_long_window_ms, config.contact_long_window_max
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info(
        "starting_application",
        version=settings.api_version,
        environment=settings.environment,
    )

    if not settings.contact_to_email:
        logger.warning("contact_to_email_not_configured")
    if not settings.email_api_key:
        logger.warning("email_api_key_not_configured", production=settings.is_production)

    client = httpx.AsyncClient(timeout=settings.email_timeout_seconds)
    app.state.contact_handler = build_contact_handler(settings, client)

    yield

    logger.info("shutting_down_application")
    await client.aclose()


_is_production = settings.is_production

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url=None if _is_production else "/api/docs",
    redoc_url=None if _is_production else "/api/redoc",
    openapi_url=None if _is_production else "/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "X-Trace-Id"],
    expose_headers=["Content-Type", "X-Trace-Id"],
    max_age=600,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: StarletteRequest, call_next: Callable) -> StarletteResponse:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=(), payment=()"
        if _is_production:
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains; preload"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(TraceMiddleware)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(contact.router, prefix="/api", tags=["Contact"])
app.include_router(projects.router, prefix="/api", tags=["Projects"])


# Exception handlers
@app.exception_handler(ContactError)
async def contact_error_handler(request: Request, exc: ContactError):
    """Render pipeline rejections as {"ok": false, "error": <code>}"""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "contact_rejected",
        error_code=exc.error_code,
        status_code=exc.status_code,
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.error_code},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning("http_exception", status_code=exc.status_code, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": "http_error", "message": exc.detail},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle query/path validation errors"""
    errors = [
        {"loc": [str(part) for part in error["loc"]], "msg": error["msg"]}
        for error in exc.errors()
    ]
    logger.warning("validation_error", errors=errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"ok": False, "error": "validation_error", "details": errors},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error("unhandled_exception", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "internal_error"},
    )


@app.get("/health")
async def health() -> JSONResponse:
    """Health check endpoint"""
    return JSONResponse({"status": "ok", "version": settings.api_version})
