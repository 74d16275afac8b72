"""
Contact form endpoint for the studio site.
Validates, filters spam, rate limits and relays the inquiry by email.
"""
import json

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from studio_site.api.dependencies import get_contact_handler
from studio_site.core.exceptions import INVALID_JSON, ClientInputError
from studio_site.domain.schemas import (
    ContactErrorResponse,
    ContactRequest,
    ContactSuccessResponse,
)
from studio_site.middleware.rate_limiter import APP_RATE_LIMIT, limiter
from studio_site.services.contact.handler import ContactHandler
from studio_site.services.contact.rate_limiter import get_client_key
from studio_site.services.contact.validation import parse_submission

logger = structlog.get_logger()

router = APIRouter()


@router.post(
    "/contact",
    response_model=ContactSuccessResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ContactErrorResponse},
        429: {"model": ContactErrorResponse},
        500: {"model": ContactErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ContactRequest.model_json_schema(by_alias=True)}
            },
        }
    },
)
@limiter.limit(APP_RATE_LIMIT)
async def submit_contact_form(
    request: Request,
    handler: ContactHandler = Depends(get_contact_handler),
):
    """
    Submit the contact form.

    The body is read raw so that malformed JSON maps to invalid_json instead
    of FastAPI's generic validation error. Rejections are raised as
    ContactError and rendered as {"ok": false, "error": <code>}.
    """
    try:
        payload = json.loads(await request.body())
    except ValueError:
        logger.info("contact_invalid_json")
        raise ClientInputError(INVALID_JSON)

    submission = parse_submission(payload)
    client_key = get_client_key(request.headers)

    outcome = await handler.handle(submission, client_key)

    return JSONResponse(status_code=outcome.status_code, content=outcome.body())
