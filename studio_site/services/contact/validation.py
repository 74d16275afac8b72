"""
Contact form input validation.

Pure functions: trim, check shape and length, raise ClientInputError with a
stable error code on the first failing field.
"""

import math
import re
from typing import Any

from studio_site.core.exceptions import (
    INVALID_EMAIL,
    INVALID_MESSAGE,
    INVALID_NAME,
    ClientInputError,
)
from studio_site.domain.models import Submission, ValidatedContact

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 80
EMAIL_MAX_LENGTH = 254
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 4000

# Pragmatic, not RFC 5322: catches typos, not undeliverable addresses
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return len(email) <= EMAIL_MAX_LENGTH and EMAIL_PATTERN.match(email) is not None


def validate_submission(name: str, email: str, message: str) -> ValidatedContact:
    """
    Validate and normalize the submitter fields.

    Fields are checked in order name, email, message; the first failure wins.

    Raises:
        ClientInputError: invalid_name, invalid_email or invalid_message
    """
    name = name.strip()
    email = email.strip()
    message = message.strip()

    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ClientInputError(INVALID_NAME, {"length": len(name)})
    if not is_valid_email(email):
        raise ClientInputError(INVALID_EMAIL)
    if not MESSAGE_MIN_LENGTH <= len(message) <= MESSAGE_MAX_LENGTH:
        raise ClientInputError(INVALID_MESSAGE, {"length": len(message)})

    return ValidatedContact(name=name, email=email, message=message)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def parse_submission(payload: Any) -> Submission:
    """
    Build a Submission from a decoded JSON body.

    Non-string fields count as empty. formStartedAt is only honored when it
    is a non-zero JSON number. A body that is not an object yields an empty
    submission, which then fails validation.
    """
    if not isinstance(payload, dict):
        payload = {}

    started_at = payload.get("formStartedAt")
    if isinstance(started_at, bool) or not isinstance(started_at, (int, float)):
        started_at = None
    elif not started_at or (isinstance(started_at, float) and not math.isfinite(started_at)):
        started_at = None

    return Submission(
        name=_text(payload.get("name")),
        email=_text(payload.get("email")),
        message=_text(payload.get("message")),
        company=_text(payload.get("company")),
        website=_text(payload.get("website")),
        form_started_at=started_at,
    )
