from studio_site.services.contact.composer import (
    compose_confirmation_email,
    compose_owner_email,
)
from studio_site.services.contact.handler import ContactHandler, RateWindow
from studio_site.services.contact.rate_limiter import RateLimiter, get_client_key
from studio_site.services.contact.spam import classify_submission
from studio_site.services.contact.validation import (
    is_valid_email,
    parse_submission,
    validate_submission,
)

__all__ = [
    "compose_confirmation_email",
    "compose_owner_email",
    "ContactHandler",
    "RateWindow",
    "RateLimiter",
    "get_client_key",
    "classify_submission",
    "is_valid_email",
    "parse_submission",
    "validate_submission",
]
