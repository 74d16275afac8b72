"""Error taxonomy for the contact pipeline.

Every failure a caller can observe maps to one stable, machine-readable
error code and an HTTP status.
"""

from typing import Any, Dict, Optional


class ContactError(Exception):
    """Base exception for all contact pipeline errors"""

    status_code: int = 500

    def __init__(self, error_code: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.details = details or {}
        super().__init__(error_code)


class ClientInputError(ContactError):
    """Malformed or invalid submission; the user must correct and resubmit"""

    status_code = 400


class AbuseRejection(ContactError):
    """Submission refused by anti-abuse checks; the user must wait"""

    status_code = 429


class ConfigurationError(ContactError):
    """Server is misconfigured; not actionable by the user"""

    pass


class DeliveryError(ContactError):
    """The email provider refused or failed to deliver the owner notification"""

    pass


# Error codes
INVALID_JSON = "invalid_json"
INVALID_NAME = "invalid_name"
INVALID_EMAIL = "invalid_email"
INVALID_MESSAGE = "invalid_message"
TOO_FAST = "too_fast"
RATE_LIMITED = "rate_limited"
MISSING_TO_EMAIL = "missing_to_email"
EMAIL_NOT_CONFIGURED = "email_not_configured"
SENDER_NOT_AUTHORIZED = "sender_not_authorized"
EMAIL_SEND_FAILED = "email_send_failed"


def error_for_dispatch_failure(reason: str) -> ContactError:
    """Translate a failed dispatch reason into the matching exception."""
    if reason == EMAIL_NOT_CONFIGURED:
        return ConfigurationError(reason)
    return DeliveryError(reason)
