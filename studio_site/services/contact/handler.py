"""
Contact submission pipeline.

Per request, strictly in order:

    bot?            -> 200, nothing else happens
    too fast?       -> 429 too_fast (no rate-limit hit recorded)
    validate        -> 400 invalid_name / invalid_email / invalid_message
    rate limit      -> 429 rate_limited (short window, then long window)
    destination?    -> 500 missing_to_email
    owner email     -> 500 on failure
    confirmation    -> skipped when suspicious, failures are non-fatal
    respond         -> 200 {"ok": true} (+ debug outside production)
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

from studio_site.core.exceptions import (
    EMAIL_SEND_FAILED,
    MISSING_TO_EMAIL,
    RATE_LIMITED,
    TOO_FAST,
    AbuseRejection,
    ConfigurationError,
    error_for_dispatch_failure,
)
from studio_site.domain.models import (
    ContactOutcome,
    DispatchResult,
    Failed,
    SpamClassification,
    Submission,
    ValidatedContact,
)
from studio_site.infrastructure.email_service import EmailDispatcher
from studio_site.services.contact.composer import (
    compose_confirmation_email,
    compose_owner_email,
)
from studio_site.services.contact.rate_limiter import RateLimiter
from studio_site.services.contact.spam import DEFAULT_MIN_FILL_MS, classify_submission
from studio_site.services.contact.validation import validate_submission

logger = structlog.get_logger()


@dataclass(frozen=True)
class RateWindow:
    name: str
    window_ms: int
    max_count: int


SHORT_WINDOW = RateWindow("minute", 60_000, 5)
LONG_WINDOW = RateWindow("hour", 60 * 60_000, 20)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ContactHandler:
    """Orchestrates validation, spam checks, rate limiting and email dispatch."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        dispatcher: EmailDispatcher,
        to_email: str,
        from_email: str,
        is_production: bool,
        studio_name: str = "PacNW Studio",
        min_fill_ms: int = DEFAULT_MIN_FILL_MS,
        short_window: RateWindow = SHORT_WINDOW,
        long_window: RateWindow = LONG_WINDOW,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.rate_limiter = rate_limiter
        self.dispatcher = dispatcher
        self.to_email = to_email
        self.from_email = from_email
        self.is_production = is_production
        self.studio_name = studio_name
        self.min_fill_ms = min_fill_ms
        self.windows = (short_window, long_window)
        self._clock = clock or _now_ms

    async def handle(self, submission: Submission, client_key: str) -> ContactOutcome:
        """
        Run one submission through the pipeline.

        Raises:
            ContactError: any rejection, carrying its error code and status
        """
        honeypot = submission.honeypot
        verdict = classify_submission(
            honeypot, submission.form_started_at, self._clock(), self.min_fill_ms
        )

        if verdict.classification == SpamClassification.BOT:
            # Indistinguishable from a real success
            logger.info("contact_bot_absorbed", client=client_key, elapsed_ms=verdict.elapsed_ms)
            return ContactOutcome()

        if verdict.classification == SpamClassification.TOO_FAST:
            logger.info("contact_too_fast", client=client_key, elapsed_ms=verdict.elapsed_ms)
            raise AbuseRejection(TOO_FAST, {"elapsed_ms": verdict.elapsed_ms})

        contact = validate_submission(submission.name, submission.email, submission.message)

        self._enforce_rate_limits(client_key)

        if not self.to_email:
            logger.error("contact_missing_to_email")
            raise ConfigurationError(MISSING_TO_EMAIL)

        owner_message = compose_owner_email(
            contact,
            to_email=self.to_email,
            from_email=self.from_email,
            client_key=client_key,
            elapsed_ms=verdict.elapsed_ms,
            honeypot=honeypot if verdict.is_suspicious else "",
        )
        owner_result = await self.dispatcher.send(owner_message)
        if not owner_result.ok:
            logger.error("contact_owner_email_failed", reason=owner_result.reason)
            raise error_for_dispatch_failure(owner_result.reason)

        logger.info(
            "contact_owner_email_sent",
            suspicious=verdict.is_suspicious,
            **self._log_fields(owner_result),
        )

        confirmation_debug: Dict[str, Any]
        if verdict.is_suspicious:
            # Never auto-reply to a possible spammer; it confirms a live inbox
            confirmation_debug = {"skipped": "spam_suspected"}
        else:
            confirmation_debug = await self._send_confirmation(contact)

        if self.is_production:
            return ContactOutcome()
        return ContactOutcome(
            debug={"owner": owner_result.debug(), "confirmation": confirmation_debug}
        )

    def _enforce_rate_limits(self, client_key: str) -> None:
        for window in self.windows:
            decision = self.rate_limiter.check(
                f"contact:{window.name}:{client_key}", window.window_ms, window.max_count
            )
            if not decision.allowed:
                logger.warning(
                    "contact_rate_limited",
                    client=client_key,
                    window=window.name,
                    reset_at=decision.reset_at,
                )
                raise AbuseRejection(RATE_LIMITED, {"window": window.name})

    async def _send_confirmation(self, contact: ValidatedContact) -> Dict[str, Any]:
        message = compose_confirmation_email(
            contact,
            owner_email=self.to_email,
            from_email=self.from_email,
            studio_name=self.studio_name,
        )
        try:
            result = await self.dispatcher.send(message)
        except Exception as e:
            # The owner email already went out, so the request still succeeds
            logger.error(
                "contact_confirmation_email_error",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=e,
            )
            return Failed(EMAIL_SEND_FAILED).debug()
        if not result.ok:
            # The lead is already captured by the owner email
            logger.error("contact_confirmation_email_failed", reason=result.reason)
        else:
            logger.info("contact_confirmation_email_sent", **self._log_fields(result))
        return result.debug()

    @staticmethod
    def _log_fields(result: DispatchResult) -> Dict[str, Any]:
        return {key: value for key, value in result.debug().items() if value is not None}
