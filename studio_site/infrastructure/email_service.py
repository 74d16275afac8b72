"""
Email service for sending transactional emails via the Resend HTTP API.
"""

from typing import Optional

import httpx
import structlog

from studio_site.core.exceptions import (
    EMAIL_NOT_CONFIGURED,
    EMAIL_SEND_FAILED,
    SENDER_NOT_AUTHORIZED,
)
from studio_site.domain.models import (
    DispatchResult,
    EmailMessage,
    Failed,
    Sent,
    SentViaFallback,
    Skipped,
)

logger = structlog.get_logger()

SENDER_NOT_AUTHORIZED_STATUS = 403


class EmailDispatcher:
    """
    Sends one email per call.

    If the provider rejects the sender identity (403), the send is retried
    exactly once with the fallback sender. No other failure is retried.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str,
        fallback_from: str,
        is_production: bool,
        client: httpx.AsyncClient,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.fallback_from = fallback_from
        self.is_production = is_production
        self.client = client

    async def send(self, message: EmailMessage) -> DispatchResult:
        """
        Send an email.

        Returns:
            Sent / SentViaFallback on delivery, Skipped when no API key is set
            outside production, Failed(reason) otherwise
        """
        if not self.api_key:
            if self.is_production:
                logger.error("email_not_configured", to_email=message.to)
                return Failed(EMAIL_NOT_CONFIGURED)
            # Dev convenience: log the would-be email instead of blocking local testing
            logger.warning(
                "email_api_key_missing",
                to_email=message.to,
                from_email=message.from_,
                subject=message.subject,
                reply_to=message.reply_to,
                text=message.text,
            )
            return Skipped("missing_api_key")

        primary = message.from_
        response = await self._post(message, primary)
        if response is None:
            return Failed(EMAIL_SEND_FAILED)

        if response.is_success:
            return Sent(from_used=primary, id=self._message_id(response))

        self._log_provider_error(response, primary, attempt="primary")

        if response.status_code != SENDER_NOT_AUTHORIZED_STATUS:
            return Failed(EMAIL_SEND_FAILED)

        if primary == self.fallback_from:
            return Failed(SENDER_NOT_AUTHORIZED)

        logger.warning(
            "email_sender_not_authorized",
            from_email=primary,
            fallback_from=self.fallback_from,
        )
        retry = await self._post(message, self.fallback_from)
        if retry is not None and retry.is_success:
            return SentViaFallback(from_used=self.fallback_from, id=self._message_id(retry))

        if retry is not None:
            self._log_provider_error(retry, self.fallback_from, attempt="fallback")
        return Failed(SENDER_NOT_AUTHORIZED)

    async def _post(self, message: EmailMessage, from_: str) -> Optional[httpx.Response]:
        try:
            return await self.client.post(
                self.api_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=message.to_payload(from_),
            )
        except httpx.TimeoutException:
            logger.error("email_send_timeout", to_email=message.to, from_email=from_)
            return None
        except httpx.HTTPError as e:
            logger.error(
                "email_transport_error",
                to_email=message.to,
                from_email=from_,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    @staticmethod
    def _message_id(response: httpx.Response) -> Optional[str]:
        # An unreadable body only loses the id; delivery already succeeded
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict) and isinstance(data.get("id"), str):
            return data["id"]
        return None

    @staticmethod
    def _log_provider_error(response: httpx.Response, from_: str, attempt: str) -> None:
        logger.error(
            "email_provider_error",
            status_code=response.status_code,
            from_email=from_,
            attempt=attempt,
            body=response.text[:500],
        )
