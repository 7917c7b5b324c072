"""SMS notification dispatch."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from shoot_coordinator.domain.notifications import SmsCategory, SmsResult
from shoot_coordinator.errors import BackendError

logger = logging.getLogger(__name__)

MOCK_NOTE = "Mocked (Twilio not configured)"
PROVIDER_NOTE = "Sent via Twilio"


class SmsClient(Protocol):
    """Interface for an SMS delivery provider."""

    async def send_sms(self, to: str, body: str) -> str:
        """Deliver a message and return the provider message id."""


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class NotificationService:
    """Deliver workflow SMS through a provider, or log them when none is set."""

    sms_client: SmsClient | None = None
    clock_millis: Callable[[], int] = field(default=_epoch_millis)

    async def send(
        self, destination_phone: str, message_body: str, category: SmsCategory
    ) -> SmsResult:
        """Send one SMS and report the outcome without raising."""
        if not destination_phone or not message_body:
            return SmsResult(success=False, error="Missing 'to' or 'message' field")

        logger.info(
            "Processing SMS request",
            extra={"category": str(category), "to": destination_phone},
        )
        if self.sms_client is None:
            logger.info(
                "Mock SMS to %s [%s]: %s", destination_phone, category, message_body
            )
            return SmsResult(
                success=True,
                message_id=f"mock_{self.clock_millis()}",
                note=MOCK_NOTE,
            )

        try:
            message_id = await self.sms_client.send_sms(
                destination_phone, message_body
            )
        except (BackendError, httpx.HTTPError) as exc:
            logger.exception(
                "SMS delivery failed",
                extra={"category": str(category), "to": destination_phone},
            )
            return SmsResult(success=False, error=str(exc) or type(exc).__name__)
        logger.info("SMS sent successfully via Twilio: %s", message_id)
        return SmsResult(success=True, message_id=message_id, note=PROVIDER_NOTE)
