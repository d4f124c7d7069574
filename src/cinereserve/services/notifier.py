"""Best-effort reservation confirmation webhook."""

import logging
from datetime import datetime, timezone

import httpx

from cinereserve.config import settings

logger = logging.getLogger(__name__)


class ReservationNotifier:
    """
    Posts a ``RESERVATION_CONFIRMATION`` event to an HTTP webhook.

    Delivery is fire-and-forget: failures are logged and never reach the
    client that made the reservation.
    """

    def __init__(
        self,
        webhook_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize notifier.

        Args:
            webhook_url: Endpoint receiving the events; empty disables delivery
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.webhook_url = settings.notification_webhook_url if webhook_url is None else webhook_url
        self.timeout = timeout or settings.notification_timeout
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    async def reservation_confirmed(self, user_id: int, screening_id: int, seat_number: str) -> bool:
        """
        Send the confirmation event.

        Returns:
            True if the webhook accepted the event, False otherwise
        """
        if not self.enabled:
            return False

        event = {
            "type": "RESERVATION_CONFIRMATION",
            "userId": user_id,
            "screeningId": screening_id,
            "seatNumber": seat_number,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self.transport,
            ) as client:
                response = await client.post(self.webhook_url, json=event)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Reservation webhook rejected event: {e.response.status_code} "
                f"(screening {screening_id}, seat {seat_number})"
            )
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Reservation webhook unreachable: {e}")
            return False

        logger.debug(f"Sent reservation confirmation for screening {screening_id}")
        return True
