"""Tests for the reservation confirmation webhook."""

import json

import httpx

from cinereserve.services.notifier import ReservationNotifier

WEBHOOK_URL = "https://hooks.example.com/reservations"


async def test_disabled_without_url() -> None:
    notifier = ReservationNotifier(webhook_url="")

    assert notifier.enabled is False
    assert await notifier.reservation_confirmed(1, 2, "A1") is False


async def test_posts_confirmation_event() -> None:
    received: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(202)

    notifier = ReservationNotifier(webhook_url=WEBHOOK_URL, transport=httpx.MockTransport(handler))

    assert await notifier.reservation_confirmed(7, 42, "C5") is True
    assert len(received) == 1
    assert str(received[0].url) == WEBHOOK_URL

    event = json.loads(received[0].content)
    assert event["type"] == "RESERVATION_CONFIRMATION"
    assert event["userId"] == 7
    assert event["screeningId"] == 42
    assert event["seatNumber"] == "C5"
    assert "timestamp" in event


async def test_error_status_is_reported_not_raised() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    notifier = ReservationNotifier(webhook_url=WEBHOOK_URL, transport=transport)

    assert await notifier.reservation_confirmed(7, 42, "C5") is False


async def test_connection_failure_is_reported_not_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = ReservationNotifier(webhook_url=WEBHOOK_URL, transport=httpx.MockTransport(handler))

    assert await notifier.reservation_confirmed(7, 42, "C5") is False
