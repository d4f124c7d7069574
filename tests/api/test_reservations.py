"""Tests for the reservation endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinereserve.api.deps import get_notifier, get_reservations
from cinereserve.exceptions import SeatAlreadyReservedError
from cinereserve.schemas import ReservationCreated, UserReservation


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_notifier(enabled: bool = True) -> MagicMock:
    notifier = MagicMock()
    notifier.enabled = enabled
    notifier.reservation_confirmed = AsyncMock(return_value=True)
    return notifier


def make_reservation_service(**methods) -> MagicMock:
    service = MagicMock()
    for name, kwargs in methods.items():
        setattr(service, name, AsyncMock(**kwargs))
    return service


# ---------------------------------------------------------------------------
# POST /reservations
# ---------------------------------------------------------------------------


async def test_reservation_requires_login(test_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/reservations", json={"screening_id": 1, "seat_number": "A1"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized - please log in first"}


async def test_reservation_missing_fields(test_app: FastAPI, login_as) -> None:
    login_as("client")
    test_app.dependency_overrides[get_notifier] = lambda: make_notifier(enabled=False)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/reservations", json={"screening_id": 1})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


async def test_reservation_seat_too_long(test_app: FastAPI, db: AsyncMock, login_as) -> None:
    login_as("client")
    test_app.dependency_overrides[get_notifier] = lambda: make_notifier(enabled=False)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post(
            "/reservations", json={"screening_id": 1, "seat_number": "ABCDEFGHIJK"}
        )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid seat number"}
    db.begin.assert_not_called()


async def test_create_reservation_notifies(test_app: FastAPI, login_as) -> None:
    user = login_as("client", user_id=4)
    service = make_reservation_service(
        create_reservation={
            "return_value": ReservationCreated(id=11, screening_id=3, seat_number="C7")
        }
    )
    notifier = make_notifier()
    test_app.dependency_overrides[get_reservations] = lambda: service
    test_app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/reservations", json={"screening_id": 3, "seat_number": "c7"})

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 11, "screening_id": 3, "seat_number": "C7"}
    service.create_reservation.assert_awaited_once_with(user.id, 3, "c7")
    notifier.reservation_confirmed.assert_awaited_once_with(4, 3, "C7")


async def test_seat_conflict(test_app: FastAPI, login_as) -> None:
    login_as("client")
    service = make_reservation_service(
        create_reservation={"side_effect": SeatAlreadyReservedError()}
    )
    notifier = make_notifier()
    test_app.dependency_overrides[get_reservations] = lambda: service
    test_app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/reservations", json={"screening_id": 3, "seat_number": "C7"})

    assert response.status_code == 409
    assert response.json() == {"error": "Seat already reserved"}
    notifier.reservation_confirmed.assert_not_awaited()


async def test_unknown_screening(test_app: FastAPI, db: AsyncMock, login_as) -> None:
    login_as("client")
    db.get = AsyncMock(return_value=None)
    test_app.dependency_overrides[get_notifier] = lambda: make_notifier(enabled=False)

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post(
            "/reservations", json={"screening_id": 99, "seat_number": "A1"}
        )

    assert response.status_code == 404
    assert response.json() == {"error": "Screening not found"}
    db.execute.assert_not_awaited()


# ---------------------------------------------------------------------------
# GET /reservations/my
# ---------------------------------------------------------------------------


async def test_my_reservations(test_app: FastAPI, login_as) -> None:
    user = login_as("client", user_id=4)
    item = UserReservation(
        id=11,
        seat_number="C7",
        reservation_time="2023-05-20 10:00:00",
        screening_id=3,
        screening_time="2023-06-01 18:00:00",
        movie_title="Inception",
        duration=148,
    )
    service = make_reservation_service(list_for_user={"return_value": [item]})
    test_app.dependency_overrides[get_reservations] = lambda: service

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/reservations/my")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 1
    assert body["data"][0]["movie_title"] == "Inception"
    service.list_for_user.assert_awaited_once_with(user.id)


async def test_my_reservations_client_only(test_app: FastAPI, login_as) -> None:
    login_as("employee")

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/reservations/my")

    assert response.status_code == 403
    assert response.json()["yourRole"] == "employee"
