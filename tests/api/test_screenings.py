"""Tests for the screening endpoints."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinereserve.api.deps import get_catalog
from cinereserve.exceptions import NotFoundError
from cinereserve.schemas import ScreeningDetail, ScreeningInfo, ScreeningStats


def make_detail() -> ScreeningDetail:
    return ScreeningDetail(
        screening=ScreeningInfo(
            id=3,
            movie_id=1,
            screening_time="2023-06-01 18:00:00",
            title="Inception",
            duration=148,
            formatted_time="2023-06-01 18:00:00",
        ),
        reserved_seats=["A1", "B4"],
    )


def make_stats() -> ScreeningStats:
    return ScreeningStats(
        id=3,
        movie_title="Inception",
        duration=148,
        screening_time="2023-06-01 18:00:00",
        reserved_seats=2,
        total_seats=80,
        reserved_seat_numbers=["A1", "B4"],
        available_seats=78,
        occupancy_rate=3,
    )


async def test_get_screening(test_app: FastAPI) -> None:
    catalog = MagicMock()
    catalog.get_screening = AsyncMock(return_value=make_detail())
    test_app.dependency_overrides[get_catalog] = lambda: catalog

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/screenings/3")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["screening"]["title"] == "Inception"
    assert body["data"]["reservedSeats"] == ["A1", "B4"]
    catalog.get_screening.assert_awaited_once_with("3")


async def test_get_screening_invalid_id(test_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/screenings/three")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid screening ID"}


async def test_get_screening_not_found(test_app: FastAPI) -> None:
    catalog = MagicMock()
    catalog.get_screening = AsyncMock(side_effect=NotFoundError("Screening not found"))
    test_app.dependency_overrides[get_catalog] = lambda: catalog

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/screenings/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Screening not found"}


async def test_stats_require_staff(test_app: FastAPI, login_as) -> None:
    login_as("client")

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/screenings_stats")

    assert response.status_code == 403
    assert response.json()["requiredRoles"] == ["employee", "manager", "admin"]


async def test_stats_for_employee(test_app: FastAPI, login_as) -> None:
    login_as("employee")
    catalog = MagicMock()
    catalog.upcoming_screening_stats = AsyncMock(return_value=[make_stats()])
    test_app.dependency_overrides[get_catalog] = lambda: catalog

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/screenings_stats")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["data"][0]["occupancy_rate"] == 3
    assert body["data"][0]["available_seats"] == 78
