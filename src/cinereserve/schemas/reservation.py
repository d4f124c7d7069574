"""Pydantic schemas for reservation data."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ReservationRequest(BaseModel):
    """Raw reservation body; presence is checked by the reservation service."""

    model_config = ConfigDict(extra="ignore")

    screening_id: Any = None
    seat_number: Any = None


class ReservationCreated(BaseModel):
    success: bool = True
    id: int
    screening_id: int
    seat_number: str


class UserReservation(BaseModel):
    """One of the caller's reservations with its screening and movie."""

    id: int
    seat_number: str
    reservation_time: str
    screening_id: int
    screening_time: str
    movie_title: str
    duration: int


class UserReservationsResponse(BaseModel):
    success: bool = True
    count: int
    data: list[UserReservation]
