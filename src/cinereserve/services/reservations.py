"""Reservation service: claiming seats for screenings."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cinereserve.config import settings
from cinereserve.database import bounded, store_errors
from cinereserve.exceptions import (
    InvalidRequestError,
    NotAuthenticatedError,
    NotFoundError,
    SeatAlreadyReservedError,
)
from cinereserve.models import SEAT_NUMBER_LENGTH, Movie, Reservation, Screening
from cinereserve.schemas import ReservationCreated, UserReservation
from cinereserve.seating import is_valid_seat
from cinereserve.utils.ids import parse_id
from cinereserve.utils.timefmt import format_datetime

logger = logging.getLogger(__name__)


async def fetch_reserved_seats(db: AsyncSession, screening_id: int) -> list[str]:
    """Seat numbers already taken for a screening, in reservation order."""
    result = await db.execute(
        select(Reservation.seat_number)
        .where(Reservation.screening_id == screening_id)
        .order_by(Reservation.id)
    )
    return list(result.scalars().all())


class ReservationService:
    """
    Creates and lists seat reservations.

    The (screening_id, seat_number) unique constraint is the final arbiter:
    the pre-check only gives the common case a clean answer, and a constraint
    violation on insert is reported exactly like a failed pre-check.
    """

    def __init__(self, db: AsyncSession, enforce_seat_layout: bool | None = None) -> None:
        self.db = db
        if enforce_seat_layout is None:
            enforce_seat_layout = settings.enforce_seat_layout
        self.enforce_seat_layout = enforce_seat_layout

    async def is_seat_reserved(self, screening_id: int, seat_number: str) -> bool:
        result = await self.db.execute(
            select(Reservation.id).where(
                Reservation.screening_id == screening_id,
                Reservation.seat_number == seat_number,
            )
        )
        return result.first() is not None

    async def reserved_seats(self, screening_id: Any) -> list[str]:
        screening_id = parse_id(screening_id, "Invalid screening ID")
        with store_errors("Failed to fetch reserved seats"):
            return await bounded(fetch_reserved_seats(self.db, screening_id))

    async def create_reservation(
        self,
        user_id: int | None,
        screening_id: Any,
        seat_number: Any,
    ) -> ReservationCreated:
        """
        Reserve one seat of a screening for a user.

        Args:
            user_id: Id of the logged-in user
            screening_id: Screening to book
            seat_number: Seat label, e.g. "C7"

        Returns:
            The created reservation

        Raises:
            NotAuthenticatedError: No user
            InvalidRequestError: Missing or malformed fields
            NotFoundError: Unknown screening
            SeatAlreadyReservedError: The seat is taken, including when a
                concurrent request claimed it first
            StoreError: Any other database failure
        """
        if user_id is None:
            raise NotAuthenticatedError("Unauthorized - please log in first")
        if screening_id in (None, "") or seat_number in (None, ""):
            raise InvalidRequestError("Missing required fields")

        screening_id = parse_id(screening_id, "Invalid screening ID")
        seat = str(seat_number).strip().upper()
        if not seat:
            raise InvalidRequestError("Missing required fields")
        if len(seat) > SEAT_NUMBER_LENGTH or (
            self.enforce_seat_layout and not is_valid_seat(seat)
        ):
            raise InvalidRequestError("Invalid seat number")

        with store_errors("Failed to create reservation"):
            reservation = await bounded(self._insert(user_id, screening_id, seat))

        logger.info(f"User {user_id} reserved seat {seat} for screening {screening_id}")
        return ReservationCreated(
            id=reservation.id,
            screening_id=reservation.screening_id,
            seat_number=reservation.seat_number,
        )

    async def _insert(self, user_id: int, screening_id: int, seat: str) -> Reservation:
        try:
            async with self.db.begin():
                if await self.db.get(Screening, screening_id) is None:
                    raise NotFoundError("Screening not found")
                if await self.is_seat_reserved(screening_id, seat):
                    raise SeatAlreadyReservedError()

                reservation = Reservation(
                    user_id=user_id,
                    screening_id=screening_id,
                    seat_number=seat,
                )
                self.db.add(reservation)
                await self.db.flush()
        except SeatAlreadyReservedError:
            logger.info(f"Seat {seat} for screening {screening_id} is already reserved")
            raise
        except IntegrityError:
            # Lost a race for the seat, or the user/screening vanished meanwhile
            if await self._seat_taken_after_rollback(screening_id, seat):
                logger.info(f"Seat {seat} for screening {screening_id} taken concurrently")
                raise SeatAlreadyReservedError() from None
            raise
        return reservation

    async def _seat_taken_after_rollback(self, screening_id: int, seat: str) -> bool:
        try:
            return await self.is_seat_reserved(screening_id, seat)
        finally:
            await self.db.rollback()

    async def list_for_user(self, user_id: int) -> list[UserReservation]:
        """A user's reservations, most recent screening first."""
        stmt = (
            select(
                Reservation.id,
                Reservation.seat_number,
                Reservation.reservation_time,
                Reservation.screening_id,
                Screening.screening_time,
                Movie.title,
                Movie.duration,
            )
            .join(Screening, Reservation.screening_id == Screening.id)
            .join(Movie, Screening.movie_id == Movie.id)
            .where(Reservation.user_id == user_id)
            .order_by(Screening.screening_time.desc(), Reservation.id)
        )
        with store_errors("Failed to fetch reservations"):
            rows = (await bounded(self.db.execute(stmt))).all()

        return [
            UserReservation(
                id=row.id,
                seat_number=row.seat_number,
                reservation_time=format_datetime(row.reservation_time),
                screening_id=row.screening_id,
                screening_time=format_datetime(row.screening_time),
                movie_title=row.title,
                duration=row.duration,
            )
            for row in rows
        ]
