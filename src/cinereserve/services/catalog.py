"""Catalog service: movies with their screenings, rooms and occupancy figures."""

import logging
import math
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cinereserve.database import bounded, store_errors
from cinereserve.exceptions import InvalidRequestError, NotFoundError
from cinereserve.models import MAX_INT, TITLE_LENGTH, Movie, Reservation, Room, Screening
from cinereserve.schemas import (
    MovieCreated,
    MovieDeleted,
    MovieFields,
    MoviePayload,
    MovieResponse,
    MovieUpdated,
    PlayingMovie,
    ScreeningDetail,
    ScreeningInfo,
    ScreeningStats,
)
from cinereserve.seating import ROOM_CAPACITY, occupancy_rate
from cinereserve.services.reservations import fetch_reserved_seats
from cinereserve.utils.ids import parse_id
from cinereserve.utils.timefmt import (
    format_datetime,
    format_time,
    is_iso_date,
    parse_date,
    parse_naive_datetime,
)

logger = logging.getLogger(__name__)

MISSING_FIELDS_ON_CREATE = "Missing required fields (title, duration, start_date, or end_date)"
MISSING_FIELDS_ON_UPDATE = "Missing required fields"
PLAYING_EXAMPLE_URL = "/movies/playing?date=2023-12-31"


# ---------------------------------------------------------------------------
# Input parsing
# ---------------------------------------------------------------------------


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_duration(value: Any) -> int:
    """Duration in whole minutes; numeric strings are accepted."""
    if isinstance(value, bool):
        raise InvalidRequestError("Duration must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRequestError("Duration must be a number") from None
    if not math.isfinite(number):
        raise InvalidRequestError("Duration must be a number")
    if number <= 0 or not number.is_integer():
        raise InvalidRequestError("Duration must be a positive whole number of minutes")
    if number > MAX_INT:
        raise InvalidRequestError("Duration is too long")
    return int(number)


def parse_movie_date(value: Any) -> date:
    if not isinstance(value, str):
        raise InvalidRequestError("Invalid date format")
    try:
        return parse_date(value)
    except ValueError:
        raise InvalidRequestError("Invalid date format") from None


def parse_screening_time(value: Any) -> datetime:
    if not value or not isinstance(value, str):
        raise InvalidRequestError("Invalid screening time")
    try:
        return parse_naive_datetime(value)
    except ValueError:
        raise InvalidRequestError("Invalid screening time") from None


def parse_room(value: Any) -> int | None:
    if _is_blank(value):
        return None
    return parse_id(value, "Room must be a room ID")


def parse_movie_fields(payload: MoviePayload, missing_message: str) -> MovieFields:
    """
    Validate the movie columns of a create/update body.

    Args:
        payload: Raw request body
        missing_message: Error text used when a required field is absent

    Returns:
        Typed movie fields

    Raises:
        InvalidRequestError: On the first missing or malformed field
    """
    required = (payload.title, payload.duration, payload.start_date, payload.end_date)
    if any(_is_blank(value) for value in required):
        raise InvalidRequestError(missing_message)
    if not isinstance(payload.title, str):
        raise InvalidRequestError("Title must be a string")
    title = payload.title.strip()
    if len(title) > TITLE_LENGTH:
        raise InvalidRequestError(f"Title must be at most {TITLE_LENGTH} characters long")

    return MovieFields(
        title=title,
        description=payload.description,
        duration=parse_duration(payload.duration),
        start_date=parse_movie_date(payload.start_date),
        end_date=parse_movie_date(payload.end_date),
        room=parse_room(payload.room),
    )


def parse_query_date(raw: str | None) -> date:
    """
    Parse the ``date`` query parameter of the playing-on-date listing.

    Only the strict ``YYYY-MM-DD`` form is accepted.
    """
    if _is_blank(raw):
        raise InvalidRequestError("Date parameter is required", example=PLAYING_EXAMPLE_URL)
    if not is_iso_date(raw):
        raise InvalidRequestError(
            "Invalid date format. Please use YYYY-MM-DD format",
            received=raw,
            example="2023-12-31",
        )
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidRequestError("Invalid date value", received=raw) from None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CatalogService:
    """
    Maintains each movie and its screening set as one consistent unit.

    Every write runs in a single transaction: a failure at any step rolls back
    all prior writes of that operation.
    """

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize catalog service.

        Args:
            db: Database session
        """
        self.db = db

    # -- writes ------------------------------------------------------------

    async def create_movie(self, payload: MoviePayload) -> MovieCreated:
        """
        Create a movie together with its screenings.

        Duplicate screening times are stored once; the returned count is the
        number of distinct times.
        """
        fields = parse_movie_fields(payload, MISSING_FIELDS_ON_CREATE)
        if not isinstance(payload.screenings, list) or not payload.screenings:
            raise InvalidRequestError("At least one screening time is required")

        with store_errors("Failed to add movie"):
            movie_id, added = await bounded(self._insert_movie(fields, payload.screenings))

        logger.info(f"Added movie {movie_id} ({fields.title!r}) with {added} screenings")
        return MovieCreated(movie_id=movie_id, screenings_added=added)

    async def _insert_movie(self, fields: MovieFields, times: list[Any]) -> tuple[int, int]:
        async with self.db.begin():
            await self._check_room(fields.room)
            movie = Movie(**fields.model_dump())
            self.db.add(movie)
            await self.db.flush()
            added = await self._insert_screenings(movie.id, times)
        return movie.id, added

    async def update_movie(self, movie_id: Any, payload: MoviePayload) -> MovieUpdated:
        """
        Replace a movie's fields and its whole screening set.

        Screenings missing from ``payload.screenings`` are removed, together
        with their reservations. An empty list removes every screening.
        """
        movie_id = parse_id(movie_id, "Invalid movie ID")
        fields = parse_movie_fields(payload, MISSING_FIELDS_ON_UPDATE)
        if not isinstance(payload.screenings, list):
            raise InvalidRequestError("Screenings must be an array")

        with store_errors("Failed to update movie"):
            replaced = await bounded(self._replace_movie(movie_id, fields, payload.screenings))

        logger.info(f"Updated movie {movie_id}; screening set replaced with {replaced} times")
        return MovieUpdated(screenings_updated=replaced)

    async def _replace_movie(self, movie_id: int, fields: MovieFields, times: list[Any]) -> int:
        async with self.db.begin():
            await self._check_room(fields.room)
            result = await self.db.execute(
                update(Movie)
                .where(Movie.id == movie_id)
                .values(**fields.model_dump())
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("Movie not found")

            await self.db.execute(delete(Screening).where(Screening.movie_id == movie_id))
            replaced = await self._insert_screenings(movie_id, times) if times else 0
        return replaced

    async def delete_movie(self, movie_id: Any) -> MovieDeleted:
        """Delete a movie, its screenings and (by cascade) their reservations."""
        movie_id = parse_id(movie_id, "Invalid movie ID")

        with store_errors("Failed to delete movie"):
            removed = await bounded(self._delete_movie(movie_id))

        logger.info(f"Deleted movie {movie_id} and {removed} screenings")
        return MovieDeleted(screenings_deleted=removed)

    async def _delete_movie(self, movie_id: int) -> int:
        async with self.db.begin():
            screenings = await self.db.execute(
                delete(Screening).where(Screening.movie_id == movie_id)
            )
            result = await self.db.execute(delete(Movie).where(Movie.id == movie_id))
            if result.rowcount == 0:
                raise NotFoundError("Movie not found")
        return screenings.rowcount

    async def _check_room(self, room_id: int | None) -> None:
        if room_id is not None and await self.db.get(Room, room_id) is None:
            raise InvalidRequestError("Room does not exist")

    async def _insert_screenings(self, movie_id: int, times: list[Any]) -> int:
        # Parsed inside the transaction so one bad time rolls back the movie write too
        parsed = [parse_screening_time(value) for value in times]
        distinct = list(dict.fromkeys(parsed))
        self.db.add_all(
            [Screening(movie_id=movie_id, screening_time=value) for value in distinct]
        )
        await self.db.flush()
        return len(distinct)

    # -- reads -------------------------------------------------------------

    async def list_movies(self) -> list[MovieResponse]:
        """All movies with their screening times in chronological order."""
        stmt = select(Movie).options(selectinload(Movie.screenings)).order_by(Movie.id)
        with store_errors("Failed to fetch movies"):
            result = await bounded(self.db.execute(stmt))
            movies = result.scalars().all()

        return [
            MovieResponse(
                id=movie.id,
                title=movie.title,
                description=movie.description,
                duration=movie.duration,
                start_date=movie.start_date,
                end_date=movie.end_date,
                room=movie.room,
                screenings=[s.screening_time for s in movie.screenings],
            )
            for movie in movies
        ]

    async def list_playing_on(self, day: date) -> list[PlayingMovie]:
        """
        Movies whose run includes ``day``, each with that day's show times.

        Movies with no screening on the day are still listed, with empty lists.
        """
        with store_errors("Failed to fetch currently playing movies"):
            return await bounded(self._playing_on(day))

    async def _playing_on(self, day: date) -> list[PlayingMovie]:
        movie_stmt = (
            select(Movie)
            .where(Movie.start_date <= day, Movie.end_date >= day)
            .order_by(Movie.id)
        )
        movies = (await self.db.execute(movie_stmt)).scalars().all()
        if not movies:
            return []

        day_start = datetime.combine(day, time.min)
        screening_stmt = (
            select(Screening)
            .where(
                Screening.movie_id.in_([m.id for m in movies]),
                Screening.screening_time >= day_start,
                Screening.screening_time < day_start + timedelta(days=1),
            )
            .order_by(Screening.screening_time, Screening.id)
        )
        screenings = (await self.db.execute(screening_stmt)).scalars().all()

        by_movie: dict[int, list[Screening]] = defaultdict(list)
        for screening in screenings:
            by_movie[screening.movie_id].append(screening)

        return [
            PlayingMovie(
                id=movie.id,
                title=movie.title,
                description=movie.description,
                duration=movie.duration,
                start_date=movie.start_date,
                end_date=movie.end_date,
                room=movie.room,
                screenings=[format_time(s.screening_time) for s in by_movie[movie.id]],
                screening_ids=[s.id for s in by_movie[movie.id]],
            )
            for movie in movies
        ]

    async def list_rooms(self) -> list[Room]:
        with store_errors("Failed to fetch rooms"):
            result = await bounded(self.db.execute(select(Room).order_by(Room.id)))
            return list(result.scalars().all())

    async def get_screening(self, screening_id: Any) -> ScreeningDetail:
        """A screening with its movie's title and duration and the seats already taken."""
        screening_id = parse_id(screening_id, "Invalid screening ID")
        with store_errors("Failed to fetch screening"):
            return await bounded(self._screening_detail(screening_id))

    async def _screening_detail(self, screening_id: int) -> ScreeningDetail:
        stmt = (
            select(Screening, Movie)
            .join(Movie, Screening.movie_id == Movie.id)
            .where(Screening.id == screening_id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            raise NotFoundError("Screening not found")

        screening, movie = row
        seats = await fetch_reserved_seats(self.db, screening_id)
        formatted = format_datetime(screening.screening_time)
        return ScreeningDetail(
            screening=ScreeningInfo(
                id=screening.id,
                movie_id=screening.movie_id,
                screening_time=formatted,
                title=movie.title,
                duration=movie.duration,
                formatted_time=formatted,
            ),
            reserved_seats=seats,
        )

    async def upcoming_screening_stats(self, today: date | None = None) -> list[ScreeningStats]:
        """
        Occupancy of every screening from ``today`` onwards.

        Only movies still running (end_date on or after today) are included.
        Capacity is the fixed room size.
        """
        today = today or date.today()
        with store_errors("Failed to fetch screening statistics"):
            return await bounded(self._screening_stats(today))

    async def _screening_stats(self, today: date) -> list[ScreeningStats]:
        stmt = (
            select(Screening.id, Screening.screening_time, Movie.title, Movie.duration)
            .join(Movie, Screening.movie_id == Movie.id)
            .where(
                Screening.screening_time >= datetime.combine(today, time.min),
                Movie.end_date >= today,
            )
            .order_by(Screening.screening_time, Screening.id)
        )
        rows = (await self.db.execute(stmt)).all()

        seats_by_screening: dict[int, list[str]] = defaultdict(list)
        if rows:
            seat_stmt = (
                select(Reservation.screening_id, Reservation.seat_number)
                .where(Reservation.screening_id.in_([row.id for row in rows]))
                .order_by(Reservation.id)
            )
            for seat in (await self.db.execute(seat_stmt)).all():
                seats_by_screening[seat.screening_id].append(seat.seat_number)

        stats = []
        for row in rows:
            seats = seats_by_screening[row.id]
            stats.append(
                ScreeningStats(
                    id=row.id,
                    movie_title=row.title,
                    duration=row.duration,
                    screening_time=format_datetime(row.screening_time),
                    reserved_seats=len(seats),
                    total_seats=ROOM_CAPACITY,
                    reserved_seat_numbers=seats,
                    available_seats=ROOM_CAPACITY - len(seats),
                    occupancy_rate=occupancy_rate(len(seats)),
                )
            )
        return stats
