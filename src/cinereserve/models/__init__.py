"""SQLAlchemy ORM models."""

from cinereserve.models.base import MAX_INT, Base
from cinereserve.models.movie import TITLE_LENGTH, Movie
from cinereserve.models.reservation import SEAT_NUMBER_LENGTH, Reservation
from cinereserve.models.room import Room
from cinereserve.models.screening import Screening
from cinereserve.models.user import USERNAME_LENGTH, Role, User

__all__ = [
    "MAX_INT",
    "SEAT_NUMBER_LENGTH",
    "TITLE_LENGTH",
    "USERNAME_LENGTH",
    "Base",
    "Movie",
    "Reservation",
    "Role",
    "Room",
    "Screening",
    "User",
]
