"""Room model for the auditoriums movies are shown in."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinereserve.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinereserve.models.movie import Movie


class Room(Base, TimestampMixin):
    """
    Cinema room.

    Every room shares the fixed 8×10 seating layout in ``cinereserve.seating``;
    capacity is not stored per room.
    """

    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    movies: Mapped[list["Movie"]] = relationship(back_populates="room_ref")

    def __repr__(self) -> str:
        return f"<Room(id={self.id!r}, name={self.name!r})>"
