"""Movie model: the root of the movie + screenings aggregate."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinereserve.models.base import Base, TimestampMixin

TITLE_LENGTH = 255

if TYPE_CHECKING:
    from cinereserve.models.room import Room
    from cinereserve.models.screening import Screening


class Movie(Base, TimestampMixin):
    """
    Movie model.

    Owns its screenings: deleting a movie cascades to them and, through them,
    to their reservations.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_LENGTH), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    room: Mapped[int | None] = mapped_column(
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    room_ref: Mapped["Room | None"] = relationship(back_populates="movies")
    screenings: Mapped[list["Screening"]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Screening.screening_time",
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title={self.title!r})>"
