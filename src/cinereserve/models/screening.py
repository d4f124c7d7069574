"""Screening model for a movie's show times."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinereserve.models.base import Base

if TYPE_CHECKING:
    from cinereserve.models.movie import Movie
    from cinereserve.models.reservation import Reservation


class Screening(Base):
    """
    A single show time of a movie.

    Screening times are local wall-clock times, stored without a timezone.
    """

    __tablename__ = "screenings"
    __table_args__ = (
        UniqueConstraint("movie_id", "screening_time", name="uq_movie_screening_time"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    screening_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    # Relationships
    movie: Mapped["Movie"] = relationship(back_populates="screenings")
    reservations: Mapped[list["Reservation"]] = relationship(
        back_populates="screening",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Screening(id={self.id!r}, movie_id={self.movie_id!r}, "
            f"screening_time={self.screening_time})>"
        )
