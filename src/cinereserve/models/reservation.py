"""Reservation model: one claimed seat for one screening."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinereserve.models.base import Base

SEAT_NUMBER_LENGTH = 10

if TYPE_CHECKING:
    from cinereserve.models.screening import Screening
    from cinereserve.models.user import User


class Reservation(Base):
    """
    Seat reservation.

    The unique constraint on (screening_id, seat_number) is what guarantees a
    seat is sold at most once per screening, including under concurrent requests.
    Reservations are never updated; they disappear only through cascades.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint("screening_id", "seat_number", name="uq_screening_seat"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    screening_id: Mapped[int] = mapped_column(
        ForeignKey("screenings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seat_number: Mapped[str] = mapped_column(String(SEAT_NUMBER_LENGTH), nullable=False)
    reservation_time: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    screening: Mapped["Screening"] = relationship(back_populates="reservations")
    user: Mapped["User"] = relationship(back_populates="reservations")

    def __repr__(self) -> str:
        return (
            f"<Reservation(screening_id={self.screening_id!r}, "
            f"seat_number={self.seat_number!r}, user_id={self.user_id!r})>"
        )
