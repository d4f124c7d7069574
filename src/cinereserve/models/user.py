"""User account model and roles."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinereserve.models.base import Base, TimestampMixin

USERNAME_LENGTH = 50

if TYPE_CHECKING:
    from cinereserve.models.reservation import Reservation


class Role(str, Enum):
    CLIENT = "client"
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


class User(Base, TimestampMixin):
    """Registered user. ``password`` holds a bcrypt hash, never the plain text."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(USERNAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Role.CLIENT.value,
        server_default=Role.CLIENT.value,
    )

    reservations: Mapped[list["Reservation"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r}, role={self.role!r})>"
