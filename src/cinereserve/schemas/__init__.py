"""Pydantic schemas for API requests and responses."""

from cinereserve.schemas.movie import (
    MovieCreated,
    MovieDeleted,
    MovieFields,
    MoviePayload,
    MovieResponse,
    MovieUpdated,
    PlayingMovie,
    PlayingResponse,
)
from cinereserve.schemas.reservation import (
    ReservationCreated,
    ReservationRequest,
    UserReservation,
    UserReservationsResponse,
)
from cinereserve.schemas.room import RoomResponse
from cinereserve.schemas.screening import (
    ScreeningDetail,
    ScreeningDetailResponse,
    ScreeningInfo,
    ScreeningStats,
    ScreeningStatsResponse,
)
from cinereserve.schemas.user import (
    AuthStatus,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    RoleUpdateRequest,
    SessionUser,
    UsersResponse,
)

__all__ = [
    "AuthStatus",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "MovieCreated",
    "MovieDeleted",
    "MovieFields",
    "MoviePayload",
    "MovieResponse",
    "MovieUpdated",
    "PlayingMovie",
    "PlayingResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ReservationCreated",
    "ReservationRequest",
    "RoleUpdateRequest",
    "RoomResponse",
    "ScreeningDetail",
    "ScreeningDetailResponse",
    "ScreeningInfo",
    "ScreeningStats",
    "ScreeningStatsResponse",
    "SessionUser",
    "UserReservation",
    "UserReservationsResponse",
    "UsersResponse",
]
