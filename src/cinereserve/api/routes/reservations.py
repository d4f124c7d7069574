"""Seat reservation endpoints."""

from fastapi import APIRouter, BackgroundTasks, Depends

from cinereserve.api.deps import get_notifier, get_reservations, require_roles, require_user
from cinereserve.models import Role
from cinereserve.schemas import (
    ReservationCreated,
    ReservationRequest,
    SessionUser,
    UserReservationsResponse,
)
from cinereserve.services.notifier import ReservationNotifier
from cinereserve.services.reservations import ReservationService

router = APIRouter()


@router.post("/reservations", response_model=ReservationCreated, status_code=201)
async def create_reservation(
    request: ReservationRequest,
    background_tasks: BackgroundTasks,
    user: SessionUser = Depends(require_user),
    reservations: ReservationService = Depends(get_reservations),
    notifier: ReservationNotifier = Depends(get_notifier),
) -> ReservationCreated:
    """
    Reserve a seat for the logged-in user.

    Returns 409 when the seat is already taken, including when another
    request claimed it a moment earlier.
    """
    created = await reservations.create_reservation(
        user.id, request.screening_id, request.seat_number
    )

    if notifier.enabled:
        background_tasks.add_task(
            notifier.reservation_confirmed, user.id, created.screening_id, created.seat_number
        )
    return created


@router.get("/reservations/my", response_model=UserReservationsResponse)
async def my_reservations(
    user: SessionUser = Depends(require_roles(Role.CLIENT.value)),
    reservations: ReservationService = Depends(get_reservations),
) -> UserReservationsResponse:
    items = await reservations.list_for_user(user.id)
    return UserReservationsResponse(count=len(items), data=items)
