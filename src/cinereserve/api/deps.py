"""FastAPI dependencies: session identity, role gates and services."""

import logging

from fastapi import Depends, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from cinereserve.database import get_db
from cinereserve.exceptions import NotAuthenticatedError
from cinereserve.schemas import SessionUser
from cinereserve.services.access import authorize
from cinereserve.services.accounts import AccountService
from cinereserve.services.catalog import CatalogService
from cinereserve.services.notifier import ReservationNotifier
from cinereserve.services.reservations import ReservationService

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def get_current_user(request: Request) -> SessionUser | None:
    """The user stored in the signed session cookie, if any."""
    data = request.session.get(SESSION_USER_KEY)
    if not data:
        return None
    try:
        return SessionUser.model_validate(data)
    except ValidationError:
        logger.warning("Discarding malformed session user")
        request.session.pop(SESSION_USER_KEY, None)
        return None


def require_user(user: SessionUser | None = Depends(get_current_user)) -> SessionUser:
    if user is None:
        raise NotAuthenticatedError("Unauthorized - please log in first")
    return user


def require_roles(*roles: str):
    """
    Build a dependency admitting only users holding one of ``roles``.

    Usage:
        @router.get("/screenings_stats")
        async def stats(user: SessionUser = Depends(require_roles("employee", "admin"))):
            ...
    """

    def dependency(user: SessionUser | None = Depends(get_current_user)) -> SessionUser:
        return authorize(user, roles)

    return dependency


def get_catalog(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_reservations(db: AsyncSession = Depends(get_db)) -> ReservationService:
    return ReservationService(db)


def get_accounts(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_notifier() -> ReservationNotifier:
    return ReservationNotifier()
