"""Role-based authorization predicates."""

import logging
from collections.abc import Iterable

from cinereserve.config import settings
from cinereserve.exceptions import ForbiddenError, InvalidRequestError, NotAuthenticatedError
from cinereserve.models.user import Role
from cinereserve.schemas.user import SessionUser

logger = logging.getLogger(__name__)

STAFF_ROLES = (Role.EMPLOYEE.value, Role.MANAGER.value, Role.ADMIN.value)
CATALOG_EDITOR_ROLES = (Role.MANAGER.value, Role.ADMIN.value)


def authorize(user: SessionUser | None, required_roles: Iterable[str]) -> SessionUser:
    """
    Allow the caller only if they are logged in with one of the required roles.

    Args:
        user: Identity from the session, or None for anonymous callers
        required_roles: Roles allowed to proceed

    Returns:
        The authorized user

    Raises:
        NotAuthenticatedError: No session user
        ForbiddenError: The user's role is not among ``required_roles``
    """
    if user is None:
        raise NotAuthenticatedError("Unauthorized - please log in first")

    roles = list(required_roles)
    if user.role not in roles:
        logger.info(f"User {user.username!r} ({user.role}) denied; requires one of {roles}")
        if settings.expose_role_details:
            raise ForbiddenError(
                f"Access denied. Your role ({user.role}) is not authorized.",
                requiredRoles=roles,
                yourRole=user.role,
            )
        raise ForbiddenError()
    return user


def ensure_not_self_demotion(actor: SessionUser, target_user_id: int, new_role: str) -> None:
    """
    Stop an admin from taking the admin role away from themselves.

    Applied on top of ``authorize`` for role changes, never instead of it.
    """
    if actor.id == target_user_id and new_role != Role.ADMIN.value:
        raise InvalidRequestError("You cannot remove your own admin privileges")
