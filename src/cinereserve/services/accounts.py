"""User accounts: registration, credentials and roles."""

import logging
from typing import Any

import bcrypt
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from cinereserve.config import settings
from cinereserve.database import bounded, store_errors
from cinereserve.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    NotAuthenticatedError,
    NotFoundError,
    UsernameTakenError,
)
from cinereserve.models import USERNAME_LENGTH, Role, User
from cinereserve.schemas import SessionUser
from cinereserve.services.access import ensure_not_self_demotion
from cinereserve.utils.ids import parse_id

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AccountService:
    """Registration, login and role management."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def register(
        self,
        username: Any,
        password: Any,
        role: Any = None,
        actor: SessionUser | None = None,
    ) -> int:
        """
        Create a user account.

        Anyone may register a client account. Any other role can only be
        granted by a logged-in admin.

        Args:
            username: Requested username
            password: Plain-text password
            role: Requested role (defaults to client)
            actor: The logged-in user performing the registration, if any

        Returns:
            The new user's id
        """
        if not username or not password:
            raise InvalidRequestError("Missing required fields")
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidRequestError("Username and password must be strings")

        username = username.strip()
        if not username:
            raise InvalidRequestError("Missing required fields")
        if len(username) > USERNAME_LENGTH:
            raise InvalidRequestError(f"Username must be at most {USERNAME_LENGTH} characters long")
        if len(password) < settings.min_password_length:
            raise InvalidRequestError(
                f"Password must be at least {settings.min_password_length} characters long"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise InvalidRequestError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

        role = role or Role.CLIENT.value
        if role not in Role.values():
            raise InvalidRequestError("Invalid role", valid_roles=Role.values())
        if role != Role.CLIENT.value and (actor is None or actor.role != Role.ADMIN.value):
            raise ForbiddenError("Only admins can create staff accounts")

        password_hash = await run_in_threadpool(hash_password, password)

        with store_errors("Registration failed"):
            user_id = await bounded(self._insert_user(username, password_hash, role))

        logger.info(f"Registered user {username!r} ({role})")
        return user_id

    async def _insert_user(self, username: str, password_hash: str, role: str) -> int:
        try:
            async with self.db.begin():
                existing = await self.db.execute(select(User.id).where(User.username == username))
                if existing.first() is not None:
                    raise UsernameTakenError()

                user = User(username=username, password=password_hash, role=role)
                self.db.add(user)
                await self.db.flush()
        except IntegrityError:
            # Same username registered concurrently
            raise UsernameTakenError() from None
        return user.id

    async def authenticate(self, username: Any, password: Any) -> SessionUser:
        """
        Check credentials and return the identity to store in the session.

        Raises:
            InvalidRequestError: Missing username or password
            NotAuthenticatedError: Unknown user or wrong password
        """
        if not username or not password:
            raise InvalidRequestError("Missing username or password")
        if not isinstance(username, str) or not isinstance(password, str):
            raise NotAuthenticatedError("Invalid credentials")

        with store_errors("Login failed"):
            result = await bounded(
                self.db.execute(select(User).where(User.username == username.strip()))
            )
            user = result.scalar_one_or_none()

        if user is None or not await run_in_threadpool(verify_password, password, user.password):
            logger.info(f"Failed login for {username!r}")
            raise NotAuthenticatedError("Invalid credentials")

        return SessionUser.model_validate(user)

    async def list_users(self) -> list[SessionUser]:
        stmt = select(User).order_by(User.role, User.username)
        with store_errors("Failed to fetch users"):
            result = await bounded(self.db.execute(stmt))
            users = result.scalars().all()
        return [SessionUser.model_validate(user) for user in users]

    async def change_role(self, actor: SessionUser, user_id: Any, role: Any) -> None:
        """
        Give a user a new role.

        The new role applies from the user's next login; existing sessions
        keep the role they were issued with.
        """
        user_id = parse_id(user_id, "Invalid user ID")
        if role not in Role.values():
            raise InvalidRequestError("Invalid role", valid_roles=Role.values())
        ensure_not_self_demotion(actor, user_id, role)

        with store_errors("Failed to update user role"):
            await bounded(self._update_role(user_id, role))

        logger.info(f"User {actor.username!r} set role of user {user_id} to {role}")

    async def _update_role(self, user_id: int, role: str) -> None:
        async with self.db.begin():
            result = await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(role=role)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError("User not found")
