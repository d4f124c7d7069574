"""SQLAdmin authentication backend backed by admin user accounts."""

import logging

from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import select
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from cinereserve.database import AsyncSessionLocal
from cinereserve.models import Role, User
from cinereserve.services.accounts import verify_password

logger = logging.getLogger(__name__)


class AdminAuth(AuthenticationBackend):
    """Only users with the admin role may sign in to the back office."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = str(form.get("username") or "")
        password = str(form.get("password") or "")
        if not username or not password:
            return False

        async with AsyncSessionLocal() as db:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()

        ok = (
            user is not None
            and user.role == Role.ADMIN.value
            and await run_in_threadpool(verify_password, password, user.password)
        )
        if ok:
            request.session.update({"admin_user_id": user.id})
        else:
            logger.info(f"Rejected back-office login for {username!r}")
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("admin_user_id") is not None
