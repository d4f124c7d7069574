"""Create an admin account, or promote an existing user to admin."""

import argparse
import asyncio
import getpass
import logging
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinereserve.database import AsyncSessionLocal
from cinereserve.models import USERNAME_LENGTH, Role, User
from cinereserve.services.accounts import hash_password

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def create_admin(db: AsyncSession, username: str, password: str | None) -> User:
    """
    Give ``username`` the admin role, creating the account if needed.

    A password is only required when the account does not exist yet.
    """
    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()

    if user is not None:
        user.role = Role.ADMIN.value
        logger.info(f"Promoted existing user {username!r} to admin")
    else:
        if not password:
            raise ValueError(f"User {username!r} does not exist; a password is required")
        if len(username) > USERNAME_LENGTH:
            raise ValueError(f"Username must be at most {USERNAME_LENGTH} characters long")
        user = User(username=username, password=hash_password(password), role=Role.ADMIN.value)
        db.add(user)
        logger.info(f"Created admin user {username!r}")

    await db.commit()
    return user


async def run(username: str, password: str | None) -> None:
    async with AsyncSessionLocal() as db:
        await create_admin(db, username, password)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("username", help="Account to create or promote")
    parser.add_argument(
        "--no-password",
        action="store_true",
        help="Only promote an existing account; do not prompt for a password",
    )
    args = parser.parse_args()

    password = None if args.no_password else getpass.getpass("Password: ")
    try:
        asyncio.run(run(args.username, password))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
