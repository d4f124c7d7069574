"""Database connection and session management."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cinereserve.config import settings
from cinereserve.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL query logging
    pool_pre_ping=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide database sessions.

    Services open their own transactions on the session; anything left
    pending when the request finishes is rolled back.

    Usage:
        @app.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            # Use db here
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


async def bounded(operation: Awaitable[T], timeout: float | None = None) -> T:
    """
    Await a store operation, giving up after ``timeout`` seconds.

    Cancelling the operation unwinds any ``session.begin()`` block inside it,
    so an open transaction is rolled back before the timeout is reported.

    Args:
        operation: Coroutine performing the store work
        timeout: Seconds to wait (defaults to ``settings.store_timeout``)

    Returns:
        Whatever the operation returns

    Raises:
        StoreError: If the operation did not finish in time
    """
    try:
        return await asyncio.wait_for(operation, timeout or settings.store_timeout)
    except asyncio.TimeoutError as e:
        raise StoreError("Database operation timed out") from e


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """
    Turn database failures raised inside the block into a ``StoreError``.

    Args:
        message: Generic message shown to the caller (e.g. "Failed to add movie")
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"{message}: {e}", exc_info=True)
        raise StoreError(message) from e
