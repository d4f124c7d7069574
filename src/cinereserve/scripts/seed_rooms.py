"""Seed script to populate the screening rooms."""

import argparse
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cinereserve.database import AsyncSessionLocal
from cinereserve.models import Room

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_ROOM_COUNT = 3


async def seed_rooms(db: AsyncSession, count: int = DEFAULT_ROOM_COUNT) -> int:
    """
    Ensure rooms "Room 1" to "Room <count>" exist.

    Returns:
        Number of rooms added
    """
    result = await db.execute(select(Room.name))
    existing = set(result.scalars().all())

    added = 0
    for number in range(1, count + 1):
        name = f"Room {number}"
        if name in existing:
            logger.info(f"{name} already exists, skipping")
            continue
        db.add(Room(name=name))
        logger.info(f"Added {name}")
        added += 1

    await db.commit()
    return added


async def run(count: int) -> None:
    async with AsyncSessionLocal() as db:
        added = await seed_rooms(db, count)
    logger.info(f"Room seeding complete ({added} added)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the cinema's screening rooms.")
    parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_ROOM_COUNT,
        metavar="N",
        help=f"Number of rooms (default: {DEFAULT_ROOM_COUNT})",
    )
    args = parser.parse_args()
    asyncio.run(run(args.count))


if __name__ == "__main__":
    main()
