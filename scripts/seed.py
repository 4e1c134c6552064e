"""Database seeder: fills the board with sample advertisements."""
import asyncio
import argparse
import random
import time

from adboard.database import engine, async_session, Base
from adboard.schema import ensure_schema
from adboard.schemas import AdvertisementCreate
from adboard.services import advertisement_service

ITEMS = ["bike", "sofa", "laptop", "guitar", "camera", "desk", "kettle",
         "stroller", "tent", "skis", "lamp", "bookshelf", "monitor", "drill"]
ADJECTIVES = ["red", "old", "almost new", "vintage", "compact", "large", "used"]


async def seed(count: int, reset: bool = False):
    print(f"Seeding: {count} advertisements")
    start = time.perf_counter()

    if reset:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    await ensure_schema(engine)

    async with async_session() as session:
        for i in range(count):
            item = random.choice(ITEMS)
            data = AdvertisementCreate(
                name=f"{random.choice(ADJECTIVES).capitalize()} {item}",
                description=f"Selling a {item} in good condition. Listing #{i}.",
                links=[f"https://img.example.com/{i}/{n}.jpg" for n in range(random.randint(1, 3))],
                price=round(random.uniform(5, 2000), 2),
            )
            await advertisement_service.create_advertisement(session, data)

    await engine.dispose()
    print(f"Done in {time.perf_counter() - start:.2f}s")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the advertisement board")
    parser.add_argument("--count", type=int, default=100, help="Number of advertisements")
    parser.add_argument("--reset", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()
    asyncio.run(seed(args.count, args.reset))
