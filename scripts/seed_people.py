#!/usr/bin/env python3
"""
Load the six demo people into the configured store without starting the API.

Deletes every existing Person first, creates the search index if it is
missing, then prints the stored names.

Usage:
    uv run python scripts/seed_people.py
    uv run python scripts/seed_people.py --store memory

Reads REDIS_URL / INDEX_NAME / KEY_PREFIX from the environment or .env.
"""

import argparse
import asyncio

from people_api.config import settings
from people_api.db.engine import close_redis
from people_api.logging_config import setup_logging
from people_api.services.seed import load_demo_data
from people_api.services.store import get_person_store


async def seed(store_type: str) -> None:
    store = get_person_store(override_type=store_type)
    try:
        await store.create_index()
        people = await load_demo_data(store)
        print(f"Seeded {len(people)} people into {store_type} store:")
        for person in people:
            print(f"  {person.id}  {person.first_name} {person.last_name} ({person.age})")
    finally:
        await store.close()
        await close_redis()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--store",
        choices=["redis", "memory"],
        default=settings.store_type,
        help="Store backend to seed (default: STORE_TYPE setting)",
    )
    args = parser.parse_args()

    setup_logging(settings.log_level)
    asyncio.run(seed(args.store))


if __name__ == "__main__":
    main()
