#!/usr/bin/env python3
"""
Script to exercise the ORM against a live realtime database.
Usage: python scripts/rtdb_demo.py [--url DATABASE_URL] [--write-mode confirm|best_effort] [--reset]
"""
import sys
import asyncio
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rtdb_orm import ORM, Record, WriteMode
from rtdb_orm.core.config import settings
from rtdb_orm.core.logging import configure_logging


class Animal(Record):
    name: str


async def run_demo(url: str, write_mode: WriteMode, reset: bool) -> None:
    """Save two animals and print the collection."""
    async with ORM(url, write_mode=write_mode):
        if reset:
            await Animal.delete_all()
            print("🧹 Cleared the animal collection")

        elephant = await Animal.save(Animal(name="Elephant"))
        print(f"✅ Saved {elephant.name} with id {elephant.id}")

        giraffe = await Animal.save(Animal(name="Giraffe"))
        print(f"✅ Saved {giraffe.name} with id {giraffe.id}")

        for animal in await Animal.find_all():
            print(f"   - {animal.id}: {animal.name}")
        print(f"Total animals: {await Animal.count()}")


def main():
    parser = argparse.ArgumentParser(description="Save and list records in a realtime database")
    parser.add_argument("--url", help="Database base URL (or set RTDB_DATABASE_URL)")
    parser.add_argument(
        "--write-mode",
        choices=[m.value for m in WriteMode],
        default=settings.write_mode.value,
        help="Wait for every write (confirm) or fire and forget (best_effort)",
    )
    parser.add_argument("--reset", action="store_true", help="Delete the animal collection first")
    args = parser.parse_args()

    configure_logging(settings.log_level)

    url = args.url or settings.database_url
    if not url:
        print("Error: no database URL. Pass --url or set RTDB_DATABASE_URL")
        sys.exit(1)

    asyncio.run(run_demo(url, WriteMode(args.write_mode), args.reset))


if __name__ == "__main__":
    main()
