#!/usr/bin/env python3
"""
Seed the relational store with users and products.

Usage:
    python database/scripts/seed.py [--clear] [--file PATH]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dotenv import load_dotenv

# Load environment variables before the configuration is read
load_dotenv()

from sqlalchemy import delete

from product_api.core.config import config
from product_api.db.models import AppUser, Product
from product_api.db.session import Database
from product_api.repositories.outcome import Success
from product_api.repositories.user import UserRepository

DEFAULT_DATA_FILE = Path(__file__).parent.parent / "data" / "seed.json"


def load_seed_data(path: Path = DEFAULT_DATA_FILE) -> Dict[str, List[Dict[str, Any]]]:
    """Read users and products from a JSON file; missing sections are empty"""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return {
        "users": list(data.get("users", [])),
        "products": list(data.get("products", [])),
    }


async def seed(database: Database, data: Dict[str, List[Dict[str, Any]]], clear: bool = False) -> Dict[str, int]:
    """Insert the seed rows, optionally clearing both tables first"""
    async with database.session() as session:
        if clear:
            await session.execute(delete(Product))
            await session.execute(delete(AppUser))
            print("Cleared existing users and products")

        session.add_all(AppUser(**user) for user in data["users"])
        session.add_all(Product(**product) for product in data["products"])
        await session.commit()

    print(f"Seeded {len(data['users'])} users and {len(data['products'])} products")
    return {"users": len(data["users"]), "products": len(data["products"])}


async def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the product database")
    parser.add_argument("--clear", action="store_true", help="delete existing rows first")
    parser.add_argument("--file", type=Path, default=DEFAULT_DATA_FILE, help="seed data JSON file")
    args = parser.parse_args(argv)

    database = Database.from_config(config)
    await database.connect()
    try:
        await seed(database, load_seed_data(args.file), clear=args.clear)

        users = await UserRepository(database).list_users()
        if isinstance(users, Success):
            for user in users.value:
                print(f"  user {user.id}: {user.email} ({user.role})")
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
