#!/usr/bin/env python
"""Drop and recreate the Acme Store tables, optionally loading demo data.

This discards every stored user, product, and favorite.

Usage:
    python -m acme_store.scripts.reset_db --yes
    python -m acme_store.scripts.reset_db --yes --seed
    python -m acme_store.scripts.reset_db --yes --database-url postgres://localhost/acme_dev
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from acme_store.db.connection import Database, sanitize_database_url
from acme_store.db.schema import reset_schema
from acme_store.db.seed import seed_demo_data
from acme_store.errors import SchemaError, StoreError
from acme_store.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drop and recreate the users, products, and favorites tables"
    )
    parser.add_argument(
        "--database-url",
        help="Connection string to reset (default: DATABASE_URL from the environment)",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Insert the demo products, users, and favorites after the reset",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm that all existing data may be destroyed",
    )
    return parser


async def reset_database(database_url: str, *, seed: bool) -> int:
    database = Database.from_url(database_url)
    try:
        await reset_schema(database)
        print("✅ Tables recreated")
        if seed:
            result = await seed_demo_data(database)
            print(
                f"🌱 Seeded {len(result.products)} products, {len(result.users)} users, "
                f"{len(result.favorites)} favorites"
            )
    except (SchemaError, StoreError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    finally:
        await database.dispose()
    return 0


async def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    database_url = args.database_url or get_settings().database_url

    print(f"🗄️  Target database: {sanitize_database_url(database_url)}")
    if not args.yes:
        print(
            "Refusing to reset without --yes; this drops every table and its data.",
            file=sys.stderr,
        )
        return 2

    return await reset_database(database_url, seed=args.seed)


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
