#!/usr/bin/env python3
"""Database and storage initialization script"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.core.database import engine, Base
from app.core.storage import get_storage
from app.models import ContentItem, ContentOutput, ProcessingJob, Transformation  # noqa: F401


async def init_database(drop: bool = False):
    """Create all tables, optionally dropping them first"""
    print("Initializing database...")

    async with engine.begin() as conn:
        if drop:
            print("Dropping existing tables...")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)

    print("Database initialized successfully!")
    print("\nCreated tables:")
    for table in Base.metadata.tables:
        print(f"  - {table}")


async def verify_connection() -> bool:
    """Verify database connection"""
    print("Verifying database connection...")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            print("Database connection verified!")
            return True
    except (SQLAlchemyError, OSError) as e:
        print(f"Database connection failed: {e}")
        return False


async def init_storage() -> bool:
    """Make sure the content bucket exists"""
    print(f"Checking {settings.storage_type} storage bucket '{settings.storage_bucket}'...")
    ok = await get_storage().check()
    print("Storage ready!" if ok else "Storage is not reachable.")
    return ok


async def main(drop: bool):
    if not await verify_connection():
        print("\nPlease ensure PostgreSQL is running and DATABASE_URL is configured correctly.")
        sys.exit(1)

    await init_database(drop=drop)

    if not await init_storage():
        print("\nCheck the AWS_* settings or LOCAL_STORAGE_PATH.")

    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    asyncio.run(main(args.drop))
