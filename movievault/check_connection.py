
import argparse
import asyncio
import sys

import asyncpg

from .config import settings
from .core.database import create_schema
from .repositories.user_repository import UserRepository


async def check_connection(init_schema: bool = False) -> bool:
    print("Testing PostgreSQL connection...")
    try:
        pool = await asyncpg.create_pool(settings.DATABASE_URL, min_size=1, max_size=1)
    except (OSError, asyncpg.PostgresError) as e:
        print(f"❌ PostgreSQL connection failed: {e}")
        print("\n💡 Troubleshooting tips:")
        print("1. Check DATABASE_URL in your environment or .env file")
        print("2. Make sure the database server is running and reachable")
        print("3. Verify your database username and password")
        return False

    try:
        print("✅ PostgreSQL connected successfully!")
        if init_schema:
            await create_schema(pool)
            print("✅ Schema created")
        try:
            users = await UserRepository(pool).count_users()
            print(f"👤 Registered users: {users}")
        except asyncpg.UndefinedTableError:
            print("⚠️  Tables not found, run with --init-schema")
    finally:
        await pool.close()
    return True


def main():
    parser = argparse.ArgumentParser(description="Check the database connection")
    parser.add_argument("--init-schema", action="store_true", help="create tables and indexes if missing")
    args = parser.parse_args()
    ok = asyncio.run(check_connection(init_schema=args.init_schema))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
