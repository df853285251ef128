# scripts/init_db.py
import asyncio
import sys

from fastfood.db import create_db_and_tables

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


async def create_tables():
    await create_db_and_tables()
    print("✅ All missing tables created.")

if __name__ == "__main__":
    asyncio.run(create_tables())
