"""Seed the database with demo reference data, teams and service orders."""

import asyncio

from app.db.engine import async_session_factory, create_tables, engine
from app.services.seed import seed_demo_data


async def seed():
    await create_tables()

    async with async_session_factory() as db:
        if not await seed_demo_data(db):
            print("Reference data already exists, skipping seed.")
            return

    print("Seeded cities UBA-MG and TOCANTINS-MG, 6 technicians, 3 teams and sample service orders.")


async def main():
    try:
        await seed()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
