"""CLI for the agenda backend: create tables, seed demo data, export."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys


async def cmd_init_db(args):
    """Create all tables on the configured database."""
    from app.config import get_settings
    from app.db.engine import create_tables, engine

    await create_tables()
    await engine.dispose()
    print(f"Tables created on {get_settings().database_url}")


async def cmd_seed(args):
    """Load demo cities, neighborhoods, service types, technicians, teams and orders."""
    from app.db.engine import async_session_factory, create_tables, engine
    from app.services.seed import seed_demo_data

    await create_tables()
    async with async_session_factory() as db:
        seeded = await seed_demo_data(db)
    await engine.dispose()

    if seeded:
        print("Demo data loaded.")
    else:
        print("Database already has reference data, skipping seed.")


async def cmd_export(args):
    """Write teams, service orders and reports as JSON."""
    from app.db.engine import async_session_factory, engine
    from app.services.export import export_data

    async with async_session_factory() as db:
        data = await export_data(db)
    await engine.dispose()

    text = json.dumps(data, ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        print(
            f"Exported {len(data['teams'])} teams, {len(data['serviceOrders'])} service orders, "
            f"{len(data['reports'])} reports to {args.output}"
        )
    else:
        print(text)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Agenda de Serviços CLI")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Create database tables")

    # seed
    subparsers.add_parser("seed", help="Load demo data into an empty database")

    # export
    ex = subparsers.add_parser("export", help="Export teams, service orders and reports as JSON")
    ex.add_argument("--output", "-o", default="", help="Output file (stdout if omitted)")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=args.log_level.upper())

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "seed":
        asyncio.run(cmd_seed(args))
    elif args.command == "export":
        asyncio.run(cmd_export(args))


if __name__ == "__main__":
    main()
