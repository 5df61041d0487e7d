"""Load or remove the demo data set."""

from __future__ import annotations

import argparse
import logging
import sys

from meetup.db import database
from meetup.db.seeds import seed_all, unseed_all


logger = logging.getLogger("meetup.scripts.seed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the database with demo users, groups and events")
    parser.add_argument(
        "--undo",
        action="store_true",
        help="Remove the demo data instead of inserting it",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    session = database.SessionLocal()
    try:
        if args.undo:
            unseed_all(session)
            print("Demo data removed.")
        else:
            counts = seed_all(session)
            print("Seeded " + ", ".join(f"{count} {table}" for table, count in counts.items()) + ".")
    except Exception:
        session.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
