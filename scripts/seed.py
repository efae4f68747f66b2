#!/usr/bin/env python3
"""
Seed README

Loads the LendTrack demo data set (two item types, a Fiction > Science
Fiction category tree, three items, one of them on loan) into the database
configured through the usual DB_* / DATABASE_URL environment variables.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from lendtrack.core import database, seed

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Load the LendTrack demo data set"
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        default=False,
        help="Keep existing records instead of clearing them first"
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    try:
        database.init()
        counts = seed.load(database.session, reset=not args.keep)
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)
    finally:
        database.session.remove()

    print("Seeding finished:")
    for name, count in counts.items():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
