#!/usr/bin/env python3
"""Back-fill default field values on every client.

Usage:
  python scripts/backfill_clients.py --list
  python scripts/backfill_clients.py reports --dry-run
  python scripts/backfill_clients.py missing-fields
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.migrations import MIGRATIONS, run_migration  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Back-fill default fields on client records")
    parser.add_argument("migration", nargs="?", choices=sorted(MIGRATIONS), help="Migration to run")
    parser.add_argument("--list", action="store_true", help="List available migrations")
    parser.add_argument("--force", action="store_true", help="Overwrite fields that already have a value")
    parser.add_argument("--dry-run", action="store_true", help="Show what would change without writing")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    if args.list or not args.migration:
        for name in sorted(MIGRATIONS):
            print(f"  {name:<18} {MIGRATIONS[name].description}")
        return

    async def backfill():
        store = runner.open_store()
        try:
            result = await run_migration(
                store, args.migration, config.CLIENTS_COLLECTION,
                force=args.force, dry_run=args.dry_run,
            )
        finally:
            store.close()

        verb = "Would update" if args.dry_run else "Updated"
        print(f"\nMigration '{args.migration}' complete:")
        print(f"  Clients scanned: {result.scanned}")
        print(f"  {verb}: {result.updated}")
        print(f"  Skipped (already present): {result.skipped}")

    runner.run(backfill, verbose=args.verbose)


if __name__ == "__main__":
    main()
