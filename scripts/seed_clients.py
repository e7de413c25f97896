#!/usr/bin/env python3
"""Seed the database with sample clients and section templates."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner, seed  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Seed sample clients / section templates")
    parser.add_argument("--sections", action="store_true", help="Also write the section templates")
    parser.add_argument("--no-clients", action="store_true", help="Skip the sample clients")
    args = parser.parse_args()

    async def run_seed():
        store = runner.open_store()
        try:
            if not args.no_clients:
                existing = await store.count(config.CLIENTS_COLLECTION)
                print(f"Existing clients: {existing}")
                added, skipped = await seed.seed_clients(store, config.CLIENTS_COLLECTION)
                total = await store.count(config.CLIENTS_COLLECTION)
                print(f"Added: {added}, Skipped (duplicates): {skipped}, Total clients: {total}")

            if args.sections:
                written = await seed.seed_sections(store, config.SECTIONS_COLLECTION)
                print(f"Sections written: {', '.join(written)}")
        finally:
            store.close()

    runner.run(run_seed)


if __name__ == "__main__":
    main()
