#!/usr/bin/env python3
"""Verify the database connection and show what the PDF would print for a few clients."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.clients import display_name, pdf_summary  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Test the client database connection")
    parser.add_argument("--show", type=int, default=3, help="Number of clients to print")
    args = parser.parse_args()

    async def check():
        store = runner.open_store()
        try:
            clients = await store.list_all(config.CLIENTS_COLLECTION)
        finally:
            store.close()

        print(f"Total documents found: {len(clients)}")
        for i, (client_id, record) in enumerate(clients[:args.show], 1):
            print(f"\nClient {i}: {display_name(client_id, record)} (ID: {client_id})")
            for key in ("inventoryType", "accountType", "PIC", "startTime",
                        "storeStartTime", "verification", "updatedAt"):
                print(f"  - {key}: {record.get(key)}")
            print("  PDF would show:")
            for label, value in pdf_summary(record).items():
                print(f"  - {label}: {value}")

        print("\nConnection successful!")

    runner.run(check)


if __name__ == "__main__":
    main()
