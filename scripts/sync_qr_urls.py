#!/usr/bin/env python3
"""Point scan accounts' qrUrl at the stored image named by qrFileName.

Without --update this only reports what would change.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.qr_audit import apply_qr_url_sync, check_default_qr, plan_qr_url_sync  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Check and fix qrUrl fields")
    parser.add_argument("--update", action="store_true", help="Write the corrected URLs")
    args = parser.parse_args()

    async def sync():
        settings = config.qr_settings()
        store = runner.open_store()
        blobs = runner.open_blobs()
        try:
            clients = await store.list_all(config.CLIENTS_COLLECTION)
            print(f"Found {len(clients)} clients\n")
            plan = await plan_qr_url_sync(clients, blobs, settings)

            for client_id, name, path in plan.missing:
                print(f"MISSING  {name} (ID: {client_id}): {path} not in storage")

            for i, item in enumerate(plan.updates, 1):
                print(f"\n{i}. {item.name} (ID: {item.client_id})")
                print(f"   qrFileName: {item.qr_file_name}")
                print(f"   Current qrUrl: {item.current_url or '(not set)'}")
                print(f"   Correct qrUrl: {item.correct_url[:80]}...")

            print("\nSummary:")
            print(f"   Scan accounts: {plan.scan_accounts}")
            print(f"   Needing qrUrl update: {len(plan.updates)}")
            print(f"   Missing images: {len(plan.missing)}")

            if not plan.updates:
                print("\nAll QR code URLs are correct!")
            elif args.update:
                updated = await apply_qr_url_sync(store, config.CLIENTS_COLLECTION, plan.updates)
                print(f"\nUpdated {updated} of {len(plan.updates)} clients")
            else:
                print("\nRun with --update to write these URLs")

            default = await check_default_qr(blobs, settings)
            status = "exists" if default.exists else "does NOT exist"
            print(f"\nDefault QR code {default.path} {status} in storage")
        finally:
            store.close()
            blobs.close()

    runner.run(sync)


if __name__ == "__main__":
    main()
