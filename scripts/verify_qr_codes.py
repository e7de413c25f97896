#!/usr/bin/env python3
"""Report which QR image every client's instructions PDF will use."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.qr_audit import audit_clients  # noqa: E402


async def main():
    settings = config.qr_settings()
    store = runner.open_store()
    try:
        clients = await store.list_all(config.CLIENTS_COLLECTION)
    finally:
        store.close()

    print(f"Found {len(clients)} clients\n")
    audit = audit_clients(clients, settings)

    print("Clients WITH QR codes configured:")
    print("=" * 80)
    for c in audit.configured:
        print(f"\n{c.name} (ID: {c.client_id})")
        print(f"   qrUrl: {c.qr_url or '(not set)'}")
        print(f"   qrFileName: {c.qr_file_name or '(not set)'}")
        print(f"   qrPath: {c.qr_path or '(not set)'}")
        print(f"   PDF will use: {c.resolution.source} -> {c.resolution.reference}")

    if audit.default:
        print(f"\n\nClients WITHOUT QR codes (will use {settings.default_reference}):")
        print("=" * 80)
        for c in audit.default:
            print(f"   {c.name} (ID: {c.client_id})")

    if audit.issues:
        print("\n\nClients with potential issues:")
        print("=" * 80)
        for c, issue in audit.issues:
            print(f"   {c.name} (ID: {c.client_id})")
            print(f"   Issue: {issue}")
            print(f'   qrFileName: "{c.qr_file_name}"')

    print("\n\nSummary:")
    print(f"   Total clients: {audit.total}")
    print(f"   With QR codes: {len(audit.configured)}")
    print(f"   Without QR codes: {len(audit.default)}")
    print(f"   With potential issues: {len(audit.issues)}")


if __name__ == "__main__":
    runner.run(main)
