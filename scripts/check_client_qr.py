#!/usr/bin/env python3
"""Show how one client's QR image is resolved, and optionally fetch it.

Usage:
  python scripts/check_client_qr.py --name "aaa grocery" --probe
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.clients import find_by_name  # noqa: E402
from clientdb.probe import probe_url  # noqa: E402
from clientdb.qr_audit import inspect_client  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Inspect a client's QR code configuration")
    parser.add_argument("--name", default="aaa", help="Case-insensitive part of the client name")
    parser.add_argument("--probe", action="store_true", help="Fetch qrUrl and report what comes back")
    args = parser.parse_args()

    async def check():
        settings = config.qr_settings()
        store = runner.open_store()
        try:
            clients = await store.list_all(config.CLIENTS_COLLECTION)
        finally:
            store.close()

        match = find_by_name(clients, args.name)
        if match is None:
            print(f"No client matching '{args.name}'\n\nAvailable clients:")
            for client_id, record in clients:
                print(f"  - {record.get('name')} (ID: {client_id})")
            return 1

        client_id, record = match
        inspection = inspect_client(client_id, record, settings)
        c = inspection.client
        print(f"Found {c.name} (ID: {c.client_id})\n")
        print("QR Code Configuration:")
        print(f"   qrUrl: {c.qr_url or '(not set)'}")
        print(f"   qrFileName: {c.qr_file_name or '(not set)'}")
        print(f"   qrPath: {c.qr_path or '(not set)'}\n")

        res = c.resolution
        kind = f" ({res.path_kind})" if res.path_kind else ""
        print(f"PDF will use {res.source}{kind}: \"{res.reference}\"")

        if inspection.url_file_name is not None:
            print(f"\n   Filename in qrUrl: \"{inspection.url_file_name}\"")
            if inspection.mismatch:
                print("   MISMATCH: qrUrl points to a different file than qrFileName!")
            else:
                print("   Filenames match")

        if args.probe and c.qr_url:
            result = await probe_url(c.qr_url)
            if result.ok:
                print("\n   URL is accessible")
                print(f"   Content-Type: {result.content_type}")
                print(f"   Content-Length: {result.content_length} bytes")
            else:
                print(f"\n   URL not accessible: {result.error}")

        print("\nResolution order:")
        print("   1. qrUrl (if it starts with a recognized scheme)")
        print(f"   2. qrFileName -> {settings.default_folder}/{{qrFileName}}")
        print("   3. qrPath as stored")
        print(f"   4. Default -> {settings.default_reference}")

    runner.run(check)


if __name__ == "__main__":
    main()
