#!/usr/bin/env python3
"""Check that the default QR image exists in storage and list the QR folder."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from clientdb import config, runner  # noqa: E402
from clientdb.probe import probe_url  # noqa: E402
from clientdb.qr_audit import check_default_qr  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Check the default QR code image")
    parser.add_argument("--probe", action="store_true", help="Also download the default image")
    args = parser.parse_args()

    async def check():
        settings = config.qr_settings()
        blobs = runner.open_blobs()
        try:
            result = await check_default_qr(blobs, settings)
        finally:
            blobs.close()

        print(f"Checking path: {result.path}")
        print(f"Full gs:// path: {result.gs_address}\n")
        if result.exists:
            print("Default QR code EXISTS in storage")
            print(f"   Download URL: {result.url[:80]}...")
            if args.probe:
                probe = await probe_url(result.url)
                if probe.ok:
                    print(f"   File is accessible ({probe.content_length} bytes)")
                else:
                    print(f"   File exists but not accessible ({probe.error})")
        else:
            print("Default QR code does NOT exist in storage!")
            print(f"   Error: {result.error}")
            print(f"   Upload it to: {result.gs_address}")

        print(f"\nFiles in {settings.default_folder}/:")
        if result.listing_error:
            print(f"   Error listing files: {result.listing_error}")
        elif not result.folder_items:
            print("   No files found!")
        for i, name in enumerate(result.folder_items, 1):
            print(f"   {i}. {name}")

        return 0 if result.exists else 1

    runner.run(check)


if __name__ == "__main__":
    main()
