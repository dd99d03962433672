#!/usr/bin/env python3
"""
Upload a SKU mapping CSV to the running service.

Usage:
    python scripts/upload_mapping.py mapping.csv                   # Upload to local server
    python scripts/upload_mapping.py mapping.csv --base-url URL    # Custom API URL
    python scripts/upload_mapping.py mapping.csv --dry-run         # Parse locally, no upload

The admin secret is read from --secret or ADMIN_UPLOAD_SECRET.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

import requests

# Add backend to path so we can import modules
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from exceptions import MappingParseError
from parsers.mapping_csv_parser import parse_mapping_csv
from services.mapping_service import build_mapping_table

DEFAULT_BASE_URL = "http://localhost:8000"
UPLOAD_PATH = "/api/mapping/upload"


def dry_run(content: bytes) -> int:
    """Parse the CSV and print what would be uploaded."""
    try:
        result = parse_mapping_csv(content)
    except MappingParseError as e:
        print(f"[ERROR] {e.message}")
        return 1

    table = build_mapping_table(result.rows)
    print(f"[OK] {len(result.rows)} rows, {result.skipped_rows} skipped")
    print(f"[OK] {table.sku_count} SKUs, {table.entry_count} warehouse entries")
    return 0


def upload(content: bytes, base_url: str, secret: str) -> int:
    """Post the CSV to the upload endpoint."""
    url = base_url.rstrip("/") + UPLOAD_PATH

    try:
        response = requests.post(
            url,
            data=content,
            headers={"X-Admin-Secret": secret, "Content-Type": "text/csv"},
            timeout=30,
        )
    except requests.exceptions.RequestException as e:
        print(f"[ERROR] Upload failed: {e}")
        return 1

    if not response.ok:
        print(f"[ERROR] {response.status_code}: {response.text}")
        return 1

    print(f"[OK] Uploaded mapping for {response.json().get('skuCount', 0)} SKUs")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Upload a SKU -> warehouse -> location mapping CSV",
    )
    parser.add_argument("csv_file", type=Path, help="Mapping CSV (SKU, Warehouse, Location)")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL (default: {DEFAULT_BASE_URL})"
    )
    parser.add_argument(
        "--secret",
        default=os.getenv("ADMIN_UPLOAD_SECRET"),
        help="Admin upload secret (default: $ADMIN_UPLOAD_SECRET)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and summarize locally without uploading"
    )

    args = parser.parse_args(argv)

    if not args.csv_file.exists():
        print(f"[ERROR] File not found: {args.csv_file}")
        return 1

    content = args.csv_file.read_bytes()

    if args.dry_run:
        return dry_run(content)

    if not args.secret:
        print("[ERROR] No admin secret. Pass --secret or set ADMIN_UPLOAD_SECRET")
        return 1

    return upload(content, args.base_url, args.secret)


if __name__ == "__main__":
    sys.exit(main())
