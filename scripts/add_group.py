#!/usr/bin/env python3
"""
Create a group in whichever storage is configured (DATABASE_URL or data.json).

Usage:
  python scripts/add_group.py --id cats --name "Cats" [--description "..."]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garantir que o pacote seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from videoboard.core.errors import StorageError
from videoboard.services.storage_service import build_storage


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create a group")
    ap.add_argument("--id", required=True, help="Group id (e.g. cats)")
    ap.add_argument("--name", required=True, help="Display name")
    ap.add_argument("--description", help="Optional description")
    args = ap.parse_args(argv)

    storage = build_storage()
    group = storage.create_group(
        {"id": (args.id or "").strip(), "name": args.name, "description": args.description}
    )
    print("OK: group created")
    print(f"  id: {group['id']}")
    print(f"  name: {group['name']}")
    if group["description"]:
        print(f"  description: {group['description']}")
    print(f"  storage: {storage.name}")


if __name__ == "__main__":
    try:
        main()
    except StorageError as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc.message}\n")
        raise SystemExit(1)
