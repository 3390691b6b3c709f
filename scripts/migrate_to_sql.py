"""One-off migration script: JSON (data.json) -> SQL database."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

# Garantir que o pacote seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from videoboard.core.config import get_settings
from videoboard.repositories.sql_repository import SQLRepository


def _load_json(path: Path) -> dict:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise SystemExit(f"{path} does not hold a JSON object")
    data.setdefault("groups", [])
    data.setdefault("videos", [])
    return data


def migrate(data_file: Path) -> dict:
    """Replace the SQL dataset with the file's groups and videos."""
    if not get_settings().use_sql:
        raise SystemExit("DATABASE_URL must be set to migrate into SQL")
    repo = SQLRepository()
    repo.init()
    repo.replace_all(_load_json(data_file))
    snapshot = repo.get_all()
    return {"groups": len(snapshot["groups"]), "videos": len(snapshot["videos"])}


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Copy data.json into the SQL database")
    ap.add_argument("--file", default=str(get_settings().data_file), help="JSON file to import")
    args = ap.parse_args()
    counts = migrate(Path(args.file))
    print(f"JSON data migrated: {counts['groups']} groups, {counts['videos']} videos.")
