"""Seed members and legacy event attendance from a JSON export.

Usage: python scripts/seed_db.py data/members.json [--events events.json]
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from _settings import REPO_ROOT, load_container

from src.ram_points.ram_points.database.bootstrap import create_schema
from src.ram_points.ram_points.seeding.legacy_seed import LEGACY_EVENTS, parse_event_columns


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("members", nargs="?", default=str(REPO_ROOT / "data" / "members.json"))
    parser.add_argument("--events", help="JSON mapping of roster column -> {name, date, points}")
    args = parser.parse_args()

    members = json.loads(Path(args.members).read_text(encoding="utf-8"))
    event_columns = LEGACY_EVENTS
    if args.events:
        event_columns = parse_event_columns(json.loads(Path(args.events).read_text(encoding="utf-8")))

    _, container = load_container()
    create_schema(container.db)
    summary = container.seeder.seed(members, event_columns)

    print(f"Found {len(members)} members to seed")
    print(f"  events created:            {summary.events_created}")
    print(f"  members created / updated: {summary.members_created} / {summary.members_updated}")
    print(f"  attendance records:        {summary.records_created} (skipped {summary.records_skipped} duplicates)")


if __name__ == "__main__":
    main()
