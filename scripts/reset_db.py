"""Delete all attendance records, events and members (in that order)."""

from __future__ import annotations

from _settings import load_container

from src.ram_points.ram_points.database.bootstrap import count_rows, reset_data


def main() -> None:
    _, container = load_container()

    removed = reset_data(container.db)
    for table, count in removed.items():
        print(f"Deleted {count} rows from {table}")

    remaining = count_rows(container.db)
    print("Verification:")
    for table, count in remaining.items():
        print(f"   {table}: {count}")

    if any(remaining.values()):
        raise SystemExit("Reset incomplete: some tables still have rows")
    print("OK: database reset. Run scripts/seed_db.py to populate it again.")


if __name__ == "__main__":
    main()
