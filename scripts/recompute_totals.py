"""Rebuild every member's point counters from the attendance ledger.

Usage: python scripts/recompute_totals.py [--check]
"""

from __future__ import annotations

import argparse

from _settings import load_container


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--check", action="store_true", help="only report drift, do not write")
    args = parser.parse_args()

    _, container = load_container()
    aggregator = container.aggregator
    results = aggregator.find_drift() if args.check else aggregator.recompute_all()

    for r in results:
        print(f"member {r.member_id}: {r.before.as_columns()} -> {r.after.as_columns()}")
    verb = "drifted" if args.check else "repaired"
    print(f"OK: {len(results)} member(s) {verb}")


if __name__ == "__main__":
    main()
