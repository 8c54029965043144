"""
Norwegian opinion-poll scraper: command-line interface.

Usage
-----
    python -m NorwayPolls --db data.sqlite
    python -m NorwayPolls --db polls.sqlite --schema party_columns --cell-policy lenient

Output
------
A SQLite database. With --schema fixed (default) every figure is one row of
the `polls` table; with --schema party_columns there is one table per
election and one column pair per party.
"""

import argparse
import sys

import requests

from NorwayPolls.pipeline import scrape_polls
from NorwayPolls.polls_client import HttpConfig


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Scrape Norwegian party polls (pollofpolls.no, InFact) into SQLite."
    )
    parser.add_argument(
        "--db", default="data.sqlite",
        help="SQLite file to write (default: data.sqlite)"
    )
    parser.add_argument(
        "--schema", choices=["fixed", "party_columns"], default="fixed",
        help="Table layout (default: fixed)"
    )
    parser.add_argument(
        "--cell-policy", choices=["strict", "lenient"], default="strict",
        help="Abort on an unparseable cell (strict) or skip it (lenient)"
    )
    parser.add_argument(
        "--sleep", type=float, default=0.0,
        help="Seconds to wait between requests (default: 0.0)"
    )
    parser.add_argument(
        "--timeout", type=int, default=60,
        help="Per-request timeout in seconds (default: 60)"
    )
    parser.add_argument(
        "--keep-existing", action="store_true",
        help="Append to an existing database instead of recreating it"
    )
    args = parser.parse_args(argv)

    try:
        records, issues = scrape_polls(
            args.db,
            schema=args.schema,
            cell_policy=args.cell_policy,
            http_config=HttpConfig(timeout_s=args.timeout, sleep_s=args.sleep),
            reset=not args.keep_existing,
        )
    except (ValueError, requests.RequestException) as exc:
        print(f"[Polls] ERROR: {exc}")
        return 1

    print(f"\nSaved {args.db}  ({len(records):,} records, {len(issues)} skipped)")
    if not issues.empty:
        print(issues["kind"].value_counts().to_string())
    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
