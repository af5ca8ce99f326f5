#!/usr/bin/env python3
"""Build the reconciled register of members' financial interests as CSV."""

import sys
import logging
import argparse
from datetime import date
from pathlib import Path

from regmem.config import config
from regmem.core import run
from regmem.exceptions import OutputError
from regmem.fetcher import Fetcher


def parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def main():
    parser = argparse.ArgumentParser(
        description="Fetch every edition of the register and write one row per distinct declaration"
    )
    parser.add_argument(
        "-o",
        "--output",
        help=f"Output CSV path (default: {config.output})",
    )
    parser.add_argument("--start", type=parse_day, help="First edition date, YYYY-MM-DD")
    parser.add_argument("--end", type=parse_day, help="Last edition date, YYYY-MM-DD (default: today)")
    parser.add_argument("--workers", type=int, help=f"Concurrent member page fetches (default: {config.workers})")
    parser.add_argument("--cache-dir", help=f"Response cache directory (default: {config.cache_dir})")
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the response cache")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    fetcher = Fetcher(
        cache_dir=Path(args.cache_dir) if args.cache_dir else None,
        use_cache=not args.no_cache,
    )
    output = Path(args.output) if args.output else config.output

    try:
        stats = run(
            start=args.start,
            end=args.end,
            output=output,
            fetch=fetcher,
            workers=args.workers,
        )
    except OutputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {stats.written} declarations to '{output}' ({stats.skipped} documents skipped)")


if __name__ == "__main__":
    main()
