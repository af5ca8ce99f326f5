#!/usr/bin/env python3
"""
Show the declarations parsed from one saved member page.

Useful for checking how the segmenter and assembler treat a page before
running the whole register.
"""

import sys
import argparse
import logging
from pathlib import Path

from regmem.core import parse_member_page


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the declarations found in a member page HTML file")
    parser.add_argument("input_file", help="Path to a saved member page")
    parser.add_argument("--edition", default="000000", help="Edition id to stamp on records (yymmdd)")
    parser.add_argument("--max-preview", type=int, default=200, help="Characters of item text to show")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    input_path = Path(args.input_file)
    if not input_path.is_file():
        print(f"Error: Input file '{args.input_file}' not found", file=sys.stderr)
        return 1

    html = input_path.read_bytes()
    records = parse_member_page(html, args.edition, input_path.name)

    if not records:
        print("No declarations found.")
        return 0

    print(f"{records[0].name}: {len(records)} declarations\n")
    section = None
    for i, record in enumerate(records, 1):
        if record.section != section:
            section = record.section
            print(f"== {section}")

        preview = record.item[: args.max_preview]
        if len(record.item) > args.max_preview:
            preview += "..."
        print(f"{i}.")
        for line in preview.split("\n"):
            print(f"   {line}")

        fields = [
            f"{label}: {value}"
            for label, value in (
                ("amount", record.amount),
                ("duration", record.duration),
                ("registered", record.registered),
            )
            if value
        ]
        if fields:
            print(f"   [{', '.join(fields)}]")
        print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
