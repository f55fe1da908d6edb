"""CLI helper that decodes a zoneinfo.idx file into JSON lines."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from zone_compactor.compaction.l1.index import read_index
from zone_compactor.core.config import DEFAULT_NAME_WIDTH, load_settings
from zone_compactor.core.errors import CompactorError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="zone-compactor-inspect",
        description="Print the records of a zoneinfo.idx file, one JSON object per line.",
    )
    parser.add_argument("index", type=Path, help="Path to zoneinfo.idx")
    width = parser.add_mutually_exclusive_group()
    width.add_argument(
        "--name-width",
        type=int,
        default=None,
        help=f"Name field width used when the index was built (default: {DEFAULT_NAME_WIDTH}).",
    )
    width.add_argument("--config", type=Path, help="Settings YAML the index was built with.")
    parser.add_argument("--name", action="append", help="Only print records with this zone name (repeatable).")
    args = parser.parse_args(argv)

    name_width = args.name_width if args.name_width is not None else DEFAULT_NAME_WIDTH
    if args.config:
        try:
            name_width = load_settings(args.config).name_width
        except (FileNotFoundError, ValueError) as exc:
            parser.error(str(exc))
    if name_width < 2:
        parser.error("--name-width must be at least 2")

    try:
        entries = read_index(args.index, name_width)
    except CompactorError as exc:
        print(f"zone-compactor-inspect: {exc}", file=sys.stderr)
        return 1
    wanted = set(args.name) if args.name else None
    for entry in entries:
        if wanted is not None and entry.name not in wanted:
            continue
        print(json.dumps(entry._asdict(), sort_keys=True))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
