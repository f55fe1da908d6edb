"""CLI runner that compacts a tzfile tree into zoneinfo.dat/.idx/.version."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from zone_compactor.compaction import CompactionInputs, CompactionResult, CompactionRunner
from zone_compactor.core.config import CompactorSettings, load_settings
from zone_compactor.core.errors import CompactorError
from zone_compactor.core.logging import add_file_handler, configure_logging, get_logger


def _print_summary(result: CompactionResult) -> None:
    payload = {
        "data_path": str(result.data_path),
        "index_path": str(result.index_path),
        "version_path": str(result.version_path),
        "zones": result.zone_count,
        "aliases": result.alias_count,
        "index_records": result.record_count,
        "blob_bytes": result.blob_bytes,
        "warnings": len(result.warnings),
    }
    if result.run_report_path:
        payload["run_report_path"] = str(result.run_report_path)
    print(json.dumps(payload, indent=2, sort_keys=True))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zone-compactor",
        description="Compile a directory of tzfile-formatted zones into zoneinfo.dat plus a sorted index.",
    )
    parser.add_argument("setup", type=Path, help="Setup manifest listing Link lines and zone names.")
    parser.add_argument("data_dir", type=Path, help="Directory holding compiled zone files (e.g. zic -d output).")
    parser.add_argument("output_dir", type=Path, help="Directory receiving zoneinfo.dat/.idx/.version.")
    parser.add_argument("version", help="tzdata version string written to zoneinfo.version (e.g. 2024a).")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML settings file (name width, output names, manifest policies).",
    )
    parser.add_argument(
        "--run-report",
        type=Path,
        help="Write a JSON run report (status, counts, artifact digests) to this path.",
    )
    parser.add_argument("--log-file", type=Path, help="Also append log output to this file.")
    parser.add_argument(
        "--allow-long-names",
        action="store_true",
        help="Truncate zone names that do not fit the index name field instead of failing.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-zone detail.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    configure_logging(level=level)
    if args.log_file:
        add_file_handler(args.log_file, level=level)

    settings = CompactorSettings()
    if args.config:
        try:
            settings = load_settings(args.config)
        except (FileNotFoundError, ValueError) as exc:
            parser.error(str(exc))
    if args.allow_long_names:
        settings = settings.model_copy(update={"long_names": "truncate"})
    get_logger(__name__).info(
        "Compactor settings (name_width=%s, long_names=%s, blank_lines=%s)",
        settings.name_width,
        settings.long_names,
        settings.blank_lines,
    )

    try:
        result = CompactionRunner().run(
            CompactionInputs(
                manifest_path=args.setup,
                data_dir=args.data_dir,
                output_dir=args.output_dir,
                version=args.version,
                settings=settings,
                run_report_path=args.run_report,
            )
        )
    except CompactorError as exc:
        print(f"zone-compactor: {exc}", file=sys.stderr)
        return 1
    _print_summary(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
