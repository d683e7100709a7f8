#!/usr/bin/env python3
"""
Print a summary of a Blockland .bls save: description, colorset, and how the
declared brick count compares with what the body actually holds.

    python bls_info.py House.bls --json House.summary.json --skip-log House.skips.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from blsave import HeaderError, Reader, SkipLogger


def summarize(reader: Reader) -> dict[str, Any]:
    actual = 0
    for result in reader:
        if result.ok:
            actual += 1
    colors = reader.colors()
    return {
        "format_version": reader.format_version(),
        "description": reader.description(),
        "opaque_colors": sum(1 for color in colors if color.is_opaque),
        "declared_colors": reader.metadata.declared_color_count,
        "expected_bricks": reader.brick_count(),
        "actual_bricks": actual,
        "skipped_records": reader.skipped_count,
        "failed_records": reader.error_count,
    }


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a Blockland .bls save file.")
    parser.add_argument("input", type=Path, help="Path to the .bls save")
    parser.add_argument("--json", type=Path, help="Optional destination for a JSON summary")
    parser.add_argument("--skip-log", type=Path, help="Write every skipped or unreadable record to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log repaired header entries and skipped records")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="[%(levelname)s] %(name)s: %(message)s")

    skip_logger = SkipLogger(args.skip_log) if args.skip_log else None
    try:
        reader = Reader.from_path(args.input, skip_logger=skip_logger)
    except HeaderError as exc:
        print(f"[!] {args.input}: {exc}", file=sys.stderr)
        return 1
    with reader:
        summary = summarize(reader)
    if skip_logger is not None:
        skip_logger.flush()
        print(f"[i] Skip log written to {args.skip_log}")

    print("Description:")
    for line in reader.description_lines():
        print(line)
    print(f"Opaque color count: {summary['opaque_colors']}")
    print(f"Expected brick count: {summary['expected_bricks']}")
    print(f"Actual brick count: {summary['actual_bricks']}")
    if summary["skipped_records"] or summary["failed_records"]:
        print(f"[i] Skipped {summary['skipped_records']} record(s), {summary['failed_records']} unreadable")

    if args.json:
        summary["source"] = str(args.input)
        args.json.write_text(json.dumps(summary, indent=2), encoding="utf-8")
        print(f"[+] JSON summary written to {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
