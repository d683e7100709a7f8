#!/usr/bin/env python3
"""
Report brick statistics for a .bls save: position bounds, color usage and the
most common brick names.  Handy for spotting saves whose body disagrees with
their header.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from blsave import HeaderError, Reader
from blsave.stats import BrickStats, summarize_bricks


def _print_report(stats: BrickStats, limit: int) -> None:
    print(f"[+] {stats.count} brick(s) decoded")
    if stats.bounds:
        lo, hi = stats.bounds
        print(f"  bounds   ({lo[0]:+.2f},{lo[1]:+.2f},{lo[2]:+.2f}) - ({hi[0]:+.2f},{hi[1]:+.2f},{hi[2]:+.2f})")
    if stats.centroid:
        cx, cy, cz = stats.centroid
        print(f"  centroid ({cx:+.2f},{cy:+.2f},{cz:+.2f})")
    used = [(idx, count) for idx, count in enumerate(stats.color_usage) if count]
    used.sort(key=lambda item: item[1], reverse=True)
    print(f"  colors in use: {len(used)}")
    for idx, count in used[:limit]:
        print(f"    color {idx:2d}: {count}")
    print("  most common bricks:")
    for name, count in stats.top_names:
        print(f"    {name:<32} {count}")
    for name, count in stats.flag_counts.items():
        print(f"  {name:<10} {count}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize brick positions and colors in a .bls save.")
    parser.add_argument("input", type=Path, help="Path to the .bls save")
    parser.add_argument("--top", type=int, default=10, help="How many brick names / colors to list (default: 10)")
    parser.add_argument("--json", type=Path, help="Optional destination for the statistics as JSON")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        reader = Reader.from_path(args.input)
    except HeaderError as exc:
        print(f"[!] {args.input}: {exc}", file=sys.stderr)
        return 1
    with reader:
        stats = summarize_bricks(reader.bricks(), top=args.top)
    _print_report(stats, args.top)
    if args.json:
        args.json.write_text(json.dumps(stats.to_dict(), indent=2), encoding="utf-8")
        print(f"[+] JSON statistics written to {args.json}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
