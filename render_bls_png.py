#!/usr/bin/env python3
"""
Render PNG previews of a Blockland .bls save with Pillow.

    python render_bls_png.py House.bls --colorset House_colors.png \
        --plan House_plan.png --plan-size 1024
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from blsave import HeaderError, Reader
from blsave.preview import render_colorset, render_plan


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a .bls colorset and brick plan to PNG.")
    parser.add_argument("input", type=Path, help="Path to the .bls save")
    parser.add_argument("--colorset", type=Path, help="Path for the 8x8 colorset swatch PNG")
    parser.add_argument("--cell-size", type=int, default=32, help="Swatch cell size in pixels")
    parser.add_argument("--plan", type=Path, help="Path for the top-down brick plan PNG")
    parser.add_argument("--plan-size", type=int, default=512, help="Plan size in pixels (square)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if not args.colorset and not args.plan:
        raise SystemExit("Specify --colorset and/or --plan to render a PNG.")

    try:
        reader = Reader.from_path(args.input)
    except HeaderError as exc:
        print(f"[!] {args.input}: {exc}", file=sys.stderr)
        return 1
    with reader:
        if args.colorset:
            render_colorset(reader.colors(), args.colorset, cell_px=args.cell_size)
            print(f"[+] Colorset PNG written to {args.colorset}")
        if args.plan:
            bricks = list(reader.bricks())
            render_plan(bricks, reader.colors(), args.plan, size_px=args.plan_size)
            print(f"[+] Plan PNG with {len(bricks)} brick(s) written to {args.plan}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
