# slabnest ver1.0 — main entry
# - Slab size from config.properties, overridable on the command line
# - Clean error reporting (no traceback)
# - PDF written only when the calculation succeeds

import argparse
import logging
import sys

from io_utils import parse_pieces, parse_properties, parse_slab
from validation import collect_problems
from packing import compute
from summary import compute_summary, format_report
from pdf_export import generate_pdf, read_page_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slabnest",
        description="Grid tiling of piece types on a single slab"
    )
    parser.add_argument("pieces_csv", help="pieces.csv input")
    parser.add_argument("config_properties", help="config.properties input")
    parser.add_argument("output_pdf", help="output PDF path")
    parser.add_argument("--slab-width", type=float, default=None,
                        help="override slab-width from config")
    parser.add_argument("--slab-height", type=float, default=None,
                        help="override slab-height from config")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    # --- LOAD INPUT FILES ---
    try:
        pieces = parse_pieces(args.pieces_csv)
        cfg = parse_properties(args.config_properties)
        slab = parse_slab(cfg, width=args.slab_width, height=args.slab_height)
        page = read_page_settings(cfg)
    except (OSError, ValueError) as e:
        print("\n[ERROR] Could not read input:")
        print(str(e).strip())
        return 1

    units = page.units

    # --- CALCULATION ---
    result, err = compute(slab, pieces)
    if err is not None:
        print("\n[ERROR] Calculation failed:")
        print(str(err))
        others = collect_problems(slab, pieces)
        if len(others) > 1:
            print("All problems found:")
            for p in others:
                print(f"- {p}")
        print("No PDF created.\n")
        return 1

    # --- SUMMARY ---
    summary = compute_summary(slab, result)
    for line in format_report(summary, units):
        print(line)

    # --- PDF OUTPUT ---
    generate_pdf(
        output_path=args.output_pdf,
        slab=slab,
        result=result,
        summary=summary,
        cfg=cfg
    )

    print(f"Success! PDF saved to {args.output_pdf}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
