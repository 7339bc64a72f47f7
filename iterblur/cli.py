"""
Command-line driver: decode, blur, encode.
"""

from __future__ import annotations

import argparse
import sys

from .engine import BACKENDS, BlurEngine
from .pgm import OUTPUT_MAX_VALUE, FormatError, decode, encode
from .timing import get_current_time

DEFAULT_INPUT = "in.pgm"
DEFAULT_PASSES = 1000
DEFAULT_OUTPUT = "out.pgm"


def eprint(*args):
    print(*args, file=sys.stderr)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="iterblur",
        description="Apply a 3x3 Gaussian filter to a PGM image a number of times.",
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT, help=f"Input P5 image (default: {DEFAULT_INPUT})")
    parser.add_argument(
        "passes", nargs="?", type=int, default=DEFAULT_PASSES, help=f"Number of filter passes (default: {DEFAULT_PASSES})"
    )
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT, help=f"Output P5 image (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--backend", choices=BACKENDS, default="vectorized", help="Pass implementation (default: vectorized)")
    parser.add_argument(
        "--max-value",
        type=int,
        default=OUTPUT_MAX_VALUE,
        help=f"Max sample value of the output image (default: {OUTPUT_MAX_VALUE})",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.passes < 0:
        eprint("passes must be >= 0")
        return 1
    if not 1 <= args.max_value <= 65535:
        eprint("max-value must be between 1 and 65535")
        return 1

    try:
        grid = decode(args.input)
    except OSError as exc:
        eprint(f"Failed to open file {args.input}: {exc.strerror or exc}")
        eprint("Failed to read pgm image.")
        return 1
    except FormatError as exc:
        eprint(f"Invalid PGM format: {exc}")
        eprint("Failed to read pgm image.")
        return 1

    engine = BlurEngine(backend=args.backend)
    print(f"Apply Gaussian filter {args.passes} times.")
    t1 = get_current_time()
    result = engine.run(grid, args.passes)
    t2 = get_current_time()
    print(f"Finished. Time: {t2 - t1:.6f} seconds.")

    try:
        encode(result, args.output, args.max_value)
    except OSError as exc:
        eprint(f"Failed to write file {args.output}: {exc.strerror or exc}")
        return 1

    print(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
