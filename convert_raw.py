import argparse
import os
import sys

from iterblur import PixelGrid, encode


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Convert a RAW 8-bit grey dump to a P5 PGM file the blur tool can read."
    )
    p.add_argument("input", help="Input .raw file")
    p.add_argument("width", type=int, help="Image width")
    p.add_argument("height", type=int, help="Image height")
    p.add_argument(
        "-o",
        "--output",
        help="Output .pgm file. Defaults to input name with .pgm",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    in_path = args.input
    w = args.width
    h = args.height

    if w <= 0 or h <= 0:
        print("width and height must be positive", file=sys.stderr)
        return 1

    if not os.path.isfile(in_path):
        print(f"Input not found: {in_path}", file=sys.stderr)
        return 1

    with open(in_path, "rb") as f:
        data = f.read()

    expected = w * h
    if len(data) != expected:
        print(
            f"Size mismatch: got {len(data)} bytes, expected {expected} (w={w}, h={h})",
            file=sys.stderr,
        )
        return 2

    out_path = args.output
    if not out_path:
        base, _ = os.path.splitext(in_path)
        out_path = base + ".pgm"

    grid = PixelGrid.from_flat([b / 255.0 for b in data], w, h)
    try:
        encode(grid, out_path, 255)
    except OSError as exc:
        print(f"Failed to write {out_path}: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
