#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

from PIL import Image

from iterblur import BlurEngine, FormatError, PixelGrid, decode
from iterblur.pgm import quantize


def eprint(*args):
    print(*args, file=sys.stderr)


def to_image(grid: PixelGrid) -> Image.Image:
    samples = quantize(grid, 255)
    return Image.frombytes("L", (grid.width, grid.height), samples.tobytes())


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate PNG previews of an image before and after blurring.")
    parser.add_argument("--input", required=True, help="Path to input P5 image")
    parser.add_argument("--passes", type=int, default=20, help="Number of filter passes")
    parser.add_argument("--outdir", default="figures", help="Output directory for PNGs")
    args = parser.parse_args(argv)

    if args.passes < 0:
        eprint("passes must be >= 0")
        return 1

    try:
        grid = decode(args.input)
    except (OSError, FormatError) as exc:
        eprint(str(exc))
        return 1

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    stem = Path(args.input).stem

    img0 = to_image(grid)
    out0 = outdir / f"{stem}_0.png"
    img0.save(out0)

    blurred = BlurEngine().run(grid, args.passes)
    img_n = to_image(blurred)
    out_n = outdir / f"{stem}_{args.passes}.png"
    img_n.save(out_n)

    # left original, right blurred
    composite = Image.new("L", (grid.width * 2, grid.height))
    composite.paste(img0, (0, 0))
    composite.paste(img_n, (grid.width, 0))
    out_comp = outdir / f"{stem}_0_{args.passes}.png"
    composite.save(out_comp)

    print(f"Wrote: {out0}")
    print(f"Wrote: {out_n}")
    print(f"Wrote: {out_comp}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
