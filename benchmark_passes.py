#!/usr/bin/env python3
import argparse
import csv
import random
import statistics
import sys
from pathlib import Path

from iterblur import BACKENDS, BlurEngine, PixelGrid
from iterblur.timing import get_current_time

WIDTH = 1920
HEIGHTS = [630, 1260, 2520, 5040]
PASSES = 20
REPEATS = 3
SEED = 123


def generate_grid(width: int, height: int, seed: int = SEED) -> PixelGrid:
    rng = random.Random(seed)
    data = [rng.getrandbits(8) / 255.0 for _ in range(width * height)]
    return PixelGrid.from_flat(data, width, height)


def time_engine(engine: BlurEngine, grid: PixelGrid, passes: int) -> float:
    t1 = get_current_time()
    engine.run(grid, passes)
    return get_current_time() - t1


def format_number(val):
    if val is None:
        return "--"
    s = f"{val:.2f}"
    return s.replace(".", ",")


def size_label(h):
    if h == 630:
        return "(x/4)"
    if h == 1260:
        return "(x/2)"
    if h == 2520:
        return "(x)"
    if h == 5040:
        return "(2x)"
    return ""


def latex_table(results, backends, heights, width=WIDTH):
    lines = []
    lines.append("\\begin{tabular}{|l|" + "r|" * len(backends) + "}\\hline")
    lines.append("Image size & " + " & ".join(backends) + " \\\\ \\hline")
    for height in heights:
        row = [f"grey {width}$\\times${height} {size_label(height)}".rstrip()]
        for backend in backends:
            rt = None
            for r in results:
                if r[0] == width and r[1] == height and r[3] == backend:
                    rt = r[4]
                    break
            row.append(format_number(rt))
        lines.append("{} & {} \\\\".format(row[0], " & ".join(row[1:])))
    lines.append("\\hline")
    lines.append("\\end{tabular}")
    return "\n".join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark blur engine runtimes")
    parser.add_argument("--width", type=int, default=WIDTH, help=f"Image width (default: {WIDTH})")
    parser.add_argument(
        "--heights", type=int, nargs="+", default=HEIGHTS, help="Image heights to benchmark"
    )
    parser.add_argument("--passes", type=int, default=PASSES, help=f"Filter passes per run (default: {PASSES})")
    parser.add_argument("--repeats", type=int, default=REPEATS, help="Repeats per case")
    parser.add_argument(
        "--backend", choices=BACKENDS, nargs="+", default=["vectorized"], help="Backends to benchmark"
    )
    parser.add_argument("--csv", default="blur_times.csv", help="Output CSV path")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.width <= 0 or any(h <= 0 for h in args.heights):
        print("width and heights must be positive", file=sys.stderr)
        return 1
    if args.passes < 0:
        print("passes must be >= 0", file=sys.stderr)
        return 1
    if args.repeats <= 0:
        print("repeats must be >= 1", file=sys.stderr)
        return 1

    results = []
    for height in args.heights:
        grid = generate_grid(args.width, height)
        for backend in args.backend:
            engine = BlurEngine(backend=backend)
            runtimes = [time_engine(engine, grid, args.passes) for _ in range(args.repeats)]
            median_rt = statistics.median(runtimes)
            print(f"[run] {backend} {args.width}x{height}: {median_rt:.3f} s", file=sys.stderr)
            results.append((args.width, height, args.passes, backend, median_rt))

    csv_path = Path(args.csv)
    with csv_path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["width", "height", "passes", "backend", "runtime_seconds"])
        for row in results:
            writer.writerow(row)

    print(latex_table(results, args.backend, args.heights, args.width))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
