from pathlib import Path
import argparse
import csv
import sys

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

BASE_DIR = Path(__file__).resolve().parent


def format_comma(value, decimals=2):
    fmt = f"{value:.{decimals}f}"
    return fmt.replace('.', ',')


def load_times(csv_path):
    data = {}
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                backend = row["backend"].strip()
                width = int(row["width"])
                height = int(row["height"])
            except (KeyError, ValueError):
                continue
            val = row.get("runtime_seconds", "").strip()
            if not val or val.lower() in ("none", "nan", "--"):
                rt = None
            else:
                try:
                    rt = float(val)
                except ValueError:
                    rt = None
            data[(backend, width, height)] = rt
    return data


def plot_runtime(data, out_dir: Path):
    backends = sorted({key[0] for key in data})
    sizes = sorted({(key[1], key[2]) for key in data}, key=lambda s: s[0] * s[1])
    labels = [f"{w}*\n{h}" for w, h in sizes]
    x = list(range(len(labels)))

    missing = []
    fig, ax = plt.subplots(figsize=(11, 6))
    for backend in backends:
        y = []
        for w, h in sizes:
            rt = data.get((backend, w, h))
            if rt is None:
                missing.append((backend, w, h))
                y.append(float("nan"))
            else:
                y.append(rt)
        ax.plot(x, y, linewidth=2, marker="o", label=backend)
        ax.fill_between(x, 0, y, alpha=0.2)

    if missing:
        print(f"WARNING: missing {len(missing)} entries in CSV (showing up to 5)", file=sys.stderr)
        for item in missing[:5]:
            print(f"  missing: {item}", file=sys.stderr)

    ax.set_title("Blur runtime per image size")
    ax.set_xlabel("Image Size")
    ax.set_ylabel("Runtime (s)")

    ax.set_xticks(x)
    ax.set_xticklabels(labels)

    ax.grid(axis="y", alpha=0.3)

    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, pos: format_comma(v, 2)))

    ax.legend(bbox_to_anchor=(1.02, 1), loc="upper left")
    fig.subplots_adjust(right=0.8)

    out_dir.mkdir(parents=True, exist_ok=True)
    png_path = out_dir / "blur_runtime.png"
    pdf_path = out_dir / "blur_runtime.pdf"

    fig.savefig(png_path, dpi=300, bbox_inches="tight")
    fig.savefig(pdf_path, bbox_inches="tight")
    plt.close(fig)
    return png_path, pdf_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Plot blur runtime per image size and backend")
    parser.add_argument("--csv", default="blur_times.csv", help="CSV file from benchmark_passes.py")
    parser.add_argument("--outdir", default=str(BASE_DIR), help="Output directory")
    args = parser.parse_args(argv)

    try:
        data = load_times(args.csv)
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if not data:
        print(f"No runtimes found in {args.csv}", file=sys.stderr)
        return 1

    for path in plot_runtime(data, Path(args.outdir)):
        print(str(path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
