#!/usr/bin/env python3
"""
Blur one image with every engine backend and compare the encoded outputs
byte-by-byte.
"""

from __future__ import annotations

import argparse
import hashlib
import shutil
import sys
import tempfile
from pathlib import Path

from iterblur import BACKENDS, OUTPUT_MAX_VALUE, BlurEngine, FormatError, decode, encode
from iterblur.timing import get_current_time


def resolve_input_path(raw: str, repo_root: Path) -> Path:
    candidate = Path(raw).expanduser()
    choices = [candidate] if candidate.is_absolute() else [Path.cwd() / candidate, repo_root / candidate]
    for path in choices:
        if path.is_file():
            return path.resolve()
    raise FileNotFoundError(f"Input file not found: {raw}")


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as f:
        while True:
            chunk = f.read(1024 * 1024)
            if not chunk:
                break
            digest.update(chunk)
    return digest.hexdigest()


def compare_files(lhs: Path, rhs: Path) -> tuple[bool, str]:
    lhs_size = lhs.stat().st_size
    rhs_size = rhs.stat().st_size
    if lhs_size != rhs_size:
        return False, f"size mismatch ({lhs_size} vs {rhs_size} bytes)"

    offset = 0
    with lhs.open("rb") as f1, rhs.open("rb") as f2:
        while True:
            b1 = f1.read(1024 * 1024)
            b2 = f2.read(1024 * 1024)
            if not b1 and not b2:
                return True, "identical"
            if b1 != b2:
                limit = min(len(b1), len(b2))
                for i in range(limit):
                    if b1[i] != b2[i]:
                        return False, f"first mismatch at byte {offset + i}: {b1[i]} != {b2[i]}"
                return False, f"mismatch near byte {offset + limit}"
            offset += len(b1)


def run_and_collect(backend: str, grid, passes: int, out_file: Path, max_value: int) -> tuple[str, int, float]:
    print(f"[run] {backend}: {passes} pass(es)")
    engine = BlurEngine(backend=backend)
    t1 = get_current_time()
    result = engine.run(grid, passes)
    elapsed = get_current_time() - t1
    encode(result, out_file, max_value)
    return sha256_file(out_file), out_file.stat().st_size, elapsed


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run every blur backend on one image and compare outputs byte-by-byte."
    )
    parser.add_argument("--input", required=True, help="Path to input P5 image")
    parser.add_argument("--passes", type=int, default=20, help="Filter pass count (default: 20)")
    parser.add_argument(
        "--max-value", type=int, default=OUTPUT_MAX_VALUE, help=f"Output max value (default: {OUTPUT_MAX_VALUE})"
    )
    parser.add_argument(
        "--save-outdir",
        default=None,
        help="Optional directory to save blur_<backend>.pgm snapshots",
    )
    parser.add_argument(
        "--keep-temp",
        action="store_true",
        help="Keep temporary working directory for debugging",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    repo_root = Path(__file__).resolve().parents[1]

    if args.passes < 0:
        print("passes must be >= 0", file=sys.stderr)
        return 1
    if not 1 <= args.max_value <= 65535:
        print("max-value must be between 1 and 65535", file=sys.stderr)
        return 1

    try:
        input_path = resolve_input_path(args.input, repo_root)
        grid = decode(input_path)
    except (OSError, FormatError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    save_dir = None
    if args.save_outdir:
        save_dir = Path(args.save_outdir).expanduser()
        if not save_dir.is_absolute():
            save_dir = Path.cwd() / save_dir
        save_dir.mkdir(parents=True, exist_ok=True)

    temp_dir = Path(tempfile.mkdtemp(prefix="compare_outputs_"))
    print(f"[info] temp dir: {temp_dir}")
    if args.keep_temp:
        print("[info] keep-temp enabled; directory will not be removed")

    statuses: dict[str, tuple[str, int, float]] = {}
    snapshots = {backend: temp_dir / f"blur_{backend}.pgm" for backend in BACKENDS}
    try:
        for backend in BACKENDS:
            statuses[backend] = run_and_collect(backend, grid, args.passes, snapshots[backend], args.max_value)

        print("")
        print("Output hashes:")
        for backend in BACKENDS:
            digest, size, elapsed = statuses[backend]
            print(f"  {backend:<10}: {digest} ({size} bytes, {elapsed:.3f} s)")

        ok_all = True
        reference = BACKENDS[0]
        for name in BACKENDS[1:]:
            same, detail = compare_files(snapshots[reference], snapshots[name])
            if same:
                print(f"[match] {reference} vs {name}: identical")
            else:
                print(f"[mismatch] {reference} vs {name}: {detail}")
                ok_all = False

        if save_dir is not None:
            for path in snapshots.values():
                shutil.copy2(path, save_dir / path.name)
            print(f"[info] saved snapshots to: {save_dir}")

        if ok_all:
            print("[pass] All outputs are identical")
            return 0
        print("[fail] Outputs are different")
        return 2

    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        if not args.keep_temp:
            shutil.rmtree(temp_dir, ignore_errors=True)


if __name__ == "__main__":
    raise SystemExit(main())
