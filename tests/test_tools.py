import csv

import numpy as np
import pytest
from PIL import Image

import benchmark_passes
import compare_outputs
import convert_raw
import make_preview
import plot_runtime
from iterblur import decode


def test_convert_raw_writes_8bit_pgm(tmp_path):
    raw = tmp_path / "img.raw"
    raw.write_bytes(bytes([0, 51, 102, 255, 10, 20]))
    assert convert_raw.main([str(raw), "3", "2"]) == 0

    out = tmp_path / "img.pgm"
    assert out.read_bytes() == b"P5\n3 2\n255\n" + raw.read_bytes()
    assert decode(out).at(0, 1) == 0.2


def test_convert_raw_size_mismatch(tmp_path):
    raw = tmp_path / "img.raw"
    raw.write_bytes(bytes(5))
    assert convert_raw.main([str(raw), "3", "2"]) == 2


def test_convert_raw_missing_input(tmp_path):
    assert convert_raw.main([str(tmp_path / "none.raw"), "3", "2"]) == 1


def test_compare_outputs_reports_identical(small_pgm, tmp_path, capsys):
    save = tmp_path / "snapshots"
    assert compare_outputs.main(["--input", str(small_pgm), "--passes", "4", "--save-outdir", str(save)]) == 0
    out = capsys.readouterr().out
    assert "[match] vectorized vs loop: identical" in out
    assert (save / "blur_vectorized.pgm").read_bytes() == (save / "blur_loop.pgm").read_bytes()


def test_compare_files_reports_first_mismatch(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"abcdef")
    b.write_bytes(b"abcxef")
    same, detail = compare_outputs.compare_files(a, b)
    assert not same
    assert "byte 3" in detail

    b.write_bytes(b"abc")
    same, detail = compare_outputs.compare_files(a, b)
    assert not same
    assert "size mismatch" in detail


def test_compare_outputs_missing_input(tmp_path):
    assert compare_outputs.main(["--input", str(tmp_path / "missing.pgm")]) == 1


def test_benchmark_writes_csv(tmp_path, capsys):
    csv_path = tmp_path / "times.csv"
    argv = ["--width", "8", "--heights", "4", "6", "--passes", "2", "--repeats", "1",
            "--backend", "vectorized", "loop", "--csv", str(csv_path)]
    assert benchmark_passes.main(argv) == 0

    with csv_path.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [(r["height"], r["backend"]) for r in rows] == [
        ("4", "vectorized"), ("4", "loop"), ("6", "vectorized"), ("6", "loop"),
    ]
    assert all(float(r["runtime_seconds"]) >= 0 for r in rows)
    assert "\\begin{tabular}" in capsys.readouterr().out


def test_benchmark_grid_is_seeded():
    a = benchmark_passes.generate_grid(5, 4)
    b = benchmark_passes.generate_grid(5, 4)
    assert a == b
    assert 0.0 <= a.min() and a.max() <= 1.0


def test_plot_runtime(tmp_path):
    csv_path = tmp_path / "times.csv"
    csv_path.write_text(
        "width,height,passes,backend,runtime_seconds\n"
        "8,4,2,vectorized,0.01\n"
        "8,6,2,vectorized,0.02\n"
        "8,4,2,loop,0.5\n"
        "8,6,2,loop,--\n"
    )
    data = plot_runtime.load_times(csv_path)
    assert data[("loop", 8, 6)] is None
    assert data[("vectorized", 8, 4)] == pytest.approx(0.01)

    assert plot_runtime.main(["--csv", str(csv_path), "--outdir", str(tmp_path / "plots")]) == 0
    assert (tmp_path / "plots" / "blur_runtime.png").is_file()
    assert (tmp_path / "plots" / "blur_runtime.pdf").is_file()


def test_make_preview(small_pgm, tmp_path):
    outdir = tmp_path / "figures"
    assert make_preview.main(["--input", str(small_pgm), "--passes", "3", "--outdir", str(outdir)]) == 0

    original = Image.open(outdir / "in_0.png")
    assert original.size == (4, 3)
    assert np.asarray(original)[0].tolist() == [0, 64, 128, 255]
    assert Image.open(outdir / "in_3.png").size == (4, 3)
    assert Image.open(outdir / "in_0_3.png").size == (8, 3)
