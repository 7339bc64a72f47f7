import numpy as np
import pytest

from iterblur import PixelGrid


def write_pgm(path, width, height, max_value, samples, header=None):
    if header is None:
        header = f"P5\n{width} {height}\n{max_value}\n".encode("ascii")
    dtype = ">u2" if max_value > 255 else "u1"
    path.write_bytes(header + np.asarray(samples, dtype=dtype).tobytes())
    return path


@pytest.fixture
def random_grid():
    rng = np.random.default_rng(42)
    return PixelGrid(rng.random((13, 17)))


@pytest.fixture
def small_pgm(tmp_path):
    samples = [0, 64, 128, 255, 32, 16, 200, 100, 50, 10, 20, 30]
    return write_pgm(tmp_path / "in.pgm", 4, 3, 255, samples)
