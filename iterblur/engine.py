"""
Iterative blur engine.

Two buffers of the image's shape are owned by the engine; each pass reads the
current one and writes the other, then the roles flip. Nothing is allocated
inside the pass loop.
"""

from __future__ import annotations

import numpy as np

from .grid import PixelGrid
from .kernel import GAUSSIAN_3X3, stencil_at, validate_kernel

BACKENDS = ("vectorized", "loop")

# (row offset, col offset) into the padded buffer, in summation order
_TAPS = tuple((i, j) for i in range(3) for j in range(3))


class BlurEngine:
    """Applies a fixed 3x3 stencil to a PixelGrid a given number of times.

    backend="vectorized" keeps each buffer as a numpy array with a one-cell
    replicated border, so the nine neighbors of every pixel are slice views.
    backend="loop" walks the pixels one by one through ``stencil_at``.
    Both produce bit-identical output.
    """

    def __init__(self, kernel=GAUSSIAN_3X3, backend: str = "vectorized") -> None:
        if backend not in BACKENDS:
            raise ValueError(f"unknown backend {backend!r} (expected one of {', '.join(BACKENDS)})")
        self.kernel = validate_kernel(kernel)
        self.backend = backend
        self._buffers = None
        self._scratch = None
        self._shape = None
        self._current = 0

    def run(self, grid: PixelGrid, passes: int) -> PixelGrid:
        if not isinstance(grid, PixelGrid):
            raise TypeError(f"expected PixelGrid, got {type(grid).__name__}")
        if isinstance(passes, bool) or not isinstance(passes, (int, np.integer)):
            raise TypeError(f"passes must be an integer, got {type(passes).__name__}")
        if passes < 0:
            raise ValueError(f"passes must be >= 0, got {passes}")

        self._allocate(grid.height, grid.width)
        self._load(grid)
        if self.backend == "vectorized":
            step = self._pass_vectorized
        else:
            step = self._pass_loop
        for _ in range(passes):
            step(self._buffers[self._current], self._buffers[1 - self._current])
            self._current = 1 - self._current
        return self._result()

    def _allocate(self, height: int, width: int) -> None:
        if self._shape == (height, width):
            return
        if self.backend == "vectorized":
            self._buffers = [np.empty((height + 2, width + 2), dtype=np.float64) for _ in range(2)]
            self._scratch = np.empty((height, width), dtype=np.float64)
        else:
            self._buffers = [[[0.0] * width for _ in range(height)] for _ in range(2)]
        self._shape = (height, width)

    def _load(self, grid: PixelGrid) -> None:
        self._current = 0
        src = self._buffers[0]
        if self.backend == "vectorized":
            src[1:-1, 1:-1] = grid.values
        else:
            for r, row in enumerate(grid.values.tolist()):
                src[r][:] = row

    def _result(self) -> PixelGrid:
        latest = self._buffers[self._current]
        if self.backend == "vectorized":
            return PixelGrid(latest[1:-1, 1:-1])
        return PixelGrid(latest)

    def _pass_vectorized(self, src: np.ndarray, dst: np.ndarray) -> None:
        height, width = self._shape
        # replicate edges into the border; columns after rows fills corners
        src[0, 1:-1] = src[1, 1:-1]
        src[-1, 1:-1] = src[-2, 1:-1]
        src[:, 0] = src[:, 1]
        src[:, -1] = src[:, -2]

        out = dst[1:-1, 1:-1]
        scratch = self._scratch
        for n, (i, j) in enumerate(_TAPS):
            neighbors = src[i:i + height, j:j + width]
            if n == 0:
                np.multiply(neighbors, self.kernel[i][j], out=out)
            else:
                np.multiply(neighbors, self.kernel[i][j], out=scratch)
                np.add(out, scratch, out=out)

    def _pass_loop(self, src: list, dst: list) -> None:
        height, width = self._shape
        kernel = self.kernel
        for row in range(height):
            line = dst[row]
            for col in range(width):
                line[col] = stencil_at(src, row, col, kernel)


def blur(grid: PixelGrid, passes: int, backend: str = "vectorized") -> PixelGrid:
    """Run ``passes`` passes of the Gaussian stencil over a copy of grid."""
    return BlurEngine(backend=backend).run(grid, passes)
