"""
3x3 stencil weights and the scalar evaluator for a single output pixel.

The nine terms are always summed in the same order, top row first, left to
right, so that every implementation of a pass rounds identically.
"""

from __future__ import annotations

GAUSSIAN_3X3 = (
    (1.0 / 16.0, 1.0 / 8.0, 1.0 / 16.0),
    (1.0 / 8.0, 1.0 / 4.0, 1.0 / 8.0),
    (1.0 / 16.0, 1.0 / 8.0, 1.0 / 16.0),
)


def validate_kernel(kernel) -> tuple[tuple[float, float, float], ...]:
    rows = tuple(tuple(float(w) for w in row) for row in kernel)
    if len(rows) != 3 or any(len(row) != 3 for row in rows):
        raise ValueError("kernel must be a 3x3 table of weights")
    return rows


def clamp(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


def neighbor_rows(row: int, height: int) -> tuple[int, int, int]:
    return clamp(row - 1, 0, height - 1), row, clamp(row + 1, 0, height - 1)


def neighbor_cols(col: int, width: int) -> tuple[int, int, int]:
    return clamp(col - 1, 0, width - 1), col, clamp(col + 1, 0, width - 1)


def stencil_at(src, row: int, col: int, kernel=GAUSSIAN_3X3) -> float:
    """Weighted sum of the clamped 3x3 neighborhood of src[row][col].

    src is any row-indexable 2-D sequence (nested lists or a numpy array).
    """
    height = len(src)
    width = len(src[0])
    rows = neighbor_rows(row, height)
    cols = neighbor_cols(col, width)
    acc = src[rows[0]][cols[0]] * kernel[0][0]
    for i, r in enumerate(rows):
        line = src[r]
        weights = kernel[i]
        for j, c in enumerate(cols):
            if i == 0 and j == 0:
                continue
            acc += line[c] * weights[j]
    return float(acc)
