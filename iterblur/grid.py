"""
Row-major grid of floating-point pixel intensities.
"""

from __future__ import annotations

import numpy as np


class PixelGrid:
    """width x height float64 intensities, indexed as (row, col).

    Values are nominally in [0, 1] but are not clamped here; the codec clamps
    when it quantizes.
    """

    __slots__ = ("_data",)

    def __init__(self, values) -> None:
        data = np.array(values, dtype=np.float64, order="C")
        if data.ndim != 2:
            raise ValueError(f"pixel grid must be 2-D, got {data.ndim} dimension(s)")
        if data.shape[0] < 1 or data.shape[1] < 1:
            raise ValueError(f"pixel grid must not be empty (height={data.shape[0]}, width={data.shape[1]})")
        self._data = data

    @classmethod
    def zeros(cls, width: int, height: int) -> PixelGrid:
        return cls(np.zeros((height, width), dtype=np.float64))

    @classmethod
    def from_flat(cls, values, width: int, height: int) -> PixelGrid:
        flat = np.asarray(values, dtype=np.float64).ravel()
        if width < 1 or height < 1:
            raise ValueError(f"width and height must be positive (width={width}, height={height})")
        if flat.size != width * height:
            raise ValueError(f"expected {width * height} values for {width}x{height}, got {flat.size}")
        return cls(flat.reshape(height, width))

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width), the numpy convention."""
        return self._data.shape

    @property
    def values(self) -> np.ndarray:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def at(self, row: int, col: int) -> float:
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        self._data[row, col] = value

    def copy(self) -> PixelGrid:
        return PixelGrid(self._data)

    def min(self) -> float:
        return float(self._data.min())

    def max(self) -> float:
        return float(self._data.max())

    def mean(self) -> float:
        return float(self._data.mean())

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
