"""
Binary PGM (P5) reading and writing.

Samples are normalized to [0, 1] on decode. On encode they are scaled by the
output maximum value, rounded to nearest (ties to even) and clamped.
"""

from __future__ import annotations

import os

import numpy as np

from .grid import PixelGrid

MAGIC = b"P5"
PGM_MAX = 65535
OUTPUT_MAX_VALUE = 65535

_WHITESPACE = b" \t\r\n\v\f"


class FormatError(ValueError):
    """The input is not a well-formed binary PGM image."""


def _read_bytes(source) -> bytes:
    if isinstance(source, (str, bytes, os.PathLike)):
        with open(source, "rb") as f:
            return f.read()
    return source.read()


def _skip_separator(data: bytes, pos: int) -> int:
    start = pos
    while pos < len(data):
        ch = data[pos:pos + 1]
        if ch == b"#":
            end = data.find(b"\n", pos)
            pos = len(data) if end < 0 else end + 1
        elif ch in _WHITESPACE:
            pos += 1
        else:
            break
    if pos == start:
        raise FormatError(f"expected whitespace at header offset {pos}")
    return pos


def _parse_int(data: bytes, pos: int, label: str) -> tuple[int, int]:
    end = pos
    while end < len(data) and data[end:end + 1].isdigit():
        end += 1
    if end == pos:
        raise FormatError(f"missing or invalid {label} in PGM header")
    return int(data[pos:end]), end


def parse_header(data: bytes) -> tuple[int, int, int, int]:
    """Return (width, height, max_value, offset of first sample)."""
    if data[:2] != MAGIC:
        raise FormatError(f"invalid PGM magic number {data[:2]!r} (expected {MAGIC!r})")
    pos = 2
    fields = []
    for label in ("width", "height", "max value"):
        pos = _skip_separator(data, pos)
        value, pos = _parse_int(data, pos, label)
        fields.append(value)
    width, height, max_value = fields

    if pos >= len(data) or data[pos:pos + 1] not in _WHITESPACE:
        raise FormatError("expected a single whitespace byte after the max value")
    pos += 1

    if width < 1 or height < 1:
        raise FormatError(f"image must not be empty (width={width}, height={height})")
    if max_value < 1 or max_value > PGM_MAX:
        raise FormatError(f"invalid max value: {max_value} (should be between 1 and {PGM_MAX})")
    return width, height, max_value, pos


def bytes_per_sample(max_value: int) -> int:
    return 2 if max_value > 255 else 1


def decode(source) -> PixelGrid:
    """Read a P5 image from a path or binary file object.

    Raises FormatError for malformed content; OSError from opening or reading
    the source propagates unchanged.
    """
    data = _read_bytes(source)
    width, height, max_value, offset = parse_header(data)

    bpp = bytes_per_sample(max_value)
    expected = width * height * bpp
    available = len(data) - offset
    if available < expected:
        raise FormatError(
            f"truncated pixel data: got {available} bytes, expected {expected} "
            f"({width}x{height}, {bpp} byte(s) per sample)"
        )
    dtype = ">u2" if bpp == 2 else "u1"
    samples = np.frombuffer(data, dtype=dtype, count=width * height, offset=offset)
    return PixelGrid(samples.reshape(height, width) / float(max_value))


def quantize(grid: PixelGrid, max_value: int = OUTPUT_MAX_VALUE) -> np.ndarray:
    if max_value < 1 or max_value > PGM_MAX:
        raise ValueError(f"max value must be between 1 and {PGM_MAX}, got {max_value}")
    scaled = np.rint(grid.values * max_value)
    return np.clip(scaled, 0, max_value).astype(np.uint16 if max_value > 255 else np.uint8)


def header_bytes(width: int, height: int, max_value: int) -> bytes:
    return MAGIC + b"\n" + f"{width} {height}\n{max_value}\n".encode("ascii")


def encode(grid: PixelGrid, destination, max_value: int = OUTPUT_MAX_VALUE) -> None:
    """Write grid as P5 to a path or binary file object."""
    samples = quantize(grid, max_value)
    if bytes_per_sample(max_value) == 2:
        samples = samples.astype(">u2")
    payload = header_bytes(grid.width, grid.height, max_value) + samples.tobytes()

    if isinstance(destination, (str, bytes, os.PathLike)):
        with open(destination, "wb") as f:
            f.write(payload)
    else:
        destination.write(payload)
