"""Iterative 3x3 Gaussian smoothing of grayscale PGM images."""

from .engine import BACKENDS, BlurEngine, blur
from .grid import PixelGrid
from .kernel import GAUSSIAN_3X3
from .pgm import OUTPUT_MAX_VALUE, FormatError, decode, encode

__all__ = [
    "BACKENDS",
    "BlurEngine",
    "FormatError",
    "GAUSSIAN_3X3",
    "OUTPUT_MAX_VALUE",
    "PixelGrid",
    "blur",
    "decode",
    "encode",
]

__version__ = "0.1.0"
