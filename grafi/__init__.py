"""
grafi: grayscale and edge-detection filters for flat RGBA / grayscale pixel buffers.
Exposes the public operations and error types.
"""
import logging

from .convolution import convolve
from .edge import edge
from .errors import (
    DepthError,
    GrafiError,
    OptionError,
    SampleTypeError,
    ShapeError,
    UnknownFilterError,
)
from .grayscale import grayscale
from .kernels import Kernel, get_kernel, register_kernel
from .pixel_buffer import PixelBuffer, construct, from_samples

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "edge",
    "grayscale",
    "convolve",
    "PixelBuffer",
    "construct",
    "from_samples",
    "Kernel",
    "get_kernel",
    "register_kernel",
    "GrafiError",
    "ShapeError",
    "DepthError",
    "OptionError",
    "UnknownFilterError",
    "SampleTypeError",
]
