"""
grafi/pixel_buffer.py

PixelBuffer value type and the adapter functions that build it.

A PixelBuffer is a flat uint8 sample array plus width/height. The number of
samples per pixel (the channel depth) is derived from the array length:
1 for grayscale, 4 for RGBA. Depths 2 and 3 are representable but rejected
by the transformations.

API:
- construct(data, width, height): strict constructor, data must already be uint8
- from_samples(samples, width, height): clamps any numeric sequence first
- as_pixel_buffer(obj): accepts PixelBuffer, mappings and ImageData-like objects
- clamp_samples(values): 8-bit clamped write semantics
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import ShapeError, SampleTypeError

logger = logging.getLogger(__name__)

MAX_DEPTH = 4


def clamp_samples(values: Any) -> np.ndarray:
    """
    Convert numeric values to uint8 the way an 8-bit clamped buffer stores them:
    NaN -> 0, round half to even, clip to [0, 255].
    Byte containers are taken as uint8 samples unchanged.
    """
    if isinstance(values, (bytes, bytearray)) or (
        isinstance(values, memoryview) and values.itemsize == 1
    ):
        return np.frombuffer(values, dtype=np.uint8).copy()
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise SampleTypeError(
            f"pixel samples must be numeric, got {type(values).__name__}: {exc}"
        ) from exc
    arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.rint(arr), 0, 255).astype(np.uint8)


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ShapeError(f"{name} must be an integer, got {value!r}.")
    if value <= 0:
        raise ShapeError(f"{name} must be positive, got {value}.")
    return int(value)


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Immutable image buffer.

    Fields:
        data: 1-D uint8 array of length width * height * depth (read-only).
        width: Width in pixels.
        height: Height in pixels.
    """
    data: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        width = _check_dimension("width", self.width)
        height = _check_dimension("height", self.height)
        if not isinstance(self.data, np.ndarray) or self.data.dtype != np.uint8:
            raise SampleTypeError(
                f"pixel data must be a uint8 numpy array, got {type(self.data).__name__}"
                + (f" of dtype {self.data.dtype}" if isinstance(self.data, np.ndarray) else "")
                + "."
            )
        if self.data.ndim != 1:
            raise ShapeError(f"pixel data must be one-dimensional, got shape {self.data.shape}.")

        pixels = width * height
        depth, remainder = divmod(self.data.size, pixels)
        # Length must be a multiple of the pixel count; maximum depth is RGBA.
        if remainder != 0 or depth == 0 or depth > MAX_DEPTH:
            raise ShapeError(
                f"data length {self.data.size} does not match a {width}x{height} image "
                f"with 1..{MAX_DEPTH} channels."
            )

        # private copy: later writes to the caller's array must not show through
        own = np.array(self.data, dtype=np.uint8, copy=True)
        own.flags.writeable = False
        object.__setattr__(self, "data", own)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def depth(self) -> int:
        return self.data.size // self.pixel_count

    def planes(self) -> np.ndarray:
        """Read-only (height, width, depth) view of the samples."""
        return self.data.reshape(self.height, self.width, self.depth)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    def __repr__(self):
        return f"PixelBuffer(width={self.width}, height={self.height}, depth={self.depth})"


def construct(data: np.ndarray, width: int, height: int) -> PixelBuffer:
    """Build a PixelBuffer from an existing uint8 array (copied, no clamping)."""
    return PixelBuffer(data, width, height)


def from_samples(samples: Any, width: int, height: int) -> PixelBuffer:
    """Build a PixelBuffer from any numeric sequence, clamping samples to 0..255."""
    data = clamp_samples(samples).ravel()
    return PixelBuffer(data, width, height)


def as_pixel_buffer(obj: Any) -> PixelBuffer:
    """
    Coerce an ImageData-like value into a PixelBuffer.
    Accepts a PixelBuffer, a mapping with data/width/height keys, or an object
    exposing data/width/height attributes.
    """
    if isinstance(obj, PixelBuffer):
        return obj
    if isinstance(obj, Mapping):
        try:
            data, width, height = obj["data"], obj["width"], obj["height"]
        except KeyError as exc:
            raise SampleTypeError(f"image mapping is missing key {exc.args[0]!r}.") from exc
    elif all(hasattr(obj, attr) for attr in ("data", "width", "height")):
        data, width, height = obj.data, obj.width, obj.height
    else:
        raise SampleTypeError(
            f"expected a PixelBuffer or an object with data/width/height, got {type(obj).__name__}."
        )

    if isinstance(data, np.ndarray) and data.dtype == np.uint8:
        return PixelBuffer(data.ravel(), width, height)
    logger.debug("clamping %s samples into a uint8 buffer", type(data).__name__)
    return from_samples(data, width, height)
