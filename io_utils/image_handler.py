# io_utils/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> (PixelBuffer, meta): depth 1 for grayscale files, depth 4 (RGBA) otherwise
- save_image(path, buffer) -> writes image
- to_image(buffer) / from_image(image): PixelBuffer <-> PIL.Image
- detect_is_rgba(buffer) -> bool
"""

import warnings
from typing import Tuple

import numpy as np
import pillow_avif  # noqa: F401  registers the AVIF plugin with Pillow
from PIL import Image

from grafi.errors import DepthError
from grafi.pixel_buffer import PixelBuffer, as_pixel_buffer, construct

GRAY_MODES = ("1", "L", "I", "I;16", "F")
HIGH_BIT_DEPTH_MODES = ("I", "I;16", "F")


def _narrow_to_uint8(img: Image.Image) -> np.ndarray:
    """
    Map a 16/32-bit grayscale image onto 0..255.
    Integer modes are scaled by their full range, float images by their min/max.
    """
    arr = np.asarray(img, dtype=np.float64)
    if img.mode == "F":
        amin, amax = float(np.nanmin(arr)), float(np.nanmax(arr))
        scale = 255.0 / (amax - amin) if amax > amin else 0.0
        arr = (arr - amin) * scale
    else:
        arr = arr * (255.0 / 65535.0)
    warnings.warn(
        f"Image mode {img.mode} narrowed to 8-bit samples.",
        RuntimeWarning,
    )
    return np.clip(np.rint(arr), 0, 255).astype(np.uint8)


def from_image(img: Image.Image) -> PixelBuffer:
    """
    Convert a Pillow image into a PixelBuffer.
    Grayscale modes become depth 1, every other mode is converted to RGBA.
    """
    width, height = img.size
    if img.mode in HIGH_BIT_DEPTH_MODES:
        arr = _narrow_to_uint8(img)
    elif img.mode in GRAY_MODES:
        arr = np.asarray(img.convert("L"), dtype=np.uint8)
    else:
        arr = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    return construct(np.ascontiguousarray(arr).ravel(), width, height)


def to_image(buffer) -> Image.Image:
    """
    Convert a depth-1 or depth-4 PixelBuffer (or ImageData-like value) to a Pillow image.
    """
    buffer = as_pixel_buffer(buffer)
    if buffer.depth == 1:
        arr = buffer.data.reshape(buffer.height, buffer.width)
    elif buffer.depth == 4:
        arr = buffer.planes()
    else:
        raise DepthError(f"Cannot build an image from color depth {buffer.depth}; expected 1 or 4.")
    # fromarray infers L for (H, W) and RGBA for (H, W, 4) uint8 arrays
    return Image.fromarray(np.array(arr, dtype=np.uint8))


def read_image(path: str) -> Tuple[PixelBuffer, dict]:
    """
    Read an image from `path` and return (buffer, meta).
    Meta contains the original mode, size and whether the file carries alpha.
    """
    with Image.open(path) as img:
        img.load()
        meta = {
            "mode": img.mode,
            "size": img.size,
            "has_alpha": img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info,
        }
        return from_image(img), meta


def save_image(path: str, buffer) -> str:
    """
    Save a depth-1 (L) or depth-4 (RGBA) buffer to `path`.
    """
    img = to_image(buffer)
    if img.mode == "RGBA" and path.lower().endswith((".jpg", ".jpeg")):
        # JPEG has no alpha channel
        img = img.convert("RGB")
    img.save(path)
    return path


def detect_is_rgba(buffer) -> bool:
    return as_pixel_buffer(buffer).depth == 4
