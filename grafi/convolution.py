"""
grafi/convolution.py

Square-kernel convolution over depth-1 and depth-4 pixel buffers.

Pipeline per colour channel:
  1) multiply-accumulate the kernel over the interior (one shifted slice per tap)
  2) divide by `divisor`, clamp and round to uint8
  3) copy border pixels from the input unchanged
The alpha channel of RGBA input is never convolved, it is copied as is.

The kernel is applied as a correlation: weight k (row-major) multiplies the
neighbour at the same row-major offset, no flipping.

Border rule: a pixel is left untouched when
    y < r  or  y > height - 2r  or  x < r  or  x > width - 2r
For r = 1 this is the usual one-pixel frame. For r > 1 the trailing band is
wider than the leading one; symmetric_border=True uses height - r / width - r.
"""

import logging
from typing import Any, Optional

import numpy as np

from .errors import DepthError
from .options import ConvolutionOptions, resolve_options
from .pixel_buffer import PixelBuffer, as_pixel_buffer, clamp_samples, construct

logger = logging.getLogger(__name__)

ALPHA = 3


def border_mask(height: int, width: int, radius: int, symmetric: bool = False) -> np.ndarray:
    """
    Boolean (height, width) mask of pixels copied verbatim from the input.
    """
    if symmetric:
        row_limit, col_limit = height - radius - 1, width - radius - 1
    else:
        row_limit, col_limit = height - 2 * radius, width - 2 * radius
    ys = np.arange(height).reshape(height, 1)
    xs = np.arange(width).reshape(1, width)
    rows = (ys < radius) | (ys > row_limit)
    cols = (xs < radius) | (xs > col_limit)
    return rows | cols


def _correlate_interior(plane: np.ndarray, kernel: np.ndarray, radius: int) -> np.ndarray:
    """
    Weighted neighbourhood sums for every interior pixel of a 2D float plane.
    Pixels closer than `radius` to an edge are left at 0.
    """
    height, width = plane.shape
    out = np.zeros((height, width), dtype=np.float64)
    inner_h = height - 2 * radius
    inner_w = width - 2 * radius
    if inner_h <= 0 or inner_w <= 0:
        return out

    acc = np.zeros((inner_h, inner_w), dtype=np.float64)
    side = kernel.shape[0]
    for ky in range(side):
        for kx in range(side):
            weight = kernel[ky, kx]
            if weight == 0:
                continue
            acc += weight * plane[ky:ky + inner_h, kx:kx + inner_w]
    out[radius:height - radius, radius:width - radius] = acc
    return out


def convolve(img: Any, option: Optional[Any] = None, **kwargs: Any) -> PixelBuffer:
    """
    Apply a square kernel to every colour channel of an image.

    Parameters
    ----------
    img : PixelBuffer or ImageData-like
        Depth-1 or depth-4 image.
    option : mapping or ConvolutionOptions, optional
        filter (flat weights, required), radius (required), divisor (default 1),
        monochrome (collapse RGBA output to one sample per pixel),
        symmetric_border (default False).
    **kwargs
        Same keys as `option`; keywords take precedence.

    Returns
    -------
    PixelBuffer
        Same width/height; same depth unless monochrome was requested on RGBA input.
    """
    opts = resolve_options(ConvolutionOptions, option, **kwargs)
    buffer = as_pixel_buffer(img)
    depth = buffer.depth
    if depth not in (1, 4):
        raise DepthError(f"ImageObject has incorrect color depth {depth}, expected 1 or 4.")

    height, width, r = buffer.height, buffer.width, opts.radius
    logger.debug(
        "convolve %r radius=%d divisor=%s monochrome=%s symmetric_border=%s",
        buffer, r, opts.divisor, opts.monochrome, opts.symmetric_border,
    )

    kernel = np.asarray(opts.filter, dtype=np.float64).reshape(2 * r + 1, 2 * r + 1)
    source = buffer.planes()
    border = border_mask(height, width, r, symmetric=opts.symmetric_border)

    # starts as a copy so alpha (and anything not convolved) passes through
    out = source.copy()
    for ch in range(depth):
        if ch == ALPHA:
            continue
        sums = _correlate_interior(source[..., ch].astype(np.float64), kernel, r)
        result = clamp_samples(sums / opts.divisor)
        out[..., ch] = np.where(border, source[..., ch], result)

    if opts.monochrome and depth == 4:
        # R, G and B are equal for gray input; keep one of them
        out = out[..., 0]

    return construct(np.ascontiguousarray(out).ravel(), width, height)
