"""
grafi/grayscale.py

Grayscale reduction of RGBA pixel buffers.

Modes:
  - luma:    0.299 R + 0.587 G + 0.114 B
  - average: (R + G + B) / 3
  - simple:  one of R, G, B, A passed through unchanged (selected by `channel`)

Output is RGBA with R = G = B = gray and the original alpha, or a single
channel per pixel when `monochrome` is set.
"""

import logging
from typing import Any, Callable, Dict, Optional

import numpy as np

from .errors import DepthError, OptionError
from .options import GrayscaleOptions, resolve_options
from .pixel_buffer import PixelBuffer, as_pixel_buffer, clamp_samples, construct

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


# each mode receives the (N, 4) float pixel array and the selected channel
def _luma(pixels: np.ndarray, channel: int) -> np.ndarray:
    r, g, b = LUMA_WEIGHTS
    return r * pixels[:, 0] + g * pixels[:, 1] + b * pixels[:, 2]


def _simple(pixels: np.ndarray, channel: int) -> np.ndarray:
    return pixels[:, channel]


def _average(pixels: np.ndarray, channel: int) -> np.ndarray:
    return (pixels[:, 0] + pixels[:, 1] + pixels[:, 2]) / 3


GRAYSCALE_MODES: Dict[str, Callable[[np.ndarray, int], np.ndarray]] = {
    "luma": _luma,
    "simple": _simple,
    "average": _average,
}


def grayscale(img: Any, option: Optional[Any] = None, **kwargs: Any) -> PixelBuffer:
    """
    Grayscale an RGBA image.

    Parameters
    ----------
    img : PixelBuffer or ImageData-like
        Depth-4 (RGBA) image.
    option : mapping or GrayscaleOptions, optional
        mode ('luma' | 'simple' | 'average'), monochrome (bool), channel (0..3).
    **kwargs
        Same keys as `option`; keywords take precedence.

    Returns
    -------
    PixelBuffer
        Depth 4 (gray RGB, original alpha) or depth 1 when monochrome.
    """
    opts = resolve_options(GrayscaleOptions, option, **kwargs)
    try:
        to_gray = GRAYSCALE_MODES[opts.mode]
    except KeyError:
        raise OptionError(
            f"Unknown grayscale mode {opts.mode!r}. Choose one of: {', '.join(GRAYSCALE_MODES)}."
        ) from None

    buffer = as_pixel_buffer(img)
    if buffer.depth != 4:
        raise DepthError(
            f"ImageObject has incorrect color depth {buffer.depth}, please pass RGBA image."
        )
    logger.debug("grayscale %r mode=%s monochrome=%s", buffer, opts.mode, opts.monochrome)

    pixels = buffer.data.reshape(-1, 4)
    gray = clamp_samples(to_gray(pixels.astype(np.float64), opts.channel))

    if opts.monochrome:
        return construct(gray, buffer.width, buffer.height)

    out = np.empty_like(pixels)
    out[:, :3] = gray[:, np.newaxis]
    out[:, 3] = pixels[:, 3]
    return construct(out.ravel(), buffer.width, buffer.height)
