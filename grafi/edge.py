"""
grafi/edge.py

Edge detection: grayscale (for RGBA input) followed by a named kernel.

The divisor is kernel.size / level, so level acts as a strength knob:
level=1 divides the Laplacian response by 9, level=2 by 4.5.
"""

import logging
from typing import Any, Optional

from .convolution import convolve
from .errors import DepthError
from .grayscale import grayscale
from .kernels import get_kernel
from .options import EdgeOptions, resolve_options
from .pixel_buffer import PixelBuffer, as_pixel_buffer

logger = logging.getLogger(__name__)


def edge(img: Any, option: Optional[Any] = None, **kwargs: Any) -> PixelBuffer:
    """
    Detect edges in a depth-1 or depth-4 image.

    Options: type (kernel name, default 'laplacian'), level (> 0, default 1),
    monochrome (collapse RGBA output to one sample per pixel).
    RGBA input is reduced with luma grayscale first; its alpha is kept.
    """
    opts = resolve_options(EdgeOptions, option, **kwargs)
    buffer = as_pixel_buffer(img)
    if buffer.depth not in (1, 4):
        raise DepthError(f"ImageObject has incorrect color depth {buffer.depth}, expected 1 or 4.")

    kernel = get_kernel(opts.type)

    if buffer.depth == 4:
        buffer = grayscale(buffer)

    divisor = kernel.size / opts.level
    logger.debug("edge %r type=%s divisor=%s", buffer, opts.type, divisor)
    return convolve(
        buffer,
        filter=kernel.weights,
        radius=kernel.radius,
        divisor=divisor,
        monochrome=opts.monochrome,
    )
