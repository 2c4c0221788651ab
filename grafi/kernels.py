"""
grafi/kernels.py

Named convolution kernels.

A Kernel is a flat, row-major tuple of (2r+1)^2 weights plus its radius r.
The registry maps a name to a Kernel so new edge kernels can be added with
register_kernel() without changing the edge detector.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from .errors import OptionError, UnknownFilterError

logger = logging.getLogger(__name__)


def kernel_radius(weights: Sequence[float]) -> int:
    """
    Radius of a square kernel from its weight count: 9 -> 1, 25 -> 2.
    Raises OptionError when the count is not an odd square.
    """
    n = len(weights)
    side = math.isqrt(n)
    if n == 0 or side * side != n or side % 2 == 0:
        raise OptionError(f"kernel must have (2r+1)^2 weights, got {n}.")
    return (side - 1) // 2


@dataclass(frozen=True)
class Kernel:
    weights: Tuple[float, ...]
    radius: int

    def __post_init__(self):
        weights = tuple(self.weights)
        if kernel_radius(weights) != self.radius:
            raise OptionError(
                f"kernel with {len(weights)} weights does not have radius {self.radius}."
            )
        object.__setattr__(self, "weights", weights)

    @property
    def size(self) -> int:
        return len(self.weights)

    @property
    def side(self) -> int:
        return 2 * self.radius + 1

    def matrix(self) -> np.ndarray:
        """Weights as a (side, side) float64 array."""
        return np.asarray(self.weights, dtype=np.float64).reshape(self.side, self.side)


KERNELS: Dict[str, Kernel] = {
    "laplacian": Kernel((-1, -1, -1, -1, 8, -1, -1, -1, -1), radius=1),
}


def get_kernel(name: str) -> Kernel:
    try:
        return KERNELS[name]
    except KeyError:
        raise UnknownFilterError(
            f"Could not find type of filter requested: {name!r}. "
            f"Choose one of: {', '.join(sorted(KERNELS))}."
        ) from None


def register_kernel(
    name: str,
    weights: Sequence[float],
    radius: Optional[int] = None,
    replace: bool = False,
) -> Kernel:
    """
    Add a named kernel to the registry and return it.
    radius is derived from the weight count when omitted.
    Re-registering an existing name requires replace=True.
    """
    if not isinstance(name, str) or not name:
        raise OptionError(f"kernel name must be a non-empty string, got {name!r}.")
    if name in KERNELS and not replace:
        raise OptionError(f"kernel {name!r} is already registered.")
    if radius is None:
        radius = kernel_radius(weights)
    kernel = Kernel(tuple(weights), radius)
    KERNELS[name] = kernel
    logger.debug("registered kernel %r (radius %d)", name, radius)
    return kernel
