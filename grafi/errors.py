"""
grafi/errors.py

Error taxonomy for pixel-buffer operations.
Every operation validates its own inputs and raises one of these before doing any work.
"""


class GrafiError(Exception):
    """Base class for all errors raised by grafi."""


class ShapeError(GrafiError, ValueError):
    """Sample count does not match width * height * depth (depth 1..4)."""


class DepthError(GrafiError, ValueError):
    """Channel depth is not accepted by the requested operation."""


class OptionError(GrafiError, ValueError):
    """A required option is missing or an option value is out of range."""


class UnknownFilterError(OptionError):
    """Requested kernel name is not in the registry."""


class SampleTypeError(GrafiError, TypeError):
    """Sample container is not a uint8 numpy array."""
