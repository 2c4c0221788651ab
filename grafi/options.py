"""
grafi/options.py

Defaults and option records for the public operations.

Each operation accepts an optional mapping (the "option object") plus keyword
overrides. resolve_options() merges both over the dataclass defaults; a value
of None means "use the default". The dataclasses validate their own fields.
"""

import numbers
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Optional, Sequence, Tuple, Type, TypeVar

import numpy as np

from .errors import OptionError

DEFAULT_GRAYSCALE_MODE = "luma"
DEFAULT_SIMPLE_CHANNEL = 1
DEFAULT_EDGE_TYPE = "laplacian"
DEFAULT_LEVEL = 1.0
DEFAULT_DIVISOR = 1.0

T = TypeVar("T")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_flag(name: str, value: Any) -> bool:
    # numpy bools come out of array comparisons
    if not isinstance(value, (bool, np.bool_)):
        raise OptionError(f"{name} must be True or False, got {value!r}.")
    return bool(value)


@dataclass(frozen=True)
class GrayscaleOptions:
    mode: str = DEFAULT_GRAYSCALE_MODE
    monochrome: bool = False
    channel: int = DEFAULT_SIMPLE_CHANNEL

    def __post_init__(self):
        if not isinstance(self.mode, str):
            raise OptionError(f"grayscale mode must be a string, got {self.mode!r}.")
        if isinstance(self.channel, bool) or not isinstance(self.channel, numbers.Integral):
            raise OptionError(f"channel must be an integer 0..3, got {self.channel!r}.")
        if not 0 <= int(self.channel) <= 3:
            raise OptionError(f"channel must be in 0..3 (R, G, B, A), got {self.channel}.")
        object.__setattr__(self, "channel", int(self.channel))
        object.__setattr__(self, "monochrome", _check_flag("monochrome", self.monochrome))


@dataclass(frozen=True)
class ConvolutionOptions:
    """
    filter and radius are required; they default to None only so that a
    missing value can be reported as an OptionError.
    """
    filter: Optional[Tuple[float, ...]] = None
    radius: Optional[int] = None
    divisor: float = DEFAULT_DIVISOR
    monochrome: bool = False
    symmetric_border: bool = False

    def __post_init__(self):
        if self.filter is None or self.radius is None:
            raise OptionError(
                f"Required options missing. filter: {self.filter!r}, radius: {self.radius!r}"
            )
        if isinstance(self.radius, bool) or not isinstance(self.radius, numbers.Integral):
            raise OptionError(f"radius must be a non-negative integer, got {self.radius!r}.")
        if self.radius < 0:
            raise OptionError(f"radius must be a non-negative integer, got {self.radius}.")

        weights = _as_weights(self.filter)
        size = 2 * int(self.radius) + 1
        if len(weights) != size * size:
            raise OptionError(
                f"filter has {len(weights)} weights; radius {self.radius} needs {size * size}."
            )
        if not _is_number(self.divisor) or self.divisor == 0:
            raise OptionError(f"divisor must be a non-zero number, got {self.divisor!r}.")

        object.__setattr__(self, "filter", weights)
        object.__setattr__(self, "radius", int(self.radius))
        object.__setattr__(self, "monochrome", _check_flag("monochrome", self.monochrome))
        object.__setattr__(self, "symmetric_border", _check_flag("symmetric_border", self.symmetric_border))


@dataclass(frozen=True)
class EdgeOptions:
    type: str = DEFAULT_EDGE_TYPE
    level: float = DEFAULT_LEVEL
    monochrome: bool = False

    def __post_init__(self):
        if not isinstance(self.type, str):
            raise OptionError(f"edge type must be a string, got {self.type!r}.")
        if not _is_number(self.level) or self.level <= 0:
            raise OptionError(f"level must be a positive number, got {self.level!r}.")
        object.__setattr__(self, "monochrome", _check_flag("monochrome", self.monochrome))


def _as_weights(values: Sequence[Any]) -> Tuple[float, ...]:
    try:
        weights = tuple(values)
    except TypeError as exc:
        raise OptionError(f"filter must be a sequence of numbers, got {values!r}.") from exc
    # numpy scalars are numbers.Real as well
    if not all(_is_number(w) for w in weights):
        raise OptionError(f"filter must contain only numbers, got {weights!r}.")
    return weights


def resolve_options(cls: Type[T], option: Any = None, **overrides: Any) -> T:
    """
    Merge an option mapping (or an existing cls instance) and keyword overrides
    over the defaults of dataclass `cls`.

    Keys set to None fall back to the default. Unknown keys raise OptionError.
    """
    if isinstance(option, cls):
        base = option
        values = {}
    elif option is None or isinstance(option, Mapping):
        base = None
        values = dict(option or {})
    else:
        raise OptionError(f"options must be a mapping or {cls.__name__}, got {type(option).__name__}.")

    values.update(overrides)
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise OptionError(f"unknown option(s) for {cls.__name__}: {', '.join(unknown)}")

    values = {k: v for k, v in values.items() if v is not None}
    if base is not None:
        return replace(base, **values)
    return cls(**values)
