# visuals/__init__.py
"""
Visual helpers for grafi.
Provides plotting and export utilities used by the batch script.
"""
from .plots import (
    compare_and_save,
    plot_kernel,
    plot_channel_breakdown,
)
__all__ = [
    "compare_and_save",
    "plot_kernel",
    "plot_channel_breakdown",
]
