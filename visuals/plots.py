"""
visuals/plots.py

Plotting utilities for edge results and kernels.

APIs:
- compare_and_save(original, edged, out_path=None, titles=None)
- plot_kernel(kernel, out_path=None, title=None, cmap=None)
- plot_channel_breakdown(buffer, out_dir=None, base_name='channel', ext='png')

Notes:
- This module uses matplotlib. It does not modify core behavior.
- If out_path is None, functions will return the matplotlib Figure object (caller can save or display).
"""

from typing import Optional, Sequence, Tuple, Union
import os
import numpy as np
import matplotlib.pyplot as plt

from grafi.kernels import Kernel, get_kernel
from grafi.pixel_buffer import PixelBuffer, as_pixel_buffer

CHANNEL_NAMES = ("R", "G", "B", "A")


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _save_or_return(fig: plt.Figure, out_path: Optional[str], dpi: int = 100):
    if out_path is not None:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig


def _display_array(buffer: PixelBuffer) -> np.ndarray:
    """(H,W) for depth 1, (H,W,4) for depth 4, first channel otherwise."""
    planes = buffer.planes()
    if buffer.depth == 4:
        return planes
    return planes[..., 0]


def _show(ax, buffer: PixelBuffer, title: str):
    arr = _display_array(buffer)
    if arr.ndim == 2:
        ax.imshow(arr, cmap="gray", vmin=0, vmax=255, interpolation="nearest")
    else:
        ax.imshow(arr, interpolation="nearest")
    ax.set_title(title)
    ax.axis("off")


def compare_and_save(
    original,
    edged,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Original (left) | Edges (right).
    Returns out_path when saving, otherwise the Figure.
    """
    original = as_pixel_buffer(original)
    edged = as_pixel_buffer(edged)
    left, right = titles if titles else ("Original", "Edges")

    fig, axs = plt.subplots(1, 2, figsize=(12, 6))
    _show(axs[0], original, left)
    _show(axs[1], edged, right)
    return _save_or_return(fig, out_path, dpi=200)


def plot_kernel(
    kernel: Union[Kernel, str],
    out_path: Optional[str] = None,
    title: Optional[str] = None,
    cmap: Optional[str] = None,
):
    """
    Heat map of kernel weights with each weight written in its cell.
    `kernel` may be a Kernel or a registered kernel name.
    """
    if isinstance(kernel, str):
        title = title or kernel
        kernel = get_kernel(kernel)
    m = kernel.matrix()
    bound = float(np.max(np.abs(m))) or 1.0

    fig, ax = plt.subplots(figsize=(4, 4))
    ax.imshow(m, cmap=cmap or "coolwarm", vmin=-bound, vmax=bound, interpolation="nearest")
    for (i, j), w in np.ndenumerate(m):
        ax.text(j, i, f"{w:g}", ha="center", va="center")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(title or f"Kernel r={kernel.radius}")
    return _save_or_return(fig, out_path)


def plot_channel_breakdown(
    buffer,
    out_dir: Optional[str] = None,
    base_name: str = "channel",
    ext: str = "png",
) -> Tuple[Optional[str], list]:
    """
    Save each channel of `buffer` to out_dir with deterministic names.
    Returns (last_saved_path_or_None, list_of_paths), or (None, figures) when out_dir is None.
    """
    buffer = as_pixel_buffer(buffer)
    planes = buffer.planes()
    results = []
    if out_dir is not None:
        os.makedirs(out_dir, exist_ok=True)
    for i in range(buffer.depth):
        fig, ax = plt.subplots(figsize=(4, 4))
        ax.imshow(planes[..., i], cmap="gray", vmin=0, vmax=255, origin="upper")
        ax.set_title(CHANNEL_NAMES[i] if buffer.depth > 1 else "gray")
        ax.axis("off")
        if out_dir is None:
            results.append(fig)
            continue
        p = os.path.join(out_dir, f"{base_name}_{i}.{ext}")
        results.append(_save_or_return(fig, p))
    if out_dir is None:
        return None, results
    return results[-1] if results else None, results
