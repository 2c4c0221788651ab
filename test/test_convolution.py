# test/test_convolution.py
import numpy as np
import pytest

from grafi.convolution import border_mask, convolve
from grafi.errors import DepthError, OptionError
from grafi.kernels import get_kernel
from grafi.options import ConvolutionOptions
from grafi.pixel_buffer import construct, from_samples

IDENTITY = [0, 0, 0, 0, 1, 0, 0, 0, 0]
LAPLACIAN = list(get_kernel("laplacian").weights)


def _gray(values):
    arr = np.asarray(values)
    return from_samples(arr.ravel(), arr.shape[1], arr.shape[0])

def _random_rgba(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return from_samples(rng.integers(0, 256, size=width * height * 4), width, height)

def test_identity_kernel_returns_input():
    img = _random_rgba(6, 5)
    out = convolve(img, filter=IDENTITY, radius=1)
    assert out == img
    assert out is not img

def test_kernel_is_applied_without_flipping():
    img = _gray(np.arange(9).reshape(3, 3) * 10)
    # last weight reads the bottom-right neighbour
    out = convolve(img, filter=[0, 0, 0, 0, 0, 0, 0, 0, 1], radius=1)
    assert out.data.reshape(3, 3)[1, 1] == 80

def test_laplacian_sums_are_clamped_and_divided():
    bright = _gray([[0, 0, 0], [0, 200, 0], [0, 0, 0]])
    dark = _gray([[100, 100, 100], [100, 0, 100], [100, 100, 100]])
    assert convolve(bright, filter=LAPLACIAN, radius=1, divisor=9).data[4] == 178  # 1600 / 9
    assert convolve(bright, filter=LAPLACIAN, radius=1).data[4] == 255
    assert convolve(dark, filter=LAPLACIAN, radius=1).data[4] == 0

def test_division_rounds_half_to_even():
    img = _gray([[0, 0, 0], [0, 5, 0], [0, 0, 0]])
    assert convolve(img, filter=IDENTITY, radius=1, divisor=2).data[4] == 2

def test_alpha_and_border_pass_through():
    img = _random_rgba(8, 6, seed=4)
    out = convolve(img, filter=LAPLACIAN, radius=1, divisor=9)
    src, res = img.planes(), out.planes()
    assert np.array_equal(src[..., 3], res[..., 3])
    mask = border_mask(6, 8, 1)
    for ch in range(3):
        assert np.array_equal(src[..., ch][mask], res[..., ch][mask])

def test_border_mask_radius_one_is_a_frame():
    mask = border_mask(4, 5, 1)
    expected = np.ones((4, 5), dtype=bool)
    expected[1:3, 1:4] = False
    assert np.array_equal(mask, expected)

def test_border_mask_trailing_band_is_wider_for_radius_two():
    # trailing rows start at height - 2r + 1
    rows = border_mask(7, 7, 2)[:, 3]
    assert rows.tolist() == [True, True, False, False, True, True, True]
    sym_rows = border_mask(7, 7, 2, symmetric=True)[:, 3]
    assert sym_rows.tolist() == [True, True, False, False, False, True, True]

def test_asymmetric_border_quirk_and_symmetric_option():
    values = np.zeros((7, 7), dtype=int)
    values[6, 6] = 250
    img = _gray(values)
    box = [1] * 25
    quirk = convolve(img, filter=box, radius=2, divisor=25).data.reshape(7, 7)
    symmetric = convolve(img, filter=box, radius=2, divisor=25, symmetric_border=True).data.reshape(7, 7)
    # (4, 4) is interior for the symmetric rule only
    assert quirk[4, 4] == 0
    assert symmetric[4, 4] == 10
    assert quirk[6, 6] == 250 and symmetric[6, 6] == 250

def test_radius_zero_scales_every_colour_sample():
    img = from_samples([10, 100, 200, 7], 1, 1)
    out = convolve(img, filter=[2], radius=0)
    assert out.data.tolist() == [20, 200, 255, 7]

def test_monochrome_collapses_rgba():
    img = _random_rgba(5, 4, seed=9)
    full = convolve(img, filter=LAPLACIAN, radius=1, divisor=9)
    mono = convolve(img, filter=LAPLACIAN, radius=1, divisor=9, monochrome=True)
    assert mono.depth == 1
    assert np.array_equal(mono.data, full.planes()[..., 0].ravel())

def test_monochrome_on_gray_keeps_shape():
    img = _gray(np.arange(16).reshape(4, 4))
    out = convolve(img, filter=IDENTITY, radius=1, monochrome=True)
    assert out == img

def test_single_pixel_is_returned_unchanged():
    img = from_samples([42], 1, 1)
    assert convolve(img, filter=LAPLACIAN, radius=1) == img

def test_accepts_options_instance():
    img = _random_rgba(3, 3)
    opts = ConvolutionOptions(filter=tuple(IDENTITY), radius=1)
    assert convolve(img, opts) == img

def test_required_options():
    img = _random_rgba(3, 3)
    with pytest.raises(OptionError):
        convolve(img, radius=1)
    with pytest.raises(OptionError):
        convolve(img, filter=IDENTITY)
    with pytest.raises(OptionError):
        convolve(img, {"filter": IDENTITY, "radius": None})

def test_invalid_options():
    img = _random_rgba(3, 3)
    with pytest.raises(OptionError):
        convolve(img, filter=IDENTITY, radius=2)
    with pytest.raises(OptionError):
        convolve(img, filter=IDENTITY, radius=1, divisor=0)
    with pytest.raises(OptionError):
        convolve(img, filter=IDENTITY, radius=-1)

@pytest.mark.parametrize("depth", [2, 3])
def test_rejects_depth_two_and_three(depth):
    img = construct(np.zeros(9 * depth, dtype=np.uint8), 3, 3)
    with pytest.raises(DepthError):
        convolve(img, filter=IDENTITY, radius=1)

def test_input_not_mutated():
    img = _random_rgba(4, 4, seed=1)
    before = img.data.copy()
    convolve(img, filter=LAPLACIAN, radius=1)
    assert np.array_equal(img.data, before)
