# test/test_edge.py
import numpy as np
import pytest

from grafi import edge
from grafi import kernels
from grafi.errors import DepthError, OptionError, UnknownFilterError
from grafi.pixel_buffer import PixelBuffer, construct, from_samples


def _uniform_rgba(width, height, rgba):
    return from_samples(np.tile(rgba, width * height), width, height)

def test_single_pixel_regression():
    out = edge({"data": [255, 255, 255, 255], "width": 1, "height": 1})
    assert isinstance(out, PixelBuffer)
    assert (out.width, out.height, out.depth) == (1, 1, 4)
    assert out.data.tolist() == [255, 255, 255, 255]

def test_uniform_image_has_zero_response():
    img = _uniform_rgba(5, 4, [30, 60, 90, 200])
    out = edge(img).planes()
    # luma(30, 60, 90) = 54.45
    assert np.all(out[1:-1, 1:-1, :3] == 0)
    assert np.all(out[0, :, :3] == 54)
    assert np.all(out[:, -1, :3] == 54)
    assert np.all(out[..., 3] == 200)

def test_uniform_gray_image():
    img = from_samples(np.full(16, 77), 4, 4)
    out = edge(img).data.reshape(4, 4)
    assert np.all(out[1:3, 1:3] == 0)
    assert out[0, 0] == 77

def test_level_scales_divisor():
    img = from_samples([0, 0, 0, 0, 10, 0, 0, 0, 0], 3, 3)
    assert edge(img).data[4] == 9  # 80 / 9
    assert edge(img, level=2).data[4] == 18  # 80 / 4.5
    assert edge(img, {"level": 2}) == edge(img, level=2)

def test_step_edge_is_detected():
    values = np.zeros((5, 6), dtype=int)
    values[:, 3:] = 200
    out = edge(from_samples(values.ravel(), 6, 5), level=4).data.reshape(5, 6)
    # bright side of the step responds, the flat dark side does not
    assert out[2, 3] > 0
    assert out[2, 1] == 0

def test_monochrome_output():
    img = _uniform_rgba(3, 3, [10, 20, 30, 255])
    out = edge(img, monochrome=True)
    assert out.depth == 1
    assert out.data[4] == 0

def test_unknown_type():
    img = from_samples([0] * 9, 3, 3)
    with pytest.raises(UnknownFilterError):
        edge(img, type="nonexistent")
    # the unknown-filter error is also an option error
    with pytest.raises(OptionError):
        edge(img, {"type": "sobel"})

@pytest.mark.parametrize("level", [0, -1, "2"])
def test_invalid_level(level):
    with pytest.raises(OptionError):
        edge(from_samples([0] * 9, 3, 3), level=level)

@pytest.mark.parametrize("depth", [2, 3])
def test_rejects_depth_two_and_three(depth):
    img = construct(np.zeros(9 * depth, dtype=np.uint8), 3, 3)
    with pytest.raises(DepthError):
        edge(img)

def test_registered_kernel_is_used(monkeypatch):
    monkeypatch.setattr(kernels, "KERNELS", dict(kernels.KERNELS))
    kernels.register_kernel("center", [0, 0, 0, 0, 9, 0, 0, 0, 0])
    img = from_samples(np.arange(9) * 3, 3, 3)
    # weight 9 with divisor 9 reproduces the input
    assert edge(img, type="center") == img

def test_accepts_bytes_and_rejects_text_samples():
    out = edge({"data": bytes([255] * 4), "width": 1, "height": 1})
    assert out.data.tolist() == [255, 255, 255, 255]
    with pytest.raises(TypeError):
        edge({"data": ["a"] * 4, "width": 1, "height": 1})

def test_monochrome_must_be_a_bool():
    with pytest.raises(OptionError):
        edge(from_samples([0] * 9, 3, 3), monochrome="false")
