import numpy as np
import pytest

from carlink.letterbox import DEFAULT_PAD_COLOR, letterbox, letterbox_pads


@pytest.mark.parametrize(
    "size, target",
    [((640, 480), (640, 640)), ((101, 33), (200, 100)), ((10, 10), (10, 10))],
)
def test_pads_fill_target(size, target):
    left, right, top, bottom = letterbox_pads(*size, *target)
    assert left + right + size[0] == target[0]
    assert top + bottom + size[1] == target[1]
    assert 0 <= right - left <= 1
    assert 0 <= bottom - top <= 1


def test_pads_reject_oversized_image():
    with pytest.raises(ValueError):
        letterbox_pads(700, 480, 640, 640)


def test_letterbox_color_image():
    image = np.zeros((100, 200, 3), dtype=np.uint8)
    padded, pads = letterbox(image, 0.5, (128, 128))
    assert padded.shape == (128, 128, 3)
    assert pads == letterbox_pads(100, 50, 128, 128)
    left, _, top, _ = pads
    assert tuple(padded[0, 0]) == DEFAULT_PAD_COLOR
    assert tuple(padded[top, left]) == (0, 0, 0)
    assert int((padded == 0).sum()) == 50 * 100 * 3


def test_letterbox_grayscale_custom_color():
    image = np.full((20, 20), 255, dtype=np.uint8)
    padded, pads = letterbox(image, 1.0, (30, 20), pad_color=(7, 7, 7))
    assert padded.shape == (20, 30)
    left, right, top, bottom = pads
    assert (top, bottom) == (0, 0)
    assert np.all(padded[:, :left] == 7)
    assert np.all(padded[:, left:left + 20] == 255)


def test_letterbox_rejects_too_large_result():
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    with pytest.raises(ValueError):
        letterbox(image, 2.0, (15, 15))


def test_letterbox_rejects_bad_scale():
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    with pytest.raises(ValueError):
        letterbox(image, 0, (15, 15))