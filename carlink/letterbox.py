"""Letterbox resizing of images to a fixed network input size."""

import numpy as np
from PIL import Image

DEFAULT_PAD_COLOR = (128, 128, 128)


def letterbox_pads(width, height, target_width, target_height):
    """Return (left, right, top, bottom) padding centring a width x height image."""
    pad_width = target_width - width
    pad_height = target_height - height
    if pad_width < 0 or pad_height < 0:
        raise ValueError("image is larger than the target size")
    left = pad_width // 2
    top = pad_height // 2
    return left, pad_width - left, top, pad_height - top


def letterbox(image, scale, target_size, pad_color=DEFAULT_PAD_COLOR):
    """Scale image by scale and pad it to target_size (width, height).

    Returns the padded array and its (left, right, top, bottom) padding.
    """
    array = np.asarray(image)
    if array.ndim not in (2, 3):
        raise ValueError("image must be a 2-D or 3-D array")
    if scale <= 0:
        raise ValueError("scale must be positive")
    height, width = array.shape[:2]
    new_width = round(width * scale)
    new_height = round(height * scale)
    if new_width < 1 or new_height < 1:
        raise ValueError("scale leaves an empty image")
    if (new_width, new_height) == (width, height):
        resized = array
    else:
        resized = np.asarray(
            Image.fromarray(array).resize(
                (new_width, new_height), Image.Resampling.BILINEAR
            )
        )

    target_width, target_height = target_size
    pads = letterbox_pads(new_width, new_height, target_width, target_height)
    left, _, top, _ = pads

    channels = 1 if array.ndim == 2 else array.shape[2]
    color = tuple(pad_color)
    if len(color) < channels:
        raise ValueError("pad color has fewer components than the image")
    padded = np.empty((target_height, target_width) + array.shape[2:], dtype=resized.dtype)
    padded[...] = color[0] if array.ndim == 2 else color[:channels]
    padded[top:top + new_height, left:left + new_width] = resized
    return padded, pads