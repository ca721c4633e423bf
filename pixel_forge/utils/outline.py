"""One pixel sprite outline."""

import numpy as np

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.utils.image import BoolArray, buffer_to_array


def outline_mask(buffer: PixelBuffer) -> BoolArray:
    """Transparent pixels with at least one opaque 4-neighbor."""
    alpha = buffer_to_array(buffer)[..., 3]
    opaque: BoolArray = alpha > 0

    neighbor: BoolArray = np.zeros_like(opaque)
    neighbor[1:, :] |= opaque[:-1, :]
    neighbor[:-1, :] |= opaque[1:, :]
    neighbor[:, 1:] |= opaque[:, :-1]
    neighbor[:, :-1] |= opaque[:, 1:]
    return neighbor & (alpha == 0)


def add_outline(buffer: PixelBuffer, color: Color) -> PixelBuffer:
    """Return a copy with every transparent 4-neighbor of the sprite painted.

    The input buffer is left untouched; opaque pixels are never modified.
    """
    result = buffer.copy()
    if buffer.width == 0 or buffer.height == 0:
        return result
    arr = buffer_to_array(result)
    arr[outline_mask(buffer)] = color.as_tuple()
    return result
