"""Blend modes and the straight-alpha "source over" operator.

Every function here exists in a scalar and a vectorized form. The scalar
forms define the arithmetic; the numpy forms repeat the same operations in
the same order on float64 arrays so that both agree byte for byte. Rounding
is half-up (``floor(x + 0.5)``) throughout.
"""

import math
from typing import MutableSequence, Sequence

import numpy as np

from pixel_forge.errors import InvalidArgumentError
from pixel_forge.types import BlendMode, parse_enum
from pixel_forge.utils.image import FloatArray


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def apply_blend_mode(base: int, blend: int, mode: BlendMode) -> int:
    """Combine one channel of the background (``base``) with the layer (``blend``)."""
    mode = parse_enum(BlendMode, mode, "blend mode")
    if mode == BlendMode.MULTIPLY:
        return _round((base * blend) / 255)
    if mode == BlendMode.SCREEN:
        return _round(255 - ((255 - base) * (255 - blend)) / 255)
    if mode == BlendMode.OVERLAY:
        if base < 128:
            return _round((2 * base * blend) / 255)
        return _round(255 - (2 * (255 - base) * (255 - blend)) / 255)
    if mode == BlendMode.ADD:
        return min(base + blend, 255)
    return blend


def blend_channels(base: FloatArray, blend: FloatArray, mode: BlendMode) -> FloatArray:
    """Vectorized :func:`apply_blend_mode` over float64 channel arrays."""
    if mode == BlendMode.MULTIPLY:
        return np.floor((base * blend) / 255 + 0.5)
    if mode == BlendMode.SCREEN:
        return np.floor(255 - ((255 - base) * (255 - blend)) / 255 + 0.5)
    if mode == BlendMode.OVERLAY:
        low = np.floor((2 * base * blend) / 255 + 0.5)
        high = np.floor(255 - (2 * (255 - base) * (255 - blend)) / 255 + 0.5)
        return np.where(base < 128, low, high)
    if mode == BlendMode.ADD:
        return np.minimum(base + blend, 255.0)
    return blend


def alpha_blend(
    dst: MutableSequence[int],
    src: Sequence[int],
    opacity: int = 255,
    mode: BlendMode = BlendMode.NORMAL,
) -> None:
    """Composite one RGBA ``src`` pixel over ``dst`` in place.

    Args:
        dst: Destination pixel (4 channels), mutated.
        src: Source pixel (4 channels).
        opacity: Extra multiplier applied to the source alpha (0-255).
        mode: Blend mode combining source color with destination color.

    A fully transparent effective source leaves ``dst`` untouched; a zero
    output alpha clears ``dst`` to transparent black.
    """
    if len(dst) < 4 or len(src) < 4:
        raise InvalidArgumentError("Pixel buffers must hold at least 4 channels (RGBA)")
    mode = parse_enum(BlendMode, mode, "blend mode")

    src_alpha = (src[3] * (opacity / 255)) / 255
    if src_alpha == 0:
        return

    dst_alpha = dst[3] / 255
    out_alpha = src_alpha + dst_alpha * (1 - src_alpha)
    if out_alpha == 0:
        dst[0] = dst[1] = dst[2] = dst[3] = 0
        return

    for i in range(3):
        blended = apply_blend_mode(dst[i], src[i], mode)
        src_part = blended * src_alpha
        dst_part = dst[i] * dst_alpha * (1 - src_alpha)
        dst[i] = min(255, _round((src_part + dst_part) / out_alpha))
    dst[3] = min(255, _round(out_alpha * 255))
