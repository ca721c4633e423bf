"""Buffer-level compositing.

Two policies live here and are intentionally kept apart:

* :func:`flatten_layers` is the smooth straight-alpha "over" used for
  multi-layer editing, with per-layer opacity and blend mode.
* :func:`composite_binary_alpha` is the hard-edged policy used by character
  assembly: a source pixel with alpha >= 128 is written fully opaque, any
  other source pixel is dropped.
"""

import logging

import numpy as np

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.layer import LayeredCanvas
from pixel_forge.errors import ValidationError
from pixel_forge.renderer.blend import blend_channels
from pixel_forge.types import BlendMode, parse_enum
from pixel_forge.utils.image import BoolArray, FloatArray, buffer_to_array

logger = logging.getLogger(__name__)

BINARY_ALPHA_THRESHOLD = 128


def composite_layer(
    dst: PixelBuffer, src: PixelBuffer, opacity: int = 255, mode: BlendMode = BlendMode.NORMAL
) -> None:
    """Source-over ``src`` onto ``dst`` in place, pixel for pixel.

    Vectorized form of :func:`~pixel_forge.renderer.blend.alpha_blend`.
    """
    if src.size != dst.size:
        raise ValidationError(
            f"Layer size {src.width}x{src.height} does not match canvas {dst.width}x{dst.height}"
        )
    mode = parse_enum(BlendMode, mode, "blend mode")
    if len(dst) == 0:
        return

    out = buffer_to_array(dst)
    s = buffer_to_array(src).astype(np.float64)
    d = out.astype(np.float64)

    src_alpha: FloatArray = (s[..., 3] * (opacity / 255)) / 255
    dst_alpha: FloatArray = d[..., 3] / 255
    out_alpha: FloatArray = src_alpha + dst_alpha * (1 - src_alpha)

    touched: BoolArray = src_alpha != 0
    cleared: BoolArray = touched & (out_alpha == 0)
    safe_out: FloatArray = np.where(out_alpha == 0, 1.0, out_alpha)

    blended = blend_channels(d[..., :3], s[..., :3], mode)
    src_part = blended * src_alpha[..., None]
    dst_part = d[..., :3] * dst_alpha[..., None] * (1 - src_alpha)[..., None]
    rgb = np.floor((src_part + dst_part) / safe_out[..., None] + 0.5)
    alpha = np.floor(out_alpha * 255 + 0.5)

    result = np.concatenate([rgb, alpha[..., None]], axis=-1)
    result = np.clip(result, 0, 255).astype(np.uint8)
    result[cleared] = 0
    out[touched] = result[touched]


def flatten_layers(canvas: LayeredCanvas) -> PixelBuffer:
    """Composite visible layers bottom (index 0) to top onto a transparent buffer."""
    result = PixelBuffer(canvas.width, canvas.height)
    for layer in canvas.layers:
        if not layer.visible:
            continue
        composite_layer(result, layer.buffer, layer.opacity, layer.blend)
    return result


def composite_binary_alpha(dst: PixelBuffer, src: PixelBuffer, x: int, y: int) -> None:
    """Paint ``src`` onto ``dst`` with its top-left corner at ``(x, y)``.

    Only source pixels with alpha >= 128 are painted and they are written with
    alpha 255. Source pixels landing outside ``dst`` are clipped.
    """
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + src.width, dst.width), min(y + src.height, dst.height)
    if x0 >= x1 or y0 >= y1:
        logger.debug("Part at (%d, %d) lies entirely off a %dx%d canvas", x, y, dst.width, dst.height)
        return

    target = buffer_to_array(dst)[y0:y1, x0:x1]
    source = buffer_to_array(src)[y0 - y : y1 - y, x0 - x : x1 - x]
    paint: BoolArray = source[..., 3] >= BINARY_ALPHA_THRESHOLD
    target[paint, :3] = source[paint, :3]
    target[paint, 3] = 255
