"""Palette extraction and nearest-color remapping."""

from typing import List, Sequence

import numpy as np

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.config import Palette
from pixel_forge.utils.image import buffer_to_array


def create_palette(name: str, colors: Sequence[Color]) -> Palette:
    return Palette(name=name, colors=tuple(colors))


def extract_palette(buffer: PixelBuffer) -> List[Color]:
    """Unique RGBA colors of ``buffer`` in first-seen (row-major) order."""
    if len(buffer) == 0:
        return []
    flat = buffer_to_array(buffer).reshape(-1, 4)
    unique, first_index = np.unique(flat, axis=0, return_index=True)
    order = np.argsort(first_index, kind="stable")
    return [Color(*(int(c) for c in unique[i])) for i in order]


def remap_to_palette(buffer: PixelBuffer, colors: Sequence[Color]) -> PixelBuffer:
    """Return a copy with every pixel snapped to its nearest palette color.

    Distance is Euclidean in RGB; the first palette entry wins ties. Alpha is
    kept from the source pixel. An empty palette returns an unchanged copy.
    """
    result = buffer.copy()
    if not colors or len(buffer) == 0:
        return result

    arr = buffer_to_array(result)
    rgb = arr[..., :3].astype(np.int32)
    pal = np.array([c.as_tuple()[:3] for c in colors], dtype=np.int32)

    # squared distance has the same argmin; argmin returns the first minimum
    diff = rgb[:, :, None, :] - pal[None, None, :, :]
    dist = np.sum(diff * diff, axis=-1)
    nearest = np.argmin(dist, axis=-1)
    arr[..., :3] = pal[nearest].astype(np.uint8)
    return result
