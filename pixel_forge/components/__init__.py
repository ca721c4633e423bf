"""Value types of the engine.

Re-exports the pixel buffer, colors, layers, anchors and parts. Buffers and
layers are mutable; everything else is a frozen dataclass and changes are
expressed by building new values.
"""

from .anchor import AnchorPoint, BodyTemplate
from .buffer import BYTES_PER_PIXEL, PixelBuffer
from .color import TRANSPARENT, Color, parse_hex, to_hex
from .layer import Layer, LayeredCanvas, create_layered_canvas
from .part import BaseBody, CharacterPart, ColorRegions

__all__ = [
    "AnchorPoint",
    "BYTES_PER_PIXEL",
    "BaseBody",
    "BodyTemplate",
    "CharacterPart",
    "Color",
    "ColorRegions",
    "Layer",
    "LayeredCanvas",
    "PixelBuffer",
    "TRANSPARENT",
    "create_layered_canvas",
    "parse_hex",
    "to_hex",
]
