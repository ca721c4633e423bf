from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.errors import InvalidArgumentError, NotFoundError, OutOfBoundsError
from pixel_forge.types import BlendMode, parse_enum


@dataclass
class Layer:
    """
    One editable layer of a multi-layer sprite.
    - `opacity` multiplies every source alpha while flattening (0-255).
    - invisible layers are skipped entirely by the flattener.
    """

    name: str
    buffer: PixelBuffer
    opacity: int = 255
    visible: bool = True
    blend: BlendMode = BlendMode.NORMAL

    def __post_init__(self) -> None:
        if not 0 <= self.opacity <= 255:
            raise InvalidArgumentError(f"Layer opacity out of range 0-255: {self.opacity}")
        self.blend = parse_enum(BlendMode, self.blend, "blend mode")


@dataclass
class LayeredCanvas:
    """
    Ordered layer stack, bottom (index 0) to front.
    - The canvas exclusively owns its layers: buffers handed to `add_layer` are copied,
      so no two layers ever alias one byte block.
    - Use `renderer.composite.flatten_layers` to produce the composited image.
    """

    width: int
    height: int
    layers: List[Layer] = field(default_factory=list)

    # -------- Layer editing API --------

    def add_layer(
        self,
        name: str,
        buffer: Optional[PixelBuffer] = None,
        opacity: int = 255,
        visible: bool = True,
        blend: BlendMode = BlendMode.NORMAL,
        index: Optional[int] = None,
    ) -> Layer:
        """
        Insert a new layer (on top unless `index` is given) and return it.
        A missing buffer creates a transparent one of the canvas size.
        """
        if buffer is None:
            buffer = PixelBuffer(self.width, self.height)
        elif buffer.size != (self.width, self.height):
            raise InvalidArgumentError(
                f"Layer buffer {buffer.width}x{buffer.height} does not match canvas "
                f"{self.width}x{self.height}"
            )
        else:
            buffer = buffer.copy()
        layer = Layer(name=name, buffer=buffer, opacity=opacity, visible=visible, blend=blend)
        if index is None:
            self.layers.append(layer)
        else:
            self._check_index(index, allow_end=True)
            self.layers.insert(index, layer)
        return layer

    def remove_layer(self, index: int) -> Layer:
        """Remove and return the layer at `index`."""
        self._check_index(index)
        return self.layers.pop(index)

    def move_layer(self, from_index: int, to_index: int) -> None:
        """Move a layer to a new position in the stack."""
        self._check_index(from_index)
        self._check_index(to_index)
        layer = self.layers.pop(from_index)
        self.layers.insert(to_index, layer)

    def find_layer(self, name: str) -> int:
        """Return the index of the first layer called `name`."""
        for i, layer in enumerate(self.layers):
            if layer.name == name:
                return i
        raise NotFoundError(f"No layer named {name!r}")

    # -------- Internal helpers --------

    def _check_index(self, index: int, allow_end: bool = False) -> None:
        upper = len(self.layers) + (1 if allow_end else 0)
        if not 0 <= index < upper:
            raise OutOfBoundsError(
                f"Layer index {index} out of range for {len(self.layers)} layers"
            )


def create_layered_canvas(width: int, height: int) -> LayeredCanvas:
    """Create a canvas with a single transparent, fully opaque "Layer 0"."""
    canvas = LayeredCanvas(width=width, height=height)
    canvas.add_layer("Layer 0")
    return canvas
