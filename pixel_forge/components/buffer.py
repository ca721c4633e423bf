"""Flat RGBA pixel buffer.

The buffer owns a ``bytearray`` of ``width * height * 4`` bytes laid out row
major with R, G, B, A channel order. Every accessor is bounds checked: an
out-of-range coordinate is an :class:`OutOfBoundsError`, never a silent clamp,
because callers rely on that error to detect mis-registered anchors.

The rasterizer (:mod:`pixel_forge.utils.draw`) and compositors mutate buffers
in place. Anything that hands a buffer to another owner (registry, parts,
layers) copies it first with :meth:`PixelBuffer.copy`.
"""

from typing import Iterator, Optional, Union

from pixel_forge.components.color import Color
from pixel_forge.errors import InvalidArgumentError, OutOfBoundsError, ValidationError
from pixel_forge.types import Coord

BYTES_PER_PIXEL = 4


class PixelBuffer:
    """Width, height and a flat RGBA byte block.

    A freshly created buffer is fully transparent (all bytes zero).
    """

    __slots__ = ("width", "height", "data")

    width: int
    height: int
    data: bytearray

    def __init__(
        self,
        width: int,
        height: int,
        data: Optional[Union[bytes, bytearray, memoryview]] = None,
    ) -> None:
        if not isinstance(width, int) or not isinstance(height, int):
            raise InvalidArgumentError(
                f"Buffer dimensions must be integers, got {width!r}x{height!r}"
            )
        if width < 0 or height < 0:
            raise InvalidArgumentError(
                f"Buffer dimensions must be non-negative, got {width}x{height}"
            )
        expected = width * height * BYTES_PER_PIXEL
        if data is None:
            self.data = bytearray(expected)
        else:
            if len(data) != expected:
                raise ValidationError(
                    f"Buffer length {len(data)} does not match {width}x{height}x4 = {expected}"
                )
            self.data = bytearray(data)
        self.width = width
        self.height = height

    # -------- Pixel access --------

    def offset(self, x: int, y: int) -> int:
        """Byte offset of pixel ``(x, y)``; raises when outside the buffer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(
                f"Pixel coordinates out of bounds: ({x}, {y}) for buffer {self.width}x{self.height}"
            )
        offset = (y * self.width + x) * BYTES_PER_PIXEL
        if offset + 3 >= len(self.data):
            raise OutOfBoundsError(f"Pixel offset {offset} exceeds buffer length {len(self.data)}")
        return offset

    def get(self, x: int, y: int) -> Color:
        o = self.offset(x, y)
        d = self.data
        return Color(d[o], d[o + 1], d[o + 2], d[o + 3])

    def set(self, x: int, y: int, color: Color) -> None:
        o = self.offset(x, y)
        self.data[o : o + 4] = bytes((color.r, color.g, color.b, color.a))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def alpha_at(self, x: int, y: int) -> int:
        return self.data[self.offset(x, y) + 3]

    # -------- Whole-buffer helpers --------

    def copy(self) -> "PixelBuffer":
        """Return an independent buffer with identical contents."""
        return PixelBuffer(self.width, self.height, self.data)

    def fill(self, color: Color) -> None:
        self.data[:] = bytes(color.as_tuple()) * (self.width * self.height)

    def coords(self) -> Iterator[Coord]:
        """Iterate over every ``(x, y)`` in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    @property
    def size(self) -> Coord:
        return (self.width, self.height)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.data == other.data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
