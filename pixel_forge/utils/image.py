"""numpy and Pillow bridges for pixel buffers.

:func:`buffer_to_array` returns a writable ``(height, width, 4)`` uint8 view
onto the buffer's own bytes, so vectorized code can mutate a buffer in place.
The PNG helpers are the codec boundary: decoded data is validated against
``width * height * 4`` before a buffer is built from it.
"""

from pathlib import Path
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image

from pixel_forge.components.buffer import BYTES_PER_PIXEL, PixelBuffer
from pixel_forge.errors import ValidationError

# Type aliases for clarity
FloatArray = npt.NDArray[np.float32 | np.float64]
UInt8Array = npt.NDArray[np.uint8]
BoolArray = npt.NDArray[np.bool_]

PathLike = Union[str, Path]


def buffer_to_array(buffer: PixelBuffer) -> UInt8Array:
    """Writable ``(h, w, 4)`` view sharing memory with ``buffer.data``."""
    return np.frombuffer(buffer.data, dtype=np.uint8).reshape(
        buffer.height, buffer.width, BYTES_PER_PIXEL
    )


def array_to_buffer(arr: npt.ArrayLike) -> PixelBuffer:
    """Copy an ``(h, w, 4)`` array into a new buffer."""
    a: UInt8Array = np.ascontiguousarray(arr, dtype=np.uint8)
    if a.ndim != 3 or a.shape[2] != BYTES_PER_PIXEL:
        raise ValidationError(f"Expected an (h, w, 4) array, got shape {a.shape}")
    height, width = int(a.shape[0]), int(a.shape[1])
    return PixelBuffer(width, height, a.tobytes())


def buffer_from_bytes(width: int, height: int, data: bytes) -> PixelBuffer:
    """Build a buffer from decoded RGBA bytes, validating the length."""
    expected = width * height * BYTES_PER_PIXEL
    if len(data) != expected:
        raise ValidationError(
            f"Decoded buffer length {len(data)} does not match {width}x{height}x4 = {expected}"
        )
    return PixelBuffer(width, height, data)


def to_image(buffer: PixelBuffer) -> Image.Image:
    return Image.frombytes("RGBA", buffer.size, bytes(buffer.data))


def from_image(image: Image.Image) -> PixelBuffer:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return buffer_from_bytes(image.width, image.height, image.tobytes())


def write_png(buffer: PixelBuffer, path: PathLike) -> None:
    """Encode ``buffer`` as an RGBA PNG at ``path``."""
    if buffer.width == 0 or buffer.height == 0:
        raise ValidationError("Cannot encode an empty buffer as PNG")
    to_image(buffer).save(path, format="PNG")


def read_png(path: PathLike) -> PixelBuffer:
    """Decode any Pillow-readable image at ``path`` into an RGBA buffer."""
    with Image.open(path) as image:
        return from_image(image)
