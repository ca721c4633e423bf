"""Sprite sheet packing.

Frames are placed in equally sized cells, each as large as the biggest
frame, with optional padding between cells. Frames are copied verbatim,
alpha included, into the top-left corner of their cell.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.errors import InvalidArgumentError
from pixel_forge.types import SheetLayout, parse_enum
from pixel_forge.utils.image import buffer_to_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    buffer: PixelBuffer
    name: Optional[str] = None

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


@dataclass(frozen=True)
class FrameRect:
    name: str
    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class SheetMetadata:
    frames: Tuple[FrameRect, ...] = ()
    tile_width: int = 0
    tile_height: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frames": [frame.to_dict() for frame in self.frames],
            "tileWidth": self.tile_width,
            "tileHeight": self.tile_height,
        }


@dataclass(frozen=True)
class PackedSheet:
    buffer: PixelBuffer
    metadata: SheetMetadata = field(default_factory=SheetMetadata)

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


def _grid_shape(count: int, layout: SheetLayout) -> Tuple[int, int]:
    """(cols, rows) for ``count`` frames."""
    if layout == SheetLayout.STRIP_HORIZONTAL:
        return count, 1
    if layout == SheetLayout.STRIP_VERTICAL:
        return 1, count
    cols = math.ceil(math.sqrt(count))
    return cols, math.ceil(count / cols)


def pack_sheet(
    frames: Sequence[Frame],
    layout: SheetLayout = SheetLayout.GRID,
    padding: int = 0,
) -> PackedSheet:
    """Pack ``frames`` into one sheet.

    ``grid`` uses ``ceil(sqrt(n))`` columns filled row by row; the strip
    layouts put every frame in a single row or column. Unnamed frames are
    called ``frame_<index>``. An empty frame list yields a 0x0 sheet.

    Raises:
        InvalidArgumentError: If the layout is unknown or ``padding`` is negative.
    """
    layout = parse_enum(SheetLayout, layout, "layout")
    if padding < 0:
        raise InvalidArgumentError(f"Padding must be non-negative, got {padding}")
    if not frames:
        return PackedSheet(PixelBuffer(0, 0))

    tile_w = max(frame.width for frame in frames)
    tile_h = max(frame.height for frame in frames)
    cols, rows = _grid_shape(len(frames), layout)
    sheet = PixelBuffer(
        cols * tile_w + (cols - 1) * padding,
        rows * tile_h + (rows - 1) * padding,
    )

    out = buffer_to_array(sheet)
    rects: List[FrameRect] = []
    for index, frame in enumerate(frames):
        x = (index % cols) * (tile_w + padding)
        y = (index // cols) * (tile_h + padding)
        if frame.width and frame.height:
            out[y : y + frame.height, x : x + frame.width] = buffer_to_array(frame.buffer)
        name = frame.name if frame.name is not None else f"frame_{index}"
        rects.append(FrameRect(name, x, y, frame.width, frame.height))

    logger.debug(
        "Packed %d frames into %dx%d %s sheet", len(frames), sheet.width, sheet.height, layout
    )
    return PackedSheet(sheet, SheetMetadata(tuple(rects), tile_w, tile_h))


def tiled_metadata(
    sheet_meta: SheetMetadata, image: str, image_width: int, image_height: int
) -> Dict[str, Any]:
    """Frame description for the Tiled map editor."""
    return {
        "image": image,
        "imageWidth": image_width,
        "imageHeight": image_height,
        **sheet_meta.to_dict(),
    }
