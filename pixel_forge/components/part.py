"""Sprite parts and base bodies.

A :class:`CharacterPart` carries its own pixel buffer. Parts are passed around
by value: :meth:`CharacterPart.copy` yields a part whose buffer shares no bytes
with the source part, and every registry, equip and recolor operation goes
through it. Coordinates in :class:`ColorRegions` are part-local.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.types import BuildType, Coord, HeightType, RegionType, Slot, ViewDirection

Region = Tuple[Coord, ...]


@dataclass(frozen=True)
class ColorRegions:
    """Pixels of a part grouped by tint role.

    ``highlight`` is optional; parts without highlights store ``None``.
    """

    primary: Region = ()
    shadow: Region = ()
    highlight: Optional[Region] = None

    def region(self, region_type: RegionType) -> Region:
        if region_type == RegionType.PRIMARY:
            return self.primary
        if region_type == RegionType.SHADOW:
            return self.shadow
        return self.highlight or ()


@dataclass(frozen=True)
class CharacterPart:
    """Reusable, optionally colorable sprite part.

    Attributes:
        id: Unique part identifier (e.g. ``"hair-spiky"``).
        slot: Slot the part declares; equip rejects any other slot.
        buffer: Owned pixel data. Never shared between two parts.
        colorable: Whether color schemes re-tint the part.
        color_regions: Pixel coordinates per tint role.
        compatible_bodies: Template ids the part was drawn for.
    """

    id: str
    slot: Slot
    buffer: PixelBuffer
    colorable: bool = False
    color_regions: ColorRegions = field(default_factory=ColorRegions)
    compatible_bodies: Tuple[str, ...] = ()

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def copy(self) -> "CharacterPart":
        # regions and bodies are tuples, only the buffer needs copying
        return replace(self, buffer=self.buffer.copy())


@dataclass(frozen=True)
class BaseBody:
    """Procedurally drawn body the parts are layered onto."""

    buffer: PixelBuffer
    build: BuildType = BuildType.NORMAL
    height_type: HeightType = HeightType.AVERAGE
    direction: ViewDirection = ViewDirection.FRONT

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height
