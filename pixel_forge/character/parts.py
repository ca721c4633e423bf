"""Procedural hair, eye and torso parts.

Every generator paints into a small part-sized buffer through a
:class:`_PartPainter`, which records each pixel's tint role as it is painted.
The recorded roles become the part's :class:`ColorRegions`, so regions always
match the final pixels exactly (a pixel painted twice keeps its last role).

Back diagonals reuse the plain back view. Front diagonals have their own
drawing, shared between the two sides by mirroring offsets.
"""

import math
from typing import Dict, List, Optional, Tuple

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.components.part import CharacterPart, ColorRegions
from pixel_forge.types import (
    Coord,
    EyeStyle,
    HairStyle,
    RegionType,
    Slot,
    TorsoStyle,
    ViewDirection,
    parse_enum,
)
from pixel_forge.utils.draw import circle_points

HAIR = Color(101, 67, 33)
HAIR_SHADOW = Color(80, 52, 25)
HAIR_HIGHLIGHT = Color(130, 95, 60)

EYE_WHITE = Color(250, 250, 250)
EYE_IRIS = Color(74, 122, 188)
EYE_PUPIL = Color(26, 26, 42)
EYE_HIGHLIGHT = Color(140, 170, 220)

SHIRT = Color(204, 51, 51)
SHIRT_SHADOW = Color(170, 40, 40)
ARMOR = Color(160, 160, 160)
ARMOR_SHADOW = Color(120, 120, 120)
ARMOR_HIGHLIGHT = Color(200, 200, 200)
OUTLINE = Color(42, 42, 42)

HAIR_SIZES = {HairStyle.SPIKY: (16, 16), HairStyle.LONG: (16, 20), HairStyle.CURLY: (18, 18)}
EYE_SIZES = {EyeStyle.ROUND: (12, 6), EyeStyle.ANIME: (14, 8), EyeStyle.SMALL: (10, 4)}
TORSO_SIZES = {
    TorsoStyle.BASIC_SHIRT: (16, 20),
    TorsoStyle.ARMOR: (16, 20),
    TorsoStyle.ROBE: (18, 24),
}

COMPATIBLE_BODIES = ("all",)

# back-left/back-right render as the plain back view
_VIEW_FALLBACK = {
    ViewDirection.BACK_LEFT: ViewDirection.BACK,
    ViewDirection.BACK_RIGHT: ViewDirection.BACK,
}


class _PartPainter:
    """Clipped painter that remembers the tint role of every painted pixel."""

    def __init__(self, width: int, height: int) -> None:
        self.buffer = PixelBuffer(width, height)
        self._roles: Dict[Coord, Optional[RegionType]] = {}

    def paint(self, x: int, y: int, color: Color, role: Optional[RegionType]) -> None:
        if not self.buffer.in_bounds(x, y):
            return
        self.buffer.set(x, y, color)
        self._roles[(x, y)] = role

    def rect(
        self, left: int, top: int, right: int, bottom: int, color: Color, role: Optional[RegionType]
    ) -> None:
        """Fill the half-open box ``[left, right) x [top, bottom)``."""
        for y in range(top, bottom):
            for x in range(left, right):
                self.paint(x, y, color, role)

    def regions(self) -> ColorRegions:
        grouped: Dict[Optional[RegionType], List[Coord]] = {}
        for coord, role in self._roles.items():
            grouped.setdefault(role, []).append(coord)
        highlight = grouped.get(RegionType.HIGHLIGHT)
        return ColorRegions(
            primary=tuple(grouped.get(RegionType.PRIMARY, ())),
            shadow=tuple(grouped.get(RegionType.SHADOW, ())),
            highlight=tuple(highlight) if highlight else None,
        )

    def build(self, part_id: str, slot: Slot) -> CharacterPart:
        return CharacterPart(
            id=part_id,
            slot=slot,
            buffer=self.buffer,
            colorable=True,
            color_regions=self.regions(),
            compatible_bodies=COMPATIBLE_BODIES,
        )


def _side(direction: ViewDirection) -> int:
    """-1 for views turned left, +1 for views turned right, 0 otherwise."""
    if direction in (ViewDirection.LEFT, ViewDirection.FRONT_LEFT):
        return -1
    if direction in (ViewDirection.RIGHT, ViewDirection.FRONT_RIGHT):
        return 1
    return 0


def _is_profile(direction: ViewDirection) -> bool:
    return direction in (ViewDirection.LEFT, ViewDirection.RIGHT)


def _resolve_view(direction: ViewDirection) -> ViewDirection:
    direction = parse_enum(ViewDirection, direction, "view direction")
    return _VIEW_FALLBACK.get(direction, direction)


# -------- Hair --------


def _draw_spiky_hair(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    side = _side(direction)
    offset = side * (2 if _is_profile(direction) else 1)
    if direction == ViewDirection.BACK:
        offset = 1
    count = 2 if _is_profile(direction) else 3

    for spike in range(count):
        cx = math.floor(w / 2 + (spike - count / 2 + 0.5) * 4 + offset)
        spike_height = 8 - spike % 2
        for y in range(spike_height):
            half = max(1, spike_height - y) // 2
            for dx in range(-half, half + 1):
                edge = abs(dx) == half and half > 0
                if edge:
                    p.paint(cx + dx, y, HAIR_SHADOW, RegionType.SHADOW)
                else:
                    p.paint(cx + dx, y, HAIR, RegionType.PRIMARY)
        if direction != ViewDirection.BACK:
            p.paint(cx, 1, HAIR_HIGHLIGHT, RegionType.HIGHLIGHT)

    band_bottom = h - 1 if direction == ViewDirection.BACK else 12
    p.rect(2 + offset, 8, w - 2 + offset, band_bottom, HAIR, RegionType.PRIMARY)


def _draw_long_hair(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    side = _side(direction)
    width = math.floor(w * 0.7) if _is_profile(direction) else w - 2
    offset = side * (2 if _is_profile(direction) else 1)
    phase = {
        ViewDirection.LEFT: math.pi / 4,
        ViewDirection.RIGHT: -math.pi / 4,
        ViewDirection.BACK: math.pi,
        ViewDirection.FRONT_LEFT: math.pi / 8,
        ViewDirection.FRONT_RIGHT: -math.pi / 8,
    }.get(direction, 0.0)

    left = max(0, 1 + offset)
    right = min(w, left + width)
    for y in range(h - 4):
        for x in range(left, right):
            edge = x in (left, right - 1)
            if edge:
                p.paint(x, y, HAIR_SHADOW, RegionType.SHADOW)
            else:
                p.paint(x, y, HAIR, RegionType.PRIMARY)

    # wavy fringe along the bottom edge
    for x in range(left, right):
        wave_y = h - 4 + math.floor(2 * math.sin(x * 0.8 + phase))
        p.paint(x, wave_y, HAIR, RegionType.PRIMARY)
    if direction != ViewDirection.BACK:
        p.paint(left + 2, 1, HAIR_HIGHLIGHT, RegionType.HIGHLIGHT)
        p.paint(left + 3, 1, HAIR_HIGHLIGHT, RegionType.HIGHLIGHT)


def _draw_curly_hair(p: _PartPainter, direction: ViewDirection) -> None:
    side = _side(direction)
    count = 2 if _is_profile(direction) else 4
    offset_x = side * (3 if _is_profile(direction) else 1)
    spacing = 6 if direction == ViewDirection.BACK else 8
    radius = 3

    for curl in range(count):
        cx = 2 + (curl % 2) * spacing + (4 if curl < 2 else 0) + offset_x
        cy = 2 + (curl // 2) * 6
        ring = circle_points(cx, cy, radius)
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy > radius * radius:
                    continue
                x, y = cx + dx, cy + dy
                if (x, y) in ring:
                    p.paint(x, y, HAIR_SHADOW, RegionType.SHADOW)
                else:
                    p.paint(x, y, HAIR, RegionType.PRIMARY)
        if direction != ViewDirection.BACK:
            p.paint(cx - 1, cy - 1, HAIR_HIGHLIGHT, RegionType.HIGHLIGHT)


_HAIR_DRAWERS = {
    HairStyle.SPIKY: _draw_spiky_hair,
    HairStyle.LONG: _draw_long_hair,
    HairStyle.CURLY: _draw_curly_hair,
}


def create_hair_part(style: HairStyle, direction: ViewDirection = ViewDirection.FRONT) -> CharacterPart:
    """Hair part ``hair-<style>`` for the ``hair-front`` slot."""
    style = parse_enum(HairStyle, style, "hair style")
    view = _resolve_view(direction)
    painter = _PartPainter(*HAIR_SIZES[style])
    _HAIR_DRAWERS[style](painter, view)
    return painter.build(f"hair-{style.value}", Slot.HAIR_FRONT)


# -------- Eyes --------


def _eye_centres(direction: ViewDirection, w: int, near: int, far: int) -> List[int]:
    """Column of each visible eye; side views show a single eye."""
    if direction == ViewDirection.LEFT:
        return [w // 2 - near]
    if direction == ViewDirection.RIGHT:
        return [w // 2 + near]
    if direction == ViewDirection.FRONT_LEFT:
        return [w // 2 - 2, (w * 3) // 4 + far]
    if direction == ViewDirection.FRONT_RIGHT:
        return [w // 4 - far, w // 2 + 2]
    return [w // 4, (w * 3) // 4]


def _draw_round_eyes(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    cy = h // 2
    for cx in _eye_centres(direction, w, 1, 1):
        for y in range(cy - 2, cy + 3):
            for x in range(cx - 2, cx + 3):
                if (x - cx) ** 2 + (y - cy) ** 2 <= 4:
                    p.paint(x, y, EYE_WHITE, None)
        p.paint(cx, cy, EYE_IRIS, RegionType.PRIMARY)
        p.paint(cx - 1, cy, EYE_IRIS, RegionType.PRIMARY)
        p.paint(cx, cy + 1, EYE_PUPIL, RegionType.SHADOW)
        p.paint(cx - 1, cy - 1, EYE_HIGHLIGHT, RegionType.HIGHLIGHT)


def _draw_anime_eyes(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    cy = h // 2
    for cx in _eye_centres(direction, w, 1, 1):
        p.rect(cx - 2, cy - 2, cx + 3, cy + 3, OUTLINE, None)
        p.rect(cx - 1, cy - 1, cx + 2, cy + 3, EYE_WHITE, None)
        for dx in (-1, 0, 1):
            p.paint(cx + dx, cy, EYE_IRIS, RegionType.PRIMARY)
        p.paint(cx, cy + 1, EYE_PUPIL, RegionType.SHADOW)
        p.paint(cx + 1, cy - 1, EYE_HIGHLIGHT, RegionType.HIGHLIGHT)


def _draw_small_eyes(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    cy = h // 2
    for cx in _eye_centres(direction, w, 2, 1):
        p.paint(cx, cy, EYE_IRIS, RegionType.PRIMARY)
        p.paint(cx, cy - 1, EYE_PUPIL, RegionType.SHADOW)


_EYE_DRAWERS = {
    EyeStyle.ROUND: _draw_round_eyes,
    EyeStyle.ANIME: _draw_anime_eyes,
    EyeStyle.SMALL: _draw_small_eyes,
}


def create_eye_part(style: EyeStyle, direction: ViewDirection = ViewDirection.FRONT) -> CharacterPart:
    """Eye part ``eyes-<style>``; fully transparent when seen from behind."""
    style = parse_enum(EyeStyle, style, "eye style")
    view = _resolve_view(direction)
    painter = _PartPainter(*EYE_SIZES[style])
    if view != ViewDirection.BACK:
        _EYE_DRAWERS[style](painter, view)
    return painter.build(f"eyes-{style.value}", Slot.EYES)


# -------- Torso --------


def _torso_span(
    direction: ViewDirection, w: int, width: int, side_scale: float, diag_scale: float
) -> Tuple[int, int]:
    side = _side(direction)
    if _is_profile(direction):
        width = math.floor(width * side_scale)
    elif side:
        width = math.floor(width * diag_scale)
    left = max(0, (w - width) // 2 + side)
    return left, min(w, left + width)


def _draw_basic_shirt(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    left, right = _torso_span(direction, w, w - 4, 0.7, 1.0)
    # shadow falls on the side facing away from the light
    shade_right = _side(direction) <= 0 and direction != ViewDirection.BACK
    shade_left, shade_right_x = (max(left, right - 4), right) if shade_right else (left, min(right, left + 4))

    for y in range(2, h - 2):
        for x in range(left, right):
            in_shadow = shade_left <= x < shade_right_x
            p.paint(
                x,
                y,
                SHIRT_SHADOW if in_shadow else SHIRT,
                RegionType.SHADOW if in_shadow else RegionType.PRIMARY,
            )
    if direction != ViewDirection.BACK:
        # collar
        p.rect(left + 3, 1, right - 3, 2, OUTLINE, None)


def _draw_armor(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    left, right = _torso_span(direction, w, w - 2, 0.6, 0.8)
    plate = 3 if direction == ViewDirection.BACK else 4

    for y in range(1, h - 1):
        seam = y % plate in (0, 1)
        for x in range(left, right):
            p.paint(
                x,
                y,
                ARMOR_SHADOW if seam else ARMOR,
                RegionType.SHADOW if seam else RegionType.PRIMARY,
            )
    if direction != ViewDirection.BACK:
        p.paint((left + right) // 2, 2, ARMOR_HIGHLIGHT, RegionType.HIGHLIGHT)


def _draw_robe(p: _PartPainter, direction: ViewDirection) -> None:
    w, h = p.buffer.width, p.buffer.height
    left, right = _torso_span(direction, w, w - 2, 0.7, 0.8)
    belt = h // 2 + (1 if direction == ViewDirection.BACK else 0)

    for y in range(1, h - 1):
        on_belt = belt <= y <= belt + 2
        for x in range(left, right):
            p.paint(
                x,
                y,
                SHIRT_SHADOW if on_belt else SHIRT,
                RegionType.SHADOW if on_belt else RegionType.PRIMARY,
            )
    # hem outline
    p.rect(left, h - 2, right, h - 1, OUTLINE, None)


_TORSO_DRAWERS = {
    TorsoStyle.BASIC_SHIRT: _draw_basic_shirt,
    TorsoStyle.ARMOR: _draw_armor,
    TorsoStyle.ROBE: _draw_robe,
}


def create_torso_part(style: TorsoStyle, direction: ViewDirection = ViewDirection.FRONT) -> CharacterPart:
    """Torso part ``torso-<style>`` for the ``torso`` slot."""
    style = parse_enum(TorsoStyle, style, "torso style")
    view = _resolve_view(direction)
    painter = _PartPainter(*TORSO_SIZES[style])
    _TORSO_DRAWERS[style](painter, view)
    return painter.build(f"torso-{style.value}", Slot.TORSO)
