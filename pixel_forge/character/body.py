"""Procedural chibi base bodies.

Bodies are drawn on a fixed 32x48 canvas. The build scales widths (and the
head radius), the height type scales vertical extents and moves features up
or down. Each view direction changes the silhouette:

* front/back views draw both arms and the full torso; the front shades the
  face, the back draws a hairline row instead;
* side views narrow the torso and legs and show a single arm;
* diagonal views keep the face treatment of their front/back neighbour but
  shift head and torso toward the facing side and narrow the torso.
"""

import math
from dataclasses import dataclass

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.components.part import BaseBody
from pixel_forge.types import BuildType, HeightType, ViewDirection, parse_enum
from pixel_forge.utils.draw import draw_circle, draw_rect

BODY_WIDTH = 32
BODY_HEIGHT = 48
CENTER_X = BODY_WIDTH // 2

SKIN = Color(255, 213, 160)
OUTLINE = Color(80, 60, 40)
SHADOW = Color(230, 190, 140)

BUILD_FACTORS = {
    BuildType.SKINNY: 0.8,
    BuildType.NORMAL: 1.0,
    BuildType.MUSCULAR: 1.2,
}

HEIGHT_FACTORS = {
    HeightType.SHORT: 0.9,
    HeightType.AVERAGE: 1.0,
    HeightType.TALL: 1.1,
}


@dataclass(frozen=True)
class _ViewShape:
    shift: int = 0
    torso_scale: float = 1.0
    show_face: bool = True
    profile: bool = False
    leg_spacing_scale: float = 1.0


VIEW_SHAPES = {
    ViewDirection.FRONT: _ViewShape(),
    ViewDirection.BACK: _ViewShape(show_face=False),
    ViewDirection.LEFT: _ViewShape(shift=-1, torso_scale=0.6, profile=True, leg_spacing_scale=0.34),
    ViewDirection.RIGHT: _ViewShape(shift=1, torso_scale=0.6, profile=True, leg_spacing_scale=0.34),
    ViewDirection.FRONT_LEFT: _ViewShape(shift=-1, torso_scale=0.8),
    ViewDirection.FRONT_RIGHT: _ViewShape(shift=1, torso_scale=0.8),
    ViewDirection.BACK_LEFT: _ViewShape(shift=-1, torso_scale=0.8, show_face=False),
    ViewDirection.BACK_RIGHT: _ViewShape(shift=1, torso_scale=0.8, show_face=False),
}


def create_base_body(
    build: BuildType,
    height: HeightType,
    direction: ViewDirection = ViewDirection.FRONT,
) -> BaseBody:
    """Draw a 32x48 base body for ``build``, ``height`` and ``direction``.

    Raises:
        InvalidArgumentError: If any argument is not a known value.
    """
    build = parse_enum(BuildType, build, "build type")
    height = parse_enum(HeightType, height, "height type")
    direction = parse_enum(ViewDirection, direction, "view direction")

    buffer = PixelBuffer(BODY_WIDTH, BODY_HEIGHT)
    bf = BUILD_FACTORS[build]
    hf = HEIGHT_FACTORS[height]
    shape = VIEW_SHAPES[direction]

    _draw_head(buffer, bf, hf, shape)
    _draw_torso(buffer, bf, hf, shape)
    _draw_legs(buffer, bf, hf, shape)
    _draw_arms(buffer, bf, hf, shape)

    return BaseBody(buffer=buffer, build=build, height_type=height, direction=direction)


def _draw_head(buffer: PixelBuffer, bf: float, hf: float, shape: _ViewShape) -> None:
    cx = CENTER_X + shape.shift
    cy = math.floor(12 / hf)
    radius = math.floor(8 * bf)

    draw_circle(buffer, cx, cy, radius, SKIN, filled=True)
    draw_circle(buffer, cx, cy, radius, OUTLINE)

    shade = math.floor(radius * 0.6)
    if shape.show_face:
        # cheek shadow on the side the head turns toward
        step = -1 if shape.shift < 0 else 1
        row, start = cy + 2, cx + 2 * step
    else:
        # hairline across the back of the head
        row, start, step = cy - radius // 2, cx - shade // 2, 1
    for i in range(shade):
        x = start + i * step
        if buffer.in_bounds(x, row):
            buffer.set(x, row, SHADOW)


def _draw_torso(buffer: PixelBuffer, bf: float, hf: float, shape: _ViewShape) -> None:
    cx = CENTER_X + shape.shift
    cy = math.floor(24 / hf)
    width = max(2, math.floor(10 * bf * shape.torso_scale))
    height = math.floor(12 * hf)

    left, top = cx - width // 2, cy - height // 2
    right, bottom = cx + width // 2, cy + height // 2
    draw_rect(buffer, left, top, right, bottom, SKIN, filled=True)
    draw_rect(buffer, left, top, right, bottom, OUTLINE)


def _draw_legs(buffer: PixelBuffer, bf: float, hf: float, shape: _ViewShape) -> None:
    top = math.floor(36 / hf)
    width = math.floor(4 * bf)
    height = math.floor(8 * hf)
    spacing = max(1, math.floor(3 * bf * shape.leg_spacing_scale))
    cx = CENTER_X + shape.shift
    bottom = min(top + height, BODY_HEIGHT - 1)

    for left, right in ((cx - spacing - width, cx - spacing), (cx + spacing, cx + spacing + width)):
        draw_rect(buffer, left, top, right, bottom, SKIN, filled=True)
        draw_rect(buffer, left, top, right, bottom, OUTLINE)


def _draw_arms(buffer: PixelBuffer, bf: float, hf: float, shape: _ViewShape) -> None:
    cy = math.floor(24 / hf)
    width = math.floor(3 * bf)
    height = math.floor(8 * hf)
    distance = math.floor(8 * bf)
    top, bottom = cy - height // 2, cy + height // 2

    if not shape.profile:
        # the far arm sits closer to the torso in three-quarter views
        left_dist = distance - 2 if shape.shift > 0 else distance
        right_dist = distance - 2 if shape.shift < 0 else distance
        spans = [
            (CENTER_X - left_dist - width, CENTER_X - left_dist),
            (CENTER_X + right_dist, CENTER_X + right_dist + width),
        ]
    else:
        # profile: one arm hanging in front of the torso
        cx = CENTER_X + shape.shift
        spans = [(cx - width // 2, cx - width // 2 + width)]

    for left, right in spans:
        draw_rect(buffer, left, top, right, bottom, SKIN, filled=True)
        draw_rect(buffer, left, top, right, bottom, OUTLINE)
