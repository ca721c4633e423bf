"""Primitive rasterizer.

Integer drawing primitives operating in place on a :class:`PixelBuffer`.
Lines and rectangles plot through :meth:`PixelBuffer.set`, so an out-of-range
coordinate raises :class:`~pixel_forge.errors.OutOfBoundsError`. Circles clip
their candidate points to the buffer instead.
"""

from typing import List, Set

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.errors import InvalidArgumentError
from pixel_forge.types import Coord


def draw_line(buffer: PixelBuffer, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
    """Bresenham line from ``(x0, y0)`` to ``(x1, y1)``, both endpoints inclusive."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        buffer.set(x, y, color)
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_rect(
    buffer: PixelBuffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    filled: bool = False,
) -> None:
    """Axis-aligned rectangle with inclusive corners in any order.

    A rectangle collapsed to a single row or column is drawn as one line.
    """
    left, right = min(x1, x2), max(x1, x2)
    top, bottom = min(y1, y2), max(y1, y2)

    if filled:
        for y in range(top, bottom + 1):
            for x in range(left, right + 1):
                buffer.set(x, y, color)
        return

    if left == right or top == bottom:
        draw_line(buffer, left, top, right, bottom, color)
        return

    draw_line(buffer, left, top, right, top, color)
    draw_line(buffer, left, bottom, right, bottom, color)
    draw_line(buffer, left, top, left, bottom, color)
    draw_line(buffer, right, top, right, bottom, color)


def circle_points(cx: int, cy: int, radius: int) -> Set[Coord]:
    """Boundary points of a midpoint circle, de-duplicated.

    The eight-way symmetric walk revisits pixels on the diagonals and axes,
    hence the set.
    """
    if radius < 0:
        raise InvalidArgumentError(f"Circle radius must be non-negative, got {radius}")
    if radius == 0:
        return {(cx, cy)}

    points: Set[Coord] = set()
    x, y = 0, radius
    d = 1 - radius
    while x <= y:
        for px, py in ((x, y), (y, x), (-x, y), (-y, x), (x, -y), (y, -x), (-x, -y), (-y, -x)):
            points.add((cx + px, cy + py))
        if d < 0:
            d += 2 * x + 3
        else:
            d += 2 * (x - y) + 5
            y -= 1
        x += 1
    return points


def draw_circle(
    buffer: PixelBuffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    filled: bool = False,
) -> None:
    """Midpoint circle, clipped to the buffer.

    The filled variant spans ``min..max`` x of the boundary points on every
    row, so small radii fill without gaps.
    """
    points = circle_points(cx, cy, radius)

    if not filled:
        for x, y in points:
            if buffer.in_bounds(x, y):
                buffer.set(x, y, color)
        return

    rows: dict[int, List[int]] = {}
    for x, y in points:
        span = rows.get(y)
        if span is None:
            rows[y] = [x, x]
        else:
            span[0] = min(span[0], x)
            span[1] = max(span[1], x)

    for y, (min_x, max_x) in rows.items():
        if not 0 <= y < buffer.height:
            continue
        for x in range(max(0, min_x), min(buffer.width - 1, max_x) + 1):
            buffer.set(x, y, color)


def flood_fill(buffer: PixelBuffer, x: int, y: int, color: Color) -> None:
    """4-connected fill of the region sharing the seed pixel's color.

    Uses an explicit stack. Filling a region that already has ``color``, or
    seeding outside the buffer, does nothing.
    """
    if not buffer.in_bounds(x, y):
        return
    target = buffer.get(x, y)
    if target == color:
        return

    stack: List[Coord] = [(x, y)]
    while stack:
        px, py = stack.pop()
        if not buffer.in_bounds(px, py) or buffer.get(px, py) != target:
            continue
        buffer.set(px, py, color)
        stack.append((px + 1, py))
        stack.append((px - 1, py))
        stack.append((px, py + 1))
        stack.append((px, py - 1))


def replace_color(buffer: PixelBuffer, old: Color, new: Color) -> int:
    """Replace every pixel exactly equal to ``old``; returns the count replaced."""
    old_bytes = bytes(old.as_tuple())
    new_bytes = bytes(new.as_tuple())
    data = buffer.data
    count = 0
    for offset in range(0, len(data), 4):
        if data[offset : offset + 4] == old_bytes:
            data[offset : offset + 4] = new_bytes
            count += 1
    return count
