import pytest

from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import TRANSPARENT, Color
from pixel_forge.errors import InvalidArgumentError, OutOfBoundsError
from pixel_forge.utils.draw import (
    circle_points,
    draw_circle,
    draw_line,
    draw_rect,
    flood_fill,
    replace_color,
)
from tests.test_utils import opaque_coords

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


def test_line_includes_both_endpoints() -> None:
    buf = PixelBuffer(5, 5)
    draw_line(buf, 0, 0, 4, 4, RED)
    assert opaque_coords(buf) == ((0, 0), (1, 1), (2, 2), (3, 3), (4, 4))


def test_line_drawn_backwards_covers_same_pixels() -> None:
    a, b = PixelBuffer(6, 4), PixelBuffer(6, 4)
    draw_line(a, 0, 1, 5, 1, RED)
    draw_line(b, 5, 1, 0, 1, RED)
    assert a == b
    assert len(opaque_coords(a)) == 6


def test_single_point_line() -> None:
    buf = PixelBuffer(3, 3)
    draw_line(buf, 1, 1, 1, 1, RED)
    assert opaque_coords(buf) == ((1, 1),)


def test_line_out_of_range_raises() -> None:
    buf = PixelBuffer(3, 3)
    with pytest.raises(OutOfBoundsError):
        draw_line(buf, 0, 0, 3, 0, RED)


def test_filled_rect_normalizes_corners() -> None:
    buf = PixelBuffer(6, 6)
    draw_rect(buf, 4, 3, 1, 1, RED, filled=True)
    coords = opaque_coords(buf)
    assert len(coords) == 4 * 3
    assert min(coords) == (1, 1) and max(coords) == (4, 3)


def test_rect_outline_leaves_interior_empty() -> None:
    buf = PixelBuffer(5, 5)
    draw_rect(buf, 0, 0, 4, 4, RED)
    assert buf.get(2, 2) == TRANSPARENT
    assert len(opaque_coords(buf)) == 16


def test_degenerate_rect_outline_is_a_line() -> None:
    buf = PixelBuffer(5, 5)
    draw_rect(buf, 1, 2, 3, 2, RED)
    assert opaque_coords(buf) == ((1, 2), (2, 2), (3, 2))


def test_circle_radius_zero_is_centre_only() -> None:
    assert circle_points(3, 4, 0) == {(3, 4)}
    buf = PixelBuffer(5, 5)
    draw_circle(buf, 2, 2, 0, RED, filled=True)
    assert opaque_coords(buf) == ((2, 2),)


def test_negative_radius_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        circle_points(0, 0, -1)


def test_circle_outline_is_symmetric() -> None:
    points = circle_points(0, 0, 3)
    assert {(3, 0), (-3, 0), (0, 3), (0, -3)} <= points
    assert all((-x, y) in points and (x, -y) in points for x, y in points)


def test_filled_circle_spans_rows() -> None:
    buf = PixelBuffer(7, 7)
    draw_circle(buf, 3, 3, 2, RED, filled=True)
    row = [buf.get(x, 3) == RED for x in range(7)]
    assert row == [False, True, True, True, True, True, False]
    assert buf.get(3, 3) == RED


def test_circle_is_clipped() -> None:
    buf = PixelBuffer(4, 4)
    draw_circle(buf, 0, 0, 3, RED, filled=True)
    draw_circle(buf, 0, 0, 3, BLUE)
    assert buf.get(0, 0) == RED
    assert buf.get(3, 0) == BLUE


def test_flood_fill_stops_at_boundary() -> None:
    buf = PixelBuffer(5, 5)
    draw_line(buf, 2, 0, 2, 4, RED)
    flood_fill(buf, 0, 0, BLUE)
    for y in range(5):
        assert buf.get(0, y) == BLUE and buf.get(1, y) == BLUE
        assert buf.get(2, y) == RED
        assert buf.get(3, y) == TRANSPARENT


def test_flood_fill_is_four_connected() -> None:
    buf = PixelBuffer(3, 3)
    # a diagonal wall still blocks a 4-connected fill
    draw_line(buf, 0, 2, 2, 0, RED)
    flood_fill(buf, 0, 0, BLUE)
    assert buf.get(0, 0) == BLUE and buf.get(1, 0) == BLUE and buf.get(0, 1) == BLUE
    assert buf.get(2, 2) == TRANSPARENT


def test_flood_fill_noops() -> None:
    buf = PixelBuffer(3, 3)
    buf.fill(RED)
    before = buf.copy()
    flood_fill(buf, 1, 1, RED)
    flood_fill(buf, 10, 10, BLUE)
    assert buf == before


def test_replace_color_counts_exact_matches() -> None:
    buf = PixelBuffer(3, 1)
    buf.set(0, 0, RED)
    buf.set(1, 0, Color(255, 0, 0, 254))
    buf.set(2, 0, RED)
    assert replace_color(buf, RED, BLUE) == 2
    assert buf.get(0, 0) == BLUE and buf.get(2, 0) == BLUE
    assert buf.get(1, 0) == Color(255, 0, 0, 254)
