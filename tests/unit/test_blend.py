from typing import List

import pytest

from pixel_forge.errors import InvalidArgumentError
from pixel_forge.renderer.blend import alpha_blend, apply_blend_mode
from pixel_forge.types import BlendMode


@pytest.mark.parametrize(
    "mode, base, blend, expected",
    [
        (BlendMode.NORMAL, 10, 200, 200),
        (BlendMode.MULTIPLY, 255, 128, 128),
        (BlendMode.MULTIPLY, 0, 200, 0),
        (BlendMode.SCREEN, 0, 0, 0),
        (BlendMode.SCREEN, 128, 128, 192),
        (BlendMode.SCREEN, 255, 3, 255),
        (BlendMode.OVERLAY, 100, 200, 157),
        (BlendMode.OVERLAY, 200, 100, 188),
        (BlendMode.ADD, 200, 100, 255),
        (BlendMode.ADD, 20, 30, 50),
    ],
)
def test_blend_modes(mode: BlendMode, base: int, blend: int, expected: int) -> None:
    assert apply_blend_mode(base, blend, mode) == expected


def test_unknown_blend_mode_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        apply_blend_mode(1, 2, "dodge")  # type: ignore[arg-type]


@pytest.mark.parametrize("mode", list(BlendMode))
@pytest.mark.parametrize("opacity", [0, 128, 255])
def test_transparent_source_leaves_destination(mode: BlendMode, opacity: int) -> None:
    dst: List[int] = [12, 34, 56, 78]
    alpha_blend(dst, [255, 255, 255, 0], opacity, mode)
    assert dst == [12, 34, 56, 78]


def test_zero_opacity_leaves_destination() -> None:
    dst = [1, 2, 3, 4]
    alpha_blend(dst, [200, 200, 200, 255], opacity=0)
    assert dst == [1, 2, 3, 4]


def test_opaque_normal_source_replaces_destination() -> None:
    dst = [12, 34, 56, 78]
    alpha_blend(dst, [200, 100, 50, 255])
    assert dst == [200, 100, 50, 255]


def test_half_transparent_over_opaque_black() -> None:
    dst = [0, 0, 0, 255]
    alpha_blend(dst, [255, 255, 255, 128])
    assert dst == [128, 128, 128, 255]


def test_source_over_transparent_destination_keeps_source_color() -> None:
    dst = [0, 0, 0, 0]
    alpha_blend(dst, [90, 60, 30, 100])
    assert dst == [90, 60, 30, 100]


def test_requires_four_channels() -> None:
    with pytest.raises(InvalidArgumentError):
        alpha_blend([0, 0, 0], [0, 0, 0, 255])
