from dataclasses import replace
from typing import Dict

import pytest

from pixel_forge.character.color import default_color_scheme
from pixel_forge.character.parts import create_eye_part, create_hair_part, create_torso_part
from pixel_forge.components.color import TRANSPARENT, Color
from pixel_forge.components.part import CharacterPart
from pixel_forge.errors import InvalidArgumentError
from pixel_forge.renderer.assembly import assemble_character, build_render_list
from pixel_forge.types import ALL_VIEW_DIRECTIONS, EyeStyle, HairStyle, Slot, TorsoStyle, ViewDirection
from tests.test_utils import alphas, blank_body, default_body, make_part, solid_buffer


def procedural_parts() -> Dict[Slot, CharacterPart]:
    return {
        Slot.HAIR_FRONT: create_hair_part(HairStyle.SPIKY),
        Slot.EYES: create_eye_part(EyeStyle.ANIME),
        Slot.TORSO: create_torso_part(TorsoStyle.ARMOR),
    }


def test_body_alone_is_reproduced() -> None:
    body = default_body()
    result = assemble_character(body, {}, default_color_scheme())
    assert result.buffer == body.buffer
    assert result.buffer is not body.buffer
    assert (result.width, result.height) == (32, 48)
    assert result.direction is ViewDirection.FRONT


def test_part_is_centered_on_anchor() -> None:
    torso = make_part("box", Slot.TORSO, width=4, height=2, color=Color(9, 8, 7))
    result = assemble_character(blank_body(), {Slot.TORSO: torso}, default_color_scheme())
    # torso anchor is (16, 24) on a 32x48 body
    painted = {(x, y) for x, y in result.buffer.coords() if result.buffer.alpha_at(x, y)}
    assert painted == {(x, y) for x in range(14, 18) for y in range(23, 25)}


def test_binary_alpha_policy() -> None:
    solid = make_part("solid", Slot.TORSO, color=Color(10, 20, 30, 200))
    faint = make_part("faint", Slot.LEGS, color=Color(10, 20, 30, 100))
    result = assemble_character(
        blank_body(), {Slot.TORSO: solid, Slot.LEGS: faint}, default_color_scheme()
    )
    assert result.buffer.get(15, 23) == Color(10, 20, 30, 255)
    # legs anchor is (16, 36)
    assert result.buffer.get(15, 35) == TRANSPARENT
    assert set(alphas(result.buffer)) == {0, 255}


def test_z_order_beats_insertion_order() -> None:
    hair_color, torso_color = Color(200, 0, 0), Color(0, 0, 200)
    # hair-front anchor (10, 10); a 20x28 part covers x 0..19, y -4..23
    hair = make_part("hair", Slot.HAIR_FRONT, width=20, height=28, color=hair_color)
    torso = make_part("torso", Slot.TORSO, color=torso_color)
    result = assemble_character(
        blank_body(), {Slot.HAIR_FRONT: hair, Slot.TORSO: torso}, default_color_scheme()
    )
    assert result.buffer.get(15, 23) == hair_color
    assert result.buffer.get(15, 24) == torso_color


def test_render_list_is_sorted_and_stable() -> None:
    parts = {
        Slot.HAIR_FRONT: make_part("hair", Slot.HAIR_FRONT),
        Slot.ARMS_RIGHT: make_part("arm-r", Slot.ARMS_RIGHT),
        Slot.HAIR_BACK: make_part("hair-b", Slot.HAIR_BACK),
        Slot.ARMS_LEFT: make_part("arm-l", Slot.ARMS_LEFT),
    }
    items = build_render_list(blank_body(), parts)
    assert [item.id for item in items] == ["hair-b", "base-body", "arm-r", "arm-l", "hair"]
    assert [item.z_order for item in items] == [0, 10, 25, 25, 55]


def test_slots_without_anchor_are_skipped() -> None:
    hat = make_part("hat", Slot.HEAD_ACCESSORY, color=Color(1, 1, 1))
    body = default_body()
    result = assemble_character(body, {Slot.HEAD_ACCESSORY: hat}, default_color_scheme())
    assert result.buffer == body.buffer


def test_colorable_parts_take_scheme_category() -> None:
    scheme = default_color_scheme()
    torso = make_part("shirt", Slot.TORSO, color=Color(1, 1, 1), colorable=True)
    arm = make_part("sleeve", Slot.ARMS_LEFT, color=Color(1, 1, 1), colorable=True)
    result = assemble_character(
        blank_body(), {Slot.TORSO: torso, Slot.ARMS_LEFT: arm}, scheme
    )
    assert result.buffer.get(16, 24) == scheme.outfit_primary.primary
    # arms-left anchor is (6, 24)
    assert result.buffer.get(6, 24) == scheme.outfit_secondary.primary
    # inputs are not recolored in place
    assert torso.buffer.get(0, 0) == Color(1, 1, 1)


def test_assembly_is_deterministic() -> None:
    body, scheme = default_body(), default_color_scheme()
    first = assemble_character(body, procedural_parts(), scheme, ViewDirection.FRONT_LEFT)
    second = assemble_character(body, procedural_parts(), scheme, ViewDirection.FRONT_LEFT)
    assert first.buffer == second.buffer
    assert first.buffer != body.buffer


@pytest.mark.parametrize("direction", list(ALL_VIEW_DIRECTIONS))
def test_every_direction_is_accepted(direction: ViewDirection) -> None:
    result = assemble_character(default_body(), procedural_parts(), default_color_scheme(), direction)
    assert result.direction is direction
    assert set(alphas(result.buffer)) <= {0, 255}


def test_invalid_direction_rejected() -> None:
    with pytest.raises(InvalidArgumentError, match="view direction"):
        assemble_character(default_body(), {}, default_color_scheme(), "up")  # type: ignore[arg-type]


def test_incomplete_scheme_rejected() -> None:
    scheme = replace(default_color_scheme(), outfit_secondary=None)
    with pytest.raises(InvalidArgumentError):
        assemble_character(default_body(), {}, scheme)


def test_result_records_inputs() -> None:
    body, scheme, parts = default_body(), default_color_scheme(), procedural_parts()
    result = assemble_character(body, parts, scheme, "back")  # type: ignore[arg-type]
    assert result.base_body is body
    assert result.equipped_parts is parts
    assert result.color_scheme is scheme
    assert result.direction is ViewDirection.BACK


def test_part_overhanging_canvas_is_clipped() -> None:
    big = make_part("cloak", Slot.TORSO, width=40, height=60, color=Color(3, 3, 3))
    result = assemble_character(blank_body(), {Slot.TORSO: big}, default_color_scheme())
    assert result.buffer == solid_buffer(32, 48, Color(3, 3, 3))
