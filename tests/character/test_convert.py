import json

import pytest

from pixel_forge.character.color import create_color_variant
from pixel_forge.character.convert import (
    character_from_dict,
    character_to_dict,
    load_character,
    save_character,
)
from pixel_forge.character.state import ColorUpdate, set_character_colors
from pixel_forge.components.color import Color
from pixel_forge.errors import ValidationError
from pixel_forge.types import Slot
from tests.test_utils import make_dressed_character


def test_save_load_roundtrip() -> None:
    character = set_character_colors(make_dressed_character(), ColorUpdate(hair=Color(218, 165, 32)))
    restored = load_character(save_character(character))

    assert restored == character
    assert restored.equipped_parts[Slot.HAIR_FRONT].buffer == character.equipped_parts[Slot.HAIR_FRONT].buffer
    assert restored.created == character.created


def test_saved_document_layout() -> None:
    character = make_dressed_character()
    text = save_character(character)
    assert text.startswith('{\n  "id": "hero"')

    data = json.loads(text)
    assert set(data) == {
        "id", "build", "height", "equippedParts", "colorScheme", "created", "lastModified",
    }
    hair = data["equippedParts"]["hair-front"]
    assert hair["id"] == "hair-spiky"
    assert len(hair["buffer"]) == hair["width"] * hair["height"] * 4
    assert all(isinstance(v, int) for v in hair["buffer"])
    assert hair["colorRegions"]["primary"][0] == list(
        character.equipped_parts[Slot.HAIR_FRONT].color_regions.primary[0]
    )
    assert data["colorScheme"]["eyes"] == {"r": 101, "g": 67, "b": 33, "a": 255}
    assert data["created"] == character.created.isoformat()


def test_derived_variants_are_rebuilt_on_load() -> None:
    data = character_to_dict(make_dressed_character())
    data["colorScheme"]["hair"]["shadow"] = {"r": 1, "g": 2, "b": 3, "a": 4}
    restored = character_from_dict(data)
    primary = restored.color_scheme.hair.primary
    assert restored.color_scheme.hair == create_color_variant(primary)


def test_invalid_json() -> None:
    with pytest.raises(ValidationError, match="Invalid JSON format"):
        load_character("{not json")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("colorScheme"),
        lambda d: d.update(created=12),
        lambda d: d.update(build="huge"),
        lambda d: d.update(id="bad id"),
        lambda d: d.update(lastModified="yesterday"),
        lambda d: d["equippedParts"]["hair-front"].update(buffer=[1, 2, 3]),
        lambda d: d["equippedParts"]["hair-front"].update(buffer="abc"),
        lambda d: d["equippedParts"]["hair-front"].update(slot="tail"),
        lambda d: d["equippedParts"]["hair-front"].update(slot="torso"),
        lambda d: d["equippedParts"]["eyes"]["colorRegions"].update(primary=[[1]]),
        lambda d: d["colorScheme"].update(skin={"r": 300, "g": 0, "b": 0}),
        lambda d: d["colorScheme"].pop("eyes"),
        lambda d: d["equippedParts"]["torso"].update(compatibleBodies=5),
        lambda d: d["equippedParts"]["torso"].update(compatibleBodies=None),
        lambda d: d["equippedParts"]["torso"].update(compatibleBodies="all"),
        lambda d: d["equippedParts"]["torso"].update(compatibleBodies=["all", 3]),
        lambda d: d["equippedParts"]["torso"].update(colorable="yes"),
        lambda d: d["equippedParts"]["torso"].update(colorable=1),
    ],
)
def test_malformed_documents_rejected(mutate) -> None:
    data = character_to_dict(make_dressed_character())
    mutate(data)
    with pytest.raises(ValidationError):
        load_character(json.dumps(data))


def test_top_level_must_be_an_object() -> None:
    with pytest.raises(ValidationError, match="Invalid character data structure"):
        load_character("[1, 2, 3]")
