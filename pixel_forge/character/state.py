"""Immutable character record.

:class:`Character` is a value object: every operation below returns a new
instance with ``last_modified`` refreshed and leaves its input untouched.
Equipped parts live in a persistent map keyed by :class:`Slot`; a part is
always copied before it is stored, so later edits to the caller's part never
reach the character. Each new version also copies the parts it carries
over, so editing one version's buffers never shows through in another.
"""

import re
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from pyrsistent import PMap, pmap

from pixel_forge.character.color import ColorScheme, create_color_scheme, default_color_scheme
from pixel_forge.components.color import Color
from pixel_forge.components.part import CharacterPart
from pixel_forge.config import DEFAULT_CONFIG, EngineConfig
from pixel_forge.errors import InvalidArgumentError, SlotMismatchError
from pixel_forge.types import BuildType, ColorCategory, HeightType, Slot, parse_enum

CHARACTER_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Character:
    """Serializable character definition.

    Attributes:
        id: Identifier made of letters, digits, ``_`` and ``-``.
        build: Body build the base body is drawn with.
        height: Body height type.
        equipped_parts: Slot to equipped part.
        color_scheme: Tints applied during assembly.
        created: Creation time (UTC).
        last_modified: Time of the most recent change (UTC).
    """

    id: str
    build: BuildType
    height: HeightType
    equipped_parts: PMap[Slot, CharacterPart]
    color_scheme: ColorScheme
    created: datetime
    last_modified: datetime

    # PixelBuffer is mutable, so characters are not hashable
    __hash__ = None  # type: ignore[assignment]


def _own_parts(parts: PMap[Slot, CharacterPart]) -> PMap[Slot, CharacterPart]:
    """Copy every part so no two character versions share a buffer."""
    return pmap({slot: part.copy() for slot, part in parts.items()})


def validate_character_id(character_id: str) -> str:
    if not character_id or not character_id.strip():
        raise InvalidArgumentError("Invalid character ID: ID cannot be empty")
    if not CHARACTER_ID_RE.fullmatch(character_id):
        raise InvalidArgumentError(
            f"Invalid character ID: {character_id}. "
            "Use only letters, numbers, hyphens and underscores"
        )
    return character_id


def create_character(
    id: str,
    build: BuildType,
    height: HeightType,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Character:
    """New character with no parts and the default color scheme.

    Raises:
        InvalidArgumentError: If the id, build or height is invalid.
    """
    validate_character_id(id)
    build = parse_enum(BuildType, build, "build type")
    height = parse_enum(HeightType, height, "height type")
    now = _now()
    return Character(
        id=id,
        build=build,
        height=height,
        equipped_parts=pmap(),
        color_scheme=default_color_scheme(config),
        created=now,
        last_modified=now,
    )


def equip_part(character: Character, slot: Slot, part: CharacterPart) -> Character:
    """Equip a copy of ``part`` into ``slot``, replacing any previous part.

    Raises:
        SlotMismatchError: If ``part`` declares a different slot.
    """
    slot = parse_enum(Slot, slot, "slot")
    if part.slot != slot:
        raise SlotMismatchError(
            f'Part slot mismatch: part is for slot "{part.slot}" '
            f'but trying to equip to "{slot}"'
        )
    return replace(
        character,
        equipped_parts=_own_parts(character.equipped_parts).set(slot, part.copy()),
        last_modified=_now(),
    )


def unequip_part(character: Character, slot: Slot) -> Character:
    """Remove the part in ``slot``; an empty slot is not an error."""
    return replace(
        character,
        equipped_parts=_own_parts(character.equipped_parts.discard(slot)),
        last_modified=_now(),
    )


@dataclass(frozen=True)
class ColorUpdate:
    """Partial color change; ``None`` keeps the current primary."""

    skin: Optional[Color] = None
    hair: Optional[Color] = None
    eyes: Optional[Color] = None
    outfit_primary: Optional[Color] = None
    outfit_secondary: Optional[Color] = None


def scheme_primaries(scheme: ColorScheme) -> ColorUpdate:
    """The five primary colors ``scheme`` was built from.

    Raises:
        InvalidArgumentError: If the scheme lacks a category.
    """
    entries = {}
    for category in ColorCategory:
        entry = scheme.variant_for(category)
        entries[category.value.replace("-", "_")] = entry if isinstance(entry, Color) else entry.primary
    return ColorUpdate(**entries)


def set_character_colors(character: Character, update: ColorUpdate) -> Character:
    """Merge ``update`` over the current primaries and rebuild every variant."""
    current = scheme_primaries(character.color_scheme)
    merged = create_color_scheme(
        skin=update.skin or current.skin,
        hair=update.hair or current.hair,
        eyes=update.eyes or current.eyes,
        outfit_primary=update.outfit_primary or current.outfit_primary,
        outfit_secondary=update.outfit_secondary or current.outfit_secondary,
    )
    return replace(
        character,
        equipped_parts=_own_parts(character.equipped_parts),
        color_scheme=merged,
        last_modified=_now(),
    )
