"""Slot traits table.

Every :class:`~pixel_forge.types.Slot` maps to its paint order and the color
scheme category used to tint parts equipped there. The table is total; a test
asserts it covers every slot, so adding a slot without traits fails loudly.

Lower ``z_order`` values are painted first (further back).
"""

from dataclasses import dataclass
from typing import Mapping

from pyrsistent import pmap

from pixel_forge.types import ColorCategory, Slot

BASE_BODY_Z_ORDER = 10
DEFAULT_Z_ORDER = 50


@dataclass(frozen=True)
class SlotTraits:
    z_order: int
    color_category: ColorCategory


SLOT_TRAITS: Mapping[Slot, SlotTraits] = pmap(
    {
        Slot.HAIR_BACK: SlotTraits(0, ColorCategory.HAIR),
        Slot.BACK_ACCESSORY: SlotTraits(5, ColorCategory.SKIN),
        Slot.EARS: SlotTraits(15, ColorCategory.SKIN),
        Slot.TORSO: SlotTraits(20, ColorCategory.OUTFIT_PRIMARY),
        Slot.ARMS_LEFT: SlotTraits(25, ColorCategory.OUTFIT_SECONDARY),
        Slot.ARMS_RIGHT: SlotTraits(25, ColorCategory.OUTFIT_SECONDARY),
        Slot.LEGS: SlotTraits(30, ColorCategory.OUTFIT_PRIMARY),
        Slot.FEET_LEFT: SlotTraits(35, ColorCategory.OUTFIT_SECONDARY),
        Slot.FEET_RIGHT: SlotTraits(35, ColorCategory.OUTFIT_SECONDARY),
        Slot.EYES: SlotTraits(40, ColorCategory.EYES),
        Slot.NOSE: SlotTraits(45, ColorCategory.SKIN),
        Slot.MOUTH: SlotTraits(50, ColorCategory.SKIN),
        Slot.HAIR_FRONT: SlotTraits(55, ColorCategory.HAIR),
        Slot.HEAD_ACCESSORY: SlotTraits(60, ColorCategory.SKIN),
        Slot.WEAPON_MAIN: SlotTraits(65, ColorCategory.SKIN),
        Slot.WEAPON_OFF: SlotTraits(65, ColorCategory.SKIN),
    }
)

# Slots every valid body template must anchor.
REQUIRED_SLOTS = (
    Slot.HAIR_BACK,
    Slot.HAIR_FRONT,
    Slot.EYES,
    Slot.NOSE,
    Slot.MOUTH,
    Slot.EARS,
    Slot.TORSO,
    Slot.ARMS_LEFT,
    Slot.ARMS_RIGHT,
    Slot.LEGS,
    Slot.FEET_LEFT,
    Slot.FEET_RIGHT,
)


def z_order_for(slot: object) -> int:
    """Paint order for ``slot``; unknown keys fall back to ``DEFAULT_Z_ORDER``."""
    traits = SLOT_TRAITS.get(slot)  # type: ignore[call-overload]
    return DEFAULT_Z_ORDER if traits is None else traits.z_order


def color_category_for(slot: Slot) -> ColorCategory:
    return SLOT_TRAITS[slot].color_category
