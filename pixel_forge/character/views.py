"""Multi-direction character renders.

Procedural parts (ids ``hair-<style>``, ``eyes-<style>`` and
``torso-<style>``) are redrawn for each view so hair, eyes and clothing turn
with the body. Any other part is reused unchanged in every view.
"""

import logging
from dataclasses import replace
from enum import StrEnum
from typing import Callable, Dict, Iterable, List, Mapping, Tuple, Type

from pixel_forge.character.body import create_base_body
from pixel_forge.character.parts import create_eye_part, create_hair_part, create_torso_part
from pixel_forge.character.state import Character
from pixel_forge.components.part import CharacterPart
from pixel_forge.config import DEFAULT_CONFIG, EngineConfig
from pixel_forge.errors import InvalidArgumentError
from pixel_forge.renderer.assembly import AssembledCharacter, assemble_character
from pixel_forge.renderer.sheet import Frame, PackedSheet, pack_sheet
from pixel_forge.types import (
    ALL_VIEW_DIRECTIONS,
    EyeStyle,
    HairStyle,
    SheetLayout,
    Slot,
    TorsoStyle,
    ViewDirection,
    parse_enum,
)

logger = logging.getLogger(__name__)

PartFactory = Callable[..., CharacterPart]

_PROCEDURAL: Tuple[Tuple[str, Type[StrEnum], PartFactory], ...] = (
    ("hair-", HairStyle, create_hair_part),
    ("eyes-", EyeStyle, create_eye_part),
    ("torso-", TorsoStyle, create_torso_part),
)


def parse_view_directions(views: str) -> List[ViewDirection]:
    """Parse ``"all"`` or a comma separated list of directions.

    Raises:
        InvalidArgumentError: If no direction is given or one is unknown.
    """
    if views.strip().lower() == "all":
        return list(ALL_VIEW_DIRECTIONS)
    names = [name.strip() for name in views.split(",") if name.strip()]
    if not names:
        raise InvalidArgumentError("No valid view directions found")
    return [parse_enum(ViewDirection, name, "view direction") for name in names]


def part_for_direction(part: CharacterPart, direction: ViewDirection) -> CharacterPart:
    """``part`` redrawn for ``direction`` when it is procedural, else a copy."""
    for prefix, styles, factory in _PROCEDURAL:
        if not part.id.startswith(prefix):
            continue
        style = part.id[len(prefix) :]
        if style not in {s.value for s in styles}:
            break
        # keep the slot the part was equipped under (hair may sit in hair-back)
        return replace(factory(style, direction), slot=part.slot)
    return part.copy()


def directional_parts(
    equipped_parts: Mapping[Slot, CharacterPart], direction: ViewDirection
) -> Dict[Slot, CharacterPart]:
    return {slot: part_for_direction(part, direction) for slot, part in equipped_parts.items()}


def render_views(
    character: Character,
    directions: Iterable[ViewDirection] = ALL_VIEW_DIRECTIONS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Dict[ViewDirection, AssembledCharacter]:
    """Assemble ``character`` once per direction, in the order given."""
    views: Dict[ViewDirection, AssembledCharacter] = {}
    for direction in directions:
        direction = parse_enum(ViewDirection, direction, "view direction")
        base_body = create_base_body(character.build, character.height, direction)
        parts = directional_parts(character.equipped_parts, direction)
        views[direction] = assemble_character(
            base_body, parts, character.color_scheme, direction, config
        )
    logger.debug("Rendered %s in %d views", character.id, len(views))
    return views


def render_character_sheet(
    character: Character,
    layout: SheetLayout = SheetLayout.GRID,
    padding: int = 0,
    config: EngineConfig = DEFAULT_CONFIG,
) -> PackedSheet:
    """All eight views packed into one sheet, frames named by direction."""
    views = render_views(character, ALL_VIEW_DIRECTIONS, config)
    frames = [Frame(view.buffer, name=direction.value) for direction, view in views.items()]
    return pack_sheet(frames, layout, padding)
