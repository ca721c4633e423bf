"""Character assembly.

Each call to :func:`assemble_character` is an independent, single pass:

1. validate the view direction and the color scheme;
2. create a transparent canvas the size of the base body;
3. build a render list: the base body at (0, 0), then every equipped part
   centered on its slot anchor from a template generated for the body size
   (slots without an anchor are skipped);
4. stable-sort the list by slot z-order;
5. recolor colorable parts with the slot's color category;
6. composite with the binary-alpha policy.

Identical inputs always produce byte-identical output.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from pixel_forge.character.color import ColorScheme, apply_color_scheme
from pixel_forge.character.template import create_body_template
from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.part import BaseBody, CharacterPart
from pixel_forge.config import DEFAULT_CONFIG, EngineConfig
from pixel_forge.renderer.composite import composite_binary_alpha
from pixel_forge.slots import BASE_BODY_Z_ORDER, color_category_for, z_order_for
from pixel_forge.types import Slot, ViewDirection, parse_enum

logger = logging.getLogger(__name__)

BASE_BODY_ID = "base-body"


@dataclass(frozen=True)
class RenderItem:
    """One entry of the paint list.

    ``slot`` is ``None`` for the base body, which is never recolored.
    """

    id: str
    buffer: PixelBuffer
    x: int
    y: int
    z_order: int
    slot: Optional[Slot] = None
    part: Optional[CharacterPart] = None


@dataclass(frozen=True)
class AssembledCharacter:
    """Flattened sprite plus the inputs it was built from."""

    buffer: PixelBuffer
    base_body: BaseBody
    equipped_parts: Mapping[Slot, CharacterPart]
    color_scheme: ColorScheme
    direction: ViewDirection

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height


def build_render_list(
    base_body: BaseBody,
    equipped_parts: Mapping[Slot, CharacterPart],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[RenderItem]:
    """Placed items sorted by z-order; ties keep insertion order."""
    template = create_body_template(
        "assembly", base_body.width, base_body.height, config.template_style
    )
    items = [RenderItem(BASE_BODY_ID, base_body.buffer, 0, 0, BASE_BODY_Z_ORDER)]
    for slot, part in equipped_parts.items():
        anchor = template.find_anchor(slot)
        if anchor is None:
            logger.debug("No anchor for slot %s, skipping part %s", slot, part.id)
            continue
        items.append(
            RenderItem(
                id=part.id,
                buffer=part.buffer,
                x=anchor.x - part.width // 2,
                y=anchor.y - part.height // 2,
                z_order=z_order_for(slot),
                slot=slot,
                part=part,
            )
        )
    # sorted() is stable
    return sorted(items, key=lambda item: item.z_order)


def assemble_character(
    base_body: BaseBody,
    equipped_parts: Mapping[Slot, CharacterPart],
    color_scheme: ColorScheme,
    direction: ViewDirection = ViewDirection.FRONT,
    config: EngineConfig = DEFAULT_CONFIG,
) -> AssembledCharacter:
    """Composite ``base_body`` and ``equipped_parts`` into one sprite.

    Args:
        base_body: Body drawn underneath every part; sets the canvas size.
        equipped_parts: Slot to part. Parts are read, never mutated.
        color_scheme: Tints for colorable parts; must define every category.
        direction: View direction the inputs were drawn for.
        config: Supplies the template style used to place parts.

    Returns:
        AssembledCharacter: The flattened buffer and the inputs used.

    Raises:
        InvalidArgumentError: If ``direction`` is not one of the eight view
            directions or the scheme lacks a color category.
    """
    direction = parse_enum(ViewDirection, direction, "view direction")
    color_scheme.validate()

    canvas = PixelBuffer(base_body.width, base_body.height)
    render_list = build_render_list(base_body, equipped_parts, config)
    logger.debug(
        "Assembling %s view: %s",
        direction,
        ", ".join(f"{item.id}@{item.z_order}({item.x},{item.y})" for item in render_list),
    )

    for item in render_list:
        buffer = item.buffer
        if item.part is not None and item.slot is not None and item.part.colorable:
            buffer = apply_color_scheme(item.part, color_scheme, color_category_for(item.slot)).buffer
        composite_binary_alpha(canvas, buffer, item.x, item.y)

    return AssembledCharacter(
        buffer=canvas,
        base_body=base_body,
        equipped_parts=equipped_parts,
        color_scheme=color_scheme,
        direction=direction,
    )
