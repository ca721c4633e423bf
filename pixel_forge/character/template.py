"""Body templates: anchor generation, validation and loading.

Anchors are derived from fixed fractions of the template size. The head
centre sits at a quarter of the height, the torso at half and the legs at
three quarters; ears, eyes, arms and feet are placed symmetrically around
those centres.
"""

from typing import Any, Dict, List, Mapping, Optional

from pixel_forge.components.anchor import AnchorPoint, BodyTemplate, make_anchors
from pixel_forge.errors import InvalidArgumentError, ValidationError
from pixel_forge.slots import REQUIRED_SLOTS
from pixel_forge.types import BodyRegion, BodyStyle, Slot, parse_enum


def create_body_template(id: str, width: int, height: int, style: BodyStyle) -> BodyTemplate:
    """Generate the canonical anchors for a ``width`` x ``height`` body.

    Raises:
        InvalidArgumentError: If a dimension is not positive or the style is unknown.
    """
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(
            "Invalid template dimensions: width and height must be positive"
        )
    style = parse_enum(BodyStyle, style, "body style")

    head_x, head_y = width // 2, height // 4
    torso_x, torso_y = width // 2, height // 2
    legs_x, legs_y = width // 2, height * 3 // 4

    anchors = make_anchors(
        {
            BodyRegion.HEAD: [
                AnchorPoint(head_x - 6, head_y - 4, Slot.HAIR_BACK),
                AnchorPoint(head_x - 4, head_y, Slot.EYES),
                AnchorPoint(head_x + 4, head_y, Slot.EYES),
                AnchorPoint(head_x, head_y + 2, Slot.NOSE),
                AnchorPoint(head_x, head_y + 4, Slot.MOUTH),
                AnchorPoint(head_x - 8, head_y, Slot.EARS),
                AnchorPoint(head_x + 8, head_y, Slot.EARS),
                AnchorPoint(head_x - 6, head_y - 2, Slot.HAIR_FRONT),
            ],
            BodyRegion.TORSO: [AnchorPoint(torso_x, torso_y, Slot.TORSO)],
            BodyRegion.LEGS: [AnchorPoint(legs_x, legs_y, Slot.LEGS)],
            BodyRegion.ARMS: [
                AnchorPoint(torso_x - 10, torso_y, Slot.ARMS_LEFT),
                AnchorPoint(torso_x + 10, torso_y, Slot.ARMS_RIGHT),
            ],
            BodyRegion.FEET: [
                AnchorPoint(legs_x - 4, height - 4, Slot.FEET_LEFT),
                AnchorPoint(legs_x + 4, height - 4, Slot.FEET_RIGHT),
            ],
        }
    )
    return BodyTemplate(id=id, width=width, height=height, style=style, anchors=anchors)


def validate_template(template: BodyTemplate) -> None:
    """Check dimensions, anchor bounds and required slots.

    Raises:
        ValidationError: On the first problem found.
    """
    if template.width <= 0 or template.height <= 0:
        raise ValidationError("Invalid template dimensions: width and height must be positive")

    available = set()
    for anchor in template.all_anchors():
        if not (0 <= anchor.x < template.width and 0 <= anchor.y < template.height):
            raise ValidationError(
                f"Anchor point outside canvas bounds: ({anchor.x}, {anchor.y}) "
                f"for {template.width}x{template.height} template"
            )
        available.add(anchor.slot)

    for slot in REQUIRED_SLOTS:
        if slot not in available:
            raise ValidationError(f"Missing required slot: {slot}")


def find_anchor(template: BodyTemplate, slot: Slot) -> Optional[AnchorPoint]:
    """First anchor serving ``slot``, or ``None`` if the template has none."""
    return template.find_anchor(slot)


def template_to_dict(template: BodyTemplate) -> Dict[str, Any]:
    return {
        "id": template.id,
        "width": template.width,
        "height": template.height,
        "style": template.style.value,
        "anchors": {
            region.value: [
                {"x": a.x, "y": a.y, "slot": a.slot.value}
                for a in template.anchors.get(region, ())
            ]
            for region in BodyRegion
        },
    }


def _anchor_from_dict(data: Any) -> AnchorPoint:
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid template data structure: anchor must be an object")
    x, y, slot = data.get("x"), data.get("y"), data.get("slot")
    if not isinstance(x, int) or not isinstance(y, int) or not isinstance(slot, str):
        raise ValidationError(f"Invalid template data structure: bad anchor {dict(data)!r}")
    try:
        return AnchorPoint(x, y, Slot(slot))
    except ValueError:
        raise ValidationError(f"Invalid template data structure: unknown slot {slot}") from None


def load_template(data: Mapping[str, Any]) -> BodyTemplate:
    """Build and validate a template from plain data.

    The top-level shape is checked before any field is trusted: ``id`` and
    ``style`` strings, integer ``width``/``height`` and an ``anchors`` object
    with a list for every body region.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid template data structure")
    anchors = data.get("anchors")
    shape_ok = (
        isinstance(data.get("id"), str)
        and isinstance(data.get("width"), int)
        and isinstance(data.get("height"), int)
        and isinstance(data.get("style"), str)
        and isinstance(anchors, Mapping)
        and all(isinstance(anchors.get(region.value), list) for region in BodyRegion)
    )
    if not shape_ok:
        raise ValidationError("Invalid template data structure")

    try:
        style = BodyStyle(data["style"])
    except ValueError:
        raise ValidationError(f"Invalid template data structure: unknown style {data['style']}") from None

    groups: Dict[BodyRegion, List[AnchorPoint]] = {
        region: [_anchor_from_dict(a) for a in anchors[region.value]] for region in BodyRegion
    }
    template = BodyTemplate(
        id=data["id"],
        width=data["width"],
        height=data["height"],
        style=style,
        anchors=make_anchors(groups),
    )
    validate_template(template)
    return template
