"""Common type aliases and enumerations.

String enumerations are used for every closed vocabulary in the engine (blend
modes, view directions, slots, ...). ``StrEnum`` members compare equal to their
plain string values, so callers may pass ``"front"`` wherever a
:class:`ViewDirection` is expected and lookups keyed by the enum still work.
"""

from enum import StrEnum
from typing import Tuple, Type, TypeVar

from pixel_forge.errors import InvalidArgumentError

Coord = Tuple[int, int]
RGBA = Tuple[int, int, int, int]

E = TypeVar("E", bound=StrEnum)


def parse_enum(enum_type: Type[E], value: object, label: str) -> E:
    """Coerce ``value`` into ``enum_type`` or raise ``InvalidArgumentError``."""
    try:
        return enum_type(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_type)
        raise InvalidArgumentError(
            f"Invalid {label}: {value}. Valid {label}s: {valid}"
        ) from None


class BlendMode(StrEnum):
    """Channel combination used when compositing a layer over its background."""

    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    ADD = "add"


class ViewDirection(StrEnum):
    """The eight supported character view directions."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    FRONT_LEFT = "front-left"
    FRONT_RIGHT = "front-right"
    BACK_LEFT = "back-left"
    BACK_RIGHT = "back-right"


ALL_VIEW_DIRECTIONS: Tuple[ViewDirection, ...] = tuple(ViewDirection)


class Slot(StrEnum):
    """Attachment categories shared by parts and template anchors."""

    HAIR_BACK = "hair-back"
    HAIR_FRONT = "hair-front"
    EYES = "eyes"
    NOSE = "nose"
    MOUTH = "mouth"
    EARS = "ears"
    TORSO = "torso"
    ARMS_LEFT = "arms-left"
    ARMS_RIGHT = "arms-right"
    LEGS = "legs"
    FEET_LEFT = "feet-left"
    FEET_RIGHT = "feet-right"
    HEAD_ACCESSORY = "head-accessory"
    BACK_ACCESSORY = "back-accessory"
    WEAPON_MAIN = "weapon-main"
    WEAPON_OFF = "weapon-off"


class ColorCategory(StrEnum):
    """Color scheme entry a part is tinted with."""

    SKIN = "skin"
    HAIR = "hair"
    EYES = "eyes"
    OUTFIT_PRIMARY = "outfit-primary"
    OUTFIT_SECONDARY = "outfit-secondary"


class RegionType(StrEnum):
    """Tint role of a color region inside a part."""

    PRIMARY = "primary"
    SHADOW = "shadow"
    HIGHLIGHT = "highlight"


class BodyRegion(StrEnum):
    """Groups of anchors on a body template."""

    HEAD = "head"
    TORSO = "torso"
    LEGS = "legs"
    ARMS = "arms"
    FEET = "feet"


class BodyStyle(StrEnum):
    CHIBI = "chibi"
    REALISTIC = "realistic"


class BuildType(StrEnum):
    SKINNY = "skinny"
    NORMAL = "normal"
    MUSCULAR = "muscular"


class HeightType(StrEnum):
    SHORT = "short"
    AVERAGE = "average"
    TALL = "tall"


class HairStyle(StrEnum):
    SPIKY = "spiky"
    LONG = "long"
    CURLY = "curly"


class EyeStyle(StrEnum):
    ROUND = "round"
    ANIME = "anime"
    SMALL = "small"


class TorsoStyle(StrEnum):
    BASIC_SHIRT = "basic-shirt"
    ARMOR = "armor"
    ROBE = "robe"


class SheetLayout(StrEnum):
    """Frame arrangement of a packed sprite sheet."""

    GRID = "grid"
    STRIP_HORIZONTAL = "strip-horizontal"
    STRIP_VERTICAL = "strip-vertical"
