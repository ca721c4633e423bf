"""JSON persistence for :class:`~pixel_forge.character.state.Character`.

The on-disk document keeps the field names of earlier character files
(``equippedParts``, ``colorScheme``, ``lastModified``, ...). Part buffers are
stored as plain integer lists, colors as ``{"r", "g", "b", "a"}`` objects and
timestamps as ISO-8601 strings.

Loading checks the top-level shape before any field is trusted. Only the
primary color of each scheme entry is read back; shadows and highlights are
always re-derived, so hand-edited files cannot carry inconsistent variants.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pyrsistent import pmap

from pixel_forge.character.color import ColorScheme, ColorVariant, create_color_scheme
from pixel_forge.character.state import Character, validate_character_id
from pixel_forge.components.buffer import PixelBuffer
from pixel_forge.components.color import Color
from pixel_forge.components.part import CharacterPart, ColorRegions, Region
from pixel_forge.errors import InvalidArgumentError, ValidationError
from pixel_forge.types import BuildType, HeightType, Slot

_SCHEME_KEYS = (
    ("skin", "skin"),
    ("hair", "hair"),
    ("eyes", "eyes"),
    ("outfitPrimary", "outfit_primary"),
    ("outfitSecondary", "outfit_secondary"),
)


# -------- Encoding --------


def _color_to_dict(color: Color) -> Dict[str, int]:
    return {"r": color.r, "g": color.g, "b": color.b, "a": color.a}


def _variant_to_dict(variant: ColorVariant) -> Dict[str, Dict[str, int]]:
    return {
        "primary": _color_to_dict(variant.primary),
        "shadow": _color_to_dict(variant.shadow),
        "highlight": _color_to_dict(variant.highlight),
    }


def _scheme_to_dict(scheme: ColorScheme) -> Dict[str, Any]:
    scheme.validate()
    out: Dict[str, Any] = {}
    for key, attr in _SCHEME_KEYS:
        entry = getattr(scheme, attr)
        out[key] = _color_to_dict(entry) if isinstance(entry, Color) else _variant_to_dict(entry)
    return out


def _region_to_list(region: Region) -> List[List[int]]:
    return [[x, y] for x, y in region]


def part_to_dict(part: CharacterPart) -> Dict[str, Any]:
    regions: Dict[str, Any] = {
        "primary": _region_to_list(part.color_regions.primary),
        "shadow": _region_to_list(part.color_regions.shadow),
    }
    if part.color_regions.highlight:
        regions["highlight"] = _region_to_list(part.color_regions.highlight)
    return {
        "id": part.id,
        "slot": part.slot.value,
        "width": part.width,
        "height": part.height,
        "colorable": part.colorable,
        "colorRegions": regions,
        "compatibleBodies": list(part.compatible_bodies),
        "buffer": list(part.buffer.data),
    }


def character_to_dict(character: Character) -> Dict[str, Any]:
    """Plain, JSON-ready representation of ``character``."""
    return {
        "id": character.id,
        "build": character.build.value,
        "height": character.height.value,
        "equippedParts": {
            slot.value: part_to_dict(part)
            for slot, part in sorted(character.equipped_parts.items(), key=lambda kv: kv[0].value)
        },
        "colorScheme": _scheme_to_dict(character.color_scheme),
        "created": character.created.isoformat(),
        "lastModified": character.last_modified.isoformat(),
    }


def save_character(character: Character) -> str:
    """Serialize ``character`` to a JSON string indented by two spaces."""
    return json.dumps(character_to_dict(character), indent=2)


# -------- Decoding --------


def _is_character_data(data: Any) -> bool:
    return (
        isinstance(data, Mapping)
        and isinstance(data.get("id"), str)
        and isinstance(data.get("build"), str)
        and isinstance(data.get("height"), str)
        and isinstance(data.get("equippedParts"), Mapping)
        and isinstance(data.get("colorScheme"), Mapping)
        and isinstance(data.get("created"), str)
        and isinstance(data.get("lastModified"), str)
    )


def _color_from_dict(data: Any, where: str) -> Color:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Invalid character data structure: {where} must be a color object")
    try:
        return Color(data["r"], data["g"], data["b"], data.get("a", 255))
    except (KeyError, InvalidArgumentError) as exc:
        raise ValidationError(f"Invalid character data structure: bad color at {where}") from exc


def _scheme_from_dict(data: Mapping[str, Any]) -> ColorScheme:
    primaries: Dict[str, Color] = {}
    for key, attr in _SCHEME_KEYS:
        entry = data.get(key)
        if key != "eyes" and isinstance(entry, Mapping) and "primary" in entry:
            entry = entry["primary"]
        primaries[attr] = _color_from_dict(entry, f"colorScheme.{key}")
    return create_color_scheme(**primaries)


def _region_from_list(data: Any, where: str) -> Region:
    if not isinstance(data, list):
        raise ValidationError(f"Invalid character data structure: {where} must be a list")
    points: List[Tuple[int, int]] = []
    for point in data:
        if (
            not isinstance(point, list)
            or len(point) != 2
            or not all(isinstance(v, int) for v in point)
        ):
            raise ValidationError(f"Invalid character data structure: bad point in {where}")
        points.append((point[0], point[1]))
    return tuple(points)


def _slot(value: Any, where: str) -> Slot:
    try:
        return Slot(value)
    except ValueError:
        raise ValidationError(f"Invalid character data structure: unknown slot {value!r} in {where}") from None


def part_from_dict(data: Any, where: str = "part") -> CharacterPart:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Invalid character data structure: {where} must be an object")
    width, height, pixels = data.get("width"), data.get("height"), data.get("buffer")
    if (
        not isinstance(data.get("id"), str)
        or not isinstance(width, int)
        or not isinstance(height, int)
        or not isinstance(pixels, list)
    ):
        raise ValidationError(f"Invalid character data structure: malformed {where}")
    try:
        buffer = PixelBuffer(width, height, bytes(pixels))
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid character data structure: bad buffer in {where}") from exc

    regions = data.get("colorRegions") or {}
    if not isinstance(regions, Mapping):
        raise ValidationError(f"Invalid character data structure: bad colorRegions in {where}")
    colorable = data.get("colorable", False)
    bodies = data.get("compatibleBodies", [])
    if not isinstance(colorable, bool):
        raise ValidationError(f"Invalid character data structure: colorable must be a boolean in {where}")
    if not isinstance(bodies, list) or not all(isinstance(body, str) for body in bodies):
        raise ValidationError(
            f"Invalid character data structure: compatibleBodies must be a list of strings in {where}"
        )

    highlight: Optional[Region] = None
    if regions.get("highlight") is not None:
        highlight = _region_from_list(regions["highlight"], f"{where}.colorRegions.highlight")
    return CharacterPart(
        id=data["id"],
        slot=_slot(data.get("slot"), where),
        buffer=buffer,
        colorable=colorable,
        color_regions=ColorRegions(
            primary=_region_from_list(regions.get("primary", []), f"{where}.colorRegions.primary"),
            shadow=_region_from_list(regions.get("shadow", []), f"{where}.colorRegions.shadow"),
            highlight=highlight,
        ),
        compatible_bodies=tuple(bodies),
    )


def character_from_dict(data: Any) -> Character:
    """Rebuild a character from :func:`character_to_dict` output.

    Raises:
        ValidationError: If the data does not have the expected shape or
            holds an unknown build, height or slot.
    """
    if not _is_character_data(data):
        raise ValidationError("Invalid character data structure")
    try:
        validate_character_id(data["id"])
    except InvalidArgumentError as exc:
        raise ValidationError(str(exc)) from exc

    try:
        build = BuildType(data["build"])
        height = HeightType(data["height"])
        created = datetime.fromisoformat(data["created"])
        last_modified = datetime.fromisoformat(data["lastModified"])
    except ValueError as exc:
        raise ValidationError(f"Invalid character data structure: {exc}") from exc

    equipped: Dict[Slot, CharacterPart] = {}
    for key, part_data in data["equippedParts"].items():
        slot = _slot(key, "equippedParts")
        part = part_from_dict(part_data, f"equippedParts.{key}")
        if part.slot != slot:
            raise ValidationError(
                f"Invalid character data structure: part {part.id} declares slot "
                f"{part.slot} but is stored under {slot}"
            )
        equipped[slot] = part

    return Character(
        id=data["id"],
        build=build,
        height=height,
        equipped_parts=pmap(equipped),
        color_scheme=_scheme_from_dict(data["colorScheme"]),
        created=created,
        last_modified=last_modified,
    )


def load_character(json_data: str) -> Character:
    """Parse a JSON document produced by :func:`save_character`."""
    try:
        data = json.loads(json_data)
    except json.JSONDecodeError:
        raise ValidationError("Invalid JSON format") from None
    return character_from_dict(data)
