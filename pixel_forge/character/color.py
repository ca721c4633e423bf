"""Color variants, schemes and region recoloring.

A :class:`ColorVariant` is always derived from its primary color: the shadow
tone scales each RGB channel by 0.7 (floored) and the highlight adds 40
(capped at 255). Alpha is carried through unchanged. Both constants are fixed
so a given primary always yields the same palette.

Recoloring never mutates its input; every function returns a fresh
:class:`CharacterPart` copy.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from pixel_forge.components.color import Color
from pixel_forge.components.part import CharacterPart
from pixel_forge.config import DEFAULT_CONFIG, EngineConfig
from pixel_forge.errors import InvalidArgumentError
from pixel_forge.types import ColorCategory, RegionType, parse_enum

SHADOW_FACTOR = 0.7
HIGHLIGHT_AMOUNT = 40


def shadow_color(base: Color) -> Color:
    return Color(
        max(0, math.floor(base.r * SHADOW_FACTOR)),
        max(0, math.floor(base.g * SHADOW_FACTOR)),
        max(0, math.floor(base.b * SHADOW_FACTOR)),
        base.a,
    )


def highlight_color(base: Color) -> Color:
    return Color(
        min(255, base.r + HIGHLIGHT_AMOUNT),
        min(255, base.g + HIGHLIGHT_AMOUNT),
        min(255, base.b + HIGHLIGHT_AMOUNT),
        base.a,
    )


@dataclass(frozen=True)
class ColorVariant:
    """Primary tone plus its derived shadow and highlight.

    Build instances with :func:`create_color_variant`; the derived tones are
    not meant to be set independently.
    """

    primary: Color
    shadow: Color
    highlight: Color


def create_color_variant(primary: Color) -> ColorVariant:
    return ColorVariant(primary, shadow_color(primary), highlight_color(primary))


@dataclass(frozen=True)
class ColorScheme:
    """Per-category tints of a character.

    ``eyes`` is a single color; every other category is a full variant.
    """

    skin: Optional[ColorVariant]
    hair: Optional[ColorVariant]
    eyes: Optional[Color]
    outfit_primary: Optional[ColorVariant]
    outfit_secondary: Optional[ColorVariant]

    def variant_for(self, category: ColorCategory) -> Union[ColorVariant, Color]:
        """Scheme entry for ``category``; raises if the scheme lacks it."""
        category = parse_enum(ColorCategory, category, "color category")
        entry = getattr(self, category.value.replace("-", "_"))
        if entry is None:
            raise InvalidArgumentError(f"Color scheme has no entry for category: {category}")
        return entry

    def validate(self) -> None:
        for category in ColorCategory:
            self.variant_for(category)


def create_color_scheme(
    skin: Color,
    hair: Color,
    eyes: Color,
    outfit_primary: Color,
    outfit_secondary: Color,
) -> ColorScheme:
    return ColorScheme(
        skin=create_color_variant(skin),
        hair=create_color_variant(hair),
        eyes=eyes,
        outfit_primary=create_color_variant(outfit_primary),
        outfit_secondary=create_color_variant(outfit_secondary),
    )


def default_color_scheme(config: EngineConfig = DEFAULT_CONFIG) -> ColorScheme:
    """Factory scheme assembled from the configured preset names."""
    names = config.scheme_defaults
    return create_color_scheme(
        skin=config.preset("skin", names.skin),
        hair=config.preset("hair", names.hair),
        eyes=config.preset("eyes", names.eyes),
        outfit_primary=config.preset("outfit", names.outfit_primary),
        outfit_secondary=config.preset("outfit", names.outfit_secondary),
    )


def apply_color_to_part(
    part: CharacterPart, region_type: RegionType, color: Color
) -> CharacterPart:
    """Return a copy of ``part`` with one region painted ``color``.

    Region coordinates outside the part's buffer are skipped.
    """
    region_type = parse_enum(RegionType, region_type, "region type")
    colored = part.copy()
    buffer = colored.buffer
    for x, y in part.color_regions.region(region_type):
        if buffer.in_bounds(x, y):
            buffer.set(x, y, color)
    return colored


def apply_color_scheme(
    part: CharacterPart, scheme: ColorScheme, category: ColorCategory
) -> CharacterPart:
    """Tint ``part`` with the scheme entry for ``category``.

    Non-colorable parts come back as an unchanged copy. Variants paint the
    primary, shadow and highlight regions in that order, so highlight wins
    where regions overlap. The eyes entry paints the primary region only.
    """
    if not part.colorable:
        return part.copy()

    entry = scheme.variant_for(category)
    if isinstance(entry, Color):
        return apply_color_to_part(part, RegionType.PRIMARY, entry)

    colored = apply_color_to_part(part, RegionType.PRIMARY, entry.primary)
    colored = apply_color_to_part(colored, RegionType.SHADOW, entry.shadow)
    return apply_color_to_part(colored, RegionType.HIGHLIGHT, entry.highlight)
