"""Engine configuration.

Static color tables (skin/hair/eye/outfit presets and indexed palettes) live
in an :class:`EngineConfig` value that is passed explicitly to the functions
that need it. ``DEFAULT_CONFIG`` holds the factory tables; tests build their
own instances with :func:`dataclasses.replace` instead of patching globals.
"""

from dataclasses import dataclass, field
from typing import Tuple

from pyrsistent import PMap, pmap

from pixel_forge.components.color import Color
from pixel_forge.errors import NotFoundError
from pixel_forge.types import BodyStyle


@dataclass(frozen=True)
class Palette:
    """Named, ordered list of colors."""

    name: str
    colors: Tuple[Color, ...]


def _colors(table: "dict[str, tuple[int, int, int]]") -> PMap[str, Color]:
    return pmap({name: Color(*rgb) for name, rgb in table.items()})


SKIN_PRESETS = _colors(
    {
        "pale": (255, 220, 177),
        "light": (241, 194, 125),
        "medium": (224, 172, 105),
        "dark": (198, 134, 66),
        "veryDark": (141, 85, 36),
    }
)

HAIR_PRESETS = _colors(
    {
        "black": (59, 48, 36),
        "brown": (101, 67, 33),
        "blonde": (218, 165, 32),
        "red": (165, 42, 42),
        "white": (245, 245, 220),
        "silver": (192, 192, 192),
    }
)

EYE_PRESETS = _colors(
    {
        "brown": (101, 67, 33),
        "blue": (74, 122, 188),
        "green": (34, 139, 34),
        "hazel": (139, 119, 101),
        "gray": (128, 128, 128),
    }
)

OUTFIT_PRESETS = _colors(
    {
        "red": (204, 51, 51),
        "blue": (51, 102, 204),
        "green": (51, 153, 51),
        "purple": (153, 51, 204),
        "orange": (255, 140, 0),
        "black": (64, 64, 64),
        "white": (240, 240, 240),
        "gray": (160, 160, 160),
        "brown": (139, 115, 85),
    }
)

GAMEBOY_PALETTE = Palette(
    "gameboy",
    tuple(Color(*rgb) for rgb in [(15, 56, 15), (48, 98, 48), (139, 172, 15), (155, 188, 15)]),
)

PICO8_PALETTE = Palette(
    "pico8",
    tuple(
        Color(*rgb)
        for rgb in [
            (0, 0, 0),
            (29, 43, 83),
            (126, 37, 83),
            (0, 135, 81),
            (171, 82, 54),
            (95, 87, 79),
            (194, 195, 199),
            (255, 241, 232),
            (255, 0, 77),
            (255, 163, 0),
            (255, 236, 39),
            (0, 228, 54),
            (41, 173, 255),
            (131, 118, 156),
            (255, 119, 168),
            (255, 204, 170),
        ]
    ),
)


@dataclass(frozen=True)
class SchemeDefaults:
    """Preset names the factory color scheme is built from."""

    skin: str = "light"
    hair: str = "brown"
    eyes: str = "brown"
    outfit_primary: str = "blue"
    outfit_secondary: str = "white"


@dataclass(frozen=True)
class EngineConfig:
    """Static tables consumed by the character pipeline.

    Attributes:
        color_presets: Preset group (``skin``, ``hair``, ``eyes``, ``outfit``)
            to preset name to color.
        scheme_defaults: Preset names used by the default color scheme.
        palettes: Indexed palettes by name.
        template_style: Body style of templates generated during assembly.
    """

    color_presets: PMap[str, PMap[str, Color]] = field(
        default_factory=lambda: pmap(
            {
                "skin": SKIN_PRESETS,
                "hair": HAIR_PRESETS,
                "eyes": EYE_PRESETS,
                "outfit": OUTFIT_PRESETS,
            }
        )
    )
    scheme_defaults: SchemeDefaults = field(default_factory=SchemeDefaults)
    palettes: PMap[str, Palette] = field(
        default_factory=lambda: pmap(
            {GAMEBOY_PALETTE.name: GAMEBOY_PALETTE, PICO8_PALETTE.name: PICO8_PALETTE}
        )
    )
    template_style: BodyStyle = BodyStyle.CHIBI

    def preset(self, group: str, name: str) -> Color:
        """Look up a preset color, raising ``NotFoundError`` on a miss."""
        table = self.color_presets.get(group)
        if table is None:
            raise NotFoundError(f"Unknown color preset group: {group}")
        color = table.get(name)
        if color is None:
            valid = ", ".join(sorted(table.keys()))
            raise NotFoundError(f"Unknown {group} preset: {name}. Available: {valid}")
        return color

    def palette(self, name: str) -> Palette:
        palette = self.palettes.get(name)
        if palette is None:
            raise NotFoundError(f"Unknown palette: {name}")
        return palette


DEFAULT_CONFIG = EngineConfig()
