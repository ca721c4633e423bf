"""RGBA color value.

Straight (non-premultiplied) 8-bit channels. Two colors are equal iff all four
channels match exactly. Hex helpers accept ``#RGB``, ``#RRGGBB`` and
``#RRGGBBAA`` (the ``#`` prefix is optional).
"""

import numbers
import re
from dataclasses import dataclass

from pixel_forge.errors import InvalidArgumentError
from pixel_forge.types import RGBA

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True)
class Color:
    """A single RGBA texel value.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
        a: Alpha channel (0-255), 255 is fully opaque.
    """

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise InvalidArgumentError(f"Color channel {name} must be an int, got {value!r}")
            # numpy integers are normalized so colors stay JSON friendly
            object.__setattr__(self, name, int(value))
            if not 0 <= value <= 255:
                raise InvalidArgumentError(f"Color channel {name} out of range 0-255: {value}")

    def as_tuple(self) -> RGBA:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_tuple(cls, values: "tuple[int, ...] | list[int]") -> "Color":
        if len(values) not in (3, 4):
            raise InvalidArgumentError(f"Expected 3 or 4 channels, got {len(values)}")
        return cls(*(int(v) for v in values))


TRANSPARENT = Color(0, 0, 0, 0)


def parse_hex(hex_string: str) -> Color:
    """Parse a hex color string.

    Raises:
        InvalidArgumentError: If the string is empty, contains non-hex
            characters or has a length other than 3, 6 or 8 digits.
    """
    digits = hex_string[1:] if hex_string.startswith("#") else hex_string
    if not digits:
        raise InvalidArgumentError("Invalid hex color: empty string")
    if not _HEX_RE.match(digits):
        raise InvalidArgumentError(
            f'Invalid hex color: contains non-hex characters in "{hex_string}"'
        )

    if len(digits) == 3:
        r, g, b = (int(ch * 2, 16) for ch in digits)
        return Color(r, g, b)
    if len(digits) in (6, 8):
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        return Color(*channels)
    raise InvalidArgumentError(
        f"Invalid hex color length: expected 3, 6, or 8 characters, "
        f'got {len(digits)} in "{hex_string}"'
    )


def to_hex(color: Color) -> str:
    """Format as ``#rrggbb`` when opaque, ``#rrggbbaa`` otherwise."""
    rgb = f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    return rgb if color.a == 255 else f"{rgb}{color.a:02x}"
