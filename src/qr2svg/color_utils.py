import dataclasses
import logging
import re

from qr2svg.errors import InvalidColorFormat

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


@dataclasses.dataclass(frozen=True)
class ColorPair:
    """Background and foreground colors of a render, as RGBA8 tuples."""

    background: RGBA = WHITE
    foreground: RGBA = BLACK

    @classmethod
    def from_strings(
        cls, background: str | None = None, foreground: str | None = None
    ) -> "ColorPair":
        """Parse ``#RRGGBB`` strings, defaulting to black on white."""
        return cls(
            background=parse_hex_color(background) if background is not None else WHITE,
            foreground=parse_hex_color(foreground) if foreground is not None else BLACK,
        )


def parse_hex_color(value: str) -> RGBA:
    """Convert a ``#RRGGBB`` string to a fully opaque RGBA tuple."""
    if not isinstance(value, str) or not HEX_COLOR_RE.fullmatch(value):
        raise InvalidColorFormat(f"Color must be in #RRGGBB format: {value!r}")
    return (int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16), 255)


def rgb2str(color: RGBA) -> str:
    """Convert an RGBA tuple to an SVG ``rgb()`` color, dropping alpha."""
    return f"rgb({color[0]},{color[1]},{color[2]})"


def clip_int(value: int | float, min_value: int = 0, max_value: int = 255) -> int:
    """Clip an int value to the specified range."""
    return max(min_value, min(max_value, int(value)))
