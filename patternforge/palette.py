"""Palettes, canvas geometry and color helpers.

Colors are stored as (R, G, B) integer tuples in 0..255. Input colors may be
any string Pillow's ``ImageColor`` understands (``#RGB``, ``#RRGGBB``,
``rgb(...)``, CSS names), integer triples, or normalized float triples.
"""

import math
import numbers
from dataclasses import dataclass

from PIL import ImageColor

from .errors import InvalidParameter


def parse_color(value):
    """Parse a color into an (r, g, b) tuple of ints in 0..255.

    Raises:
        InvalidParameter: if the value is not a recognizable color.
    """
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError as exc:
            raise InvalidParameter(f"malformed color {value!r}") from exc
        return tuple(rgb[:3])

    try:
        parts = tuple(value)
    except TypeError:
        raise InvalidParameter(f"malformed color {value!r}") from None
    if len(parts) != 3:
        raise InvalidParameter(f"color {value!r} must have 3 components")

    if all(isinstance(p, numbers.Integral) and not isinstance(p, bool)
           for p in parts):
        if not all(0 <= p <= 255 for p in parts):
            raise InvalidParameter(f"color {value!r} out of range 0..255")
        return tuple(int(p) for p in parts)

    try:
        floats = [float(p) for p in parts]
    except (TypeError, ValueError):
        raise InvalidParameter(f"malformed color {value!r}") from None
    if not all(0.0 <= p <= 1.0 for p in floats):
        raise InvalidParameter(
            f"normalized color {value!r} out of range 0..1")
    return tuple(int(round(p * 255)) for p in floats)


def to_hex(rgb):
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def darken(rgb, factor):
    """Scale each channel by ``factor`` (< 1 darkens)."""
    return tuple(int(c * factor) for c in rgb)


def lighten(rgb, factor):
    """Scale each channel by ``factor`` (> 1 lightens), clamped to 255."""
    return tuple(min(255, int(c * factor)) for c in rgb)


def tint(rgb, amount):
    """Move a color toward white by ``amount`` in [0, 1]."""
    return tuple(min(255, int(round(c + (255 - c) * amount))) for c in rgb)


def blend(rgb1, rgb2, ratio):
    return tuple(int(round(a + (b - a) * ratio)) for a, b in zip(rgb1, rgb2))


def with_alpha(rgb, alpha):
    """RGBA tuple from an RGB tuple and an opacity in [0, 1]."""
    a = int(round(max(0.0, min(1.0, alpha)) * 255))
    return (rgb[0], rgb[1], rgb[2], a)


@dataclass(frozen=True)
class Palette:
    """Ordered foreground colors plus a background color."""

    colors: tuple
    background: tuple
    name: str = "custom"

    @classmethod
    def from_spec(cls, colors, background, name="custom"):
        """Build a palette from unparsed colors, validating each one."""
        if isinstance(colors, str):
            colors = [colors]
        parsed = tuple(parse_color(c) for c in colors)
        if not parsed:
            raise InvalidParameter("palette needs at least one color")
        return cls(colors=parsed, background=parse_color(background),
                   name=name)

    def others(self, *exclude):
        """Palette colors minus ``exclude``; the full list if none remain."""
        rest = [c for c in self.colors if c not in exclude]
        return rest if rest else list(self.colors)


@dataclass(frozen=True)
class CanvasSpec:
    """Pixel dimensions and grid density of one generation call."""

    width: int
    height: int
    grid_density: int

    @property
    def cell_size(self):
        return max(self.width, self.height) / self.grid_density

    @property
    def grid_shape(self):
        """(cols, rows) of the tile grid."""
        cell = self.cell_size
        return (math.ceil(self.width / cell), math.ceil(self.height / cell))


PALETTES = {
    "bauhaus": ("Bauhaus Classic",
                ["#E53935", "#FDD835", "#1E88E5", "#212121", "#F5F5DC"],
                "#F5F5DC"),
    "warm-earth": ("Warm Earth",
                   ["#D84315", "#F4A261", "#2A9D8F", "#264653", "#E9C46A"],
                   "#FAF3E0"),
    "cool-ocean": ("Cool Ocean",
                   ["#003F5C", "#58508D", "#BC5090", "#FF6361", "#FFA600"],
                   "#F0F4F8"),
    "forest": ("Forest",
               ["#2D6A4F", "#40916C", "#52B788", "#74C69D", "#1B4332"],
               "#F1FAEE"),
    "sunset": ("Sunset",
               ["#FF6B6B", "#FEC89A", "#FFD93D", "#6BCB77", "#4D96FF"],
               "#FFF8E7"),
    "monochrome": ("Monochrome",
                   ["#1A1A1A", "#4A4A4A", "#7A7A7A", "#AAAAAA", "#DADADA"],
                   "#F5F5F5"),
    "retro-pop": ("Retro Pop",
                  ["#E63946", "#F4A261", "#2A9D8F", "#457B9D", "#1D3557"],
                  "#F1FAEE"),
    "nordic": ("Nordic",
               ["#5E81AC", "#81A1C1", "#88C0D0", "#8FBCBB", "#2E3440"],
               "#ECEFF4"),
}

CANVAS_SIZES = {
    "phone": (1080, 1920),
    "phone-landscape": (1920, 1080),
    "desktop": (1920, 1080),
    "desktop-4k": (3840, 2160),
    "square": (1080, 1080),
    "square-large": (2048, 2048),
    "poster-a4": (2480, 3508),
    "poster-a3": (3508, 4961),
}


def get_palette(name):
    """Return a named preset palette."""
    key = name.strip().lower().replace(" ", "-").replace("_", "-")
    if key not in PALETTES:
        raise InvalidParameter(
            f"unknown palette {name!r}; available: {', '.join(PALETTES)}")
    label, colors, background = PALETTES[key]
    return Palette.from_spec(colors, background, name=label)


def coerce_palette(value):
    """Accept a Palette, a preset name, or a {colors, background} mapping."""
    if isinstance(value, Palette):
        return Palette.from_spec(value.colors, value.background,
                                 name=value.name)
    if isinstance(value, str):
        return get_palette(value)
    if isinstance(value, dict):
        if "colors" not in value or "background" not in value:
            raise InvalidParameter(
                "palette mapping needs 'colors' and 'background'")
        return Palette.from_spec(value["colors"], value["background"],
                                 name=value.get("name", "custom"))
    raise InvalidParameter(f"unsupported palette value {value!r}")
