"""Curated and generated ink palettes for the channel colors."""

import colorsys
import random
from dataclasses import dataclass

from models import CHANNEL_NAMES, ColorMode

from .colors import rgb_to_hex


@dataclass(frozen=True)
class CmykPalette:
    """Four harmonious ink colors standing in for cyan, magenta, yellow, black."""

    name: str
    c: str
    m: str
    y: str
    k: str

    def as_list(self) -> "list[str]":
        return [self.c, self.m, self.y, self.k]


CMYK_PALETTES = (
    CmykPalette("Retro Print", "#3d9a9c", "#d75a8b", "#e5c36a", "#3a3a3a"),
    CmykPalette("Vibrant Pop", "#00f2ff", "#ff00aa", "#fff800", "#1a1a1a"),
    CmykPalette("Faded Beach", "#88ccee", "#f5a9b8", "#fef4a7", "#6c5c53"),
    CmykPalette("Forest Tones", "#1a936f", "#a44a3f", "#f3ca40", "#272d2d"),
    CmykPalette("Blueprint", "#005f73", "#0a9396", "#94d2bd", "#001219"),
    CmykPalette("Autumn", "#e85d04", "#d00000", "#ffba08", "#370617"),
    CmykPalette("Sunset", "#f79d65", "#f4845f", "#f27059", "#f25c54"),
    CmykPalette("Ocean Depths", "#1b5299", "#6290c3", "#8ea2c6", "#21295c"),
    CmykPalette("Technoir", "#ff42b8", "#230a59", "#7302a6", "#02020a"),
    CmykPalette("Vintage Comics", "#4a90e2", "#d0021b", "#f8e71c", "#000000"),
    CmykPalette("Sorbet", "#ffc8dd", "#ffafcc", "#bde0fe", "#a2d2ff"),
    CmykPalette("Industrial", "#585858", "#b8b8b8", "#d8d8d8", "#282828"),
    CmykPalette("Riso", "#ff4c65", "#4c95ff", "#fff24c", "#2d2d2d"),
    CmykPalette("Earth & Sky", "#a8dadc", "#457b9d", "#1d3557", "#e63946"),
    CmykPalette("Cyberpunk", "#00f0ff", "#f000ff", "#ffff00", "#101010"),
    CmykPalette("Pastel Dream", "#a0c4ff", "#bdb2ff", "#ffc6ff", "#fffffc"),
    CmykPalette("Hot Metal", "#db222a", "#ff8c00", "#ffee32", "#232528"),
    CmykPalette("Midnight", "#03045e", "#0077b6", "#00b4d8", "#023047"),
    CmykPalette("Candy", "#ff8fab", "#ffb3c6", "#cde495", "#a1e4b5"),
    CmykPalette("Muted Rainbow", "#e07a5f", "#3d405b", "#81b29a", "#f2cc8f"),
)


def palette_names() -> "list[str]":
    return [palette.name for palette in CMYK_PALETTES]


def get_cmyk_palette(name: "str | None" = None, rng: "random.Random | None" = None) -> CmykPalette:
    """Look up a curated palette by name (case-insensitive) or pick one at random.

    Raises:
        KeyError: If ``name`` matches no palette
    """
    if name is None:
        return (rng or random).choice(CMYK_PALETTES)
    key = name.strip().lower()
    for palette in CMYK_PALETTES:
        if palette.name.lower() == key:
            return palette
    raise KeyError(f"Unknown palette '{name}'. Available: {', '.join(palette_names())}")


def _hsl_to_hex(h: float, s: float, l: float) -> str:
    r, g, b = colorsys.hls_to_rgb(h % 1.0, l, s)
    return rgb_to_hex(r * 255, g * 255, b * 255)


def generate_palette(num_colors: int, rng: "random.Random | None" = None) -> "list[str]":
    """Generate a harmonious palette around a random base hue.

    1 color: dark tint. 2: complementary. 3: triadic. 4 (or more): tetradic.

    Args:
        num_colors: Number of channels (1-4)
        rng: Random source (module-level random by default)

    Returns:
        List of hex colors
    """
    rng = rng or random.Random()
    base_hue = rng.random()
    saturation = 0.6 + rng.random() * 0.4
    lightness = 0.5 + rng.random() * 0.2

    if num_colors == 1:
        return [_hsl_to_hex(base_hue, 0.1, 0.2)]
    if num_colors == 2:
        return [
            _hsl_to_hex(base_hue, saturation, lightness - 0.1),
            _hsl_to_hex(base_hue + 0.5, saturation, lightness + 0.1),
        ]
    if num_colors == 3:
        return [_hsl_to_hex(base_hue + i / 3, saturation, lightness) for i in range(3)]
    return [_hsl_to_hex(base_hue + i * 0.25, saturation, lightness) for i in range(4)]


def palette_for_mode(
    mode: ColorMode, name: "str | None" = None, rng: "random.Random | None" = None
) -> "dict[str, str]":
    """Channel colors for a color mode.

    CMYK uses a curated palette (``name`` or a random one); other modes use a
    generated palette.

    Raises:
        KeyError: If ``name`` matches no palette
        ValueError: If ``name`` is given for a mode other than CMYK
    """
    channels = CHANNEL_NAMES[mode]
    if mode is ColorMode.CMYK:
        colors = get_cmyk_palette(name, rng).as_list()
    elif name is not None:
        raise ValueError(
            f"Named palettes are four-ink CMYK palettes; {mode.value} mode only "
            "supports a generated palette"
        )
    else:
        colors = generate_palette(len(channels), rng)
    return dict(zip(channels, colors))
