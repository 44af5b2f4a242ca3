"""Color helpers: hex parsing and luminance."""

import re

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: str) -> "tuple[int, int, int] | None":
    """Convert a hex color string to an RGB tuple.

    Args:
        hex_color: Color such as "#FF0000" (leading "#" optional)

    Returns:
        RGB tuple (0-255 each channel), or None if the string is malformed
    """
    if not isinstance(hex_color, str):
        return None
    match = _HEX_PATTERN.match(hex_color.strip())
    if not match:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return (r, g, b)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert RGB components (0-255) to a lowercase "#rrggbb" string."""
    return "#" + "".join(f"{max(0, min(255, round(c))):02x}" for c in (r, g, b))


def get_luminance(r: int, g: int, b: int) -> float:
    """Relative luminance of an RGB color (WCAG 2.0).

    Returns:
        Luminance from 0 (black) to 1 (white)
    """

    def linearize(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)
