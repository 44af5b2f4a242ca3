"""Color separation into per-channel intensity maps.

AIDEV-NOTE: Every map is a flat, read-only float64 array of length
width * height (row-major, index = y * width + x). 1.0 means maximum ink,
0.0 means no mark. Maps are shared read-only between channel renders.
"""

import logging

import numpy as np
from PIL import Image

from models import CHANNEL_NAMES, ColorMode, IntensityCurve

from .errors import InvalidInputError

logger = logging.getLogger(__name__)


def image_to_pixels(image: Image.Image) -> "tuple[np.ndarray, int, int]":
    """Flatten a PIL image into an RGBA byte buffer.

    Args:
        image: Input image in any mode

    Returns:
        Tuple of (flat uint8 RGBA array, width, height)
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    return np.asarray(rgba, dtype=np.uint8).reshape(-1), width, height


def _normalized_rgb(pixels, width: int, height: int, contrast: float) -> np.ndarray:
    """Validate an RGBA buffer and return contrast-adjusted RGB in [0, 1].

    Returns:
        Array of shape (width * height, 3)

    Raises:
        InvalidInputError: If dimensions or buffer length are wrong
    """
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Image dimensions must be positive, got {width}x{height}")

    if isinstance(pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixels, dtype=np.uint8)
    else:
        data = np.asarray(pixels)
    if data.ndim != 1:
        data = data.reshape(-1)
    expected = 4 * width * height
    if data.size != expected:
        raise InvalidInputError(
            f"Pixel buffer has {data.size} values, expected {expected} "
            f"(4 x {width} x {height})"
        )

    rgb = data.reshape(-1, 4)[:, :3].astype(np.float64) / 255.0

    # Contrast pushes values away from (or toward) the 0.5 midpoint
    factor = contrast / 100.0
    return np.clip((rgb - 0.5) * factor + 0.5, 0.0, 1.0)


def _freeze(values: np.ndarray) -> np.ndarray:
    values = np.ascontiguousarray(values, dtype=np.float64)
    values.flags.writeable = False
    return values


def rgb_to_cmyk(
    pixels, width: int, height: int, contrast: float = 100.0
) -> "dict[str, np.ndarray]":
    """Separate RGBA pixels into cyan, magenta, yellow and black maps.

    Args:
        pixels: Flat RGBA byte sequence (length 4 * width * height)
        width: Image width
        height: Image height
        contrast: Contrast adjustment in percent (100 = unchanged)

    Returns:
        Dict with "cyan", "magenta", "yellow", "black" intensity maps
    """
    rgb = _normalized_rgb(pixels, width, height, contrast)
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]

    k = 1.0 - rgb.max(axis=1)

    # AIDEV-NOTE: Pure black (k == 1) has no chroma - guard the division
    has_chroma = k < 1.0
    denominator = np.where(has_chroma, 1.0 - k, 1.0)
    c = np.where(has_chroma, (1.0 - r - k) / denominator, 0.0)
    m = np.where(has_chroma, (1.0 - g - k) / denominator, 0.0)
    y = np.where(has_chroma, (1.0 - b - k) / denominator, 0.0)

    return {
        "cyan": _freeze(np.clip(c, 0.0, 1.0)),
        "magenta": _freeze(np.clip(m, 0.0, 1.0)),
        "yellow": _freeze(np.clip(y, 0.0, 1.0)),
        "black": _freeze(np.clip(k, 0.0, 1.0)),
    }


def rgb_to_grayscale(pixels, width: int, height: int, contrast: float = 100.0) -> np.ndarray:
    """Inverted luminance map (1 = darkest)."""
    rgb = _normalized_rgb(pixels, width, height, contrast)
    luminance = 0.299 * rgb[:, 0] + 0.587 * rgb[:, 1] + 0.114 * rgb[:, 2]
    return _freeze(np.clip(1.0 - luminance, 0.0, 1.0))


def rgb_to_multitone(
    pixels, width: int, height: int, tones: int, contrast: float = 100.0
) -> "dict[str, np.ndarray]":
    """Split the grayscale intensity into 2 or 3 overlapping tone maps.

    Duotone: tone1 = sqrt(i) favours shadows, tone2 = 1 - sqrt(1 - i)
    favours highlights. Tritone: tone1 = i, tone2 = sin(i * pi) peaking at
    the midtones, tone3 = 1 - i.
    """
    gray = rgb_to_grayscale(pixels, width, height, contrast)

    if tones == 2:
        return {
            "tone1": _freeze(np.sqrt(gray)),
            "tone2": _freeze(1.0 - np.sqrt(1.0 - gray)),
        }
    if tones == 3:
        return {
            "tone1": gray,
            "tone2": _freeze(np.clip(np.sin(gray * np.pi), 0.0, 1.0)),
            "tone3": _freeze(1.0 - gray),
        }
    raise InvalidInputError(f"Multi-tone separation supports 2 or 3 tones, got {tones}")


def apply_intensity_curve(values: np.ndarray, curve: IntensityCurve) -> np.ndarray:
    """Remap an intensity map through a tone curve.

    Args:
        values: Intensity map
        curve: LINEAR (unchanged), GAMMA (i ** 1.4) or CONTRAST (S-curve)

    Returns:
        New read-only intensity map (or ``values`` itself for LINEAR)
    """
    if curve is IntensityCurve.LINEAR:
        return values
    if curve is IntensityCurve.GAMMA:
        return _freeze(np.power(values, 1.4))
    if curve is IntensityCurve.CONTRAST:
        low = 2.0 * values * values
        high = 1.0 - 2.0 * (1.0 - values) * (1.0 - values)
        return _freeze(np.where(values < 0.5, low, high))
    return values


def separate(
    pixels,
    width: int,
    height: int,
    contrast: float = 100.0,
    mode: ColorMode = ColorMode.CMYK,
    curve: IntensityCurve = IntensityCurve.LINEAR,
) -> "dict[str, np.ndarray]":
    """Separate an RGBA buffer into the channel set of a color mode.

    Args:
        pixels: Flat RGBA byte sequence (length 4 * width * height)
        width: Image width
        height: Image height
        contrast: Contrast adjustment in percent (50-200)
        mode: Color mode selecting the channel set
        curve: Tone curve applied to every channel

    Returns:
        Dict of channel name -> intensity map, in compositing order

    Raises:
        InvalidInputError: If the pixel buffer does not match the dimensions
    """
    if mode is ColorMode.MONOCHROME:
        raw = {"key": rgb_to_grayscale(pixels, width, height, contrast)}
    elif mode is ColorMode.DUOTONE:
        raw = rgb_to_multitone(pixels, width, height, 2, contrast)
    elif mode is ColorMode.TRITONE:
        tri = rgb_to_multitone(pixels, width, height, 3, contrast)
        raw = {
            "shadows": tri["tone1"],
            "midtones": tri["tone2"],
            "highlights": tri["tone3"],
        }
    else:
        raw = rgb_to_cmyk(pixels, width, height, contrast)
        mode = ColorMode.CMYK

    channels = {
        name: apply_intensity_curve(raw[name], curve) for name in CHANNEL_NAMES[mode]
    }
    logger.debug(
        "Separated %dx%d image into %s channels: %s",
        width,
        height,
        mode.value,
        ", ".join(channels),
    )
    return channels
