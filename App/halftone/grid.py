"""Rotated lattice sampling shared by the grid-based patterns.

AIDEV-NOTE: This is the single screen-rotation routine. Every pattern that
samples a rotated grid goes through iter_rotated_grid() so screen angles
behave the same for all of them.
"""

import math
from typing import TYPE_CHECKING, Callable, Iterator

import numpy as np

from .errors import InvalidInputError

if TYPE_CHECKING:
    from models import PatternConfig, Primitive

DrawFn = Callable[[float, float, float, "PatternConfig"], "list[Primitive]"]


def check_spacing(spacing: float) -> None:
    """Reject steps that would never advance a sampling loop."""
    if not spacing > 0:
        raise InvalidInputError(f"Sampling spacing must be positive, got {spacing}")


def lookup_intensity(values: np.ndarray, width: int, height: int, x: float, y: float) -> float:
    """Intensity at the pixel containing (x, y).

    Returns:
        Map value at floor(y) * width + floor(x), or 0.0 outside the canvas
    """
    pixel_x = math.floor(x)
    pixel_y = math.floor(y)
    if 0 <= pixel_x < width and 0 <= pixel_y < height:
        return float(values[pixel_y * width + pixel_x])
    return 0.0


def iter_rotated_grid(
    width: int, height: int, angle: float, spacing: float
) -> "Iterator[tuple[float, float]]":
    """Yield rotated lattice points that land on the canvas.

    The square lattice spans [-diagonal/2, diagonal/2) on both axes so that
    the canvas stays fully covered after rotation about its center.

    Args:
        width: Canvas width
        height: Canvas height
        angle: Screen angle in degrees
        spacing: Lattice step in pixels

    Yields:
        (x, y) canvas coordinates inside [0, width) x [0, height)
    """
    check_spacing(spacing)

    angle_rad = angle * math.pi / 180
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    diagonal = math.sqrt(width * width + height * height)
    half_width = width / 2
    half_height = height / 2

    # AIDEV-NOTE: Positions are accumulated with +=, never index * spacing.
    # Saved patterns depend on the exact float sequence.
    y_grid = -diagonal / 2
    while y_grid < diagonal / 2:
        x_grid = -diagonal / 2
        while x_grid < diagonal / 2:
            rot_x = x_grid * cos_a - y_grid * sin_a + half_width
            rot_y = x_grid * sin_a + y_grid * cos_a + half_height

            if 0 <= rot_x < width and 0 <= rot_y < height:
                yield rot_x, rot_y

            x_grid += spacing
        y_grid += spacing


def apply_rotated_grid(
    values: np.ndarray,
    width: int,
    height: int,
    config: "PatternConfig",
    draw_fn: DrawFn,
) -> "list[Primitive]":
    """Run a shape generator at every point of the channel's rotated grid.

    Args:
        values: Intensity map
        width: Canvas width
        height: Canvas height
        config: Channel settings (angle and spacing select the lattice)
        draw_fn: Called as draw_fn(x, y, intensity, config); returns the
            primitives to draw there (empty list for none)

    Returns:
        All primitives in sampling order
    """
    primitives = []
    extend = primitives.extend
    for x, y in iter_rotated_grid(width, height, config.angle, config.spacing):
        intensity = lookup_intensity(values, width, height, x, y)
        extend(draw_fn(x, y, intensity, config))
    return primitives
