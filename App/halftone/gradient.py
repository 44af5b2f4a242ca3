"""Sobel gradient field used to orient flow-field marks."""

from dataclasses import dataclass

import numpy as np


@dataclass
class GradientField:
    """Per-pixel unit gradient vectors of an intensity map.

    AIDEV-NOTE: ``vectors`` has shape (height, width, 2). Border pixels hold
    NaN - there is no gradient there and callers must skip them. Interior
    pixels hold a unit vector, or (0, 0) where the map is flat.
    """

    vectors: np.ndarray
    width: int
    height: int

    def at(self, x: int, y: int) -> "tuple[float, float] | None":
        """Gradient at pixel (x, y), or None where it is undefined."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        gx, gy = self.vectors[y, x]
        if np.isnan(gx):
            return None
        return float(gx), float(gy)


def compute_gradient_field(values: np.ndarray, width: int, height: int) -> GradientField:
    """Compute normalized Sobel gradients for every interior pixel.

    Args:
        values: Intensity map (length width * height, row-major)
        width: Map width
        height: Map height

    Returns:
        GradientField pointing toward increasing intensity (darker areas)
    """
    vectors = np.full((height, width, 2), np.nan, dtype=np.float64)
    if width < 3 or height < 3:
        return GradientField(vectors=vectors, width=width, height=height)

    v = np.asarray(values, dtype=np.float64).reshape(height, width)

    # 3x3 Sobel kernels applied to the neighbours of each interior pixel
    top_left, top, top_right = v[:-2, :-2], v[:-2, 1:-1], v[:-2, 2:]
    left, right = v[1:-1, :-2], v[1:-1, 2:]
    bottom_left, bottom, bottom_right = v[2:, :-2], v[2:, 1:-1], v[2:, 2:]

    gx = (top_right + 2 * right + bottom_right) - (top_left + 2 * left + bottom_left)
    gy = (bottom_left + 2 * bottom + bottom_right) - (top_left + 2 * top + top_right)

    magnitude = np.sqrt(gx * gx + gy * gy)
    nonzero = magnitude > 0
    safe = np.where(nonzero, magnitude, 1.0)

    vectors[1:-1, 1:-1, 0] = np.where(nonzero, gx / safe, 0.0)
    vectors[1:-1, 1:-1, 1] = np.where(nonzero, gy / safe, 0.0)

    return GradientField(vectors=vectors, width=width, height=height)
