"""Utility functions for image sizing and plotting statistics.

AIDEV-NOTE: Plot time estimates are rough per-element costs, not a motion
simulation. They are only meant for comparing settings.
"""

import math

from PIL import Image

from models import Circle, Line, PlotStats, Polygon, Polyline, Primitive, Rect

# Estimated seconds to plot one element of each kind
CIRCLE_SECONDS = 0.5
LINE_SECONDS = 0.1
POLYGON_SECONDS = 0.3
RECT_SECONDS = 0.2


def scale_image_to_fit(image: Image.Image, max_dimension: int) -> "tuple[Image.Image, float]":
    """Downscale an image so its longest side fits max_dimension.

    Args:
        image: Input PIL image
        max_dimension: Longest allowed side in pixels (0 disables scaling)

    Returns:
        Tuple of (scaled_image, scale_factor)

    AIDEV-NOTE: Never upscales - a larger canvas only adds samples without
    adding detail.
    """
    width, height = image.size
    if max_dimension <= 0 or max(width, height) <= max_dimension:
        return image, 1.0

    scale = max_dimension / max(width, height)
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))
    return image.resize((new_width, new_height), Image.Resampling.LANCZOS), scale


def suggest_spacing(width: int, height: int) -> int:
    """Suggest a grid spacing for an image size (larger images, coarser grid)."""
    image_area = width * height
    if image_area > 1_000_000:
        return 15
    if image_area < 400_000:
        return 8
    return 12


def primitive_length(primitive: Primitive) -> float:
    """Drawn length of a primitive's outline in pixels."""
    if isinstance(primitive, Circle):
        return 2 * math.pi * primitive.r
    if isinstance(primitive, Rect):
        return 2 * (primitive.width + primitive.height)
    if isinstance(primitive, Line):
        return math.hypot(primitive.x2 - primitive.x1, primitive.y2 - primitive.y1)

    points = list(primitive.points)
    if isinstance(primitive, Polygon) and points:
        points.append(points[0])
    total = 0.0
    for i in range(1, len(points)):
        x1, y1 = points[i - 1]
        x2, y2 = points[i]
        total += math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)
    return total


def calculate_total_length(primitives: "list[Primitive]") -> float:
    """Total outline length of all primitives in pixels."""
    return sum(primitive_length(p) for p in primitives)


def plot_stats(primitives: "list[Primitive]") -> PlotStats:
    """Count elements by kind and estimate plotting time."""
    stats = PlotStats()
    for primitive in primitives:
        if isinstance(primitive, Circle):
            stats.circles += 1
        elif isinstance(primitive, Line):
            stats.lines += 1
        elif isinstance(primitive, Polygon):
            stats.polygons += 1
        elif isinstance(primitive, Rect):
            stats.rects += 1
        elif isinstance(primitive, Polyline):
            stats.paths += 1

    stats.estimated_seconds = (
        stats.circles * CIRCLE_SECONDS
        + stats.lines * LINE_SECONDS
        + (stats.polygons + stats.paths) * POLYGON_SECONDS
        + stats.rects * RECT_SECONDS
    )
    return stats
