"""Shape generators for the halftone pattern families.

AIDEV-NOTE: Each draw_* function turns one sample (x, y, intensity) into a
list of primitives (empty when the intensity is at or below the pattern's
threshold). Nothing here touches a canvas - the rasterizer and the SVG
writer both consume the returned primitives. The render_* functions are
the patterns with their own sampling loops (crosshatch, stochastic,
stipple, jittered cells).
"""

import math
from typing import TYPE_CHECKING

import numpy as np

from models import Circle, Line, Polygon, Polyline, Rect

from .grid import check_spacing, lookup_intensity
from .seeded_random import SeededRandom

if TYPE_CHECKING:
    from models import PatternConfig, Primitive

    from .gradient import GradientField


def _shape_style(config: "PatternConfig") -> "tuple[bool, float | None]":
    """(filled, stroke_width) for closed shapes under the render style."""
    if config.is_stroke:
        return False, config.stroke_width
    return True, None


# --- Grid-based generators (called through apply_rotated_grid) ---


def draw_circle(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Classic dot: radius grows with intensity."""
    radius = (config.dot_size / 2) * intensity
    if radius <= 0.5:
        return []
    filled, stroke_width = _shape_style(config)
    return [Circle(x, y, radius, filled=filled, stroke_width=stroke_width)]


def draw_square(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Axis-aligned square centered on the sample."""
    size = config.dot_size * intensity
    if size <= 0.5:
        return []
    half = size / 2
    filled, stroke_width = _shape_style(config)
    return [Rect(x - half, y - half, size, size, filled=filled, stroke_width=stroke_width)]


def draw_diamond(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Square of side dot_size * intensity rotated 45 degrees about its center."""
    size = config.dot_size * intensity
    if size <= 0.5:
        return []
    # Half-diagonal of the rotated square
    reach = size / math.sqrt(2)
    filled, stroke_width = _shape_style(config)
    points = [(x, y - reach), (x + reach, y), (x, y + reach), (x - reach, y)]
    return [Polygon(points, filled=filled, stroke_width=stroke_width)]


def draw_line(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Short stroke oriented by line_angle, width proportional to intensity.

    AIDEV-NOTE: Tone is carried by the stroke width, so the width stays
    dot_size * intensity in both render styles.
    """
    line_width = config.dot_size * intensity
    if line_width <= 0.2:
        return []

    line_angle_rad = (config.line_angle * math.pi) / 180
    line_length = config.spacing * 0.8
    dx = math.cos(line_angle_rad) * line_length / 2
    dy = math.sin(line_angle_rad) * line_length / 2
    return [Line(x - dx, y - dy, x + dx, y + dy, stroke_width=line_width)]


def draw_concentric(
    x: float, y: float, intensity: float, config: "PatternConfig"
) -> "list[Primitive]":
    """Rings around the sample: more and larger rings for darker areas."""
    if intensity <= 0.1:
        return []

    max_radius = config.dot_size * intensity
    num_rings = math.floor(intensity * 4) + 1
    if config.is_stroke:
        stroke_width = config.stroke_width
    else:
        stroke_width = max(0.5, max_radius / num_rings * 0.3)

    return [
        Circle(x, y, (max_radius / num_rings) * (ring + 1), filled=False, stroke_width=stroke_width)
        for ring in range(num_rings)
    ]


def draw_spiral(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Archimedean spiral; darker areas get more turns and a larger radius."""
    if intensity <= 0.1:
        return []

    max_radius = config.dot_size * intensity
    turns = intensity * 3 + 1
    num_points = math.floor(turns * 20)

    points = []
    for i in range(num_points + 1):
        t = i / num_points
        angle = t * turns * math.pi * 2
        radius = t * max_radius
        points.append((x + math.cos(angle) * radius, y + math.sin(angle) * radius))

    stroke_width = config.stroke_width if config.is_stroke else max(1, intensity * 2)
    return [Polyline(points, stroke_width=stroke_width)]


def draw_hexagon(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Regular hexagon with circumradius dot_size * intensity."""
    if intensity <= 0.05:
        return []

    hex_size = config.dot_size * intensity
    points = []
    for i in range(6):
        angle = (i / 6) * math.pi * 2
        points.append((x + math.cos(angle) * hex_size, y + math.sin(angle) * hex_size))

    filled, stroke_width = _shape_style(config)
    return [Polygon(points, filled=filled, stroke_width=stroke_width)]


def draw_wave(x: float, y: float, intensity: float, config: "PatternConfig") -> "list[Primitive]":
    """Dot displaced across line_angle by a sine of its position."""
    if intensity <= 0.1:
        return []

    wave_length = config.spacing * 4
    angle_rad = (config.line_angle or 0) * math.pi / 180
    wave_phase = (x * math.cos(angle_rad) - y * math.sin(angle_rad)) / wave_length * math.pi * 2

    amplitude = config.dot_size * intensity
    displacement = math.sin(wave_phase) * amplitude
    disp_x = x + displacement * math.sin(angle_rad)
    disp_y = y + displacement * math.cos(angle_rad)
    dot_radius = max(1, config.dot_size * intensity * 0.3)

    filled, stroke_width = _shape_style(config)
    return [Circle(disp_x, disp_y, dot_radius, filled=filled, stroke_width=stroke_width)]


def draw_flow_segment(
    x: float,
    y: float,
    intensity: float,
    config: "PatternConfig",
    gradients: "GradientField",
) -> "list[Primitive]":
    """Segment along the local gradient plus a dot marking its origin.

    Returns nothing on the 1-pixel border where the gradient is undefined.
    """
    if intensity <= 0.1:
        return []
    gradient = gradients.at(math.floor(x), math.floor(y))
    if gradient is None:
        return []

    grad_x, grad_y = gradient
    flow_length = config.dot_size * intensity * 2
    end_x = x + grad_x * flow_length
    end_y = y + grad_y * flow_length
    if config.is_stroke:
        line_width = config.stroke_width
    else:
        line_width = max(0.5, intensity * config.dot_size * 0.3)

    # AIDEV-NOTE: The origin dot is always filled, whatever the render style
    return [
        Line(x, y, end_x, end_y, stroke_width=line_width),
        Circle(x, y, line_width, filled=True),
    ]


# --- Patterns with their own sampling loops ---


def render_crosshatch(
    values: np.ndarray, width: int, height: int, config: "PatternConfig"
) -> "list[Primitive]":
    """Render diagonal hatch strokes on an axis-aligned grid.

    Each sample above 0.1 intensity gets floor(4 * intensity) + 1 offset
    strokes at 45 degrees plus the screen angle; samples above 0.5 also get
    the opposite diagonal.

    Args:
        values: Intensity map
        width: Canvas width
        height: Canvas height
        config: Channel settings

    Returns:
        Line primitives in sampling order
    """
    check_spacing(config.spacing)
    spacing = config.spacing
    stroke_width = config.stroke_width if config.is_stroke else 1
    line_length = spacing * 0.7
    angle1 = 45 + config.angle
    angle2 = -45 + config.angle
    dx1 = math.cos(angle1 * math.pi / 180) * line_length / 2
    dy1 = math.sin(angle1 * math.pi / 180) * line_length / 2
    dx2 = math.cos(angle2 * math.pi / 180) * line_length / 2
    dy2 = math.sin(angle2 * math.pi / 180) * line_length / 2

    primitives = []
    y = 0
    while y < height:
        x = 0
        while x < width:
            intensity = lookup_intensity(values, width, height, x, y)

            if intensity > 0.1:
                num_lines = math.floor(intensity * 4) + 1

                for i in range(num_lines):
                    offset = (i - num_lines / 2) * 2
                    primitives.append(
                        Line(
                            x - dx1 + offset,
                            y - dy1 + offset,
                            x + dx1 + offset,
                            y + dy1 + offset,
                            stroke_width=stroke_width,
                        )
                    )

                    # Second diagonal for darker areas
                    if intensity > 0.5:
                        primitives.append(
                            Line(
                                x - dx2 + offset,
                                y - dy2 + offset,
                                x + dx2 + offset,
                                y + dy2 + offset,
                                stroke_width=stroke_width,
                            )
                        )
            x += spacing
        y += spacing

    return primitives


def render_stochastic(
    values: np.ndarray,
    width: int,
    height: int,
    config: "PatternConfig",
    rng: "SeededRandom | None" = None,
) -> "list[Primitive]":
    """Render jittered dots kept with probability equal to intensity.

    Args:
        values: Intensity map
        width: Canvas width
        height: Canvas height
        config: Channel settings (randomness scales grid tightening and jitter)
        rng: Random source, a fresh SeededRandom(config.seed) by default

    Returns:
        Circle primitives in sampling order

    AIDEV-NOTE: The order of rng draws (jitter x, jitter y, acceptance,
    radius) is part of the output contract - reordering changes every
    pattern generated from a given seed.
    """
    rng = rng or SeededRandom(config.seed)
    spacing = config.spacing
    randomness = config.randomness
    base_spacing = spacing * (1 - randomness / 200)
    check_spacing(base_spacing)
    filled, stroke_width = _shape_style(config)

    primitives = []
    y = 0
    while y < height:
        x = 0
        while x < width:
            random_x = x + (rng.next() - 0.5) * spacing * randomness / 100
            random_y = y + (rng.next() - 0.5) * spacing * randomness / 100

            if 0 <= random_x < width and 0 <= random_y < height:
                intensity = lookup_intensity(values, width, height, random_x, random_y)
                if rng.next() < intensity:
                    radius = config.dot_size / 4 + (rng.next() * config.dot_size / 4)
                    primitives.append(
                        Circle(random_x, random_y, radius, filled=filled, stroke_width=stroke_width)
                    )
            x += base_spacing
        y += base_spacing

    return primitives


def render_stipple(
    values: np.ndarray,
    width: int,
    height: int,
    config: "PatternConfig",
    rng: "SeededRandom | None" = None,
) -> "list[Primitive]":
    """Render a dense stipple of small dots at half the grid spacing.

    Each sample places a dot with probability equal to its intensity; areas
    above 0.3 intensity may also get a smaller secondary dot.

    Args:
        values: Intensity map
        width: Canvas width
        height: Canvas height
        config: Channel settings
        rng: Random source, a fresh SeededRandom(config.seed) by default

    Returns:
        Circle primitives in sampling order
    """
    rng = rng or SeededRandom(config.seed)
    stipple_spacing = config.spacing / 2
    check_spacing(stipple_spacing)
    dot_size = config.dot_size
    filled, stroke_width = _shape_style(config)

    primitives = []
    y = 0
    while y < height:
        x = 0
        while x < width:
            intensity = lookup_intensity(values, width, height, x, y)

            if rng.next() < intensity:
                radius = dot_size / 6 + (rng.next() * dot_size / 6)
                offset_x = (rng.next() - 0.5) * stipple_spacing / 2
                offset_y = (rng.next() - 0.5) * stipple_spacing / 2
                primitives.append(
                    Circle(x + offset_x, y + offset_y, radius, filled=filled, stroke_width=stroke_width)
                )

            if intensity > 0.3 and rng.next() < intensity * 0.5:
                small_radius = dot_size / 12
                small_x = x + (rng.next() - 0.5) * stipple_spacing
                small_y = y + (rng.next() - 0.5) * stipple_spacing
                if 0 <= small_x < width and 0 <= small_y < height:
                    primitives.append(
                        Circle(small_x, small_y, small_radius, filled=filled, stroke_width=stroke_width)
                    )
            x += stipple_spacing
        y += stipple_spacing

    return primitives


def render_jittered_cells(
    values: np.ndarray,
    width: int,
    height: int,
    config: "PatternConfig",
    rng: "SeededRandom | None" = None,
) -> "list[Primitive]":
    """Render irregular hexagonal cells around jittered, rotated seed points.

    This is the "voronoi" pattern. It does not compute a tessellation:
    each seed gets its own six-sided polygon whose vertex radii vary
    between 0.7 and 1.3 times dot_size * intensity.

    Args:
        values: Intensity map
        width: Canvas width
        height: Canvas height
        config: Channel settings (angle rotates the seed lattice)
        rng: Random source, a fresh SeededRandom(config.seed) by default

    Returns:
        Polygon primitives in seed order
    """
    rng = rng or SeededRandom(config.seed)
    spacing = config.spacing
    grid_spacing = spacing * 1.5
    check_spacing(grid_spacing)

    angle_rad = (config.angle * math.pi) / 180
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    diagonal = math.sqrt(width * width + height * height)

    # AIDEV-NOTE: All seed points (two jitter draws each) are generated
    # before any cell consumes radius draws.
    seeds = []
    y_grid = -diagonal / 2
    while y_grid < diagonal / 2:
        x_grid = -diagonal / 2
        while x_grid < diagonal / 2:
            jitter_x = (rng.next() - 0.5) * spacing * 0.5
            jitter_y = (rng.next() - 0.5) * spacing * 0.5
            rot_x = (x_grid + jitter_x) * cos_a - (y_grid + jitter_y) * sin_a + width / 2
            rot_y = (x_grid + jitter_x) * sin_a + (y_grid + jitter_y) * cos_a + height / 2
            seeds.append((rot_x, rot_y))
            x_grid += grid_spacing
        y_grid += grid_spacing

    filled, stroke_width = _shape_style(config)
    num_sides = 6
    primitives = []
    for seed_x, seed_y in seeds:
        if not (0 <= seed_x < width and 0 <= seed_y < height):
            continue
        intensity = lookup_intensity(values, width, height, seed_x, seed_y)
        if intensity <= 0.05:
            continue

        base_radius = config.dot_size * intensity
        points = []
        for i in range(num_sides):
            angle = (i / num_sides) * math.pi * 2
            radius = base_radius * (0.7 + rng.next() * 0.6)
            points.append((seed_x + math.cos(angle) * radius, seed_y + math.sin(angle) * radius))
        primitives.append(Polygon(points, filled=filled, stroke_width=stroke_width))

    return primitives
