"""Pattern dispatch: maps a pattern type to its sampler and shape generator."""

import logging
from dataclasses import dataclass
from functools import partial

import numpy as np

from models import PatternConfig, PatternType, Primitive

from .gradient import compute_gradient_field
from .grid import apply_rotated_grid
from .rendering import (
    draw_circle,
    draw_concentric,
    draw_diamond,
    draw_flow_segment,
    draw_hexagon,
    draw_line,
    draw_spiral,
    draw_square,
    draw_wave,
    render_crosshatch,
    render_jittered_cells,
    render_stipple,
    render_stochastic,
)
from .seeded_random import SeededRandom

logger = logging.getLogger(__name__)

# Patterns drawn at every point of the rotated screen grid
GRID_GENERATORS = {
    PatternType.CIRCLE: draw_circle,
    PatternType.SQUARE: draw_square,
    PatternType.DIAMOND: draw_diamond,
    PatternType.LINE: draw_line,
    PatternType.CONCENTRIC: draw_concentric,
    PatternType.SPIRAL: draw_spiral,
    PatternType.HEXAGONAL: draw_hexagon,
    PatternType.WAVE: draw_wave,
}

# Patterns with their own sampling loop; the seeded ones take an rng
SAMPLERS = {
    PatternType.CROSSHATCH: render_crosshatch,
    PatternType.STOCHASTIC: render_stochastic,
    PatternType.STIPPLE: render_stipple,
    PatternType.VORONOI: render_jittered_cells,
}

SEEDED_PATTERNS = frozenset(
    {PatternType.STOCHASTIC, PatternType.STIPPLE, PatternType.VORONOI}
)


@dataclass
class PatternResult:
    """Primitives generated for one channel and the color applied to them."""

    pattern_type: PatternType
    primitives: "list[Primitive]"
    color: str


def resolve_pattern_type(pattern: "PatternType | str") -> PatternType:
    """Parse a pattern identifier, falling back to CIRCLE when unknown."""
    if isinstance(pattern, PatternType):
        return pattern
    try:
        return PatternType(str(pattern).strip().lower())
    except ValueError:
        logger.warning("Unknown pattern type %r, using circle", pattern)
        return PatternType.CIRCLE


def all_pattern_names() -> "list[str]":
    """List all pattern identifiers."""
    return [pattern.value for pattern in PatternType]


def generate_pattern(
    pattern: "PatternType | str",
    values: np.ndarray,
    width: int,
    height: int,
    config: PatternConfig,
) -> PatternResult:
    """Generate the primitives of one channel.

    Args:
        pattern: Pattern type or identifier (unknown values draw circles)
        values: Intensity map (length width * height, row-major)
        width: Canvas width
        height: Canvas height
        config: Channel settings

    Returns:
        PatternResult with primitives in drawing order

    AIDEV-NOTE: Seeded patterns get a fresh SeededRandom(config.seed) on
    every call, so repeated jobs and parallel channels never share
    generator state.
    """
    pattern_type = resolve_pattern_type(pattern)

    if pattern_type is PatternType.FLOWFIELD:
        gradients = compute_gradient_field(values, width, height)
        draw_fn = partial(draw_flow_segment, gradients=gradients)
        primitives = apply_rotated_grid(values, width, height, config, draw_fn)
    elif pattern_type in GRID_GENERATORS:
        primitives = apply_rotated_grid(
            values, width, height, config, GRID_GENERATORS[pattern_type]
        )
    elif pattern_type in SEEDED_PATTERNS:
        sampler = SAMPLERS[pattern_type]
        primitives = sampler(values, width, height, config, rng=SeededRandom(config.seed))
    else:
        primitives = SAMPLERS[pattern_type](values, width, height, config)

    logger.debug(
        "Generated %d primitives for %s pattern (%dx%d, angle %.1f)",
        len(primitives),
        pattern_type.value,
        width,
        height,
        config.angle,
    )
    return PatternResult(pattern_type=pattern_type, primitives=primitives, color=config.color)
