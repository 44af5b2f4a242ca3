"""Halftone pattern engine for pen-plotter and screen-print artwork.

AIDEV-NOTE: This package turns images into per-channel vector halftones.
Organized into modular components:
- separation: RGB(A) -> per-channel intensity maps (gray/duo/tri/CMYK)
- grid: rotated screen lattice shared by the grid-based patterns
- rendering: per-pattern shape generators and bespoke samplers
- patterns: pattern type -> sampler/generator dispatch
- gradient: Sobel gradient field for the flow-field pattern
- raster / svg_writer: the two consumers of the generated primitives
- processor: Main HalftoneProcessor orchestrator
"""

from .errors import (
    ConfigValidationError,
    HalftoneError,
    InvalidInputError,
    ResourceExhaustedError,
)
from .patterns import generate_pattern
from .processor import HalftoneProcessor
from .seeded_random import SeededRandom
from .separation import separate

__all__ = [
    "HalftoneProcessor",
    "generate_pattern",
    "separate",
    "SeededRandom",
    "HalftoneError",
    "InvalidInputError",
    "ConfigValidationError",
    "ResourceExhaustedError",
]
