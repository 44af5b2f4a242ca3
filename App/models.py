"""Data models and constants for the halftone plotter."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from PIL import Image

# Configuration file path
CONFIG_FILE = Path.home() / ".halftone_plotter_config.json"

# AIDEV-NOTE: Reference seed for the pattern generator - changing it changes
# every stochastic, stipple and cell pattern.
DEFAULT_SEED = 12345

# Plotter units per canvas pixel used by the HPGL encoder
HPGL_UNITS_PER_PIXEL = 40


class PatternType(Enum):
    """Halftone pattern families.

    AIDEV-NOTE: Values are the identifiers accepted from config files and
    the CLI. Unknown identifiers fall back to CIRCLE.
    """

    CIRCLE = "circle"
    SQUARE = "square"
    DIAMOND = "diamond"
    LINE = "line"
    CROSSHATCH = "crosshatch"
    STOCHASTIC = "stochastic"
    STIPPLE = "stipple"
    VORONOI = "voronoi"  # Jittered polygon cells, not a true tessellation
    CONCENTRIC = "concentric"
    SPIRAL = "spiral"
    HEXAGONAL = "hexagonal"
    WAVE = "wave"
    FLOWFIELD = "flowfield"


class ColorMode(Enum):
    """Color separation modes."""

    MONOCHROME = "monochrome"
    DUOTONE = "duotone"
    TRITONE = "tritone"
    CMYK = "cmyk"


class RenderStyle(Enum):
    """How closed shapes are drawn."""

    FILL = "fill"  # Solid shapes
    STROKE = "stroke"  # Outlines only, at the configured stroke width


class IntensityCurve(Enum):
    """Tone curves applied to separated intensity maps."""

    LINEAR = "linear"
    GAMMA = "gamma"
    CONTRAST = "contrast"


# AIDEV-NOTE: Channel order is the compositing order for multiply blending.
CHANNEL_NAMES: "dict[ColorMode, tuple[str, ...]]" = {
    ColorMode.MONOCHROME: ("key",),
    ColorMode.DUOTONE: ("tone1", "tone2"),
    ColorMode.TRITONE: ("shadows", "midtones", "highlights"),
    ColorMode.CMYK: ("cyan", "magenta", "yellow", "black"),
}

# Standard CMYK screen angles (degrees), chosen to minimize moire
STANDARD_ANGLES: "dict[str, float]" = {
    "cyan": 15.0,
    "magenta": 75.0,
    "yellow": 0.0,
    "black": 45.0,
}

MODE_ANGLES: "dict[ColorMode, dict[str, float]]" = {
    ColorMode.MONOCHROME: {"key": 45.0},
    ColorMode.DUOTONE: {"tone1": 75.0, "tone2": 15.0},
    ColorMode.TRITONE: {"shadows": 75.0, "midtones": 15.0, "highlights": 0.0},
    ColorMode.CMYK: STANDARD_ANGLES,
}

DEFAULT_CMYK_COLORS = ("#00ffff", "#ff00ff", "#ffff00", "#000000")


def default_colors(mode: ColorMode) -> "dict[str, str]":
    """Default channel colors for a color mode.

    Channels take the CMYK ink colors positionally, except a single
    monochrome channel which is printed in black.
    """
    names = CHANNEL_NAMES[mode]
    if mode is ColorMode.MONOCHROME:
        return {names[0]: DEFAULT_CMYK_COLORS[3]}
    return dict(zip(names, DEFAULT_CMYK_COLORS))


# --- Drawing primitives ---


@dataclass
class Circle:
    """Circle centered at (cx, cy)."""

    cx: float
    cy: float
    r: float
    filled: bool = True
    stroke_width: "float | None" = None


@dataclass
class Rect:
    """Axis-aligned rectangle with top-left corner at (x, y)."""

    x: float
    y: float
    width: float
    height: float
    filled: bool = True
    stroke_width: "float | None" = None


@dataclass
class Line:
    """Straight segment. Always stroked."""

    x1: float
    y1: float
    x2: float
    y2: float
    stroke_width: float = 1.0
    filled: bool = False


@dataclass
class Polygon:
    """Closed polygon through ``points``."""

    points: "list[tuple[float, float]]"
    filled: bool = True
    stroke_width: "float | None" = None


@dataclass
class Polyline:
    """Open path through ``points`` (serialized as an SVG ``<path>``).

    AIDEV-NOTE: Used for spirals. Always stroked, never filled.
    """

    points: "list[tuple[float, float]]"
    stroke_width: float = 1.0
    filled: bool = False


Primitive = Union[Circle, Rect, Line, Polygon, Polyline]


# --- Configuration models ---


@dataclass(frozen=True)
class PatternConfig:
    """Immutable settings for one channel's render pass.

    AIDEV-NOTE: ``angle`` rotates the sampling grid (screen angle) while
    ``line_angle`` rotates the mark drawn at each sample. They are
    independent.
    """

    pattern_type: PatternType = PatternType.CIRCLE
    dot_size: float = 8.0  # px, 2-20
    spacing: float = 12.0  # px, 5-30
    contrast: float = 100.0  # percent, 50-200
    randomness: float = 50.0  # percent, 0-100
    angle: float = 0.0  # degrees, 0-180
    line_angle: float = 45.0  # degrees, 0-180
    render_style: RenderStyle = RenderStyle.FILL
    stroke_width: float = 1.0  # px, 0.5-5
    color: str = "#000000"
    seed: int = DEFAULT_SEED

    @property
    def is_stroke(self) -> bool:
        return self.render_style is RenderStyle.STROKE


@dataclass
class ProcessingConfig:
    """Configuration for a whole halftone job (persisted by ConfigManager)."""

    # Pattern settings
    pattern_type: PatternType = PatternType.CIRCLE
    dot_size: float = 8.0
    spacing: float = 12.0
    line_angle: float = 45.0
    randomness: float = 50.0
    render_style: RenderStyle = RenderStyle.FILL
    stroke_width: float = 1.0
    seed: int = DEFAULT_SEED

    # Separation settings
    color_mode: ColorMode = ColorMode.CMYK
    contrast: float = 100.0
    intensity_curve: IntensityCurve = IntensityCurve.LINEAR

    # Screen angles - standard per-mode angles unless disabled
    use_standard_angles: bool = True
    angles: "dict[str, float]" = field(default_factory=dict)

    # Channel colors (hex); missing channels use default_colors()
    colors: "dict[str, str]" = field(default_factory=dict)

    # Downscale images larger than this (longest side, px). 0 disables.
    max_dimension: int = 0

    # Channels rendered concurrently (1 = sequential)
    workers: int = 4

    def channel_names(self) -> "tuple[str, ...]":
        return CHANNEL_NAMES[self.color_mode]

    def angle_for(self, channel: str) -> float:
        """Screen angle for a channel."""
        if self.use_standard_angles:
            return MODE_ANGLES[self.color_mode].get(channel, 0.0)
        return float(self.angles.get(channel, 0.0))

    def color_for(self, channel: str) -> str:
        """Ink color for a channel."""
        if channel in self.colors:
            return self.colors[channel]
        return default_colors(self.color_mode).get(channel, "#000000")

    def channel_config(self, channel: str) -> PatternConfig:
        """Build the immutable render settings for one channel."""
        return PatternConfig(
            pattern_type=self.pattern_type,
            dot_size=self.dot_size,
            spacing=self.spacing,
            contrast=self.contrast,
            randomness=self.randomness,
            angle=self.angle_for(channel),
            line_angle=self.line_angle,
            render_style=self.render_style,
            stroke_width=self.stroke_width,
            color=self.color_for(channel),
            seed=self.seed,
        )

    def validate(self) -> None:
        """Check documented ranges.

        Raises:
            ConfigValidationError: Listing every out-of-range setting
        """
        from halftone.colors import hex_to_rgb
        from halftone.errors import ConfigValidationError

        errors = []

        def check_range(name: str, value: float, low: float, high: float):
            if not low <= value <= high:
                errors.append(f"{name}={value} out of range ({low} to {high})")

        check_range("dot_size", self.dot_size, 2, 20)
        check_range("spacing", self.spacing, 5, 30)
        check_range("contrast", self.contrast, 50, 200)
        check_range("randomness", self.randomness, 0, 100)
        check_range("line_angle", self.line_angle, 0, 180)
        check_range("stroke_width", self.stroke_width, 0.5, 5)

        for name, enum_type in (
            ("pattern_type", PatternType),
            ("render_style", RenderStyle),
            ("color_mode", ColorMode),
            ("intensity_curve", IntensityCurve),
        ):
            value = getattr(self, name)
            if not isinstance(value, enum_type):
                errors.append(f"{name}={value!r} is not a known {enum_type.__name__}")

        for channel, angle in self.angles.items():
            check_range(f"angles[{channel}]", angle, 0, 180)

        for channel, color in self.colors.items():
            if hex_to_rgb(color) is None:
                errors.append(f"colors[{channel}]={color!r} is not a hex color")

        if self.max_dimension < 0:
            errors.append(f"max_dimension={self.max_dimension} must not be negative")
        if self.workers < 1:
            errors.append(f"workers={self.workers} must be at least 1")

        if errors:
            raise ConfigValidationError(errors)


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as m:ss."""
    minutes, secs = divmod(round(seconds), 60)
    return f"{minutes}:{secs:02d}"


# --- Result models ---


@dataclass
class PlotStats:
    """Element counts and estimated plot time for one channel."""

    circles: int = 0
    lines: int = 0
    polygons: int = 0
    rects: int = 0
    paths: int = 0
    estimated_seconds: float = 0.0

    @property
    def total_elements(self) -> int:
        return self.circles + self.lines + self.polygons + self.rects + self.paths

    @property
    def estimated_plot_time(self) -> str:
        """Estimated plot time formatted as m:ss."""
        return format_duration(self.estimated_seconds)


@dataclass
class ChannelResult:
    """Rendered output of one channel.

    AIDEV-NOTE: ``raster`` and ``svg`` are generated from the same
    ``primitives`` list, so every vector element has exactly one raster
    counterpart.
    """

    channel: str
    config: PatternConfig
    primitives: "list[Primitive]"
    raster: "Image.Image"
    svg: str
    stats: PlotStats


@dataclass
class ProcessedImage:
    """Result of a halftone job."""

    # Per-channel outputs keyed by channel name, in compositing order
    channels: "dict[str, ChannelResult]"

    width: int
    height: int
    color_mode: ColorMode
    pattern_type: PatternType

    # Multiply-blended preview of all channels
    composite: "Image.Image | None" = None

    # All channels in one SVG document
    combined_svg: str = ""

    @property
    def total_elements(self) -> int:
        return sum(result.stats.total_elements for result in self.channels.values())

    @property
    def total_estimated_seconds(self) -> float:
        return sum(result.stats.estimated_seconds for result in self.channels.values())
