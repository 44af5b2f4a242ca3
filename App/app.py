"""Halftone Plotter - command-line entry point.

Converts an image into per-channel halftone artwork (SVG, PNG preview and
optionally HPGL) for pen plotting or screen printing.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from config_manager import ConfigManager
from halftone import HalftoneError, HalftoneProcessor
from halftone.palettes import palette_for_mode, palette_names
from halftone.patterns import all_pattern_names, resolve_pattern_type
from models import (
    CONFIG_FILE,
    ColorMode,
    IntensityCurve,
    ProcessedImage,
    RenderStyle,
    format_duration,
)
from path_to_hpgl import PathToHPGLConverter

console = Console()

logger = logging.getLogger("halftone_plotter")


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None):
    """Setup logging with a Rich handler for terminal output.

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Suppress all but ERROR messages
        log_file: Optional path to log file
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handlers: "list[logging.Handler]" = [
        RichHandler(console=console, show_time=True, show_path=False, rich_tracebacks=True)
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="halftone-plotter",
        description="Convert an image into plotter-ready halftone patterns.",
    )
    parser.add_argument("input", nargs="?", help="Input image (PNG, JPG, ...)")
    parser.add_argument("-o", "--output", default=".", help="Output directory")
    parser.add_argument("--pattern", help="Pattern type (see --list-patterns)")
    parser.add_argument("--mode", choices=[m.value for m in ColorMode], help="Color mode")
    parser.add_argument("--dot-size", type=float, help="Dot size in pixels (2-20)")
    parser.add_argument("--spacing", type=float, help="Grid spacing in pixels (5-30)")
    parser.add_argument("--contrast", type=float, help="Contrast in percent (50-200)")
    parser.add_argument("--randomness", type=float, help="Randomness in percent (0-100)")
    parser.add_argument("--line-angle", type=float, help="Mark angle for line/wave patterns")
    parser.add_argument(
        "--angle",
        action="append",
        metavar="CHANNEL=DEG",
        help="Custom screen angle for a channel (disables standard angles)",
    )
    parser.add_argument(
        "--color", action="append", metavar="CHANNEL=HEX", help="Ink color for a channel"
    )
    parser.add_argument("--style", choices=[s.value for s in RenderStyle], help="Render style")
    parser.add_argument("--stroke-width", type=float, help="Stroke width for outline style")
    parser.add_argument("--palette", help="Curated palette name (cmyk mode only), or 'random'")
    parser.add_argument("--curve", choices=[c.value for c in IntensityCurve], help="Tone curve")
    parser.add_argument("--seed", type=int, help="Seed for stochastic patterns")
    parser.add_argument("--workers", type=int, help="Channels rendered in parallel")
    parser.add_argument("--max-dimension", type=int, help="Downscale longest side to this size")
    parser.add_argument("--hpgl", action="store_true", help="Also write HPGL files")
    parser.add_argument("--config", help=f"Config file (default {CONFIG_FILE})")
    parser.add_argument("--save-config", action="store_true", help="Save merged settings")
    parser.add_argument("--list-patterns", action="store_true", help="List patterns and palettes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    parser.add_argument("--log-file", help="Log to file")
    return parser


def _parse_pairs(pairs: "list[str]", option: str) -> "dict[str, str]":
    result = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"{option} expects CHANNEL=VALUE, got {pair!r}")
        result[name.strip()] = value.strip()
    return result


def apply_arguments(config, args: argparse.Namespace):
    """Override loaded configuration with command-line options."""
    if args.pattern:
        config.pattern_type = resolve_pattern_type(args.pattern)
    if args.mode:
        config.color_mode = ColorMode(args.mode)
    if args.style:
        config.render_style = RenderStyle(args.style)
    if args.curve:
        config.intensity_curve = IntensityCurve(args.curve)

    overrides = {
        "dot_size": args.dot_size,
        "spacing": args.spacing,
        "contrast": args.contrast,
        "randomness": args.randomness,
        "line_angle": args.line_angle,
        "stroke_width": args.stroke_width,
        "seed": args.seed,
        "workers": args.workers,
        "max_dimension": args.max_dimension,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    if args.angle:
        config.use_standard_angles = False
        config.angles.update(
            {name: float(v) for name, v in _parse_pairs(args.angle, "--angle").items()}
        )

    if args.palette:
        name = None if args.palette.lower() == "random" else args.palette
        config.colors = palette_for_mode(config.color_mode, name)
    if args.color:
        config.colors.update(_parse_pairs(args.color, "--color"))

    return config


def show_catalog():
    """Print available patterns and palettes."""
    console.print("[bold cyan]Patterns:[/] " + ", ".join(all_pattern_names()))
    console.print("[bold cyan]Palettes:[/] " + ", ".join(palette_names()))


def write_outputs(
    processed: ProcessedImage, output_dir: Path, stem: str, hpgl: bool = False
) -> "list[Path]":
    """Write every channel's SVG/PNG, the combined SVG and the preview."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    converter = PathToHPGLConverter()

    for pen, (name, result) in enumerate(processed.channels.items(), start=1):
        svg_path = output_dir / f"{stem}-{name}.svg"
        svg_path.write_text(result.svg, encoding="utf-8")
        png_path = output_dir / f"{stem}-{name}.png"
        result.raster.save(png_path)
        written.extend([svg_path, png_path])

        if hpgl:
            hpgl_path = output_dir / f"{stem}-{name}.hpgl"
            hpgl_path.write_text(converter.to_hpgl(result.primitives, pen=pen), encoding="ascii")
            written.append(hpgl_path)

    combined_path = output_dir / f"{stem}-combined.svg"
    combined_path.write_text(processed.combined_svg, encoding="utf-8")
    preview_path = output_dir / f"{stem}-preview.png"
    processed.composite.save(preview_path)
    written.extend([combined_path, preview_path])
    return written


def show_stats(processed: ProcessedImage):
    """Print per-channel plotting statistics."""
    table = Table(title="Processing Statistics")
    for column in ("Channel", "Circles", "Lines", "Polygons", "Rects", "Paths", "Total", "Est. time"):
        table.add_column(column, justify="right" if column != "Channel" else "left")

    for name, result in processed.channels.items():
        stats = result.stats
        table.add_row(
            name,
            str(stats.circles),
            str(stats.lines),
            str(stats.polygons),
            str(stats.rects),
            str(stats.paths),
            str(stats.total_elements),
            stats.estimated_plot_time,
        )

    table.add_row(
        "TOTAL",
        "",
        "",
        "",
        "",
        "",
        str(processed.total_elements),
        format_duration(processed.total_estimated_seconds),
    )
    console.print(table)


def main(argv: "Optional[list[str]]" = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_patterns:
        show_catalog()
        return 0

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not args.input:
        parser.print_usage()
        logger.error("No input image specified.")
        return 1

    manager = ConfigManager(Path(args.config)) if args.config else ConfigManager()

    try:
        config = apply_arguments(manager.load(), args)
        config.validate()
    except (HalftoneError, ValueError, KeyError) as e:
        logger.error("%s", e)
        return 1

    if args.save_config:
        saved, error = manager.save(config)
        if saved:
            logger.info("Saved configuration to %s", manager.config_path)
        else:
            logger.warning("Could not save configuration: %s", error)

    input_path = Path(args.input)
    try:
        processed = HalftoneProcessor(config).process(input_path)
    except (HalftoneError, ValueError) as e:
        logger.error("Processing failed: %s", e)
        return 1

    written = write_outputs(processed, Path(args.output), input_path.stem, hpgl=args.hpgl)
    for path in written:
        logger.debug("Wrote %s", path)
    logger.info("Wrote %d files to %s", len(written), args.output)

    if not args.quiet:
        show_stats(processed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
